"""ip-api.com geolocation client."""
from __future__ import annotations

import logging
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from errors import ApiError, McpError, UnexpectedError
from mcp_framework import log_interaction
from settings import AppSettings, get_settings
from transport_utils import IpApiRequestOptions, fetch_ip_api


class IpApiFailure(BaseModel):
    status: str
    message: str | None = None


class IPDetail(BaseModel):
    """Successful ip-api.com payload.

    Every data field is optional because the ``fields`` parameter lets the
    caller narrow the response. Fields the model does not name are kept.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    status: Literal["success"]
    message: str | None = None
    query: str | None = None
    country: str | None = None
    country_code: str | None = Field(default=None, alias="countryCode")
    region: str | None = None
    region_name: str | None = Field(default=None, alias="regionName")
    city: str | None = None
    zip: str | None = None
    lat: float | None = None
    lon: float | None = None
    timezone: str | None = None
    isp: str | None = None
    org: str | None = None
    as_: str | None = Field(default=None, alias="as")
    asname: str | None = None
    reverse: str | None = None
    mobile: bool | None = None
    proxy: bool | None = None
    hosting: bool | None = None

    def vendor_fields(self) -> dict[str, Any]:
        """Return the populated fields under their ip-api.com names."""
        return self.model_dump(by_alias=True, exclude_none=True)


IpApiEnvelope = Union[IPDetail, IpApiFailure]


def parse_envelope(payload: Any) -> IpApiEnvelope:
    if not isinstance(payload, dict):
        raise ApiError(f"IP API error: unexpected response type {type(payload).__name__}")
    if payload.get("status") != "success":
        return IpApiFailure.model_validate({"status": str(payload.get("status")), "message": payload.get("message")})
    return IPDetail.model_validate(payload)


def get(
    ip_address: str | None = None,
    options: IpApiRequestOptions | None = None,
    *,
    settings: AppSettings | None = None,
) -> IPDetail:
    """Look up ``ip_address``; ``None`` looks up the caller's public IP."""

    settings = settings or get_settings()
    input_payload = {"ip_address": ip_address or "current"}

    try:
        payload = fetch_ip_api(
            ip_address or "",
            options,
            token=settings.ipapi_api_token,
            host=settings.ip_api_host,
            timeout=settings.http_timeout_seconds,
        )
        envelope = parse_envelope(payload)
        if isinstance(envelope, IpApiFailure):
            raise ApiError(f"IP API error: {envelope.message or 'Unknown error'}")
    except McpError as exc:
        log_interaction("ip_api_error", input_payload, exc.to_dict(), level=logging.ERROR)
        raise
    except Exception as exc:
        log_interaction("ip_api_error", input_payload, {"error": str(exc)}, level=logging.ERROR)
        raise UnexpectedError("Unexpected service error while fetching IP data", original=exc) from exc

    log_interaction("ip_api", input_payload, {"query": envelope.query}, level=logging.DEBUG)
    return envelope
