"""IP address lookup controller."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from errors import handle_controller_error
from mcp_framework import log_interaction
from settings import AppSettings, get_settings
from transport_utils import IpApiRequestOptions
from vendors import ip_api

from .common import ControllerResponse, apply_defaults
from .ipaddress_formatter import format_ip_details

EXTENDED_FIELDS = (
    "status",
    "message",
    "country",
    "countryCode",
    "region",
    "regionName",
    "city",
    "zip",
    "lat",
    "lon",
    "timezone",
    "isp",
    "org",
    "as",
    "asname",
    "reverse",
    "mobile",
    "proxy",
    "hosting",
    "query",
)


@dataclass(frozen=True)
class GetIpOptions:
    include_extended_data: bool | None = None
    use_https: bool | None = None


DEFAULT_OPTIONS = {"include_extended_data": False, "use_https": False}


def get(
    ip_address: str | None = None,
    options: GetIpOptions | None = None,
    *,
    settings: AppSettings | None = None,
) -> ControllerResponse:
    """Look up ``ip_address`` (or the caller's IP) and render it as Markdown."""

    merged = apply_defaults(options or GetIpOptions(), DEFAULT_OPTIONS)
    log_interaction(
        "ip_controller_get",
        {"ip_address": ip_address or "current", **asdict(merged)},
        {},
        level=logging.DEBUG,
    )

    try:
        request_options = IpApiRequestOptions(
            use_https=bool(merged.use_https),
            fields=EXTENDED_FIELDS if merged.include_extended_data else None,
        )
        detail = ip_api.get(ip_address, request_options, settings=settings or get_settings())
    except Exception as exc:
        raise handle_controller_error(
            exc,
            entity_type="IP Address Details",
            operation="retrieving",
            source="controllers/ipaddress_controller.py@get",
            additional_info={"ip_address": ip_address},
        ) from exc

    return ControllerResponse(content=format_ip_details(detail, datetime.now(timezone.utc)))
