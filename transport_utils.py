"""HTTP transport shared by the vendor clients.

``fetch_api`` performs one request, parses the JSON body and maps every
failure onto :mod:`errors`. ``fetch_ip_api`` assembles the ip-api.com URL
(scheme, path, ``key``/``fields``/``lang`` query) before delegating to it.
"""
from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence
from urllib.parse import quote, urlencode, urlparse

from errors import ApiError, InputValidationError, UnexpectedError
from mcp_framework import log_interaction
from settings import get_settings


@dataclass(frozen=True)
class RequestOptions:
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class IpApiRequestOptions:
    use_https: bool = False
    fields: Sequence[str] | None = None
    lang: str | None = None


def _require_absolute_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InputValidationError(f"Expected an absolute http(s) URL, got: {url!r}")


def _redact(url: str) -> str:
    parsed = urlparse(url)
    if "key=" not in parsed.query:
        return url
    query = "&".join(
        "key=***" if part.startswith("key=") else part for part in parsed.query.split("&")
    )
    return parsed._replace(query=query).geturl()


def fetch_api(url: str, options: RequestOptions | None = None, *, timeout: float | None = None) -> Any:
    """Send one request to ``url`` and return the decoded JSON body."""

    _require_absolute_url(url)
    options = options or RequestOptions()
    if timeout is None:
        timeout = get_settings().http_timeout_seconds

    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        **options.headers,
    }
    data = json.dumps(options.body).encode("utf-8") if options.body is not None else None
    request = urllib.request.Request(url, data=data, headers=headers, method=options.method)
    request_info = {"method": options.method, "url": _redact(url)}

    log_interaction("fetch_api_request", request_info, {}, level=logging.DEBUG)

    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", None) or response.getcode()
            reason = getattr(response, "reason", "")
            raw_bytes = response.read()
            charset = response.headers.get_content_charset() or "utf-8"
    except urllib.error.HTTPError as exc:
        error_text = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
        log_interaction(
            "fetch_api_error",
            request_info,
            {"status": exc.code, "reason": str(exc.reason), "body": error_text},
            level=logging.ERROR,
        )
        raise ApiError(
            f"API request failed: {exc.code} {exc.reason}",
            status_code=exc.code,
            original=error_text,
        ) from exc
    except (urllib.error.URLError, OSError) as exc:
        detail = getattr(exc, "reason", exc)
        log_interaction("fetch_api_error", request_info, {"error": str(detail)}, level=logging.ERROR)
        raise ApiError(f"Network error during API call: {detail}", original=exc) from exc
    except Exception as exc:
        log_interaction(
            "fetch_api_error",
            request_info,
            {"error": str(exc), "type": exc.__class__.__name__},
            level=logging.ERROR,
        )
        raise UnexpectedError(f"Unexpected error during API call: {exc}", original=exc) from exc

    log_interaction("fetch_api_response", request_info, {"status": status, "reason": reason}, level=logging.DEBUG)

    if not 200 <= status < 300:
        error_text = raw_bytes.decode(charset, errors="replace")
        log_interaction("fetch_api_error", request_info, {"status": status, "body": error_text}, level=logging.ERROR)
        raise ApiError(f"API request failed: {status} {reason}".rstrip(), status_code=status, original=error_text)

    try:
        payload = json.loads(raw_bytes.decode(charset))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        log_interaction("fetch_api_error", request_info, {"status": status, "error": str(exc)}, level=logging.ERROR)
        raise ApiError(f"Failed to parse API response JSON: {exc}", status_code=status, original=exc) from exc

    log_interaction("fetch_api_parsed", request_info, {"status": status}, level=logging.DEBUG)
    return payload


def build_ip_api_url(
    ip_address: str = "",
    options: IpApiRequestOptions | None = None,
    *,
    token: str | None = None,
    host: str = "ip-api.com",
) -> str:
    options = options or IpApiRequestOptions()
    scheme = "https" if options.use_https else "http"
    url = f"{scheme}://{host}/json/{quote(ip_address or '', safe=':.')}"

    params: dict[str, str] = {}
    if token:
        params["key"] = token
    if options.fields:
        params["fields"] = ",".join(options.fields)
    if options.lang:
        params["lang"] = options.lang

    if params:
        url = f"{url}?{urlencode(params, safe=',')}"
    return url


def fetch_ip_api(
    ip_address: str = "",
    options: IpApiRequestOptions | None = None,
    *,
    token: str | None = None,
    host: str | None = None,
    timeout: float | None = None,
) -> Any:
    """Call the ip-api.com JSON endpoint for ``ip_address`` (empty for the caller's IP)."""

    if host is None:
        host = get_settings().ip_api_host
    url = build_ip_api_url(ip_address, options, token=token, host=host)
    return fetch_api(url, RequestOptions(method="GET"), timeout=timeout)
