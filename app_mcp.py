"""Composable MCP server hosting the IP lookup and SearchAPI.site services."""
from __future__ import annotations

import logging
from importlib import metadata
from typing import Literal

import uvicorn
from fastmcp import FastMCP

from mcp_framework import (
    ServiceDefinition,
    configure_logging,
    create_http_app,
    create_mcp_server,
    log_interaction,
)
from services import register_ip_address_service, register_searchapi_service
from settings import AppSettings, get_settings

APP_NAME = "ipsearch-mcp"

Transport = Literal["stdio", "http"]

services = [
    ServiceDefinition(
        name="ip_address",
        description="Look up geolocation and network details for an IP address via ip-api.com.",
        register=register_ip_address_service,
    ),
    ServiceDefinition(
        name="searchapi",
        description="Search Google, Google Images and YouTube via SearchAPI.site.",
        register=register_searchapi_service,
    ),
]


def app_version() -> str:
    """Installed distribution version, as advertised by the server and ``--version``."""

    try:
        return metadata.version(APP_NAME)
    except metadata.PackageNotFoundError:
        # running from a source checkout that was never installed
        return "0+unknown"


def build_server() -> FastMCP:
    return create_mcp_server(
        services,
        app_name=APP_NAME,
        version=app_version(),
        instructions="IP geolocation lookups and Google/YouTube search, returned as Markdown.",
    )


def run_server(
    transport: Transport = "stdio",
    *,
    host: str | None = None,
    port: int | None = None,
    settings: AppSettings | None = None,
) -> None:
    """Build the server and serve it until the transport closes."""

    settings = settings or get_settings()
    configure_logging(logging.DEBUG if settings.debug else logging.INFO)

    mcp = build_server()
    log_interaction(
        "startup",
        {"services": [service.name for service in services], "transport": transport},
        {"app": APP_NAME, "ipapi_token": bool(settings.ipapi_api_token)},
    )

    if transport == "stdio":
        mcp.run(transport="stdio")
    elif transport == "http":
        uvicorn.run(
            create_http_app(mcp),
            host=host or settings.mcp_host,
            port=port or settings.mcp_port,
            log_level="debug" if settings.debug else "info",
        )
    else:
        raise ValueError(f"Unsupported transport: {transport}")

    log_interaction("shutdown", {"transport": transport}, {"app": APP_NAME})


if __name__ == "__main__":
    run_server()
