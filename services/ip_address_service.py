"""IP geolocation tool and resources for MCP."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from controllers import ipaddress_controller
from controllers.ipaddress_controller import GetIpOptions
from errors import McpError, format_error_message
from mcp_framework import log_interaction

IP_GET_DETAILS_DESCRIPTION = """Get geolocation and network details for an IP address.

Retrieves country, region, city, coordinates, timezone, ISP, organization and
AS details for a public IPv4 or IPv6 address. Omit `ip_address` to look up
the public IP of the machine running this server.

Set `include_extended_data` to also request reverse DNS plus mobile, proxy
and hosting detection. `use_https` switches the lookup to HTTPS, which may
require a paid ip-api.com token.

Not suitable for private or reserved ranges (10.x.x.x, 192.168.x.x ...),
historical data, or precise location. Returns Markdown with a bullet list of
the vendor fields and a retrieval timestamp."""

EXAMPLE_IP = "8.8.8.8"


def _read_ip_resource(ip_address: str | None, uri: str) -> str:
    try:
        response = ipaddress_controller.get(ip_address)
    except McpError as exc:
        log_interaction("ip_resource_error", {"uri": uri}, exc.to_dict(), level=logging.ERROR)
        return format_error_message(exc)

    log_interaction("ip_resource", {"uri": uri}, {"length": len(response.content)})
    return response.content


def register_ip_address_service(mcp: FastMCP) -> None:
    """Register the IP lookup tool and the ``ip://`` resources on the provided MCP instance."""

    @mcp.tool(name="ip_get_details", description=IP_GET_DETAILS_DESCRIPTION)
    def ip_get_details(
        ip_address: Annotated[
            str | None, Field(description="IP address to lookup (omit for current IP)")
        ] = None,
        include_extended_data: Annotated[
            bool | None, Field(description="Include extended data like ASN, mobile and proxy detection")
        ] = None,
        use_https: Annotated[
            bool | None, Field(description="Use HTTPS for API requests (may require paid API key)")
        ] = None,
    ) -> str:
        input_payload = {
            "ip_address": ip_address,
            "include_extended_data": include_extended_data,
            "use_https": use_https,
        }

        try:
            response = ipaddress_controller.get(
                ip_address,
                GetIpOptions(include_extended_data=include_extended_data, use_https=use_https),
            )
        except McpError as exc:
            log_interaction("ip_get_details_error", input_payload, exc.to_dict(), level=logging.ERROR)
            raise ToolError(format_error_message(exc)) from exc

        log_interaction("ip_get_details", input_payload, {"length": len(response.content)})
        return response.content

    @mcp.resource(
        "ip://current",
        name="Current Device IP",
        description="Details about your current IP address",
        mime_type="text/plain",
    )
    def current_ip_details() -> str:
        return _read_ip_resource(None, "ip://current")

    @mcp.resource(
        f"ip://{EXAMPLE_IP}",
        name="Example IP",
        description=f"Details about the example IP address {EXAMPLE_IP}",
        mime_type="text/plain",
    )
    def example_ip_details() -> str:
        return _read_ip_resource(EXAMPLE_IP, f"ip://{EXAMPLE_IP}")
