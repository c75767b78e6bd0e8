import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from app_mcp import build_server

from conftest import GOOGLE_DNS_PAYLOAD

pytestmark = pytest.mark.anyio


async def test_registers_all_tools_and_resources():
    async with Client(build_server()) as client:
        tools = {tool.name for tool in await client.list_tools()}
        resources = {str(resource.uri) for resource in await client.list_resources()}

    assert tools == {"ip_get_details", "search_google", "search_google_images", "search_youtube"}
    assert resources == {"ip://current", "ip://8.8.8.8"}


async def test_ip_get_details_returns_markdown(transport):
    transport.respond(GOOGLE_DNS_PAYLOAD)

    async with Client(build_server()) as client:
        result = await client.call_tool(
            "ip_get_details", {"ip_address": "8.8.8.8", "include_extended_data": True}
        )

    assert "# IP Address Details: 8.8.8.8" in result.content[0].text
    assert "fields" in transport.last_params


async def test_search_tool_error_becomes_tool_error(transport):
    async with Client(build_server()) as client:
        with pytest.raises(ToolError, match="API key is required for SearchAPI.site"):
            await client.call_tool("search_google", {"query": "python"})

    assert transport.requests == []


async def test_search_youtube_passes_arguments(transport):
    transport.respond({"success": True, "data": {"items": []}})

    async with Client(build_server()) as client:
        result = await client.call_tool(
            "search_youtube", {"query": "jazz", "api_key": "k", "order": "date", "max_results": 5}
        )

    assert result.content[0].text == "No YouTube results found."
    assert transport.last_json == {"query": "jazz", "maxResults": 5, "order": "date", "videoDuration": "any"}


async def test_current_ip_resource(transport):
    transport.respond(GOOGLE_DNS_PAYLOAD)

    async with Client(build_server()) as client:
        contents = await client.read_resource("ip://current")

    assert contents[0].text.startswith("# IP Address Details: 8.8.8.8")
    assert transport.last_url.path == "/json/"


async def test_example_ip_resource_error_is_rendered_as_content(transport):
    transport.respond({"status": "fail", "message": "quota exceeded"})

    async with Client(build_server()) as client:
        contents = await client.read_resource("ip://8.8.8.8")

    assert contents[0].text == "Error: Error retrieving IP Address Details: IP API error: quota exceeded"
    assert transport.last_url.path == "/json/8.8.8.8"
