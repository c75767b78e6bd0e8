"""Command-line interface over the same controllers the MCP tools use.

Running ``ipsearch-mcp`` without arguments starts the MCP server over stdio.
"""

import logging
import sys
from enum import Enum
from typing import Callable, Optional

import typer
from rich.console import Console

from app_mcp import app_version, run_server
from controllers import ControllerResponse, ipaddress_controller, searchapi_controller
from controllers.ipaddress_controller import GetIpOptions
from controllers.searchapi_controller import (
    GoogleImageSearchOptions,
    GoogleSearchOptions,
    YouTubeSearchOptions,
)
from errors import McpError, format_error_message
from mcp_framework import configure_logging, log_interaction
from settings import get_settings

app = typer.Typer(
    name="ipsearch-mcp",
    no_args_is_help=True,
    help="IP geolocation lookups and Google/YouTube search via ip-api.com and SearchAPI.site.",
)

_err_console = Console(stderr=True)


class YouTubeOrderChoice(str, Enum):
    date = "date"
    view_count = "viewCount"
    rating = "rating"
    relevance = "relevance"


class VideoDurationChoice(str, Enum):
    short = "short"
    medium = "medium"
    long = "long"
    any = "any"


class TransportChoice(str, Enum):
    stdio = "stdio"
    http = "http"


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"ipsearch-mcp {app_version()}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_print_version, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    settings = get_settings()
    configure_logging(logging.DEBUG if settings.debug else logging.WARNING)


def _emit(command: str, call: Callable[[], ControllerResponse]) -> None:
    try:
        response = call()
    except McpError as exc:
        log_interaction(f"cli_{command}_error", {"command": command}, exc.to_dict(), level=logging.DEBUG)
        _err_console.print(format_error_message(exc), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    typer.echo(response.content)


@app.command("get-ip-details")
def get_ip_details(
    ip_address: Optional[str] = typer.Argument(None, help="IP address to lookup (omit for current IP)"),
    extended: bool = typer.Option(False, "--extended", help="Include extended data like ASN, mobile and proxy detection"),
    https: bool = typer.Option(False, "--https", help="Use HTTPS for API requests (may require paid API key)"),
) -> None:
    """Get geolocation and network details about an IP address or the current device."""

    options = GetIpOptions(include_extended_data=extended, use_https=https)
    _emit("get-ip-details", lambda: ipaddress_controller.get(ip_address, options))


@app.command("search-google")
def search_google(
    query: str = typer.Option(..., "--query", help="The search query to perform"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="SearchAPI.site API key (defaults to SEARCHAPI_API_KEY)"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum number of results"),
    offset: Optional[int] = typer.Option(None, "--offset", min=0, help="Number of results to skip"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort order"),
    from_date: Optional[str] = typer.Option(None, "--from-date", help="Earliest publication date"),
    to_date: Optional[str] = typer.Option(None, "--to-date", help="Latest publication date"),
) -> None:
    """Perform a Google search using SearchAPI.site."""

    options = GoogleSearchOptions(
        query=query,
        api_key=api_key,
        limit=limit,
        offset=offset,
        sort=sort,
        from_date=from_date,
        to_date=to_date,
    )
    _emit("search-google", lambda: searchapi_controller.google_search(options))


@app.command("search-google-images")
def search_google_images(
    query: str = typer.Option(..., "--query", help="The image search query to perform"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="SearchAPI.site API key (defaults to SEARCHAPI_API_KEY)"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum number of results"),
    offset: Optional[int] = typer.Option(None, "--offset", min=0, help="Number of results to skip"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort order"),
    from_date: Optional[str] = typer.Option(None, "--from-date", help="Earliest publication date"),
    to_date: Optional[str] = typer.Option(None, "--to-date", help="Latest publication date"),
) -> None:
    """Perform a Google image search using SearchAPI.site."""

    options = GoogleImageSearchOptions(
        query=query,
        api_key=api_key,
        limit=limit,
        offset=offset,
        sort=sort,
        from_date=from_date,
        to_date=to_date,
    )
    _emit("search-google-images", lambda: searchapi_controller.google_image_search(options))


@app.command("search-youtube")
def search_youtube(
    query: str = typer.Option(..., "--query", help="The YouTube search query to perform"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="SearchAPI.site API key (defaults to SEARCHAPI_API_KEY)"),
    max_results: Optional[int] = typer.Option(
        None, "--max-results", min=1, max=50, help="Maximum number of results to return (1-50)"
    ),
    page_token: Optional[str] = typer.Option(
        None, "--page-token", help="Token for pagination to get next/previous page of results"
    ),
    order: Optional[YouTubeOrderChoice] = typer.Option(None, "--order", help="Sort order for results"),
    published_after: Optional[int] = typer.Option(
        None, "--published-after", min=0, help="Number of days to filter videos from"
    ),
    video_duration: Optional[VideoDurationChoice] = typer.Option(
        None, "--video-duration", help="Filter by video duration"
    ),
) -> None:
    """Perform a YouTube search using SearchAPI.site."""

    options = YouTubeSearchOptions(
        query=query,
        api_key=api_key,
        max_results=max_results,
        page_token=page_token,
        order=order.value if order else None,
        published_after=published_after,
        video_duration=video_duration.value if video_duration else None,
    )
    _emit("search-youtube", lambda: searchapi_controller.youtube_search(options))


@app.command("serve")
def serve(
    transport: TransportChoice = typer.Option(TransportChoice.stdio, "--transport", help="MCP transport"),
    host: Optional[str] = typer.Option(None, "--host", help="Bind host for the HTTP transport"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port for the HTTP transport"),
) -> None:
    """Start the MCP server."""

    run_server(transport.value, host=host, port=port)


def run() -> None:
    if len(sys.argv) <= 1:
        run_server("stdio")
        return
    app()


if __name__ == "__main__":
    run()
