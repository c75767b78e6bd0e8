"""SearchAPI.site search tools for MCP."""

import logging
from typing import Annotated, Any, Callable

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from controllers import ControllerResponse, searchapi_controller
from controllers.searchapi_controller import (
    GoogleImageSearchOptions,
    GoogleSearchOptions,
    YouTubeSearchOptions,
)
from errors import McpError, format_error_message
from mcp_framework import log_interaction
from vendors.searchapi_site import VideoDuration, YouTubeOrder

QueryArg = Annotated[str, Field(description="The search query to perform")]
ApiKeyArg = Annotated[
    str | None,
    Field(description="Your SearchAPI.site API key (defaults to SEARCHAPI_API_KEY)"),
]
LimitArg = Annotated[int | None, Field(ge=1, description="Maximum number of results to return")]
OffsetArg = Annotated[int | None, Field(ge=0, description="Number of results to skip")]
SortArg = Annotated[str | None, Field(description="Sort order understood by SearchAPI.site")]
FromDateArg = Annotated[str | None, Field(description="Only results published on or after this date")]
ToDateArg = Annotated[str | None, Field(description="Only results published on or before this date")]


def _run(action: str, input_payload: dict[str, Any], call: Callable[[], ControllerResponse]) -> str:
    try:
        response = call()
    except McpError as exc:
        log_interaction(f"{action}_error", input_payload, exc.to_dict(), level=logging.ERROR)
        raise ToolError(format_error_message(exc)) from exc

    log_interaction(action, input_payload, {"length": len(response.content)})
    return response.content


def register_searchapi_service(mcp: FastMCP) -> None:
    """Register Google, Google Images and YouTube search tools on the provided MCP instance."""

    @mcp.tool(name="search_google")
    def search_google(
        query: QueryArg,
        api_key: ApiKeyArg = None,
        limit: LimitArg = None,
        offset: OffsetArg = None,
        sort: SortArg = None,
        from_date: FromDateArg = None,
        to_date: ToDateArg = None,
    ) -> str:
        """Perform a Google search using SearchAPI.site.

        Several keywords can be combined in one query, separated by commas.
        Returns Markdown with titles, snippets and links.
        """

        options = GoogleSearchOptions(
            query=query,
            api_key=api_key,
            limit=limit,
            offset=offset,
            sort=sort,
            from_date=from_date,
            to_date=to_date,
        )
        return _run(
            "search_google",
            {"query": query, "limit": limit, "offset": offset},
            lambda: searchapi_controller.google_search(options),
        )

    @mcp.tool(name="search_google_images")
    def search_google_images(
        query: QueryArg,
        api_key: ApiKeyArg = None,
        limit: LimitArg = None,
        offset: OffsetArg = None,
        sort: SortArg = None,
        from_date: FromDateArg = None,
        to_date: ToDateArg = None,
    ) -> str:
        """Perform a Google image search using SearchAPI.site.

        Returns Markdown with titles, thumbnails, sizes and source links.
        """

        options = GoogleImageSearchOptions(
            query=query,
            api_key=api_key,
            limit=limit,
            offset=offset,
            sort=sort,
            from_date=from_date,
            to_date=to_date,
        )
        return _run(
            "search_google_images",
            {"query": query, "limit": limit, "offset": offset},
            lambda: searchapi_controller.google_image_search(options),
        )

    @mcp.tool(name="search_youtube")
    def search_youtube(
        query: Annotated[str, Field(description="The YouTube search query to perform")],
        api_key: ApiKeyArg = None,
        max_results: Annotated[
            int | None, Field(ge=1, le=50, description="Maximum number of results to return (1-50)")
        ] = None,
        page_token: Annotated[
            str | None, Field(description="Token for pagination to get next/previous page of results")
        ] = None,
        order: Annotated[YouTubeOrder | None, Field(description="Sort order for results")] = None,
        published_after: Annotated[
            int | None, Field(ge=0, description="Number of days to filter videos from")
        ] = None,
        video_duration: Annotated[
            VideoDuration | None, Field(description="Filter by video duration")
        ] = None,
    ) -> str:
        """Perform a YouTube search using SearchAPI.site.

        Defaults: 10 results ordered by relevance, any duration. Returns
        Markdown with titles, channels, thumbnails, descriptions, links and
        page tokens for navigating further results.
        """

        options = YouTubeSearchOptions(
            query=query,
            api_key=api_key,
            max_results=max_results,
            page_token=page_token,
            order=order,
            published_after=published_after,
            video_duration=video_duration,
        )
        return _run(
            "search_youtube",
            {"query": query, "max_results": max_results, "order": order, "page_token": page_token},
            lambda: searchapi_controller.youtube_search(options),
        )
