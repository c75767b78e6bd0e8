"""SearchAPI.site controller.

Validates caller input, applies the default tables, calls the vendor client
and renders the result. Every failure is normalized through
:func:`errors.handle_controller_error` and raised.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from errors import InputValidationError, handle_controller_error
from mcp_framework import log_interaction
from settings import AppSettings, get_settings
from vendors import searchapi_site
from vendors.searchapi_site import (
    GoogleImageSearchRequestOptions,
    GoogleSearchRequestOptions,
    VideoDuration,
    YouTubeOrder,
    YouTubeSearchRequestOptions,
)

from .common import ControllerResponse, apply_defaults
from .searchapi_formatter import (
    format_google_image_results,
    format_google_search_results,
    format_youtube_results,
)

SOURCE = "controllers/searchapi_controller.py"


@dataclass(frozen=True)
class GoogleSearchOptions:
    query: str
    api_key: str | None = None
    limit: int | None = None
    offset: int | None = None
    sort: str | None = None
    from_date: str | None = None
    to_date: str | None = None


@dataclass(frozen=True)
class GoogleImageSearchOptions(GoogleSearchOptions):
    pass


@dataclass(frozen=True)
class YouTubeSearchOptions:
    query: str
    api_key: str | None = None
    max_results: int | None = None
    page_token: str | None = None
    order: YouTubeOrder | None = None
    published_after: int | None = None
    video_duration: VideoDuration | None = None


YOUTUBE_DEFAULTS: dict[str, Any] = {
    "max_results": 10,
    "order": "relevance",
    "video_duration": "any",
}


def _validate(query: str, api_key: str | None, settings: AppSettings, search_name: str) -> tuple[str, str]:
    trimmed_query = (query or "").strip()
    if not trimmed_query:
        raise InputValidationError(f"Query is required for {search_name}")

    resolved_key = api_key or settings.searchapi_api_key
    if not resolved_key:
        raise InputValidationError("API key is required for SearchAPI.site")
    return trimmed_query, resolved_key


def google_search(options: GoogleSearchOptions, *, settings: AppSettings | None = None) -> ControllerResponse:
    """Run a Google web search and render the results."""

    settings = settings or get_settings()
    log_interaction("google_search", {"query": options.query}, {}, level=logging.DEBUG)

    try:
        query, api_key = _validate(options.query, options.api_key, settings, "Google search")
        response = searchapi_site.google_search(
            GoogleSearchRequestOptions(
                query=query,
                limit=options.limit,
                offset=options.offset,
                sort=options.sort,
                from_date=options.from_date,
                to_date=options.to_date,
            ),
            api_key,
            settings=settings,
        )
    except Exception as exc:
        raise handle_controller_error(
            exc,
            entity_type="Google Search Results",
            operation="searching",
            source=f"{SOURCE}@google_search",
            additional_info={"query": options.query},
        ) from exc

    return ControllerResponse(content=format_google_search_results(response.data))


def google_image_search(
    options: GoogleImageSearchOptions, *, settings: AppSettings | None = None
) -> ControllerResponse:
    """Run a Google image search and render the results."""

    settings = settings or get_settings()
    log_interaction("google_image_search", {"query": options.query}, {}, level=logging.DEBUG)

    try:
        query, api_key = _validate(options.query, options.api_key, settings, "Google image search")
        response = searchapi_site.google_image_search(
            GoogleImageSearchRequestOptions(
                query=query,
                limit=options.limit,
                offset=options.offset,
                sort=options.sort,
                from_date=options.from_date,
                to_date=options.to_date,
            ),
            api_key,
            settings=settings,
        )
    except Exception as exc:
        raise handle_controller_error(
            exc,
            entity_type="Google Image Search Results",
            operation="searching",
            source=f"{SOURCE}@google_image_search",
            additional_info={"query": options.query},
        ) from exc

    return ControllerResponse(content=format_google_image_results(response.data))


def youtube_search(options: YouTubeSearchOptions, *, settings: AppSettings | None = None) -> ControllerResponse:
    """Run a YouTube search with the controller defaults applied."""

    settings = settings or get_settings()
    merged = apply_defaults(options, YOUTUBE_DEFAULTS)
    log_interaction(
        "youtube_search",
        {
            "query": merged.query,
            "max_results": merged.max_results,
            "order": merged.order,
            "video_duration": merged.video_duration,
        },
        {},
        level=logging.DEBUG,
    )

    try:
        query, api_key = _validate(merged.query, merged.api_key, settings, "YouTube search")
        response = searchapi_site.youtube_search(
            YouTubeSearchRequestOptions(
                query=query,
                max_results=merged.max_results,
                page_token=merged.page_token,
                order=merged.order,
                published_after=merged.published_after,
                video_duration=merged.video_duration,
            ),
            api_key,
            settings=settings,
        )
    except Exception as exc:
        raise handle_controller_error(
            exc,
            entity_type="YouTube Search Results",
            operation="searching",
            source=f"{SOURCE}@youtube_search",
            additional_info={"query": options.query},
        ) from exc

    return ControllerResponse(content=format_youtube_results(response))
