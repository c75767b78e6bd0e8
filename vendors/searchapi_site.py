"""SearchAPI.site client: Google web search, Google image search and YouTube search.

Each operation POSTs a JSON body to its own path under the configured base URL
and authenticates with the ``X-API-Key`` header. Optional request fields are
only sent when the caller supplied them, so the vendor applies its own
defaults otherwise.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from errors import ApiError, McpError, UnexpectedError
from mcp_framework import log_interaction
from settings import AppSettings, get_settings
from transport_utils import RequestOptions, fetch_api

GOOGLE_SEARCH_PATH = "/api/v1/google"
GOOGLE_IMAGE_SEARCH_PATH = "/api/v1/google/images"
YOUTUBE_SEARCH_PATH = "/api/v1/google/youtube"

YouTubeOrder = Literal["date", "viewCount", "rating", "relevance"]
VideoDuration = Literal["short", "medium", "long", "any"]


_DATETIME = TypeAdapter(datetime)


class _VendorModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _null_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


# Request options


class GoogleSearchRequestOptions(_VendorModel):
    query: str
    limit: int | None = None
    offset: int | None = None
    sort: str | None = None
    from_date: str | None = None
    to_date: str | None = None


class GoogleImageSearchRequestOptions(GoogleSearchRequestOptions):
    pass


class YouTubeSearchRequestOptions(_VendorModel):
    query: str
    max_results: int | None = Field(default=None, alias="maxResults")
    page_token: str | None = Field(default=None, alias="pageToken")
    order: YouTubeOrder | None = None
    published_after: int | None = Field(default=None, alias="publishedAfter")
    video_duration: VideoDuration | None = Field(default=None, alias="videoDuration")


# Results


class ImageRef(_VendorModel):
    src: str


class GoogleSearchResult(_VendorModel):
    title: str = ""
    link: str = ""
    snippet: str = ""
    position: int | None = None
    display_link: str | None = Field(default=None, alias="displayLink")
    source: str | None = None
    meta: dict[str, Any] | None = None
    image: list[ImageRef] | None = None


class GoogleImageResult(_VendorModel):
    title: str = ""
    link: str = ""
    snippet: str = ""
    position: int | None = None
    display_link: str | None = Field(default=None, alias="displayLink")
    source: str | None = None
    image_url: str = Field(default="", alias="imageUrl")
    thumbnail_url: str = Field(default="", alias="thumbnailUrl")
    image_width: int | None = Field(default=None, alias="imageWidth")
    image_height: int | None = Field(default=None, alias="imageHeight")
    image_size: int | None = Field(default=None, alias="imageSize")
    image_type: str | None = Field(default=None, alias="imageType")


class Thumbnail(_VendorModel):
    url: str
    width: int | None = None
    height: int | None = None


class Thumbnails(_VendorModel):
    default: Thumbnail | None = None
    medium: Thumbnail | None = None
    high: Thumbnail | None = None


class YouTubeSearchResult(_VendorModel):
    id: str = ""
    title: str = ""
    description: str = ""
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    thumbnails: Thumbnails | None = None
    channel_title: str = Field(default="", alias="channelTitle")
    channel_id: str = Field(default="", alias="channelId")
    video_url: str = Field(default="", alias="videoUrl")

    @field_validator("published_at", mode="before")
    @classmethod
    def lenient_published_at(cls, value: Any) -> Any:
        # One bad timestamp drops the date, not the whole result page.
        if value is None or value == "":
            return None
        try:
            return _DATETIME.validate_python(value)
        except ValidationError:
            return None


class PageInfo(_VendorModel):
    total_results: int = Field(default=0, alias="totalResults")
    results_per_page: int = Field(default=0, alias="resultsPerPage")


class YouTubeSearchData(_VendorModel):
    items: list[YouTubeSearchResult] = Field(default_factory=list)
    next_page_token: str | None = Field(default=None, alias="nextPageToken")
    prev_page_token: str | None = Field(default=None, alias="prevPageToken")
    page_info: PageInfo | None = Field(default=None, alias="pageInfo")

    items_null_as_empty = field_validator("items", mode="before")(_null_as_empty_list)


# Envelopes


class SearchApiFailure(_VendorModel):
    success: Literal[False]
    message: str | None = None


class GoogleSearchResponse(_VendorModel):
    success: Literal[True]
    message: str | None = None
    data: list[GoogleSearchResult] = Field(default_factory=list)

    data_null_as_empty = field_validator("data", mode="before")(_null_as_empty_list)


class GoogleImageSearchResponse(_VendorModel):
    success: Literal[True]
    message: str | None = None
    data: list[GoogleImageResult] = Field(default_factory=list)

    data_null_as_empty = field_validator("data", mode="before")(_null_as_empty_list)


class YouTubeSearchResponse(_VendorModel):
    success: Literal[True]
    message: str | None = None
    data: YouTubeSearchData = Field(default_factory=YouTubeSearchData)

    @field_validator("data", mode="before")
    @classmethod
    def null_data_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


ResponseT = TypeVar("ResponseT", GoogleSearchResponse, GoogleImageSearchResponse, YouTubeSearchResponse)


def parse_envelope(payload: Any, model: type[ResponseT]) -> Union[ResponseT, SearchApiFailure]:
    if not isinstance(payload, dict):
        raise ApiError(f"SearchAPI.site API error: unexpected response type {type(payload).__name__}")
    if payload.get("success") is not True:
        return SearchApiFailure(success=False, message=payload.get("message"))
    return model.model_validate(payload)


def _make_request(
    path: str,
    body: dict[str, Any],
    api_key: str,
    model: type[ResponseT],
    settings: AppSettings,
) -> ResponseT:
    url = f"{settings.searchapi_base_url.rstrip('/')}{path}"
    input_payload = {"path": path, "query": body.get("query"), "body_keys": sorted(body)}

    try:
        payload = fetch_api(
            url,
            RequestOptions(method="POST", headers={"X-API-Key": api_key}, body=body),
            timeout=settings.http_timeout_seconds,
        )
        envelope = parse_envelope(payload, model)
        if isinstance(envelope, SearchApiFailure):
            raise ApiError(f"SearchAPI.site API error: {envelope.message or 'Unknown error'}")
    except McpError as exc:
        log_interaction("searchapi_error", input_payload, exc.to_dict(), level=logging.ERROR)
        raise
    except Exception as exc:
        log_interaction(
            "searchapi_error",
            input_payload,
            {"error": str(exc), "type": exc.__class__.__name__},
            level=logging.ERROR,
        )
        raise UnexpectedError(
            "Unexpected service error while making request to SearchAPI.site", original=exc
        ) from exc

    log_interaction("searchapi", input_payload, {"success": True}, level=logging.DEBUG)
    return envelope


def _request_body(options: BaseModel) -> dict[str, Any]:
    return options.model_dump(by_alias=True, exclude_none=True)


def google_search(
    options: GoogleSearchRequestOptions,
    api_key: str,
    *,
    settings: AppSettings | None = None,
) -> GoogleSearchResponse:
    return _make_request(
        GOOGLE_SEARCH_PATH, _request_body(options), api_key, GoogleSearchResponse, settings or get_settings()
    )


def google_image_search(
    options: GoogleImageSearchRequestOptions,
    api_key: str,
    *,
    settings: AppSettings | None = None,
) -> GoogleImageSearchResponse:
    return _make_request(
        GOOGLE_IMAGE_SEARCH_PATH,
        _request_body(options),
        api_key,
        GoogleImageSearchResponse,
        settings or get_settings(),
    )


def youtube_search(
    options: YouTubeSearchRequestOptions,
    api_key: str,
    *,
    settings: AppSettings | None = None,
) -> YouTubeSearchResponse:
    return _make_request(
        YOUTUBE_SEARCH_PATH, _request_body(options), api_key, YouTubeSearchResponse, settings or get_settings()
    )
