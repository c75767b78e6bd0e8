"""Markdown rendering for SearchAPI.site results."""
from __future__ import annotations

from typing import Sequence

from formatting import format_bullet_list, format_heading, format_separator, format_url, truncate
from vendors.searchapi_site import GoogleImageResult, GoogleSearchResult, YouTubeSearchResponse


def _join_sections(heading: str, sections: list[str]) -> str:
    separator = f"\n\n{format_separator()}\n\n"
    return f"{format_heading(heading)}\n\n" + separator.join(sections)


def format_google_search_results(results: Sequence[GoogleSearchResult]) -> str:
    if not results:
        return "No search results found."

    sections = []
    for index, result in enumerate(results, start=1):
        parts = [
            format_heading(f"{index}. {result.title}", 2),
            format_url(result.link, "View Result"),
        ]
        if result.snippet:
            parts.append(result.snippet)
        if result.meta:
            parts.append(format_bullet_list(result.meta))
        if result.image:
            parts.append("**Images:**\n\n" + "\n".join(f"* {image.src}" for image in result.image))
        sections.append("\n\n".join(parts))

    return _join_sections("Search Results", sections)


def format_google_image_results(results: Sequence[GoogleImageResult]) -> str:
    if not results:
        return "No image results found."

    sections = []
    for index, result in enumerate(results, start=1):
        parts = [format_heading(f"{index}. {result.title}", 2)]
        if result.display_link:
            parts.append(f"**Source:** {result.display_link}")
        if result.thumbnail_url:
            parts.append(f"![{result.title}]({result.thumbnail_url})")
        if result.snippet:
            parts.append(result.snippet)
        parts.append(
            f"{format_url(result.image_url, 'View Full Image')} | {format_url(result.link, 'View Source')}"
        )
        if result.image_width and result.image_height:
            parts.append(f"Image Size: {result.image_width}x{result.image_height}")
        sections.append("\n\n".join(parts))

    return _join_sections("Image Search Results", sections)


def format_youtube_results(response: YouTubeSearchResponse) -> str:
    data = response.data
    if not data.items:
        return "No YouTube results found."

    sections = []
    for index, video in enumerate(data.items, start=1):
        parts = [
            format_heading(f"{index}. {video.title}", 2),
            f"**Channel:** {video.channel_title}",
        ]
        if video.published_at:
            parts.append(f"**Published:** {video.published_at.strftime('%Y-%m-%d')}")
        if video.thumbnails and video.thumbnails.medium:
            parts.append(f"![{video.title}]({video.thumbnails.medium.url})")
        if video.description:
            parts.append(truncate(video.description))
        parts.append(format_url(video.video_url, "Watch Video"))
        sections.append("\n\n".join(parts))

    markdown = format_heading("YouTube Search Results")
    if data.page_info:
        markdown += f"\n\nShowing {len(data.items)} of {data.page_info.total_results} results"
    markdown += "\n\n" + f"\n\n{format_separator()}\n\n".join(sections)

    if data.next_page_token or data.prev_page_token:
        pagination = [format_heading("Pagination", 2)]
        if data.prev_page_token:
            pagination.append(f"Previous Page Token: `{data.prev_page_token}`")
        if data.next_page_token:
            pagination.append(f"Next Page Token: `{data.next_page_token}`")
        pagination.append(
            "Use these tokens with `page_token` (`--page-token` on the CLI) to navigate through results."
        )
        markdown += "\n\n" + "\n\n".join(pagination)

    return markdown
