import re
from datetime import datetime, timezone

from controllers.ipaddress_formatter import format_ip_details
from controllers.searchapi_formatter import (
    format_google_image_results,
    format_google_search_results,
    format_youtube_results,
)
from formatting import format_bullet_list, truncate
from vendors.ip_api import IPDetail
from vendors.searchapi_site import (
    GoogleImageResult,
    GoogleSearchResult,
    YouTubeSearchResponse,
)

from conftest import GOOGLE_DNS_PAYLOAD

RETRIEVED_AT = datetime(2025, 3, 1, 12, 30, 0, tzinfo=timezone.utc)


def _video(index: int, **overrides):
    video = {
        "id": f"vid{index}",
        "title": f"Video {index}",
        "description": "short description",
        "publishedAt": "2024-05-06T07:08:09Z",
        "thumbnails": {"medium": {"url": f"https://i.ytimg.com/{index}.jpg", "width": 320, "height": 180}},
        "channelTitle": "Channel",
        "channelId": "chan",
        "videoUrl": f"https://www.youtube.com/watch?v=vid{index}",
    }
    video.update(overrides)
    return video


def test_ip_details_round_trip():
    markdown = format_ip_details(IPDetail.model_validate(GOOGLE_DNS_PAYLOAD), RETRIEVED_AT)
    lines = markdown.splitlines()

    assert lines[0] == "# IP Address Details: 8.8.8.8"
    assert "- country: United States" in lines
    assert "- city: Mountain View" in lines
    assert "- isp: Google LLC" in lines
    assert "- as: AS15169 Google LLC" in lines
    assert not any(line.startswith("- status") for line in lines)
    assert re.fullmatch(r"\*Details retrieved at .+\*", lines[-1])
    assert lines[-1] == "*Details retrieved at 2025-03-01 12:30:00 UTC*"


def test_ip_details_booleans():
    detail = IPDetail.model_validate({**GOOGLE_DNS_PAYLOAD, "mobile": False, "hosting": True})

    markdown = format_ip_details(detail, RETRIEVED_AT)

    assert "- mobile: No" in markdown
    assert "- hosting: Yes" in markdown


def test_empty_results_render_a_sentence():
    assert format_google_search_results([]) == "No search results found."
    assert format_google_image_results([]) == "No image results found."
    assert (
        format_youtube_results(YouTubeSearchResponse.model_validate({"success": True, "data": {"items": []}}))
        == "No YouTube results found."
    )


def test_google_results_are_numbered_and_separated():
    results = [
        GoogleSearchResult.model_validate(
            {
                "title": "Python",
                "link": "https://python.org",
                "snippet": "Official site",
                "meta": {"og:type": "website"},
                "image": [{"src": "https://python.org/logo.png"}],
            }
        ),
        GoogleSearchResult.model_validate({"title": "PyPI", "link": "https://pypi.org", "snippet": "Packages"}),
    ]

    markdown = format_google_search_results(results)

    assert markdown.startswith("# Search Results")
    assert "## 1. Python" in markdown
    assert "## 2. PyPI" in markdown
    assert "[View Result](https://python.org)" in markdown
    assert "- og:type: website" in markdown
    assert "* https://python.org/logo.png" in markdown
    assert markdown.count("\n---\n") == 1


def test_image_results_embed_thumbnail():
    result = GoogleImageResult.model_validate(
        {
            "title": "Corgi",
            "link": "https://dogs.example/corgi",
            "displayLink": "dogs.example",
            "imageUrl": "https://dogs.example/corgi.jpg",
            "thumbnailUrl": "https://thumbs.example/corgi.jpg",
            "imageWidth": 640,
            "imageHeight": 480,
        }
    )

    markdown = format_google_image_results([result])

    assert markdown.startswith("# Image Search Results")
    assert "**Source:** dogs.example" in markdown
    assert "![Corgi](https://thumbs.example/corgi.jpg)" in markdown
    assert "[View Full Image](https://dogs.example/corgi.jpg) | [View Source](https://dogs.example/corgi)" in markdown
    assert "Image Size: 640x480" in markdown


def test_youtube_results_with_pagination():
    response = YouTubeSearchResponse.model_validate(
        {
            "success": True,
            "data": {
                "items": [_video(1, description="x" * 250), _video(2)],
                "nextPageToken": "NEXT",
                "prevPageToken": "PREV",
                "pageInfo": {"totalResults": 1000, "resultsPerPage": 2},
            },
        }
    )

    markdown = format_youtube_results(response)

    assert markdown.startswith("# YouTube Search Results")
    assert "Showing 2 of 1000 results" in markdown
    assert "**Published:** 2024-05-06" in markdown
    assert "![Video 1](https://i.ytimg.com/1.jpg)" in markdown
    assert "x" * 200 + "..." in markdown
    assert "x" * 201 not in markdown
    assert "[Watch Video](https://www.youtube.com/watch?v=vid2)" in markdown
    assert "## Pagination" in markdown
    assert "Previous Page Token: `PREV`" in markdown
    assert "Next Page Token: `NEXT`" in markdown
    assert "`page_token` (`--page-token` on the CLI)" in markdown


def test_youtube_results_without_tokens_have_no_pagination_section():
    response = YouTubeSearchResponse.model_validate({"success": True, "data": {"items": [_video(1)]}})

    assert "## Pagination" not in format_youtube_results(response)


def test_truncate_and_bullets():
    assert truncate("abc", 5) == "abc"
    assert truncate("abcdef", 5) == "abcde..."
    assert format_bullet_list({"a": 1, "b": None, "c": ""}) == "- a: 1"
