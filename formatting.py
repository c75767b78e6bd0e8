"""Markdown building blocks used by the controller formatters."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping

DESCRIPTION_LIMIT = 200


def format_heading(text: str, level: int = 1) -> str:
    level = max(1, min(level, 6))
    return f"{'#' * level} {text}"


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def format_bullet_list(items: Mapping[str, Any]) -> str:
    """Render ``key: value`` bullets, skipping empty values."""

    lines = [
        f"- {key}: {format_value(value)}"
        for key, value in items.items()
        if value is not None and value != ""
    ]
    return "\n".join(lines)


def format_url(url: str, title: str | None = None) -> str:
    return f"[{title or url}]({url})"


def format_separator() -> str:
    return "---"


def format_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
