"""Markdown rendering for ip-api.com lookups."""
from __future__ import annotations

from datetime import datetime

from formatting import format_bullet_list, format_date, format_heading
from vendors.ip_api import IPDetail

_ENVELOPE_FIELDS = ("status", "message")


def format_ip_details(detail: IPDetail, retrieved_at: datetime) -> str:
    fields = {key: value for key, value in detail.vendor_fields().items() if key not in _ENVELOPE_FIELDS}

    lines = [
        format_heading(f"IP Address Details: {detail.query or 'unknown'}", 1),
        "",
        format_bullet_list(fields),
        "",
        f"*Details retrieved at {format_date(retrieved_at)}*",
    ]
    return "\n".join(lines)
