from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, TypeVar

OptionsT = TypeVar("OptionsT")


@dataclass(frozen=True)
class ControllerResponse:
    """Rendered Markdown handed to every front end."""

    content: str


def apply_defaults(options: OptionsT, defaults: Mapping[str, Any]) -> OptionsT:
    """Fill the dataclass fields left as ``None`` from ``defaults``."""

    names = {item.name for item in fields(options)}  # type: ignore[arg-type]
    missing = {
        name: value
        for name, value in defaults.items()
        if name in names and getattr(options, name) is None
    }
    return replace(options, **missing) if missing else options  # type: ignore[type-var]
