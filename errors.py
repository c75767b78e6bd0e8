"""Error taxonomy shared by the transport, vendor clients, controllers and front ends."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from mcp_framework import log_interaction


class ErrorType(str, Enum):
    API_ERROR = "API_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class McpError(Exception):
    """Base class for every error this project raises on purpose."""

    error_type = ErrorType.UNEXPECTED_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        original: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original = original

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"error": self.message, "type": self.error_type.value}
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


class ApiError(McpError):
    """A vendor or the transport rejected the call."""

    error_type = ErrorType.API_ERROR


class UnexpectedError(McpError):
    """Anything not otherwise classified; ``original`` keeps the cause."""

    error_type = ErrorType.UNEXPECTED_ERROR


class InputValidationError(McpError, ValueError):
    """Raised before any network call when caller input is incomplete."""

    error_type = ErrorType.VALIDATION_ERROR


def ensure_mcp_error(error: BaseException) -> McpError:
    if isinstance(error, McpError):
        return error
    return UnexpectedError(f"Unexpected error: {error}", original=error)


def handle_controller_error(
    error: BaseException,
    *,
    entity_type: str,
    operation: str,
    source: str,
    additional_info: dict[str, Any] | None = None,
) -> McpError:
    """Normalize ``error`` into a user-presentable error of the same kind.

    The failure is logged with its context. The normalized error is returned
    so that the caller decides whether to raise it or hand it back as a value.
    """

    mcp_error = ensure_mcp_error(error)
    normalized = type(mcp_error)(
        f"Error {operation} {entity_type}: {mcp_error.message}",
        status_code=mcp_error.status_code,
        original=mcp_error.original if mcp_error.original is not None else error,
    )

    log_interaction(
        "controller_error",
        {"source": source, "entity_type": entity_type, "operation": operation, **(additional_info or {})},
        normalized.to_dict(),
        level=logging.ERROR,
    )
    return normalized


def format_error_message(error: BaseException) -> str:
    return f"Error: {ensure_mcp_error(error).message}"
