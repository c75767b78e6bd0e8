"""Environment-driven configuration shared by the CLI and the MCP server."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Vendor credentials, endpoints and process options.

    Values come from the environment or a local ``.env`` file. Variable names
    match the field names (``IPAPI_API_TOKEN``, ``SEARCHAPI_API_KEY`` ...).
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    ipapi_api_token: str | None = Field(
        default=None,
        description="ip-api.com token; unlocks extra fields and HTTPS.",
    )
    searchapi_api_key: str | None = Field(
        default=None,
        description="Fallback SearchAPI.site key when a caller does not pass one.",
    )
    ip_api_host: str = Field(default="ip-api.com", min_length=1)
    searchapi_base_url: str = Field(default="https://searchapi.site", min_length=8)
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per outbound request (seconds).",
    )
    debug: bool = False

    mcp_host: str = "127.0.0.1"
    mcp_port: int = Field(default=8000, ge=1, le=65535)


def get_settings() -> AppSettings:
    return AppSettings()
