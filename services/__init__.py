"""Reusable MCP services."""

from .ip_address_service import register_ip_address_service
from .searchapi_service import register_searchapi_service

__all__ = ["register_ip_address_service", "register_searchapi_service"]
