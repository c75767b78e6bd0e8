"""Controllers shared by the CLI and the MCP services."""

from .common import ControllerResponse

__all__ = ["ControllerResponse"]
