"""Utility modules for the advisory action server."""

from advisory_mcp.utils.logging_config import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
