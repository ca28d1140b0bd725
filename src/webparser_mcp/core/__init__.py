"""Core infrastructure shared by the tools and admin modules.

This module provides the single source of truth for provider instances.
"""

from webparser_mcp.core.providers import (
    default_provider,
    get_provider,
)

__all__ = [
    "default_provider",
    "get_provider",
]
