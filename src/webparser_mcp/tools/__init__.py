"""MCP parsing tools and business logic.

This module exposes the extraction core as MCP tools:
- parse_url: Fetch pages and extract structured data
- parse_html: Extract structured data from HTML supplied by the client

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions and registration
- service.py: Fetching, serialized extraction and batch operations
"""

from webparser_mcp.tools.router import (
    parse_html,
    parse_url,
    register_parsing_tools,
)
from webparser_mcp.tools.service import (
    batch_parse_urls,
    parse_html_content,
    run_parse,
)

__all__ = [
    # MCP tool functions
    "parse_url",
    "parse_html",
    # Registration functions
    "register_parsing_tools",
    # Service functions
    "batch_parse_urls",
    "parse_html_content",
    "run_parse",
]
