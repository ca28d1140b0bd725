"""MCP tool definitions for page parsing."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from webparser_mcp.admin.service import get_config, get_limits
from webparser_mcp.models.responses import BatchParseResponse, ParseResponse
from webparser_mcp.tools.service import batch_parse_urls, run_parse


async def parse_url(
    urls: list[str],
    mode: str = "metadata",
    output_format: str = "json",
    timeout: int | None = None,
    max_retries: int | None = None,
) -> BatchParseResponse:
    """Fetch one or more URLs and extract structured data from each page.

    Args:
        urls: List of URLs to parse (must be http:// or https://)
        mode: What to extract: metadata, links, headings, images or text
              (default: metadata)
        output_format: Serialization of the result: json, csv or html
                       (default: json)
        timeout: Request timeout in seconds (default: server config, 10)
        max_retries: Maximum number of retry attempts on failure
                     (default: server config, 3)

    Returns:
        BatchParseResponse with results for all URLs
    """
    return await batch_parse_urls(urls, mode, output_format, timeout, max_retries)


async def parse_html(
    html: str,
    mode: str = "metadata",
    output_format: str = "json",
    base_url: str | None = None,
) -> ParseResponse:
    """Extract structured data from HTML supplied directly.

    Args:
        html: Raw HTML of the page
        mode: What to extract: metadata, links, headings, images or text
              (default: metadata)
        output_format: Serialization of the result: json, csv or html
                       (default: json)
        base_url: URL of the page, used to resolve relative links and images

    Returns:
        ParseResponse with the serialized result
    """
    return await run_parse(
        html,
        mode,
        output_format,
        url=base_url,
        limits=get_limits(),
        parse_timeout=get_config("parse_timeout"),
    )


def register_parsing_tools(mcp: FastMCP) -> None:
    """Register parsing tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool()(parse_url)
    mcp.tool()(parse_html)
