"""MCP server exposing the page parsing tools."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from webparser_mcp.admin.router import api_config_get, api_config_update, health_check
from webparser_mcp.tools.router import register_parsing_tools

# Stateless mode auto-creates sessions for unknown session IDs
mcp = FastMCP(
    "Web Parser",
    instructions=(
        "Extracts structured data from web pages: metadata, links, headings, "
        "images or text statistics, serialized as JSON, CSV or HTML."
    ),
    stateless_http=True,
)

register_parsing_tools(mcp)

mcp.custom_route("/healthz", methods=["GET"])(health_check)
mcp.custom_route("/api/config", methods=["GET"])(api_config_get)
mcp.custom_route("/api/config", methods=["POST"])(api_config_update)


def run_server(transport: str = "streamable-http", host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the MCP server.

    Args:
        transport: Transport type ('streamable-http', 'sse' or 'stdio')
        host: Host to bind to (default: 0.0.0.0)
        port: Port to bind to (default: 8000)
    """
    mcp.settings.host = host
    mcp.settings.port = port

    mcp.run(transport=transport)


if __name__ == "__main__":
    run_server()
