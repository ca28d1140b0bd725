"""Provider initialization for the webparser MCP server."""

from webparser_mcp.providers import RequestsProvider, ScraperProvider

# Shared by the tools service and the server
default_provider: ScraperProvider = RequestsProvider()


def get_provider(url: str) -> ScraperProvider:
    """Get the provider that can fetch a URL.

    Args:
        url: The URL to fetch

    Returns:
        A provider that supports the URL

    Raises:
        ValueError: If no provider supports the URL
    """
    if default_provider.supports_url(url):
        return default_provider

    raise ValueError(f"No provider supports URL: {url}")
