"""Document providers for fetching raw HTML."""

from webparser_mcp.providers.base import FetchResult, ScraperProvider
from webparser_mcp.providers.requests_provider import RequestsProvider

__all__ = ["ScraperProvider", "FetchResult", "RequestsProvider"]
