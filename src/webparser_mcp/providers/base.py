"""Base provider interface for fetching documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class FetchResult:
    """Raw HTML fetched from a URL."""

    url: str
    content: str
    status_code: int
    content_type: str | None
    metadata: dict[str, Any]


class ScraperProvider(ABC):
    """Abstract base class for document providers."""

    @abstractmethod
    async def scrape(self, url: str, **kwargs: Any) -> FetchResult:
        """Fetch the HTML of a URL.

        Args:
            url: The URL to fetch
            **kwargs: Additional provider-specific options

        Returns:
            FetchResult containing the raw HTML and fetch metadata
        """

    @abstractmethod
    def supports_url(self, url: str) -> bool:
        """Check if this provider can fetch the given URL."""
