"""Document provider using the requests library with retry support."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlparse

import requests

from webparser_mcp.errors import EmptyResponseError
from webparser_mcp.providers.base import FetchResult, ScraperProvider

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; WebParserPro/2.0)",
    "Accept": "text/html,application/xhtml+xml",
    "Cache-Control": "no-cache",
}


class RequestsProvider(ScraperProvider):
    """Fetch pages with requests, retrying transient failures."""

    def __init__(
        self,
        timeout: int = 10,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        min_content_length: int = 100,
    ) -> None:
        """Initialize the requests provider.

        Args:
            timeout: Request timeout in seconds (default: 10)
            max_retries: Maximum number of retry attempts (default: 3)
            retry_delay: Delay unit between retries in seconds; attempt n
                waits n * retry_delay (default: 1.0)
            min_content_length: Shorter responses are treated as failures
                (default: 100)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.min_content_length = min_content_length

        self.session = requests.Session()
        logger.info(f"RequestsProvider initialized (timeout={timeout}s, max_retries={max_retries})")

    def supports_url(self, url: str) -> bool:
        """Check if this provider supports the given URL.

        Args:
            url: The URL to check

        Returns:
            True if the URL uses http or https scheme and has a host
        """
        try:
            parsed = urlparse(url)
            return parsed.scheme in ("http", "https") and bool(parsed.netloc)
        except ValueError:
            return False

    async def scrape(self, url: str, **kwargs: Any) -> FetchResult:
        """Fetch a URL with retry logic.

        Args:
            url: The URL to fetch
            **kwargs: Additional options
                - timeout: Request timeout in seconds
                - max_retries: Maximum number of retry attempts
                - headers: Extra HTTP headers

        Returns:
            FetchResult containing the page HTML and metadata

        Raises:
            requests.RequestException: If the request fails after all retries
            EmptyResponseError: If every attempt returned too little content
        """
        timeout = kwargs.get("timeout", self.timeout)
        max_retries = kwargs.get("max_retries", self.max_retries)
        headers = {**DEFAULT_HEADERS, **kwargs.get("headers", {})}

        attempt = 0
        while True:
            try:
                # Run requests in thread pool to avoid blocking
                loop = asyncio.get_event_loop()
                response = await loop.run_in_executor(
                    None,
                    lambda: self.session.get(url, headers=headers, timeout=timeout),
                )

                response.raise_for_status()

                content = response.text or ""
                if len(content) < self.min_content_length:
                    raise EmptyResponseError(
                        f"Response from {url} is empty or too short ({len(content)} characters)"
                    )

                metadata = {
                    "encoding": response.encoding,
                    "elapsed_ms": response.elapsed.total_seconds() * 1000,
                    "attempts": attempt + 1,
                    "retries": attempt,
                }

                return FetchResult(
                    url=response.url or url,
                    content=content,
                    status_code=response.status_code,
                    content_type=response.headers.get("Content-Type"),
                    metadata=metadata,
                )

            except (
                requests.Timeout,
                requests.ConnectionError,
                requests.HTTPError,
                EmptyResponseError,
            ) as e:
                attempt += 1

                if attempt > max_retries:
                    raise

                delay = self.retry_delay * attempt
                logger.debug(
                    f"Retry attempt {attempt}/{max_retries} for {url} after {delay:.2f}s delay: {e}"
                )
                await asyncio.sleep(delay)
