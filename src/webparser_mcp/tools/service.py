"""Business logic for the parsing tools."""

from __future__ import annotations

import asyncio
import functools
import logging

from webparser_mcp.admin.service import get_config, get_limits
from webparser_mcp.config import ExtractionLimits
from webparser_mcp.core.providers import get_provider
from webparser_mcp.document import parse_document
from webparser_mcp.errors import ExtractionTimeoutError
from webparser_mcp.extractors import extract
from webparser_mcp.formatters import export_filename, format_result
from webparser_mcp.models.modes import ExtractionMode, OutputFormat
from webparser_mcp.models.responses import BatchParseResponse, ParseResponse, ParseResultItem

logger = logging.getLogger(__name__)

# At most one extraction runs at a time; fetches may still overlap
_extraction_lock: asyncio.Lock | None = None
_lock_loop: asyncio.AbstractEventLoop | None = None


def _get_extraction_lock() -> asyncio.Lock:
    """Get the extraction lock for the running event loop."""
    global _extraction_lock, _lock_loop

    loop = asyncio.get_running_loop()
    if _extraction_lock is None or _lock_loop is not loop:
        _extraction_lock = asyncio.Lock()
        _lock_loop = loop
    return _extraction_lock


def parse_html_content(
    html: str,
    mode: ExtractionMode | str,
    output_format: OutputFormat | str,
    url: str | None = None,
    limits: ExtractionLimits | None = None,
) -> ParseResponse:
    """Parse HTML, extract one view and serialize it.

    Args:
        html: Raw HTML text
        mode: Extraction mode
        output_format: Serialization format
        url: URL the HTML came from, used to resolve relative references
        limits: Payload-size caps (default: ExtractionLimits())

    Returns:
        ParseResponse with serialized content and structured data

    Raises:
        UnsupportedModeError: If mode is not a supported extraction mode
        UnsupportedFormatError: If output_format is not a supported format
    """
    extraction_mode = ExtractionMode.parse(mode)
    fmt = OutputFormat.parse(output_format)

    doc = parse_document(html, url)
    result = extract(doc, extraction_mode, url, limits)

    return ParseResponse(
        url=url,
        mode=extraction_mode.value,
        output_format=fmt.value,
        count=result.count,
        content=format_result(result, fmt),
        filename=export_filename(fmt),
        media_type=fmt.media_type,
        data=result.model_dump(mode="json"),
    )


async def run_parse(
    html: str,
    mode: ExtractionMode | str,
    output_format: OutputFormat | str,
    url: str | None = None,
    limits: ExtractionLimits | None = None,
    parse_timeout: float | None = None,
) -> ParseResponse:
    """Run parse_html_content off the event loop under the time budget.

    Extractions are serialized. The traversal itself cannot be interrupted,
    so on timeout the caller stops waiting while the worker thread finishes
    in the background. The lock is held until that thread is done, not until
    the caller gives up.

    Raises:
        ExtractionTimeoutError: If the extraction exceeds parse_timeout
    """
    lock = _get_extraction_lock()
    await lock.acquire()
    loop = asyncio.get_running_loop()
    try:
        future = loop.run_in_executor(
            None,
            functools.partial(parse_html_content, html, mode, output_format, url, limits),
        )
    except BaseException:
        lock.release()
        raise

    def _release(done: asyncio.Future) -> None:
        lock.release()
        if not done.cancelled() and done.exception() is not None:
            logger.debug(f"Extraction of {url or 'document'} raised {done.exception()!r}")

    future.add_done_callback(_release)

    try:
        return await asyncio.wait_for(asyncio.shield(future), timeout=parse_timeout)
    except asyncio.TimeoutError as e:
        raise ExtractionTimeoutError(
            f"Extraction of {url or 'document'} exceeded {parse_timeout}s"
        ) from e


async def parse_single_url_safe(
    url: str,
    mode: ExtractionMode,
    output_format: OutputFormat,
    semaphore: asyncio.Semaphore,
    timeout: int = 10,
    max_retries: int = 3,
    parse_timeout: float | None = None,
    limits: ExtractionLimits | None = None,
) -> ParseResultItem:
    """Safely fetch and parse a single URL with error handling.

    Args:
        url: The URL to fetch
        mode: Extraction mode
        output_format: Serialization format
        semaphore: Semaphore for controlling fetch concurrency
        timeout: Request timeout in seconds
        max_retries: Maximum retry attempts
        parse_timeout: Extraction time budget in seconds
        limits: Payload-size caps

    Returns:
        ParseResultItem with success/error status
    """
    try:
        provider = get_provider(url)
        async with semaphore:
            result = await provider.scrape(url, timeout=timeout, max_retries=max_retries)

        response = await run_parse(
            result.content,
            mode,
            output_format,
            url=result.url,
            limits=limits,
            parse_timeout=parse_timeout,
        )
        logger.info(f"Parsed {url} ({mode.value}): {response.count} item(s)")

        return ParseResultItem(url=url, success=True, data=response, error=None)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {str(e)}"
        logger.warning(f"Failed to parse {url}: {error_msg}")

        return ParseResultItem(url=url, success=False, data=None, error=error_msg)


async def batch_parse_urls(
    urls: list[str],
    mode: ExtractionMode | str = ExtractionMode.METADATA,
    output_format: OutputFormat | str = OutputFormat.JSON,
    timeout: int | None = None,
    max_retries: int | None = None,
    concurrency: int | None = None,
) -> BatchParseResponse:
    """Fetch and parse multiple URLs.

    Mode and format are validated before anything is fetched.

    Args:
        urls: List of URLs to parse
        mode: Extraction mode
        output_format: Serialization format
        timeout: Request timeout in seconds (default: runtime config)
        max_retries: Maximum retry attempts per URL (default: runtime config)
        concurrency: Maximum number of concurrent fetches (default: runtime config)

    Returns:
        BatchParseResponse with results for all URLs

    Raises:
        UnsupportedModeError: If mode is not a supported extraction mode
        UnsupportedFormatError: If output_format is not a supported format
    """
    extraction_mode = ExtractionMode.parse(mode)
    fmt = OutputFormat.parse(output_format)

    if timeout is None:
        timeout = get_config("default_timeout")
    if max_retries is None:
        max_retries = get_config("default_max_retries")
    semaphore = asyncio.Semaphore(concurrency or get_config("concurrency"))
    parse_timeout = get_config("parse_timeout")
    limits = get_limits()

    tasks = [
        parse_single_url_safe(
            url, extraction_mode, fmt, semaphore, timeout, max_retries, parse_timeout, limits
        )
        for url in urls
    ]

    results = await asyncio.gather(*tasks)

    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    return BatchParseResponse(
        total=len(results),
        successful=successful,
        failed=failed,
        results=results,
    )
