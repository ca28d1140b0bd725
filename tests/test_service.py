"""Tests for the parsing service and MCP tools."""

from __future__ import annotations

import asyncio
import json
import threading
import time
from unittest.mock import AsyncMock, Mock, patch

import pytest
import requests

from webparser_mcp.admin.service import update_config
from webparser_mcp.errors import (
    ExtractionTimeoutError,
    UnsupportedFormatError,
    UnsupportedModeError,
)
from webparser_mcp.models.responses import ParseResponse
from webparser_mcp.providers import FetchResult
from webparser_mcp.tools.router import parse_html, parse_url
from webparser_mcp.tools.service import batch_parse_urls, parse_html_content, run_parse


def _fetch_result(html: str, url: str = "https://example.com") -> FetchResult:
    return FetchResult(
        url=url,
        content=html,
        status_code=200,
        content_type="text/html; charset=utf-8",
        metadata={"elapsed_ms": 12.5, "attempts": 1, "retries": 0},
    )


class TestParseHtmlContent:
    """Tests for parse_html_content."""

    def test_links_as_csv(self, sample_html: str) -> None:
        response = parse_html_content(sample_html, "links", "csv", url="https://example.com/")

        assert isinstance(response, ParseResponse)
        assert response.mode == "links"
        assert response.output_format == "csv"
        assert response.count == 2
        assert response.content.splitlines()[0] == "text,href,is_external,rel,target"
        assert response.filename.endswith(".csv")
        assert response.media_type == "text/csv"
        assert response.data["links"][1]["href"] == "https://example.com/relative"

    def test_metadata_as_json(self, sample_html: str) -> None:
        response = parse_html_content(sample_html, "metadata", "json")

        assert json.loads(response.content) == response.data
        assert response.data["title"] == "Test Page Title"
        assert response.data["og"]["title"] == "Sample Page"

    def test_unsupported_mode_raises(self, sample_html: str) -> None:
        with pytest.raises(UnsupportedModeError):
            parse_html_content(sample_html, "tables", "json")

    def test_unsupported_format_raises(self, sample_html: str) -> None:
        with pytest.raises(UnsupportedFormatError):
            parse_html_content(sample_html, "links", "xml")


class TestRunParse:
    """Tests for run_parse concurrency and time budget."""

    @pytest.mark.asyncio
    async def test_returns_response(self, sample_html: str) -> None:
        response = await run_parse(sample_html, "headings", "html", parse_timeout=5)

        assert response.count == 2
        assert response.content.startswith("<!DOCTYPE html>")
        assert response.media_type == "text/html"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def slow_parse(*args: object) -> None:
            time.sleep(0.5)

        with patch("webparser_mcp.tools.service.parse_html_content", side_effect=slow_parse):
            with pytest.raises(ExtractionTimeoutError, match="exceeded"):
                await run_parse("<html></html>", "text", "json", parse_timeout=0.05)

    @pytest.mark.asyncio
    async def test_extractions_are_serialized(self, sample_html: str) -> None:
        active = 0
        max_active = 0
        guard = threading.Lock()

        def tracking_parse(*args: object) -> str:
            nonlocal active, max_active
            with guard:
                active += 1
                max_active = max(max_active, active)
            time.sleep(0.02)
            with guard:
                active -= 1
            return "done"

        with patch("webparser_mcp.tools.service.parse_html_content", side_effect=tracking_parse):
            results = await asyncio.gather(
                *(run_parse(sample_html, "text", "json") for _ in range(4))
            )

        assert results == ["done"] * 4
        assert max_active == 1

    @pytest.mark.asyncio
    async def test_lock_held_until_timed_out_extraction_finishes(self) -> None:
        active = 0
        max_active = 0
        guard = threading.Lock()

        def tracking_parse(*args: object) -> str:
            nonlocal active, max_active
            with guard:
                active += 1
                max_active = max(max_active, active)
            time.sleep(0.3)
            with guard:
                active -= 1
            return "done"

        with patch("webparser_mcp.tools.service.parse_html_content", side_effect=tracking_parse):
            with pytest.raises(ExtractionTimeoutError):
                await run_parse("<html></html>", "text", "json", parse_timeout=0.05)

            result = await run_parse("<html></html>", "text", "json", parse_timeout=5)

        assert result == "done"
        assert max_active == 1


class TestBatchParseUrls:
    """Tests for batch_parse_urls."""

    @pytest.mark.asyncio
    async def test_success(self, sample_html: str) -> None:
        mock_provider = Mock()
        mock_provider.scrape = AsyncMock(return_value=_fetch_result(sample_html))

        with patch("webparser_mcp.tools.service.get_provider", return_value=mock_provider):
            result = await batch_parse_urls(["https://example.com"], "links", "json", timeout=20)

        mock_provider.scrape.assert_called_once_with(
            "https://example.com", timeout=20, max_retries=3
        )
        assert result.total == 1
        assert result.successful == 1
        item = result.results[0]
        assert item.success
        assert item.data.url == "https://example.com"
        assert item.data.count == 2

    @pytest.mark.asyncio
    async def test_partial_failure(self, sample_html: str) -> None:
        mock_provider = Mock()
        mock_provider.scrape = AsyncMock(
            side_effect=[
                _fetch_result(sample_html),
                requests.ConnectionError("Connection failed"),
            ]
        )

        with patch("webparser_mcp.tools.service.get_provider", return_value=mock_provider):
            result = await batch_parse_urls(
                ["https://example.com", "https://down.example.com"], "metadata", "csv"
            )

        assert result.total == 2
        assert result.successful == 1
        assert result.failed == 1
        failed = result.results[1]
        assert failed.url == "https://down.example.com"
        assert failed.data is None
        assert failed.error == "ConnectionError: Connection failed"

    @pytest.mark.asyncio
    async def test_unsupported_url_reported_per_item(self) -> None:
        result = await batch_parse_urls(["ftp://example.com"])

        assert result.failed == 1
        assert result.results[0].error.startswith("ValueError: No provider supports URL")

    @pytest.mark.asyncio
    async def test_invalid_mode_rejected_before_fetch(self) -> None:
        mock_provider = Mock()
        mock_provider.scrape = AsyncMock()

        with patch("webparser_mcp.tools.service.get_provider", return_value=mock_provider):
            with pytest.raises(UnsupportedModeError):
                await batch_parse_urls(["https://example.com"], "tables")

        mock_provider.scrape.assert_not_called()

    @pytest.mark.asyncio
    async def test_uses_runtime_limits(self) -> None:
        html = "<html><body>" + "".join(f'<a href="/p{i}">{i}</a>' for i in range(10)) + "</body></html>"
        mock_provider = Mock()
        mock_provider.scrape = AsyncMock(return_value=_fetch_result(html))
        update_config({"max_links": 3})

        with patch("webparser_mcp.tools.service.get_provider", return_value=mock_provider):
            result = await batch_parse_urls(["https://example.com"], "links")

        data = result.results[0].data
        assert data.count == 10
        assert len(data.data["links"]) == 3


class TestTools:
    """Tests for the MCP tool functions."""

    @pytest.mark.asyncio
    async def test_parse_html_tool(self) -> None:
        html = "<html><body><script>alert(1)</script><h1>&lt;script&gt;x&lt;/script&gt;</h1></body></html>"

        response = await parse_html(html, mode="headings", output_format="html")

        assert response.count == 1
        assert "<script>" not in response.content
        assert "&lt;script&gt;x&lt;/script&gt;" in response.content

    @pytest.mark.asyncio
    async def test_parse_html_resolves_against_base_url(self) -> None:
        response = await parse_html(
            '<img src="a.png" alt="A">', mode="images", base_url="https://example.com/img/"
        )

        assert response.data["images"][0]["src"] == "https://example.com/img/a.png"
        assert response.url == "https://example.com/img/"

    @pytest.mark.asyncio
    async def test_parse_url_tool(self, sample_html: str) -> None:
        mock_provider = Mock()
        mock_provider.scrape = AsyncMock(return_value=_fetch_result(sample_html))

        with patch("webparser_mcp.tools.service.get_provider", return_value=mock_provider):
            result = await parse_url(["https://example.com"], mode="text", max_retries=5)

        mock_provider.scrape.assert_called_once_with(
            "https://example.com", timeout=10, max_retries=5
        )
        assert result.successful == 1
        assert result.results[0].data.mode == "text"

    @pytest.mark.asyncio
    async def test_runtime_fetch_defaults(self, sample_html: str) -> None:
        mock_provider = Mock()
        mock_provider.scrape = AsyncMock(return_value=_fetch_result(sample_html))
        update_config({"default_timeout": 25, "default_max_retries": 1})

        with patch("webparser_mcp.tools.service.get_provider", return_value=mock_provider):
            await parse_url(["https://example.com"])

        mock_provider.scrape.assert_called_once_with(
            "https://example.com", timeout=25, max_retries=1
        )
