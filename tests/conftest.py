"""Pytest configuration and fixtures for webparser-mcp tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from webparser_mcp.admin.service import reset_config


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> Iterator[None]:
    """Keep runtime config changes from leaking between tests."""
    yield
    reset_config()


@pytest.fixture
def sample_html() -> str:
    """Sample HTML for testing."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="description" content="A sample page for testing">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <meta property="og:title" content="Sample Page">
        <title>Test Page Title</title>
        <script>console.log('should be stripped');</script>
        <style>.test { color: red; }</style>
    </head>
    <body>
        <h1 id="top">Main Heading</h1>
        <p>This is a <strong>sample</strong> paragraph with <em>formatting</em>.</p>
        <h2>Subheading</h2>
        <ul>
            <li><a href="https://example.com">Example Link</a></li>
            <li><a href="/relative" title="Relative Link">Relative</a></li>
            <li><a href="#anchor">Anchor Link</a></li>
        </ul>
        <div>
            <p>Another paragraph with some text.</p>
        </div>
        <noscript>No JavaScript content</noscript>
    </body>
    </html>
    """


@pytest.fixture
def empty_html() -> str:
    return "<html><head></head><body></body></html>"


@pytest.fixture
def html_with_links() -> str:
    """HTML with various types of links."""
    return """
    <html>
    <body>
        <a href="https://other.org/page" rel="nofollow noopener" target="_blank">External Link</a>
        <a href="https://example.com/page">Same Host Absolute</a>
        <a href="/relative/path">Relative Link</a>
        <a href="sibling">   Sibling
            Link  </a>
        <a href="#section">Anchor Link</a>
        <a href="javascript:void(0)">Script Link</a>
        <a href="JavaScript:alert(1)">Upper Script Link</a>
        <a href="mailto:test@example.com">Email Link</a>
        <a href="   ">Blank Link</a>
        <a href="/no-text"></a>
        <a href="http://[invalid">Broken Link</a>
        <a>Link without href</a>
    </body>
    </html>
    """


@pytest.fixture
def html_with_metadata() -> str:
    """HTML with various metadata tags."""
    return """
    <html lang="de">
    <head>
        <meta http-equiv="Content-Type" content="text/html; charset=ISO-8859-1">
        <title>Metadata Test Page</title>
        <meta name="description" content="Test description">
        <meta name="description" content="Second description">
        <meta name="keywords" content="test, metadata, html">
        <meta name="robots" content="noindex">
        <meta name="author" content="   ">
        <meta property="og:title" content="OG Title">
        <meta property="og:description" content="OG Description">
        <meta property="og:image" content="https://example.com/image.jpg">
        <meta property="og:type" content="article">
        <meta name="twitter:card" content="summary">
    </head>
    <body>
        <h1>Content</h1>
    </body>
    </html>
    """


@pytest.fixture
def html_with_headings() -> str:
    return """
    <html>
    <body>
        <h2 id="intro">Introduction</h2>
        <h1>Title</h1>
        <h3 id="">Details</h3>
        <h2>Background</h2>
        <h6>Fine <em>print</em></h6>
    </body>
    </html>
    """


@pytest.fixture
def html_with_images() -> str:
    return """
    <html>
    <head><base href="https://cdn.example.com/assets/"></head>
    <body>
        <img src="logo.png" alt="Company logo" width="120" height="40">
        <img src="/banner.jpg" alt="" loading="lazy">
        <img src="https://other.org/pixel.gif">
        <img alt="No source">
        <img src="  ">
    </body>
    </html>
    """


@pytest.fixture
def html_with_text() -> str:
    return """
    <html>
    <body>
        <script>var hidden = "Script text should never be counted.";</script>
        <p>The quick brown fox jumps over the lazy dog. Short one!</p>
        <p>Is this the real life? Is this just fantasy...</p>
        <style>p { margin: 0 }</style>
        <p>The dog's owner didn't mind at all.</p>
    </body>
    </html>
    """
