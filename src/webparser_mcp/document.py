"""Parse raw HTML into a navigable document snapshot."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

# Tags whose text never reaches the reader
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

_CONTENT_TYPE_CHARSET = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


@dataclass
class MetaTag:
    name: str | None = None
    property: str | None = None
    content: str | None = None
    charset: str | None = None
    http_equiv: str | None = None


@dataclass
class Anchor:
    href: str
    text: str = ""
    rel: str | None = None
    target: str | None = None


@dataclass
class Heading:
    level: int
    text: str
    id: str | None = None


@dataclass
class Image:
    src: str | None
    alt: str | None = None
    width: str | None = None
    height: str | None = None
    loading: str | None = None


@dataclass
class ParsedDocument:
    """Snapshot of the parts of an HTML page the extractor reads."""

    url: str | None = None
    base_href: str | None = None
    title: str = ""
    metas: list[MetaTag] = field(default_factory=list)
    anchors: list[Anchor] = field(default_factory=list)
    headings: list[Heading] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    body_text: str = ""
    charset: str | None = None
    language: str | None = None

    def resolve_base(self, base_url: str | None = None) -> str | None:
        """Get the URL relative references are resolved against.

        Args:
            base_url: Caller-supplied document URL (defaults to ``self.url``)

        Returns:
            ``<base href>`` joined onto the document URL when declared,
            otherwise the document URL itself
        """
        document_url = base_url or self.url
        if self.base_href:
            try:
                return urljoin(document_url or "", self.base_href)
            except ValueError:
                return document_url
        return document_url


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def _attr(element: Tag, name: str) -> str | None:
    """Get an attribute as a string, joining multi-valued attributes."""
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _declared_charset(metas: list[MetaTag]) -> str | None:
    for meta in metas:
        if meta.charset:
            return meta.charset.strip()
    for meta in metas:
        if meta.http_equiv and meta.http_equiv.lower() == "content-type" and meta.content:
            match = _CONTENT_TYPE_CHARSET.search(meta.content)
            if match:
                return match.group(1)
    return None


def parse_document(html: str, url: str | None = None) -> ParsedDocument:
    """Parse HTML into a ParsedDocument.

    Malformed markup never raises: the parser always builds some tree, which
    may be empty.

    Args:
        html: Raw HTML text
        url: URL the HTML was loaded from, used as the default base URL

    Returns:
        ParsedDocument describing the page
    """
    soup = BeautifulSoup(html or "", "lxml")

    base = soup.find("base", href=True)
    title_tag = soup.find("title")

    metas = [
        MetaTag(
            name=_attr(meta, "name"),
            property=_attr(meta, "property"),
            content=_attr(meta, "content"),
            charset=_attr(meta, "charset"),
            http_equiv=_attr(meta, "http-equiv"),
        )
        for meta in soup.find_all("meta")
    ]

    anchors = [
        Anchor(
            href=_attr(link, "href") or "",
            text=link.get_text(" ", strip=True),
            rel=_attr(link, "rel"),
            target=_attr(link, "target"),
        )
        for link in soup.find_all("a", href=True)
    ]

    # find_all with a list of names keeps document order across levels
    headings = [
        Heading(
            level=int(heading.name[1]),
            text=collapse_whitespace(heading.get_text(" ")),
            id=_attr(heading, "id"),
        )
        for heading in soup.find_all(HEADING_TAGS)
    ]

    images = [
        Image(
            src=_attr(img, "src"),
            alt=_attr(img, "alt"),
            width=_attr(img, "width"),
            height=_attr(img, "height"),
            loading=_attr(img, "loading"),
        )
        for img in soup.find_all("img")
    ]

    html_tag = soup.find("html")
    language = _attr(html_tag, "lang") if html_tag else None

    # Strip non-content tags last, after everything above has been read
    for tag in NON_CONTENT_TAGS:
        for element in soup.find_all(tag):
            element.decompose()
    text_root = soup.body or soup
    body_text = text_root.get_text(" ")

    return ParsedDocument(
        url=url,
        base_href=_attr(base, "href") if base else None,
        title=collapse_whitespace(title_tag.get_text()) if title_tag else "",
        metas=metas,
        anchors=anchors,
        headings=headings,
        images=images,
        body_text=body_text,
        charset=_declared_charset(metas),
        language=language.strip() if language else None,
    )
