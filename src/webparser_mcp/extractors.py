"""Extract structured views from a parsed HTML document.

``extract`` dispatches on the extraction mode to one function per mode.
Every function is pure: it reads the ParsedDocument and returns a result
model. Items that cannot be used (blank hrefs, unresolvable URLs) are
skipped rather than failing the whole extraction.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from urllib.parse import urljoin, urlsplit

from webparser_mcp.config import ExtractionLimits
from webparser_mcp.document import ParsedDocument, collapse_whitespace
from webparser_mcp.errors import MalformedReferenceError, UnsupportedModeError
from webparser_mcp.models.modes import ExtractionMode
from webparser_mcp.models.results import (
    ExtractionResult,
    HeadingItem,
    HeadingLevel,
    HeadingsResult,
    ImageItem,
    ImagesResult,
    LinkItem,
    LinksResult,
    MetadataResult,
    OpenGraphData,
    TextResult,
    UnsupportedModeResult,
)

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "not specified"
NO_LINK_TEXT = "[no text]"
TRUNCATION_MARKER = "..."

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
_WORD = re.compile(r"\b[\w']+\b")


def resolve_url(reference: str, base_url: str | None) -> tuple[str, str | None]:
    """Resolve a possibly relative reference against a base URL.

    Args:
        reference: href or src value as written in the page
        base_url: URL to resolve against (may be None)

    Returns:
        Tuple of (absolute URL, lower-cased hostname or None)

    Raises:
        MalformedReferenceError: If the reference cannot be resolved or its
            host cannot be parsed
    """
    try:
        absolute = urljoin(base_url or "", reference.strip())
        hostname = urlsplit(absolute).hostname
    except ValueError as e:
        raise MalformedReferenceError(reference, base_url, str(e)) from e
    return absolute, hostname


def _hostname(url: str | None) -> str | None:
    if not url:
        return None
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def _meta_content(doc: ParsedDocument, key: str) -> str | None:
    """Content of the first meta tag whose name or property matches key."""
    key = key.lower()
    for meta in doc.metas:
        names = (meta.name, meta.property)
        if any(n and n.strip().lower() == key for n in names):
            if meta.content and meta.content.strip():
                return meta.content.strip()
    return None


def extract_metadata(
    doc: ParsedDocument, base_url: str | None, limits: ExtractionLimits
) -> MetadataResult:
    """Extract title, meta tags and Open Graph properties."""
    values = {
        "title": doc.title or None,
        "description": _meta_content(doc, "description"),
        "keywords": _meta_content(doc, "keywords"),
        "charset": doc.charset,
        "language": doc.language,
        "viewport": _meta_content(doc, "viewport"),
        "robots": _meta_content(doc, "robots"),
        "author": _meta_content(doc, "author"),
    }
    og_values = {
        name: _meta_content(doc, f"og:{name}")
        for name in ("title", "description", "image", "type")
    }

    specified = sum(1 for v in values.values() if v) + sum(1 for v in og_values.values() if v)

    return MetadataResult(
        **{key: value or NOT_SPECIFIED for key, value in values.items()},
        og=OpenGraphData(**{key: value or NOT_SPECIFIED for key, value in og_values.items()}),
        count=specified,
    )


def extract_links(
    doc: ParsedDocument, base_url: str | None, limits: ExtractionLimits
) -> LinksResult:
    """Extract hyperlinks, resolved to absolute URLs."""
    resolve_against = doc.resolve_base(base_url)
    document_host = _hostname(base_url or doc.url)

    links: list[LinkItem] = []
    internal = external = 0

    for anchor in doc.anchors:
        href = anchor.href.strip()
        if not href or href.lower().startswith("javascript:") or href.startswith("#"):
            continue

        try:
            absolute, hostname = resolve_url(href, resolve_against)
        except MalformedReferenceError as e:
            logger.debug(f"Skipping link: {e}")
            continue

        is_external = hostname != document_host
        if is_external:
            external += 1
        else:
            internal += 1

        if len(links) >= limits.max_links:
            continue

        text = collapse_whitespace(anchor.text)[: limits.link_text_length]
        links.append(
            LinkItem(
                text=text or NO_LINK_TEXT,
                href=absolute,
                is_external=is_external,
                rel=anchor.rel or "",
                target=anchor.target or "_self",
            )
        )

    total = internal + external
    return LinksResult(links=links, total=total, internal=internal, external=external, count=total)


def extract_headings(
    doc: ParsedDocument, base_url: str | None, limits: ExtractionLimits
) -> HeadingsResult:
    """Group h1-h6 headings by level in document order."""
    levels = {level: HeadingLevel() for level in range(1, 7)}

    for heading in doc.headings:
        bucket = levels[heading.level]
        bucket.count += 1
        if len(bucket.items) < limits.max_headings_per_level:
            heading_id = heading.id.strip() if heading.id else ""
            bucket.items.append(HeadingItem(text=heading.text, id=heading_id or None))

    return HeadingsResult(
        **{f"h{level}": bucket for level, bucket in levels.items()},
        count=sum(bucket.count for bucket in levels.values()),
    )


def extract_images(
    doc: ParsedDocument, base_url: str | None, limits: ExtractionLimits
) -> ImagesResult:
    """Extract images with alt-text coverage counts."""
    resolve_against = doc.resolve_base(base_url)

    images: list[ImageItem] = []
    total = with_alt = 0

    for image in doc.images:
        if not image.src or not image.src.strip():
            continue

        try:
            absolute, _ = resolve_url(image.src, resolve_against)
        except MalformedReferenceError as e:
            logger.debug(f"Skipping image: {e}")
            continue

        total += 1
        if image.alt and image.alt.strip():
            with_alt += 1

        if len(images) < limits.max_images:
            images.append(
                ImageItem(
                    src=absolute,
                    alt=image.alt,
                    width=image.width,
                    height=image.height,
                    loading=image.loading or "eager",
                )
            )

    return ImagesResult(
        images=images,
        total=total,
        with_alt=with_alt,
        without_alt=total - with_alt,
        count=total,
    )


def extract_text(
    doc: ParsedDocument, base_url: str | None, limits: ExtractionLimits
) -> TextResult:
    """Compute sentence and word statistics over the body text."""
    text = collapse_whitespace(doc.body_text)

    sentences = [
        sentence
        for sentence in (part.strip() for part in _SENTENCE_BOUNDARY.split(text))
        if len(sentence) > limits.min_sentence_length
    ]
    words = _WORD.findall(text.lower())

    word_count = len(words)
    sentence_count = len(sentences)

    sample = text[: limits.text_sample_length]
    if len(text) > limits.text_sample_length:
        sample += TRUNCATION_MARKER

    return TextResult(
        sentences=sentences[: limits.max_sentences],
        word_count=word_count,
        unique_words=len(set(words)),
        reading_time=math.ceil(word_count / limits.words_per_minute),
        character_count=len(text),
        sentence_count=sentence_count,
        average_words_per_sentence=round(word_count / max(sentence_count, 1), 1),
        sample=sample,
        count=sentence_count,
    )


Extractor = Callable[[ParsedDocument, str | None, ExtractionLimits], ExtractionResult]

EXTRACTORS: dict[ExtractionMode, Extractor] = {
    ExtractionMode.METADATA: extract_metadata,
    ExtractionMode.LINKS: extract_links,
    ExtractionMode.HEADINGS: extract_headings,
    ExtractionMode.IMAGES: extract_images,
    ExtractionMode.TEXT: extract_text,
}


def extract(
    doc: ParsedDocument,
    mode: ExtractionMode | str,
    base_url: str | None = None,
    limits: ExtractionLimits | None = None,
) -> ExtractionResult:
    """Extract one structured view of a document.

    Args:
        doc: Parsed document
        mode: Extraction mode (enum member or name)
        base_url: URL of the document, used to resolve relative references
            and to decide which links are external (defaults to ``doc.url``)
        limits: Payload-size caps (defaults to ExtractionLimits())

    Returns:
        The mode-specific result, or UnsupportedModeResult with count 0 when
        the mode is not recognized
    """
    try:
        extraction_mode = ExtractionMode.parse(mode)
    except UnsupportedModeError as e:
        logger.warning(str(e))
        return UnsupportedModeResult(mode=str(mode), error=str(e))

    if limits is None:
        limits = ExtractionLimits()

    return EXTRACTORS[extraction_mode](doc, base_url, limits)
