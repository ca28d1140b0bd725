"""Pydantic models for the structured views produced by the extractor.

Every result carries ``mode`` and ``count``. Field declaration order is the
order keys appear in serialized output.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field


class OpenGraphData(BaseModel):
    """Open Graph properties of a page."""

    title: str = Field(description="og:title content")
    description: str = Field(description="og:description content")
    image: str = Field(description="og:image content")
    type: str = Field(description="og:type content")


class MetadataResult(BaseModel):
    """Document-level metadata."""

    mode: str = Field(default="metadata", description="Extraction mode")
    title: str = Field(description="Document title")
    description: str = Field(description="Meta description")
    keywords: str = Field(description="Meta keywords")
    charset: str = Field(description="Declared character set")
    language: str = Field(description="Declared document language")
    viewport: str = Field(description="Meta viewport")
    robots: str = Field(description="Meta robots directives")
    author: str = Field(description="Meta author")
    og: OpenGraphData = Field(description="Open Graph properties")
    count: int = Field(description="Number of fields that were specified")


class LinkItem(BaseModel):
    """A single resolved hyperlink."""

    text: str = Field(description="Anchor text, truncated")
    href: str = Field(description="Absolute URL")
    is_external: bool = Field(description="Whether the link leaves the document's host")
    rel: str = Field(description="rel attribute")
    target: str = Field(description="target attribute")


class LinksResult(BaseModel):
    """Hyperlinks found in a document."""

    mode: str = Field(default="links", description="Extraction mode")
    links: list[LinkItem] = Field(description="Links, capped for payload size")
    total: int = Field(description="Total number of valid links")
    internal: int = Field(description="Links on the document's host")
    external: int = Field(description="Links to other hosts")
    count: int = Field(description="Total number of valid links")


class HeadingItem(BaseModel):
    text: str = Field(description="Heading text")
    id: str | None = Field(default=None, description="id attribute")


class HeadingLevel(BaseModel):
    """Headings found at one level."""

    count: int = Field(default=0, description="Number of headings at this level")
    items: list[HeadingItem] = Field(default_factory=list, description="Headings, capped per level")


class HeadingsResult(BaseModel):
    """Headings h1 to h6 in document order."""

    mode: str = Field(default="headings", description="Extraction mode")
    h1: HeadingLevel = Field(default_factory=HeadingLevel)
    h2: HeadingLevel = Field(default_factory=HeadingLevel)
    h3: HeadingLevel = Field(default_factory=HeadingLevel)
    h4: HeadingLevel = Field(default_factory=HeadingLevel)
    h5: HeadingLevel = Field(default_factory=HeadingLevel)
    h6: HeadingLevel = Field(default_factory=HeadingLevel)
    count: int = Field(default=0, description="Total number of headings")


class ImageItem(BaseModel):
    """A single resolved image."""

    src: str = Field(description="Absolute image URL")
    alt: str | None = Field(default=None, description="alt attribute, None when absent")
    width: str | None = Field(default=None, description="width attribute")
    height: str | None = Field(default=None, description="height attribute")
    loading: str = Field(default="eager", description="loading attribute")


class ImagesResult(BaseModel):
    """Images found in a document."""

    mode: str = Field(default="images", description="Extraction mode")
    images: list[ImageItem] = Field(description="Images, capped for payload size")
    total: int = Field(description="Total number of valid images")
    with_alt: int = Field(description="Images with non-blank alt text")
    without_alt: int = Field(description="Images with missing or blank alt text")
    count: int = Field(description="Total number of valid images")


class TextResult(BaseModel):
    """Plain-text statistics of the document body."""

    mode: str = Field(default="text", description="Extraction mode")
    sentences: list[str] = Field(description="Sentences, capped for payload size")
    word_count: int = Field(description="Number of words")
    unique_words: int = Field(description="Number of distinct lower-cased words")
    reading_time: int = Field(description="Estimated reading time in minutes")
    character_count: int = Field(description="Characters in the collapsed text")
    sentence_count: int = Field(description="Number of sentences found")
    average_words_per_sentence: float = Field(description="Words per sentence")
    sample: str = Field(description="Leading sample of the text")
    count: int = Field(description="Number of sentences found")


class UnsupportedModeResult(BaseModel):
    """Explicit result for an extraction mode outside the supported set."""

    mode: str = Field(description="The mode that was requested")
    error: str = Field(description="Why nothing was extracted")
    count: int = Field(default=0, description="Always zero")


ExtractionResult = Union[
    MetadataResult,
    LinksResult,
    HeadingsResult,
    ImagesResult,
    TextResult,
    UnsupportedModeResult,
]
