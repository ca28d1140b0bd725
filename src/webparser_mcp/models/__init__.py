"""Pydantic data models for extraction results and parse responses.

This module defines the data structures used throughout the parser:
- Closed sets of extraction modes and output formats (ExtractionMode, OutputFormat)
- One result model per extraction mode (MetadataResult, LinksResult, ...)
- Tool responses for single and batch parses (ParseResponse, BatchParseResponse)

All models use Pydantic v2 for validation and serialization.
"""

from webparser_mcp.models.modes import ExtractionMode, OutputFormat
from webparser_mcp.models.responses import (
    BatchParseResponse,
    ParseResponse,
    ParseResultItem,
)
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

__all__ = [
    # Enumerations
    "ExtractionMode",
    "OutputFormat",
    # Extraction results
    "ExtractionResult",
    "MetadataResult",
    "OpenGraphData",
    "LinksResult",
    "LinkItem",
    "HeadingsResult",
    "HeadingLevel",
    "HeadingItem",
    "ImagesResult",
    "ImageItem",
    "TextResult",
    "UnsupportedModeResult",
    # Tool responses
    "ParseResponse",
    "ParseResultItem",
    "BatchParseResponse",
]
