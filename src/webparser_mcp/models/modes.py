"""Closed sets of extraction modes and output formats."""

from __future__ import annotations

from enum import Enum

from webparser_mcp.errors import UnsupportedFormatError, UnsupportedModeError


class ExtractionMode(str, Enum):
    """Which structured view of a page to extract."""

    METADATA = "metadata"
    LINKS = "links"
    HEADINGS = "headings"
    IMAGES = "images"
    TEXT = "text"

    @classmethod
    def parse(cls, value: ExtractionMode | str) -> ExtractionMode:
        """Coerce a mode name to an ExtractionMode.

        Args:
            value: An ExtractionMode or its (case-insensitive) name

        Returns:
            The matching ExtractionMode

        Raises:
            UnsupportedModeError: If the value names no mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedModeError(value)


class OutputFormat(str, Enum):
    """Serialization target for an extraction result."""

    JSON = "json"
    CSV = "csv"
    HTML = "html"

    @property
    def extension(self) -> str:
        """File extension used when the output is exported."""
        return self.value

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @classmethod
    def parse(cls, value: OutputFormat | str) -> OutputFormat:
        """Coerce a format name to an OutputFormat.

        Raises:
            UnsupportedFormatError: If the value names no format
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedFormatError(value)


_MEDIA_TYPES = {
    OutputFormat.JSON: "application/json",
    OutputFormat.CSV: "text/csv",
    OutputFormat.HTML: "text/html",
}
