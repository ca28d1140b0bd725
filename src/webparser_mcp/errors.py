"""Exception types raised by the parser core and its collaborators."""

from __future__ import annotations


class WebParserError(Exception):
    """Base class for all webparser errors."""


class UnsupportedModeError(WebParserError, ValueError):
    """Raised when an extraction mode is not one of the supported modes."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(f"Unsupported extraction mode: {mode!r}")


class UnsupportedFormatError(WebParserError, ValueError):
    """Raised when an output format is not one of the supported formats."""

    def __init__(self, output_format: object) -> None:
        self.output_format = output_format
        super().__init__(f"Unsupported output format: {output_format!r}")


class MalformedReferenceError(WebParserError, ValueError):
    """Raised when a relative URL cannot be resolved against its base."""

    def __init__(self, reference: str, base_url: str | None, reason: str = "") -> None:
        self.reference = reference
        self.base_url = base_url
        message = f"Cannot resolve {reference!r} against {base_url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ExtractionTimeoutError(WebParserError, TimeoutError):
    """Raised when extraction exceeds the caller's time budget."""


class EmptyResponseError(WebParserError):
    """Raised when a fetched document is empty or too short to be a page."""
