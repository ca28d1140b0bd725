"""Pydantic response models for parse operations."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ParseResponse(BaseModel):
    """Response model for a single parse."""

    url: str | None = Field(default=None, description="The URL the HTML was loaded from")
    mode: str = Field(description="Extraction mode used")
    output_format: str = Field(description="Serialization format of content")
    count: int = Field(description="Number of items found")
    content: str = Field(description="The serialized extraction result")
    filename: str = Field(description="Suggested filename for exporting content")
    media_type: str = Field(description="Media type of content")
    data: dict[str, Any] = Field(description="The extraction result as structured data")


class ParseResultItem(BaseModel):
    """Individual result item for batch parse operations."""

    url: str = Field(description="The URL that was requested")
    success: bool = Field(description="Whether the parse was successful")
    data: ParseResponse | None = Field(default=None, description="Parse data if successful")
    error: str | None = Field(default=None, description="Error message if failed")


class BatchParseResponse(BaseModel):
    """Response model for batch parse operations."""

    total: int = Field(description="Total number of URLs processed")
    successful: int = Field(description="Number of successful parses")
    failed: int = Field(description="Number of failed parses")
    results: list[ParseResultItem] = Field(description="Results for each URL")
