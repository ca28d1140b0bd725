"""Extract structured data from HTML pages and serialize it.

The core is two pure steps:
- extract(): ParsedDocument + ExtractionMode -> extraction result
- format_result(): extraction result + OutputFormat -> str
"""

from webparser_mcp.config import ExtractionLimits
from webparser_mcp.document import ParsedDocument, parse_document
from webparser_mcp.extractors import extract
from webparser_mcp.formatters import export_filename, flatten_record, format_result
from webparser_mcp.models.modes import ExtractionMode, OutputFormat

__all__ = [
    "ExtractionLimits",
    "ExtractionMode",
    "OutputFormat",
    "ParsedDocument",
    "export_filename",
    "extract",
    "flatten_record",
    "format_result",
    "parse_document",
]
