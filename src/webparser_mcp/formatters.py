"""Serialize extraction results as JSON, CSV or HTML."""

from __future__ import annotations

import csv
import html
import io
import json
import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from webparser_mcp.models.modes import OutputFormat

HTML_TITLE = "Extraction results"


def _to_record(result: BaseModel | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    return result


def flatten_record(
    record: Mapping[str, Any], parent_key: str = "", sep: str = "."
) -> dict[str, Any]:
    """Flatten nested mappings into dotted key paths.

    Keys are visited in iteration order. Nested mappings are recursed into;
    lists and primitives are leaves.

    Args:
        record: Mapping to flatten
        parent_key: Prefix for every key produced
        sep: Separator between path segments

    Returns:
        Single-level dict of leaf path to leaf value

    Examples:
        >>> flatten_record({"a": 1, "b": {"c": 2, "d": 3}})
        {'a': 1, 'b.c': 2, 'b.d': 3}
    """
    flat: dict[str, Any] = {}
    for key, value in record.items():
        path = f"{parent_key}{sep}{key}" if parent_key else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_record(value, path, sep))
        else:
            flat[path] = value
    return flat


def _cell(value: Any) -> str:
    """Render a leaf value as CSV cell text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, Mapping)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def _table_rows(record: Mapping[str, Any]) -> list[Mapping[str, Any]] | None:
    """First top-level value that is a non-empty list of mappings, if any."""
    for value in record.values():
        if isinstance(value, list) and value and all(isinstance(item, Mapping) for item in value):
            return value
    return None


def to_csv(record: Mapping[str, Any]) -> str:
    """Serialize a record as CSV.

    Records holding a list of items (links, images) become one row per item.
    Anything else is flattened into a single header row and a single value
    row. Value cells are always quoted.
    """
    rows = _table_rows(record)
    if rows is not None:
        header: list[str] = []
        for item in rows:
            for key in item:
                if key not in header:
                    header.append(key)
        values = [[_cell(item.get(key)) for key in header] for item in rows]
    else:
        flat = flatten_record(record)
        header = list(flat)
        values = [[_cell(value) for value in flat.values()]]

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(header)
    csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n").writerows(values)
    return buffer.getvalue()


def _render_html(value: Any) -> str:
    if isinstance(value, Mapping):
        items = "".join(
            f"<dt>{html.escape(str(key))}</dt><dd>{_render_html(item)}</dd>"
            for key, item in value.items()
        )
        return f"<dl>{items}</dl>"
    if isinstance(value, (list, tuple)):
        items = "".join(f"<li>{_render_html(item)}</li>" for item in value)
        return f"<ul>{items}</ul>"
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return html.escape(str(value))


def to_html(record: Mapping[str, Any]) -> str:
    """Render a record as a standalone HTML document.

    Mappings become definition lists, lists become unordered lists. All keys
    and leaf text are escaped, so page content cannot inject markup.
    """
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="UTF-8">'
        f"<title>{HTML_TITLE}</title></head>\n"
        f"<body><h1>{HTML_TITLE}</h1>\n"
        f"{_render_html(record)}\n"
        "</body></html>\n"
    )


def to_json(record: Mapping[str, Any]) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False)


_FORMATTERS = {
    OutputFormat.JSON: to_json,
    OutputFormat.CSV: to_csv,
    OutputFormat.HTML: to_html,
}


def format_result(
    result: BaseModel | Mapping[str, Any], output_format: OutputFormat | str
) -> str:
    """Serialize an extraction result.

    Args:
        result: Result model or any nested mapping
        output_format: Target format (enum member or name)

    Returns:
        Serialized output

    Raises:
        UnsupportedFormatError: If the format is not json, csv or html
    """
    fmt = OutputFormat.parse(output_format)
    return _FORMATTERS[fmt](_to_record(result))


def export_filename(
    output_format: OutputFormat | str,
    prefix: str = "webparser-results",
    timestamp: float | None = None,
) -> str:
    """Build a download filename of the form ``<prefix>-<epoch ms>.<ext>``.

    Args:
        output_format: Format of the exported content
        prefix: Leading part of the filename
        timestamp: Seconds since the epoch (default: now)

    Returns:
        Filename with the format's extension
    """
    fmt = OutputFormat.parse(output_format)
    if timestamp is None:
        timestamp = time.time()
    return f"{prefix}-{round(timestamp * 1000)}.{fmt.extension}"
