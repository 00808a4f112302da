"""
Account record loading from CSV and JSON uploads.

CSV: header row names the fields; every row becomes one record with string
values (empty cells stay ""). JSON: an array of objects, or a single object
treated as a one-record upload.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import PurePath
from typing import Any

from backend_fakecheck.core.exceptions import RecordParseError, UnsupportedFileFormatError
from backend_fakecheck.fakecheck_logging import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".json")


def parse_csv_records(text: str) -> list[dict[str, Any]]:
    """Parse CSV text with a header row into one dict per data row."""
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        return []
    records: list[dict[str, Any]] = []
    try:
        for row in reader:
            # Short rows leave None for missing cells; extra cells land under None.
            records.append({k.strip(): ("" if v is None else v) for k, v in row.items() if k is not None})
    except csv.Error as e:
        raise RecordParseError(f"Failed to parse CSV file: {e}") from e
    return records


def parse_json_records(text: str) -> list[dict[str, Any]]:
    """Parse a JSON array of account objects (or one object) into records."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordParseError(f"Failed to parse JSON file: {e.msg}") from e
    except ValueError as e:
        # e.g. integer literals past the int digit limit
        raise RecordParseError(f"Failed to parse JSON file: {e}") from e
    items = data if isinstance(data, list) else [data]
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise RecordParseError(
                f"Failed to parse JSON file: item {position} is {type(item).__name__}, expected an object"
            )
    return items


def load_records(filename: str | None, content: bytes) -> list[dict[str, Any]]:
    """
    Decode an uploaded file into account records, dispatching on its extension.

    Raises:
        UnsupportedFileFormatError: extension is not .csv or .json.
        RecordParseError: content is not UTF-8 or not valid for its format.
    """
    suffix = PurePath(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileFormatError(filename)
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise RecordParseError("File is not valid UTF-8 text") from e

    records = parse_csv_records(text) if suffix == ".csv" else parse_json_records(text)
    logger.info("records_loaded", filename=filename, format=suffix.lstrip("."), count=len(records))
    return records
