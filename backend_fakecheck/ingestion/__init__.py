"""
Ingestion package — turn uploaded files into account records.

Parses CSV and JSON payloads into plain mappings for the detection engine.
No normalization beyond decoding: the detectors tolerate loosely-typed fields.
"""

from backend_fakecheck.ingestion.records import (
    load_records,
    parse_csv_records,
    parse_json_records,
)

__all__ = ["load_records", "parse_csv_records", "parse_json_records"]
