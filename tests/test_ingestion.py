"""
Tests for record ingestion (CSV / JSON uploads into account records).
"""

from __future__ import annotations

import pytest

from backend_fakecheck.core.exceptions import RecordParseError, UnsupportedFileFormatError
from backend_fakecheck.ingestion import load_records, parse_csv_records, parse_json_records


def test_parse_csv_keeps_strings_and_blank_cells():
    records = parse_csv_records("username,posts,bio\nalice,12,\nbob,n/a,hi\n")
    assert records == [
        {"username": "alice", "posts": "12", "bio": ""},
        {"username": "bob", "posts": "n/a", "bio": "hi"},
    ]


def test_parse_csv_short_row_and_quoted_delimiters():
    records = parse_csv_records('username,recent_locations,bio\n"carol","NYC,Paris"\n')
    assert records == [{"username": "carol", "recent_locations": "NYC,Paris", "bio": ""}]


def test_parse_csv_header_only_or_empty():
    assert parse_csv_records("username,email\n") == []
    assert parse_csv_records("") == []


def test_parse_json_array_and_single_object():
    assert parse_json_records('[{"username": "a"}, {"username": "b", "posts": 3}]') == [
        {"username": "a"},
        {"username": "b", "posts": 3},
    ]
    assert parse_json_records('{"username": "solo"}') == [{"username": "solo"}]
    assert parse_json_records("[]") == []


def test_parse_json_rejects_invalid():
    with pytest.raises(RecordParseError, match="Failed to parse JSON file"):
        parse_json_records("{oops")
    with pytest.raises(RecordParseError, match="item 1"):
        parse_json_records('[{"username": "a"}, "b"]')


def test_parse_json_oversized_integer_is_parse_error():
    text = '[{"username": "a", "posts": ' + "9" * 5000 + "}]"
    with pytest.raises(RecordParseError, match="Failed to parse JSON file"):
        parse_json_records(text)


def test_load_records_dispatches_on_extension():
    assert load_records("Accounts.CSV", b"username\nalice\n") == [{"username": "alice"}]
    assert load_records("accounts.json", b'[{"username": "alice"}]') == [{"username": "alice"}]


def test_load_records_strips_utf8_bom():
    assert load_records("a.csv", "\ufeffusername\nalice\n".encode("utf-8")) == [{"username": "alice"}]


def test_load_records_unsupported_extension():
    with pytest.raises(UnsupportedFileFormatError):
        load_records("accounts.xlsx", b"")
    with pytest.raises(UnsupportedFileFormatError):
        load_records(None, b"")


def test_load_records_rejects_non_utf8():
    with pytest.raises(RecordParseError):
        load_records("a.csv", b"\xff\xfe\xfa")
