"""
Parsing helpers and small primitives shared by the detectors.

Account records arrive loosely typed (numbers and booleans as strings, dates
in assorted layouts). Everything here degrades to a safe default instead of
raising, so a malformed field never fails the whole record.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any

from rapidfuzz.distance import Levenshtein

SECONDS_PER_DAY = 86400

_DATE_LAYOUTS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
)

_NUMERIC_RE = re.compile(r"^[+-]?\d+(\.\d*)?$")


def is_blank(value: Any) -> bool:
    """True for None and for values whose string form is empty after strip."""
    if value is None:
        return True
    return str(value).strip() == ""


def parse_int(value: Any, default: int = 0) -> int:
    """
    Coerce a loosely-typed count to int.

    int/bool pass through, floats and numeric strings are truncated toward
    zero; anything else (None, "", "n/a", NaN) returns default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        return int(value)
    text = str(value).strip()
    if not _NUMERIC_RE.match(text):
        return default
    try:
        return int(float(text)) if "." in text else int(text)
    except (ValueError, OverflowError):
        # Too many digits for int() or beyond float range.
        return default


def is_false(value: Any) -> bool:
    """True only for False or the string "false" (any case). Missing is not false."""
    if isinstance(value, bool):
        return value is False
    if isinstance(value, str):
        return value.strip().lower() == "false"
    return False


def split_tokens(value: Any, sep: str = ",") -> list[str]:
    """
    Decode a list field: a delimited string or an already-decoded list.

    Tokens are stripped and blanks dropped.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items: Iterable[Any] = value
    else:
        items = str(value).split(sep)
    tokens = []
    for item in items:
        if item is None:
            continue
        token = str(item).strip()
        if token:
            tokens.append(token)
    return tokens


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse created_at into an aware UTC datetime; None when absent or unparseable.

    Accepts datetime/date objects, epoch milliseconds (int/float), ISO-8601
    strings (trailing Z allowed) and a few common slash/space layouts.
    Naive values are taken as UTC.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            parsed = None
            for layout in _DATE_LAYOUTS:
                try:
                    parsed = datetime.strptime(text, layout)
                    break
                except ValueError:
                    continue
            if parsed is None:
                return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def calculate_account_age(created_at: Any, *, now: datetime | None = None) -> int:
    """
    Whole days between created_at and now, rounded up; 0 when created_at is unusable.

    Uses the absolute distance, so a future created_at counts the same as a past one.
    """
    created = parse_timestamp(created_at)
    if created is None:
        return 0
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    seconds = abs((current - created).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance (insert/delete/substitute, unit cost) between two strings."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str) -> float:
    """
    Similarity percentage (0-100) from Levenshtein distance over the longer length.

    Two empty strings are 100% similar.
    """
    return Levenshtein.normalized_similarity(a, b) * 100.0
