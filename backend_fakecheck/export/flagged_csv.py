"""
CSV export of flagged accounts.

Column layout is consumed by analysts' spreadsheets; keep header text and
order stable. The header is bare, every data field is quoted, and flags are
joined with ";".
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from backend_fakecheck.detection_engine.models import AccountAnalysis
from backend_fakecheck.detection_engine.utils import is_blank

EXPORT_HEADER = (
    "Username",
    "Email",
    "Followers",
    "Following",
    "Posts",
    "Account Age (days)",
    "Suspicion Score",
    "Risk Level",
    "Flags",
)


def _field(data: dict, name: str, default: str) -> str:
    value = data.get(name)
    return default if is_blank(value) else str(value)


def flagged_accounts_csv(analyses: Iterable[AccountAnalysis]) -> str:
    """
    Render analyses as CSV text with EXPORT_HEADER.

    Email and counts come from the attached account data (blank / 0 when
    missing); account age comes from the account-age finding.
    """
    buf = io.StringIO()
    buf.write(",".join(EXPORT_HEADER) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for analysis in analyses:
        data = dict(analysis.account_data or {})
        writer.writerow(
            [
                analysis.username or "",
                _field(data, "email", ""),
                _field(data, "followers", "0"),
                _field(data, "following", "0"),
                _field(data, "posts", "0"),
                analysis.account_age_days,
                analysis.suspicion_score,
                analysis.risk_level.value,
                ";".join(analysis.flags),
            ]
        )
    return buf.getvalue()
