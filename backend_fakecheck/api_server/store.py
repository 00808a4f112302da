"""
In-memory session state for the API: uploaded records, last analysis, dashboard stats.

One AccountStore belongs to one app instance (app.state.store) and is handed
to handlers through a FastAPI dependency. Nothing is persisted; a restart or
a new upload starts over. Sync handlers run in a thread pool, so every
read-modify-write goes through the lock.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request

from backend_fakecheck.core.exceptions import AccountNotFoundError, NoDataUploadedError
from backend_fakecheck.detection_engine import AccountAnalysis, BatchResult, DetectionConfig, score_batch


@dataclass
class DashboardStats:
    total_processed: int = 0
    total_flagged: int = 0
    recent_flags: list[AccountAnalysis] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalProcessed": self.total_processed,
            "totalFlagged": self.total_flagged,
            "recentFlags": [a.to_dict() for a in self.recent_flags],
        }


class AccountStore:
    """Records of the latest upload plus the results of the latest analysis."""

    def __init__(self, *, recent_flags_limit: int = 10) -> None:
        self._lock = threading.Lock()
        self._records: list[dict[str, Any]] = []
        self._flagged: list[AccountAnalysis] = []
        self._stats = DashboardStats()
        self._recent_flags_limit = recent_flags_limit

    def replace_records(self, records: Sequence[Mapping[str, Any]]) -> int:
        """Replace uploaded records; earlier analysis results stay until the next analyze."""
        with self._lock:
            self._records = [dict(r) for r in records]
            return len(self._records)

    def record_count(self) -> int:
        with self._lock:
            return len(self._records)

    def find_account(self, username: str) -> dict[str, Any]:
        """First uploaded record whose username matches case-insensitively."""
        wanted = username.strip().lower()
        with self._lock:
            for record in self._records:
                candidate = record.get("username")
                if candidate is not None and str(candidate).lower() == wanted:
                    return record
        raise AccountNotFoundError(username)

    def analyze(self, config: DetectionConfig | None = None) -> BatchResult:
        """Score all uploaded records as one batch and refresh dashboard state."""
        with self._lock:
            if not self._records:
                raise NoDataUploadedError()
            result = score_batch(self._records, config=config)
            self._flagged = list(result.flagged)
            limit = self._recent_flags_limit
            self._stats = DashboardStats(
                total_processed=result.total,
                total_flagged=len(result.flagged),
                recent_flags=self._flagged[-limit:] if limit > 0 else [],
            )
            return result

    def flagged(self) -> list[AccountAnalysis]:
        with self._lock:
            return list(self._flagged)

    def stats(self) -> DashboardStats:
        with self._lock:
            return self._stats


def get_store(request: Request) -> AccountStore:
    """Dependency: the store owned by the app serving this request."""
    return request.app.state.store
