"""
Data models for detection engine input and output.

Responsibilities:
- Define the per-detector Finding base, per-account AccountAnalysis and
  per-batch BatchResult returned by the scorer.
- Define DedupIndex, the batch-scoped profile-picture index.
- Provide to_dict() forms with the camelCase keys used by API responses
  and the CSV export.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class Finding:
    """
    Result of one detector for one account.

    Subclasses add the evidence fields for their detector. Immutable once built.
    """

    is_suspicious: bool

    def points(self, weight: int) -> int:
        """Contribution to the suspicion score: the detector weight when triggered."""
        return weight if self.is_suspicious else 0

    def describe(self) -> str:
        """Human-readable flag message; only meaningful when is_suspicious."""
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                value = list(value)
            out[_camel(f.name)] = value
        return out


class DedupIndex:
    """
    Content hash of a profile picture -> username that first used it.

    Scoped to one batch: the batch coordinator creates one, threads it through
    every record in input order, then drops it. Never share an instance
    between unrelated batches.
    """

    def __init__(self) -> None:
        self._seen: dict[str, str | None] = {}

    @staticmethod
    def content_hash(picture: str) -> str:
        return hashlib.md5(picture.encode("utf-8"), usedforsecurity=False).hexdigest()

    def lookup(self, picture: str) -> str | None:
        """Username registered for this picture, or None if unseen (or registered without a username)."""
        return self._seen.get(self.content_hash(picture))

    def register(self, picture: str, username: str | None) -> None:
        """Record username as first owner of picture; earlier registrations win."""
        self._seen.setdefault(self.content_hash(picture), username)

    def check_and_register(self, picture: str, username: str | None) -> tuple[bool, str | None]:
        """
        Return (is_duplicate, original_username).

        Unseen pictures are registered to username and reported as not duplicate;
        the index is left unchanged for duplicates.
        """
        key = self.content_hash(picture)
        if key in self._seen:
            return True, self._seen[key]
        self._seen[key] = username
        return False, None

    def __contains__(self, picture: object) -> bool:
        return isinstance(picture, str) and self.content_hash(picture) in self._seen

    def __len__(self) -> int:
        return len(self._seen)


@dataclass(frozen=True)
class AccountAnalysis:
    """
    Scoring result for one account.

    flags holds one message per triggered detector in detector order; details
    maps detector name to its Finding. account_data is attached only by the
    batch coordinator, for flagged accounts.
    """

    username: str | None
    suspicion_score: int
    risk_level: RiskLevel
    flags: tuple[str, ...]
    details: Mapping[str, Finding]
    account_data: Mapping[str, Any] | None = None

    @property
    def account_age_days(self) -> int:
        age = self.details.get("accountAge")
        return getattr(age, "age_days", 0) if age is not None else 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "username": self.username,
            "suspicionScore": self.suspicion_score,
            "riskLevel": self.risk_level.value,
            "flags": list(self.flags),
            "details": {name: finding.to_dict() for name, finding in self.details.items()},
        }
        if self.account_data is not None:
            out["accountData"] = dict(self.account_data)
        return out


@dataclass(frozen=True)
class BatchResult:
    """Outcome of scoring one batch; flagged and clean keep input order."""

    total: int
    flagged: tuple[AccountAnalysis, ...] = field(default_factory=tuple)
    clean: tuple[AccountAnalysis, ...] = field(default_factory=tuple)

    @property
    def flagged_percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return len(self.flagged) / self.total * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "flagged": [a.to_dict() for a in self.flagged],
            "clean": [a.to_dict() for a in self.clean],
        }
