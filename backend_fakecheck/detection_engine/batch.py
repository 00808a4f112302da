"""
Batch coordinator — score a collection of account records together.

Owns the DedupIndex for the lifetime of one call: records are scored strictly
in input order against the same index, so the earliest record using a
profile picture is its "original" and later ones are duplicates. Results are
partitioned into flagged (score >= flag_threshold, with the source record
attached) and clean, each preserving input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from backend_fakecheck.detection_engine.config import DEFAULT_CONFIG, DetectionConfig
from backend_fakecheck.detection_engine.models import AccountAnalysis, BatchResult, DedupIndex
from backend_fakecheck.detection_engine.scorer import score_one
from backend_fakecheck.fakecheck_logging import get_logger

logger = get_logger(__name__)


def score_batch(
    records: Iterable[Mapping[str, Any]],
    *,
    config: DetectionConfig | None = None,
    now: datetime | None = None,
) -> BatchResult:
    """
    Score every record in order and split the results into flagged and clean.

    A new DedupIndex is created per call and discarded afterwards; batches
    never share duplicate-picture state. All records in the batch are scored
    against the same reference time.

    Args:
        records: Account records, in the order that decides duplicate precedence.
        config: Thresholds and weights; defaults when None.
        now: Reference time for account age; current UTC time when None.

    Returns:
        BatchResult(total, flagged, clean). An empty input gives total=0.

    Raises:
        TypeError: records is None or a record is not a mapping.
    """
    if records is None:
        raise TypeError("records must be an iterable of account mappings, got None")
    cfg = config or DEFAULT_CONFIG
    current = now or datetime.now(timezone.utc)
    index = DedupIndex()

    flagged: list[AccountAnalysis] = []
    clean: list[AccountAnalysis] = []
    total = 0
    for record in records:
        total += 1
        analysis = score_one(record, index, config=cfg, now=current)
        if analysis.suspicion_score >= cfg.flag_threshold:
            flagged.append(replace(analysis, account_data=record))
        else:
            clean.append(analysis)

    logger.info(
        "batch_scored",
        total=total,
        flagged=len(flagged),
        clean=len(clean),
        distinct_pictures=len(index),
    )
    return BatchResult(total=total, flagged=tuple(flagged), clean=tuple(clean))
