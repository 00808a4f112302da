"""
Suspicion score computation — combine detector findings into a risk tier.

Responsibilities:
- Run every detector on one account record, in fixed order.
- Sum the weights of triggered detectors (the metadata detector adds its own
  sub-score) into suspicion_score and derive the LOW / MEDIUM / HIGH tier.
- Produce one human-readable flag per triggered detector, in detector order.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from backend_fakecheck.detection_engine.config import DEFAULT_CONFIG, DetectionConfig
from backend_fakecheck.detection_engine.models import AccountAnalysis, DedupIndex, Finding, RiskLevel
from backend_fakecheck.detection_engine.signals import (
    check_account_age,
    check_activity_anomalies,
    check_burst_posting,
    check_content_similarity,
    check_duplicate_profile_picture,
    check_profile_completeness,
    check_suspicious_metadata,
    check_username_pattern,
)
from backend_fakecheck.fakecheck_logging import get_logger

logger = get_logger(__name__)

# Detector names in declaration order; keys of AccountAnalysis.details.
DETECTOR_NAMES: tuple[str, ...] = (
    "burstPosting",
    "profileCompleteness",
    "accountAge",
    "usernamePattern",
    "duplicateProfile",
    "metadata",
    "activity",
    "content",
)


def detector_weights(config: DetectionConfig) -> dict[str, int]:
    """Fixed weight per detector. metadata is listed for completeness; it scores itself."""
    return {
        "burstPosting": config.burst_weight,
        "profileCompleteness": config.completeness_weight,
        "accountAge": config.account_age_weight,
        "usernamePattern": config.username_weight,
        "duplicateProfile": config.duplicate_picture_weight,
        "metadata": 0,
        "activity": config.activity_weight,
        "content": config.content_weight,
    }


def risk_level_for(score: int, config: DetectionConfig = DEFAULT_CONFIG) -> RiskLevel:
    """Map a suspicion score to its tier: >= high_risk -> HIGH, >= flag -> MEDIUM, else LOW."""
    if score >= config.high_risk_threshold:
        return RiskLevel.HIGH
    if score >= config.flag_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def run_detectors(
    account: Mapping[str, Any],
    index: DedupIndex,
    *,
    config: DetectionConfig,
    now: datetime,
) -> dict[str, Finding]:
    """Run all detectors; insertion order of the result is DETECTOR_NAMES order."""
    return {
        "burstPosting": check_burst_posting(account, config=config, now=now),
        "profileCompleteness": check_profile_completeness(account, config=config),
        "accountAge": check_account_age(account, config=config, now=now),
        "usernamePattern": check_username_pattern(account),
        "duplicateProfile": check_duplicate_profile_picture(account, index),
        "metadata": check_suspicious_metadata(account, config=config),
        "activity": check_activity_anomalies(account, config=config),
        "content": check_content_similarity(account, config=config),
    }


def combine_findings(
    username: str | None,
    findings: Mapping[str, Finding],
    config: DetectionConfig = DEFAULT_CONFIG,
) -> AccountAnalysis:
    """
    Aggregate findings into an AccountAnalysis.

    suspicion_score is the sum of each triggered finding's points; flags lists
    the triggered findings' messages in DETECTOR_NAMES order.
    """
    weights = detector_weights(config)
    score = 0
    flags: list[str] = []
    for name in DETECTOR_NAMES:
        finding = findings.get(name)
        if finding is None or not finding.is_suspicious:
            continue
        score += finding.points(weights[name])
        flags.append(finding.describe())
    return AccountAnalysis(
        username=username,
        suspicion_score=score,
        risk_level=risk_level_for(score, config),
        flags=tuple(flags),
        details=MappingProxyType(dict(findings)),
    )


def score_one(
    account: Mapping[str, Any],
    index: DedupIndex | None = None,
    *,
    config: DetectionConfig | None = None,
    now: datetime | None = None,
) -> AccountAnalysis:
    """
    Score a single account record.

    Without an index a fresh, empty DedupIndex is created for this call only,
    so the duplicate-picture check can never fire for an isolated lookup.
    Pass a shared index (as score_batch does) to detect duplicates across
    records.

    Args:
        account: Account record mapping; fields may be missing or loosely typed.
        index: Profile-picture index to check against and register into.
        config: Thresholds and weights; defaults when None.
        now: Reference time for account age; current UTC time when None.

    Returns:
        AccountAnalysis with score, tier, ordered flags and per-detector findings.

    Raises:
        TypeError: account is not a mapping.
    """
    if not isinstance(account, Mapping):
        raise TypeError(f"account record must be a mapping, got {type(account).__name__}")
    cfg = config or DEFAULT_CONFIG
    current = now or datetime.now(timezone.utc)
    dedup = index if index is not None else DedupIndex()

    username = account.get("username")
    username = None if username is None else str(username)
    findings = run_detectors(account, dedup, config=cfg, now=current)
    analysis = combine_findings(username, findings, cfg)

    logger.debug(
        "account_scored",
        username=username,
        suspicion_score=analysis.suspicion_score,
        risk_level=analysis.risk_level.value,
        flags=list(analysis.flags),
    )
    return analysis
