"""
Detection engine package — multi-signal fake-account scoring.

Runs eight independent heuristic detectors over an account record, combines
their findings into a suspicion score and LOW / MEDIUM / HIGH tier, and
coordinates batch scoring with cross-record duplicate-picture detection.
"""

from backend_fakecheck.detection_engine.batch import score_batch
from backend_fakecheck.detection_engine.config import DetectionConfig
from backend_fakecheck.detection_engine.models import (
    AccountAnalysis,
    BatchResult,
    DedupIndex,
    Finding,
    RiskLevel,
)
from backend_fakecheck.detection_engine.scorer import (
    DETECTOR_NAMES,
    combine_findings,
    risk_level_for,
    score_one,
)
from backend_fakecheck.detection_engine.utils import calculate_account_age, string_similarity

__all__ = [
    "AccountAnalysis",
    "BatchResult",
    "DETECTOR_NAMES",
    "DedupIndex",
    "DetectionConfig",
    "Finding",
    "RiskLevel",
    "calculate_account_age",
    "combine_findings",
    "risk_level_for",
    "score_batch",
    "score_one",
    "string_similarity",
]
