"""
Thresholds and weights for the fake-account detectors.

Defaults reproduce the production heuristics; tune per environment by
passing a modified DetectionConfig (dataclasses.replace) to the scorer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DISPOSABLE_EMAIL_DOMAINS: frozenset[str] = frozenset(
    {
        "10minutemail.com",
        "guerrillamail.com",
        "mailinator.com",
        "yopmail.com",
        "tempmail.org",
        "throwaway.email",
        "temp-mail.org",
        "getnada.com",
        "maildrop.cc",
    }
)

# Profile fields that each add completeness points when non-blank, in report order.
PROFILE_FIELDS: tuple[str, ...] = ("bio", "profile_picture", "full_name", "website", "location")


@dataclass(frozen=True)
class DetectionConfig:
    """
    Configurable thresholds for the detectors and the combiner.

    Counts are per account; rates are posts per day.
    """

    # Burst: posts per day strictly above this triggers.
    burst_posts_per_day: float = 50.0

    # Completeness: 20 points per filled profile field, bonuses for social connections.
    completeness_field_points: int = 20
    completeness_followers_min: int = 10
    completeness_following_min: int = 5
    completeness_connection_bonus: int = 10
    completeness_min_score: int = 40

    # Account age: younger than this many days triggers.
    new_account_days: int = 30

    # Activity: more distinct values than these trigger.
    max_distinct_posting_hours: int = 20
    max_distinct_locations: int = 3

    # Content: duplicate ratio strictly above this triggers.
    duplicate_content_ratio: float = 0.5

    disposable_email_domains: frozenset[str] = field(default=DISPOSABLE_EMAIL_DOMAINS)

    # Fixed weights added to the suspicion score when a detector triggers.
    # The metadata detector contributes its own sub-score instead.
    burst_weight: int = 2
    completeness_weight: int = 1
    account_age_weight: int = 1
    username_weight: int = 2
    duplicate_picture_weight: int = 3
    activity_weight: int = 1
    content_weight: int = 2

    # Tiers: score >= high -> HIGH, score >= flag -> MEDIUM, else LOW.
    # Batch flagging uses flag_threshold.
    flag_threshold: int = 3
    high_risk_threshold: int = 5


DEFAULT_CONFIG = DetectionConfig()
