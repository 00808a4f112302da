"""
Signal detectors — one independent heuristic check per suspicious trait.

Each check_* function reads one account record (a loosely-typed mapping) and
returns a typed Finding with the evidence behind its verdict. Checks never
raise on malformed fields: unparseable numbers, dates and lists degrade to
0 / empty, via the helpers in detection_engine.utils.

Only check_duplicate_profile_picture has cross-record state, through the
DedupIndex the caller passes in.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from backend_fakecheck.detection_engine.config import DEFAULT_CONFIG, PROFILE_FIELDS, DetectionConfig
from backend_fakecheck.detection_engine.models import DedupIndex, Finding
from backend_fakecheck.detection_engine.utils import (
    calculate_account_age,
    is_blank,
    is_false,
    parse_int,
    split_tokens,
)

POST_DELIMITER = "|||"

ISSUE_EMAIL_NOT_VERIFIED = "Email not verified"
ISSUE_DISPOSABLE_EMAIL = "Disposable email domain"
ISSUE_PHONE_NOT_VERIFIED = "Phone not verified"
ISSUE_NO_EMAIL = "No email provided"

ISSUE_ALWAYS_ON = "24/7 posting pattern detected"
ISSUE_LOCATION_JUMPS = "Multiple geographic locations in short time"


@dataclass(frozen=True)
class UsernameMatcher:
    regex: re.Pattern[str]
    description: str


# Checked in order; first match wins.
SUSPICIOUS_USERNAME_PATTERNS: tuple[UsernameMatcher, ...] = (
    UsernameMatcher(re.compile(r"^[a-z]+\d{4,}$", re.ASCII), "letters followed by 4+ digits"),
    UsernameMatcher(re.compile(r"^[a-z]{1,3}\d{8,}$", re.ASCII), "1-3 letters followed by 8+ digits"),
    UsernameMatcher(re.compile(r"^user\d+$", re.IGNORECASE | re.ASCII), "'user' followed by digits"),
    UsernameMatcher(re.compile(r"^account\d+$", re.IGNORECASE | re.ASCII), "'account' followed by digits"),
    UsernameMatcher(re.compile(r"^test\d+$", re.IGNORECASE | re.ASCII), "'test' followed by digits"),
    UsernameMatcher(re.compile(r"^fake\d+$", re.IGNORECASE | re.ASCII), "'fake' followed by digits"),
    UsernameMatcher(re.compile(r"^bot\d+$", re.IGNORECASE | re.ASCII), "'bot' followed by digits"),
)


@dataclass(frozen=True)
class BurstPostingFinding(Finding):
    posts_per_day: float = 0.0
    total_posts: int = 0
    account_age: int = 1
    """Age in days used as the divisor (floored to 1)."""

    def describe(self) -> str:
        return f"High posting frequency: {self.posts_per_day} posts/day"


@dataclass(frozen=True)
class ProfileCompletenessFinding(Finding):
    score: int = 0
    missing_fields: tuple[str, ...] = ()

    def describe(self) -> str:
        return f"Low profile completeness: {self.score}%"


@dataclass(frozen=True)
class AccountAgeFinding(Finding):
    age_days: int = 0

    def describe(self) -> str:
        return f"New account: {self.age_days} days old"


@dataclass(frozen=True)
class UsernamePatternFinding(Finding):
    pattern: str | None = None
    regex: str | None = None

    def describe(self) -> str:
        return f"Suspicious username pattern: {self.pattern}"


@dataclass(frozen=True)
class DuplicateProfileFinding(Finding):
    original_account: str | None = None

    @property
    def is_duplicate(self) -> bool:
        return self.is_suspicious

    def describe(self) -> str:
        if self.original_account is None:
            return "Duplicate profile picture detected"
        return f"Duplicate profile picture detected (also used by {self.original_account})"

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["isDuplicate"] = self.is_duplicate
        return out


@dataclass(frozen=True)
class MetadataFinding(Finding):
    issues: tuple[str, ...] = ()
    score: int = 0

    def points(self, weight: int) -> int:
        # Variable contribution: the sum of the individual issue scores.
        return self.score if self.is_suspicious else 0

    def describe(self) -> str:
        return f"Suspicious metadata: {', '.join(self.issues)}"


@dataclass(frozen=True)
class ActivityFinding(Finding):
    issue: str | None = None
    distinct_hours: int = 0
    distinct_locations: int = 0

    def describe(self) -> str:
        return f"Activity anomaly: {self.issue}"


@dataclass(frozen=True)
class ContentSimilarityFinding(Finding):
    similarity: int | None = None
    """Duplicate ratio as an integer percentage; None with fewer than 2 posts."""
    duplicate_ratio: float = 0.0
    post_count: int = 0

    def describe(self) -> str:
        return f"Duplicate content detected: {self.similarity}% similarity"


def check_burst_posting(
    account: Mapping[str, Any],
    *,
    config: DetectionConfig = DEFAULT_CONFIG,
    now: datetime | None = None,
) -> BurstPostingFinding:
    """Flag accounts posting more than burst_posts_per_day on average since creation."""
    posts = parse_int(account.get("posts"))
    age = max(calculate_account_age(account.get("created_at"), now=now), 1)
    posts_per_day = posts / age
    return BurstPostingFinding(
        is_suspicious=posts_per_day > config.burst_posts_per_day,
        posts_per_day=round(posts_per_day, 2),
        total_posts=posts,
        account_age=age,
    )


def check_profile_completeness(
    account: Mapping[str, Any],
    *,
    config: DetectionConfig = DEFAULT_CONFIG,
) -> ProfileCompletenessFinding:
    """
    Score how filled-in the profile is (0-100) and flag sparse profiles.

    20 points per non-blank profile field, plus a bonus each for having more
    than a handful of followers and of followed accounts.
    """
    missing = tuple(name for name in PROFILE_FIELDS if is_blank(account.get(name)))
    score = (len(PROFILE_FIELDS) - len(missing)) * config.completeness_field_points
    if parse_int(account.get("followers")) > config.completeness_followers_min:
        score += config.completeness_connection_bonus
    if parse_int(account.get("following")) > config.completeness_following_min:
        score += config.completeness_connection_bonus
    return ProfileCompletenessFinding(
        is_suspicious=score < config.completeness_min_score,
        score=min(score, 100),
        missing_fields=missing,
    )


def check_account_age(
    account: Mapping[str, Any],
    *,
    config: DetectionConfig = DEFAULT_CONFIG,
    now: datetime | None = None,
) -> AccountAgeFinding:
    """Flag accounts younger than new_account_days. Missing created_at counts as age 0."""
    age_days = calculate_account_age(account.get("created_at"), now=now)
    return AccountAgeFinding(is_suspicious=age_days < config.new_account_days, age_days=age_days)


def check_username_pattern(account: Mapping[str, Any]) -> UsernamePatternFinding:
    """Match the username against SUSPICIOUS_USERNAME_PATTERNS; first match wins."""
    username = account.get("username")
    if is_blank(username):
        return UsernamePatternFinding(is_suspicious=False)
    text = str(username)
    for matcher in SUSPICIOUS_USERNAME_PATTERNS:
        if matcher.regex.fullmatch(text):
            return UsernamePatternFinding(
                is_suspicious=True,
                pattern=matcher.description,
                regex=matcher.regex.pattern,
            )
    return UsernamePatternFinding(is_suspicious=False)


def check_duplicate_profile_picture(
    account: Mapping[str, Any],
    index: DedupIndex,
) -> DuplicateProfileFinding:
    """
    Flag a profile picture already used by an earlier account in the same index.

    First sighting registers the picture under this account's username and is
    never flagged; later sightings report the first owner.
    """
    picture = account.get("profile_picture")
    if is_blank(picture):
        return DuplicateProfileFinding(is_suspicious=False)
    username = account.get("username")
    is_duplicate, original = index.check_and_register(
        str(picture), None if username is None else str(username)
    )
    return DuplicateProfileFinding(is_suspicious=is_duplicate, original_account=original)


def check_suspicious_metadata(
    account: Mapping[str, Any],
    *,
    config: DetectionConfig = DEFAULT_CONFIG,
) -> MetadataFinding:
    """
    Accumulate verification and email issues, each with its own score.

    Unverified email +1, disposable email domain +2, unverified phone +1,
    missing email +1.
    """
    issues: list[str] = []
    score = 0

    if is_false(account.get("email_verified")):
        issues.append(ISSUE_EMAIL_NOT_VERIFIED)
        score += 1

    email = account.get("email")
    if not is_blank(email):
        parts = str(email).split("@")
        domain = parts[1].strip().lower() if len(parts) > 1 else ""
        if domain in config.disposable_email_domains:
            issues.append(ISSUE_DISPOSABLE_EMAIL)
            score += 2

    if is_false(account.get("phone_verified")):
        issues.append(ISSUE_PHONE_NOT_VERIFIED)
        score += 1

    if is_blank(email):
        issues.append(ISSUE_NO_EMAIL)
        score += 1

    return MetadataFinding(is_suspicious=bool(issues), issues=tuple(issues), score=score)


def check_activity_anomalies(
    account: Mapping[str, Any],
    *,
    config: DetectionConfig = DEFAULT_CONFIG,
) -> ActivityFinding:
    """
    Flag near-continuous posting or implausibly many recent locations.

    Only one issue is reported; the posting-hours check wins when both hold.
    """
    hours: set[int] = set()
    for token in split_tokens(account.get("posting_hours")):
        try:
            hours.add(int(token))
        except ValueError:
            continue
    locations = {token.lower() for token in split_tokens(account.get("recent_locations"))}

    issue = None
    if len(hours) > config.max_distinct_posting_hours:
        issue = ISSUE_ALWAYS_ON
    elif len(locations) > config.max_distinct_locations:
        issue = ISSUE_LOCATION_JUMPS
    return ActivityFinding(
        is_suspicious=issue is not None,
        issue=issue,
        distinct_hours=len(hours),
        distinct_locations=len(locations),
    )


def check_content_similarity(
    account: Mapping[str, Any],
    *,
    config: DetectionConfig = DEFAULT_CONFIG,
) -> ContentSimilarityFinding:
    """Flag accounts whose recent posts are mostly exact repeats (trimmed, case-insensitive)."""
    raw = account.get("recent_posts")
    if isinstance(raw, (list, tuple)):
        posts = ["" if p is None else str(p) for p in raw]
    elif is_blank(raw):
        posts = []
    else:
        posts = str(raw).split(POST_DELIMITER)

    if len(posts) < 2:
        return ContentSimilarityFinding(is_suspicious=False, post_count=len(posts))

    unique = {post.strip().lower() for post in posts}
    ratio = 1 - len(unique) / len(posts)
    return ContentSimilarityFinding(
        is_suspicious=ratio > config.duplicate_content_ratio,
        similarity=round(ratio * 100),
        duplicate_ratio=round(ratio, 2),
        post_count=len(posts),
    )
