"""
Pytest fixtures for FakeCheck tests. Pins the reference time and provides
account-record factories and a FastAPI client over a fresh app.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> str:
    """ISO timestamp `days` before NOW."""
    return (NOW - timedelta(days=days)).isoformat()


def make_account(**overrides):
    """
    Complete, verified, established account that triggers no detector.
    Override fields per test; pass None to drop a field.
    """
    account = {
        "username": "alice_w",
        "email": "alice@gmail.com",
        "email_verified": True,
        "phone_verified": True,
        "created_at": days_ago(400),
        "posts": 120,
        "followers": 300,
        "following": 150,
        "bio": "Photographer",
        "full_name": "Alice Walker",
        "website": "https://alice.example.com",
        "location": "Lisbon",
    }
    for key, value in overrides.items():
        if value is None:
            account.pop(key, None)
        else:
            account[key] = value
    if "profile_picture" not in overrides:
        # One picture per username so batches do not trip duplicate detection.
        account["profile_picture"] = f"https://cdn.example.com/{account.get('username')}.jpg"
    return account


@pytest.fixture
def now():
    return NOW


@pytest.fixture(name="days_ago")
def days_ago_fixture():
    return days_ago


@pytest.fixture
def account_factory():
    return make_account


@pytest.fixture
def settings():
    """Default settings, independent of the developer's env / .env."""
    from backend_fakecheck.config import Settings

    return Settings()


@pytest.fixture
def client(settings):
    """FastAPI TestClient over a new app (and therefore a new, empty store)."""
    from fastapi.testclient import TestClient

    from backend_fakecheck.api_server.server import create_app

    return TestClient(create_app(settings))
