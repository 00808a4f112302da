"""
Environment variable loading for FakeCheck.

- Loads .env from project root when available (python-dotenv).
- Typed readers with defaults: unparseable values fall back instead of failing.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is backend_fakecheck/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"


def load_fakecheck_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str) -> str:
    """Return the stripped env value, or default when unset/blank."""
    return (os.getenv(name) or "").strip() or default


def env_int(name: str, default: int) -> int:
    """Return the env value as int; default when unset, blank or not an integer."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Comma-separated env value as a tuple of stripped items; default when unset or empty."""
    items = tuple(item.strip() for item in (os.getenv(name) or "").split(",") if item.strip())
    return items or default
