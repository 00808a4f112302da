"""
Configuration management for Backend FakeCheck.

Loads settings from environment variables and the optional project .env file.
Exposes a single source of truth for service configuration.
"""

from backend_fakecheck.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
