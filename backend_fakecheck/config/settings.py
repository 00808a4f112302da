"""
Application settings and environment configuration.

Responsibilities:
- Load configuration from environment variables and the project .env file.
- Provide defaults for every optional setting.
- Expose typed settings (API host/port, CORS origins, upload limit, dashboard sizes,
  flagging thresholds) for the API server, CLI and detection engine.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from backend_fakecheck.config.env import env_int, env_list, env_str, load_fakecheck_env
from backend_fakecheck.detection_engine.config import DetectionConfig


@dataclass(frozen=True)
class Settings:
    """Process configuration. Build with get_settings(); immutable afterwards."""

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    log_format: str = "json"
    """Log renderer: json or console (LOG_FORMAT)."""
    max_upload_bytes: int = 16 * 1024 * 1024
    cors_allow_origins: tuple[str, ...] = ("*",)
    """Origins allowed by the CORS middleware (CORS_ALLOW_ORIGINS, comma-separated)."""
    dashboard_recent_flags: int = 10
    """How many of the latest flagged accounts the dashboard stats keep."""
    dashboard_recent_activity: int = 5
    """How many flagged accounts GET /api/dashboard returns as recent activity."""
    flag_threshold: int = 3
    high_risk_threshold: int = 5

    def detection_config(self) -> DetectionConfig:
        """DetectionConfig with this process's tier thresholds applied."""
        return replace(
            DetectionConfig(),
            flag_threshold=self.flag_threshold,
            high_risk_threshold=self.high_risk_threshold,
        )


def get_settings() -> Settings:
    """
    Return the current application settings.

    Reads env (after loading .env) on every call so tests can monkeypatch
    variables; unset or malformed values use the dataclass defaults.
    """
    load_fakecheck_env()
    defaults = Settings()
    return Settings(
        api_host=env_str("API_HOST", defaults.api_host),
        api_port=env_int("API_PORT", defaults.api_port),
        log_level=env_str("LOG_LEVEL", defaults.log_level).upper(),
        log_format=env_str("LOG_FORMAT", defaults.log_format).lower(),
        max_upload_bytes=env_int("MAX_UPLOAD_BYTES", defaults.max_upload_bytes),
        cors_allow_origins=env_list("CORS_ALLOW_ORIGINS", defaults.cors_allow_origins),
        dashboard_recent_flags=env_int("DASHBOARD_RECENT_FLAGS", defaults.dashboard_recent_flags),
        dashboard_recent_activity=env_int("DASHBOARD_RECENT_ACTIVITY", defaults.dashboard_recent_activity),
        flag_threshold=env_int("FLAG_THRESHOLD", defaults.flag_threshold),
        high_risk_threshold=env_int("HIGH_RISK_THRESHOLD", defaults.high_risk_threshold),
    )
