"""
Structured logging for Backend FakeCheck.

JSON logs with timestamp, event_type and keyword context (username, scores, flags).
Use get_logger() in every module for aggregation-friendly output.
"""

from backend_fakecheck.fakecheck_logging.logger import bind_account, configure_structlog, get_logger

__all__ = ["bind_account", "configure_structlog", "get_logger"]
