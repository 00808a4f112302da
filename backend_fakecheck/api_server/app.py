"""
FastAPI/ASGI application entrypoint.

Build the ASGI app from the current environment settings.
Run with: uvicorn backend_fakecheck.api_server.app:app --host 0.0.0.0 --port 8000
"""

from backend_fakecheck.api_server.server import create_app
from backend_fakecheck.config import get_settings
from backend_fakecheck.fakecheck_logging import configure_structlog

settings = get_settings()
configure_structlog(settings.log_level, settings.log_format)
app = create_app(settings)

__all__ = ["app"]
