"""
Main entrypoint: run the FakeCheck API with uvicorn.

Env: API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT, MAX_UPLOAD_BYTES, CORS_ALLOW_ORIGINS,
FLAG_THRESHOLD, etc. (see backend_fakecheck.config).

Equivalent: uvicorn backend_fakecheck.api_server.app:app --host 0.0.0.0 --port 8000
"""

from backend_fakecheck.fakecheck_logging import configure_structlog, get_logger

logger = get_logger("main")


def main() -> None:
    """Build the app from env settings and serve it in the main thread."""
    import uvicorn

    from backend_fakecheck.api_server.server import create_app
    from backend_fakecheck.config import get_settings

    # Settings load .env first, so LOG_LEVEL / LOG_FORMAT from it apply here.
    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    app = create_app(settings)
    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
