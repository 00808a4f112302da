"""
FastAPI server — upload account data, run fake-account analysis, read results.

Endpoints under /api: upload (CSV/JSON), analyze (score the whole upload as
one batch), check (score one uploaded account), dashboard, export (flagged
accounts as CSV). State lives in the AccountStore of each app instance;
build apps with create_app().
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from backend_fakecheck import __version__
from backend_fakecheck.api_server.store import AccountStore, get_store
from backend_fakecheck.config import Settings, get_settings
from backend_fakecheck.core.exceptions import (
    AccountNotFoundError,
    NoDataUploadedError,
    RecordParseError,
    UnsupportedFileFormatError,
)
from backend_fakecheck.detection_engine import score_one
from backend_fakecheck.export import flagged_accounts_csv
from backend_fakecheck.fakecheck_logging import bind_account, get_logger
from backend_fakecheck.ingestion import load_records

logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Dependency: settings the serving app was built with."""
    return request.app.state.settings


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class UploadResponse(BaseModel):
    """POST /api/upload response."""

    success: bool = True
    message: str = Field(..., description="Human-readable upload summary")
    count: int = Field(..., ge=0, description="Number of account records stored")


class AnalysisSummary(BaseModel):
    totalProcessed: int = Field(..., ge=0)
    totalFlagged: int = Field(..., ge=0)
    flaggedPercentage: str = Field(..., description="Flagged share of processed accounts, 2 decimals")


class AnalyzeResponse(BaseModel):
    """POST /api/analyze response."""

    success: bool = True
    summary: AnalysisSummary
    flaggedAccounts: list[dict[str, Any]] = Field(default_factory=list)


class CheckRequest(BaseModel):
    """POST /api/check body: username to look up in the uploaded data."""

    username: str | None = Field(None, max_length=256, description="Username, matched case-insensitively")


class CheckResponse(BaseModel):
    """POST /api/check response."""

    success: bool = True
    account: dict[str, Any]
    analysis: dict[str, Any]


class DashboardResponse(BaseModel):
    """GET /api/dashboard response."""

    success: bool = True
    stats: dict[str, Any]
    recentActivity: list[dict[str, Any]] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload(
    file: UploadFile | None = File(None, description="CSV or JSON file of account records"),
    store: AccountStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> UploadResponse:
    """Replace the uploaded account records with the contents of a CSV or JSON file."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    content = await file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=400, detail="File too large")
    try:
        records = load_records(file.filename, content)
    except UnsupportedFileFormatError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except RecordParseError as e:
        logger.warning("upload_parse_failed", filename=file.filename, error=str(e))
        raise HTTPException(status_code=400, detail=str(e)) from e

    count = store.replace_records(records)
    logger.info("records_uploaded", filename=file.filename, count=count)
    return UploadResponse(message=f"Successfully uploaded {count} accounts", count=count)


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    store: AccountStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AnalyzeResponse:
    """Score every uploaded record as one batch and cache the flagged accounts."""
    try:
        result = store.analyze(settings.detection_config())
    except NoDataUploadedError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.exception("analysis_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Analysis failed") from e

    return AnalyzeResponse(
        summary=AnalysisSummary(
            totalProcessed=result.total,
            totalFlagged=len(result.flagged),
            flaggedPercentage=f"{result.flagged_percentage:.2f}",
        ),
        flaggedAccounts=[a.to_dict() for a in result.flagged],
    )


@router.post("/check", response_model=CheckResponse)
def check(
    body: CheckRequest,
    store: AccountStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> CheckResponse:
    """Score one uploaded account on its own (no cross-account duplicate detection)."""
    username = (body.username or "").strip()
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")
    try:
        account = store.find_account(username)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    analysis = score_one(account, config=settings.detection_config())
    bind_account(analysis.username).info(
        "account_checked",
        suspicion_score=analysis.suspicion_score,
        risk_level=analysis.risk_level.value,
    )
    return CheckResponse(account=account, analysis=analysis.to_dict())


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    store: AccountStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> DashboardResponse:
    """Stats of the latest analysis plus the most recently flagged accounts."""
    limit = settings.dashboard_recent_activity
    recent = store.flagged()[-limit:] if limit > 0 else []
    return DashboardResponse(
        stats=store.stats().to_dict(),
        recentActivity=[a.to_dict() for a in recent],
    )


@router.get("/export")
def export(store: AccountStore = Depends(get_store)) -> Response:
    """Download the flagged accounts of the latest analysis as CSV."""
    flagged = store.flagged()
    if not flagged:
        raise HTTPException(status_code=400, detail="No flagged accounts to export")
    return Response(
        content=flagged_accounts_csv(flagged),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="flagged_accounts.csv"'},
    )


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------


def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API with its own AccountStore.

    Every call returns an independent app; uploads and analyses made against
    one app are invisible to another.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="Backend FakeCheck API",
        description="Upload social-media account data and flag likely fake accounts.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.store = AccountStore(recent_flags_limit=settings.dashboard_recent_flags)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api", tags=["Fake Accounts"])
    app.add_exception_handler(HTTPException, http_exception_handler)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness check: API is up."""
        return {"status": "ok"}

    return app
