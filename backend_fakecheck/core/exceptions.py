"""
Application-level exceptions.

The detection engine itself never raises for data-shape reasons; these cover
the layers around it (record ingestion, stored-data lookups) and carry
messages safe to return to API clients.
"""

from __future__ import annotations


class FakecheckError(Exception):
    """Base class for FakeCheck domain errors."""


class UnsupportedFileFormatError(FakecheckError):
    """Uploaded file is neither CSV nor JSON."""

    def __init__(self, filename: str | None) -> None:
        self.filename = filename
        super().__init__("Unsupported file format. Please upload CSV or JSON.")


class RecordParseError(FakecheckError):
    """File content could not be decoded into account records."""


class NoDataUploadedError(FakecheckError):
    """An analysis was requested before any records were uploaded."""

    def __init__(self) -> None:
        super().__init__("No data to analyze. Please upload data first.")


class AccountNotFoundError(FakecheckError):
    """No uploaded record matches the requested username."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Account not found in uploaded data")
