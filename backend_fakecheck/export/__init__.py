"""Export package — serialize scoring results for download."""

from backend_fakecheck.export.flagged_csv import EXPORT_HEADER, flagged_accounts_csv

__all__ = ["EXPORT_HEADER", "flagged_accounts_csv"]
