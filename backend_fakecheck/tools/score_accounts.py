"""
Score an account export file from the command line.

Loads a CSV or JSON file of account records, scores it as one batch and
prints the flagged accounts. Optionally writes the flagged-accounts CSV
(same layout as GET /api/export) or dumps the full result as JSON.

Usage (from project root):

    python -m backend_fakecheck.tools.score_accounts accounts.csv
    python -m backend_fakecheck.tools.score_accounts accounts.json --flagged-csv flagged.csv
    python -m backend_fakecheck.tools.score_accounts accounts.csv --json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from backend_fakecheck.config import get_settings
from backend_fakecheck.core.exceptions import FakecheckError
from backend_fakecheck.detection_engine import score_batch
from backend_fakecheck.export import flagged_accounts_csv
from backend_fakecheck.fakecheck_logging import configure_structlog, get_logger
from backend_fakecheck.ingestion import load_records

logger = get_logger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Flag likely fake accounts in a CSV/JSON export.")
    parser.add_argument("path", type=Path, help="CSV or JSON file of account records")
    parser.add_argument("--flagged-csv", type=Path, default=None, help="Write flagged accounts CSV here")
    parser.add_argument("--json", action="store_true", help="Print the full batch result as JSON")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    # Logs go to stderr; stdout carries only the report or --json output.
    configure_structlog(settings.log_level, settings.log_format)
    try:
        records = load_records(args.path.name, args.path.read_bytes())
    except (OSError, FakecheckError) as e:
        logger.error("score_accounts_load_failed", path=str(args.path), error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    result = score_batch(records, config=settings.detection_config())

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(
            f"{result.total} accounts processed, {len(result.flagged)} flagged "
            f"({result.flagged_percentage:.2f}%)"
        )
        for analysis in result.flagged:
            print(
                f"  [{analysis.risk_level.value}] {analysis.username} "
                f"score={analysis.suspicion_score}: {'; '.join(analysis.flags)}"
            )

    if args.flagged_csv is not None:
        args.flagged_csv.write_text(flagged_accounts_csv(result.flagged), encoding="utf-8")
        logger.info("flagged_csv_written", path=str(args.flagged_csv), rows=len(result.flagged))
    return 0


if __name__ == "__main__":
    sys.exit(main())
