"""Batch reconciliation for a scheduler/cron.

Writes the exception export (or the daily time summary) as CSV to stdout or
to ``--out``. Re-running over the same range is safe: output is recomputed
from the stores every time.

    python scripts/run_reconciliation.py --start 2026-03-01 --end 2026-03-07
"""

from __future__ import annotations

import argparse
import importlib
import sys
from datetime import date, timedelta
from pathlib import Path

from dotenv import load_dotenv

from attendance_reconciliation.common.datetime_utils import parse_iso_date
from attendance_reconciliation.config import get_settings_module
from attendance_reconciliation.container import build_container
from attendance_reconciliation.core.logging import configure_logging, get_logger
from attendance_reconciliation.reports.service import DAILY_SUMMARY_FIELDS, EXCEPTION_CSV_FIELDS, to_csv_bytes

logger = get_logger("scripts.run_reconciliation")


def parse_args(argv=None) -> argparse.Namespace:
    yesterday = date.today() - timedelta(days=1)
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--start", type=parse_iso_date, default=yesterday)
    parser.add_argument("--end", type=parse_iso_date, default=yesterday)
    parser.add_argument("--employee-id", default=None)
    parser.add_argument("--report", choices=["exceptions", "daily"], default="exceptions")
    parser.add_argument("--out", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv=None) -> None:
    load_dotenv(override=False)
    args = parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=settings.DB_CONFIG,
        timezone_name=settings.ENGINE_TIMEZONE,
        max_workers=settings.RECONCILE_MAX_WORKERS,
    )
    report = container.reconciliation_service.reconcile(start=args.start, end=args.end, employee_id=args.employee_id)

    if args.report == "daily":
        payload = to_csv_bytes(report.daily_summary().rows, DAILY_SUMMARY_FIELDS)
    else:
        payload = to_csv_bytes(report.exception_rows(), EXCEPTION_CSV_FIELDS)

    if args.out:
        args.out.write_bytes(payload)
        logger.info("%d record(s), %d exception(s) -> %s", len(report.records), len(report.exceptions), args.out)
    else:
        sys.stdout.buffer.write(payload)


if __name__ == "__main__":
    main()
