from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..anomalies.model import ExceptionRecord
from ..attendance.model import AttendanceRecord
from ..directory.repository import display_name

EXCEPTION_CSV_FIELDS = [
    "id",
    "employee_name",
    "date",
    "type",
    "details",
    "status",
    "source_event_id",
]

DAILY_SUMMARY_FIELDS = [
    "work_date",
    "employee_id",
    "employee_name",
    "shift_name",
    "first_in",
    "last_out",
    "worked_hours",
    "break_minutes",
    "exceptions",
    "manual_entry",
    "status",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def format_hours(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def exception_rows(exceptions: Sequence[ExceptionRecord], names: Mapping[str, str]) -> list[dict]:
    """Raw exception fields for compliance/audit export."""

    return [
        {
            "id": ex.exception_id,
            "employee_name": display_name(names, ex.employee_id),
            "date": ex.work_date.strftime("%Y-%m-%d"),
            "type": ex.exception_type.value,
            "details": ex.details,
            "status": ex.status.value,
            "source_event_id": ex.source_event_id,
        }
        for ex in exceptions
    ]


def daily_time_summary(records: Sequence[AttendanceRecord], names: Mapping[str, str]) -> ReportData:
    summary_map: dict[str, dict] = {}
    out_rows: list[dict] = []

    for r in records:
        out_rows.append(
            {
                "work_date": r.work_date.strftime("%Y-%m-%d"),
                "employee_id": r.employee_id,
                "employee_name": display_name(names, r.employee_id),
                "shift_name": r.shift_name,
                "first_in": r.first_in.strftime("%H:%M") if r.first_in else "-",
                "last_out": r.last_out.strftime("%H:%M") if r.last_out else "-",
                "worked_hours": format_hours(r.total_work_minutes),
                "break_minutes": r.break_minutes,
                "exceptions": ";".join(tag.value for tag in r.exceptions),
                "manual_entry": "yes" if r.has_manual_entry else "no",
                "status": r.status.value,
            }
        )

        s = summary_map.get(r.employee_id)
        if not s:
            s = {
                "employee_id": r.employee_id,
                "employee_name": display_name(names, r.employee_id),
                "total_minutes": 0,
                "days": 0,
            }
            summary_map[r.employee_id] = s
        s["total_minutes"] += r.total_work_minutes
        s["days"] += 1

    summary = [
        {
            "employee_id": s["employee_id"],
            "employee_name": s["employee_name"],
            "days": s["days"],
            "total_minutes": s["total_minutes"],
            "total_hours": format_hours(s["total_minutes"]),
        }
        for s in summary_map.values()
    ]
    summary.sort(key=lambda x: (-x["total_minutes"], x["employee_id"]))
    return ReportData(rows=out_rows, summary=summary)


def to_csv_bytes(rows: Sequence[dict], fieldnames: Sequence[str]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    # BOM so spreadsheet tools pick up UTF-8 names.
    return out.getvalue().encode("utf-8-sig")
