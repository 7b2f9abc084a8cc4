from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from flask import Flask, jsonify, request, session

from ..anomalies.model import ExceptionRecord
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import RecordStatus, Role
from ..core.exceptions import AuthorizationError, LifecycleError, ValidationError
from ..directory.repository import display_name
from ..reports.service import EXCEPTION_CSV_FIELDS, to_csv_bytes


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def record_to_dict(r: AttendanceRecord, names: dict[str, str]) -> dict:
    return {
        "id": r.record_id,
        "assignment_id": r.assignment_id,
        "employee_id": r.employee_id,
        "employee_name": display_name(names, r.employee_id),
        "date": r.work_date.isoformat(),
        "scheduled_start": _iso(r.scheduled_start),
        "scheduled_end": _iso(r.scheduled_end),
        "shift_name": r.shift_name,
        "first_in": _iso(r.first_in),
        "last_out": _iso(r.last_out),
        "total_work_minutes": r.total_work_minutes,
        "break_minutes": r.break_minutes,
        "overtime_minutes": r.overtime_minutes,
        "exceptions": [tag.value for tag in r.exceptions],
        "has_manual_entry": r.has_manual_entry,
        "status": r.status.value,
    }


def exception_to_dict(ex: ExceptionRecord, names: dict[str, str]) -> dict:
    return {
        "id": ex.exception_id,
        "employee_id": ex.employee_id,
        "employee_name": display_name(names, ex.employee_id),
        "date": ex.work_date.isoformat(),
        "type": ex.exception_type.value,
        "details": ex.details,
        "status": ex.status.value,
        "source_event_id": ex.source_event_id,
        "minutes": ex.minutes,
    }


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")

    def _date_range() -> tuple[date, date]:
        end_s = request.args.get("end")
        end = _parse_date(end_s) if end_s else date.today()
        start_s = request.args.get("start")
        start = _parse_date(start_s) if start_s else end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
        return start, end

    def _parse_record_status(value) -> RecordStatus:
        # Accept the stored value ("Reviewed") or the enum name ("REVIEWED").
        raw = str(value or "").strip()
        for status in RecordStatus:
            if raw == status.value or raw.upper() == status.name:
                return status
        raise ValidationError(f"Unknown record status: {value!r}")

    def _current_role() -> Role:
        # Session is populated by the external identity service.
        try:
            return Role(session.get("role"))
        except ValueError:
            raise AuthorizationError("Login required")

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(LifecycleError)
    def _lifecycle_error(e: LifecycleError):
        return jsonify({"success": False, "message": str(e)}), 409

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e: AuthorizationError):
        return jsonify({"success": False, "message": str(e)}), 403

    @app.route("/api/reconciliation", methods=["GET"], endpoint="reconciliation")
    def reconciliation():
        start, end = _date_range()
        report = container.reconciliation_service.reconcile(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id") or None,
        )
        return jsonify(
            {
                "success": True,
                "start": report.start.isoformat(),
                "end": report.end.isoformat(),
                "records": [record_to_dict(r, report.names) for r in report.records],
                "exceptions": [exception_to_dict(e, report.names) for e in report.exceptions],
            }
        )

    @app.route("/api/reports/daily-summary", methods=["GET"], endpoint="daily_summary")
    def daily_summary():
        start, end = _date_range()
        report = container.reconciliation_service.reconcile(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id") or None,
        )
        data = report.daily_summary()
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary})

    @app.route("/api/exceptions/export", methods=["GET"], endpoint="export_exceptions")
    def export_exceptions():
        start, end = _date_range()
        report = container.reconciliation_service.reconcile(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id") or None,
        )
        filename = f"exceptions_{start:%Y%m%d}_{end:%Y%m%d}.csv"
        return app.response_class(
            to_csv_bytes(report.exception_rows(), EXCEPTION_CSV_FIELDS),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/exceptions/<exception_id>/acknowledge", methods=["POST"], endpoint="acknowledge_exception")
    def acknowledge_exception(exception_id: str):
        status = container.lifecycle_tracker.acknowledge(
            exception_id,
            current_role=_current_role(),
            actor_id=session.get("user_id"),
        )
        return jsonify({"success": True, "id": exception_id, "status": status.value})

    @app.route("/api/records/<record_id>/status", methods=["POST"], endpoint="record_status")
    def record_status(record_id: str):
        payload = request.get_json(silent=True) or {}
        target = _parse_record_status(payload.get("status"))

        status = container.lifecycle_tracker.move_record(
            record_id,
            target,
            current_role=_current_role(),
            actor_id=session.get("user_id"),
        )
        return jsonify({"success": True, "id": record_id, "status": status.value})
