from __future__ import annotations

from flask import Flask, request

from ..auth.gate import current_caller
from ..common.http import ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")
    gate = container.gate
    service = container.attendance_service

    @app.route(f"{prefix}/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @gate.admin_required
    def mark_attendance():
        data = request_data()
        record, created = service.mark(
            caller=current_caller(),
            employee_id=data.get("employeeId"),
            work_date=data.get("date"),
            status=data.get("status"),
        )
        message = "Attendance marked successfully" if created else "Attendance updated successfully"
        return ok(201 if created else 200, message=message, attendance=record.to_dict())

    @app.route(f"{prefix}/attendance", methods=["GET"], endpoint="attendance_get")
    @gate.login_required
    def get_attendance():
        record = service.get_for_day(
            caller=current_caller(),
            employee_id=request.args.get("employeeId"),
            work_date=request.args.get("date"),
        )
        return ok(attendance=record.to_dict())

    @app.route(f"{prefix}/attendance/report", methods=["GET"], endpoint="attendance_report")
    @gate.login_required
    def attendance_report():
        rows = service.report(
            caller=current_caller(),
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
            employee_id=request.args.get("employeeId"),
        )
        return ok(attendance=[r.to_dict() for r in rows])

    @app.route(f"{prefix}/attendance/all", methods=["GET"], endpoint="attendance_all_for_date")
    @gate.admin_required
    def attendance_for_date():
        rows = service.for_date(caller=current_caller(), work_date=request.args.get("date"))
        return ok(attendance=[r.to_dict() for r in rows])
