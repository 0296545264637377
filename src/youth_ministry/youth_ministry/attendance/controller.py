from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok, optional_int, parse_date_arg, parse_enum
from ..container import Container
from ..core.enums import AttendanceStatus, ServiceType
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<day>", methods=["GET"], endpoint="attendance_roll_call")
    def attendance_roll_call(day: str):
        try:
            roll = container.attendance_service.roll_call(
                parse_date_arg(day),
                sort_by=request.args.get("sort_by") or "name",
            )
        except DomainError as e:
            return error_response(e)
        return ok(
            {
                "date": roll.attendance_date.isoformat(),
                "is_cancelled": roll.is_cancelled,
                "present_count": roll.present_count,
                "total_count": roll.total_count,
                "students": [
                    {
                        "student_id": r.student_id,
                        "name": r.name,
                        "grade": r.grade,
                        "status": r.status.value if r.status else None,
                    }
                    for r in roll.rows
                ],
            }
        )

    @app.route("/api/attendance/<day>/<int:student_id>", methods=["PUT"], endpoint="attendance_mark")
    def attendance_mark(day: str, student_id: int):
        data = request.get_json(silent=True) or {}
        try:
            attendance_id = container.attendance_service.mark_attendance(
                student_id=student_id,
                attendance_date=parse_date_arg(day),
                status=parse_enum(AttendanceStatus, data.get("status"), "status"),
                marked_by=optional_int(data.get("marked_by"), "marked_by"),
                service_type=parse_enum(ServiceType, data.get("service_type"), "service_type", ServiceType.FRIDAY),
            )
        except DomainError as e:
            return error_response(e)
        return ok({"attendance_id": attendance_id})

    @app.route("/api/attendance/<day>/<int:student_id>/toggle", methods=["POST"], endpoint="attendance_toggle")
    def attendance_toggle(day: str, student_id: int):
        data = request.get_json(silent=True) or {}
        try:
            status = container.attendance_service.toggle_attendance(
                student_id=student_id,
                attendance_date=parse_date_arg(day),
                marked_by=optional_int(data.get("marked_by"), "marked_by"),
            )
        except DomainError as e:
            return error_response(e)
        return ok({"student_id": student_id, "status": status.value})

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="attendance_history")
    def attendance_history(student_id: int):
        try:
            limit = optional_int(request.args.get("limit"), "limit")
            rows = (
                container.attendance_service.history(student_id, limit=limit)
                if limit
                else container.attendance_service.history(student_id)
            )
        except DomainError as e:
            return error_response(e)
        return ok(
            [
                {
                    "date": r.attendance_date.isoformat(),
                    "status": r.status.value,
                    "service_type": r.service_type.value,
                }
                for r in rows
            ]
        )
