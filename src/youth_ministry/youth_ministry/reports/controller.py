from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok, parse_date_arg, parse_enum
from ..container import Container
from ..core.enums import ServiceType
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/attendance", methods=["GET"], endpoint="reports_attendance")
    def reports_attendance():
        try:
            message = container.report_service.build_attendance_message(
                parse_date_arg(request.args.get("date")),
                parse_enum(ServiceType, request.args.get("service_type"), "service_type", ServiceType.FRIDAY),
            )
        except DomainError as e:
            return error_response(e)
        return ok(
            {
                "date": message.attendance_date.isoformat(),
                "service_type": message.service_type.value,
                "present": message.present_names,
                "text": message.text,
            }
        )
