from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok, optional_int, parse_date_arg
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/cancellations", methods=["POST"], endpoint="cancellations_create")
    def cancellations_create():
        data = request.get_json(silent=True) or {}
        try:
            day = parse_date_arg(data.get("date"))
            cancellation_id = container.cancellation_service.cancel_class(
                day,
                reason=data.get("reason"),
                marked_by=optional_int(data.get("marked_by"), "marked_by"),
            )
        except DomainError as e:
            return error_response(e)
        return ok({"cancellation_id": cancellation_id, "date": day.isoformat()}, 201)

    @app.route("/api/cancellations", methods=["GET"], endpoint="cancellations_list")
    def cancellations_list():
        return ok([d.isoformat() for d in container.cancellation_service.list_cancelled_dates()])

    @app.route("/api/cancellations/<day>", methods=["GET"], endpoint="cancellations_get")
    def cancellations_get(day: str):
        try:
            cancellation = container.cancellation_service.get(parse_date_arg(day))
        except DomainError as e:
            return error_response(e)
        return ok(
            {
                "date": day,
                "is_cancelled": cancellation is not None,
                "reason": cancellation.reason if cancellation else None,
            }
        )

    @app.route("/api/cancellations/<day>", methods=["DELETE"], endpoint="cancellations_restore")
    def cancellations_restore(day: str):
        try:
            container.cancellation_service.restore_class(parse_date_arg(day))
        except DomainError as e:
            return error_response(e)
        return ok({"date": day, "is_cancelled": False})
