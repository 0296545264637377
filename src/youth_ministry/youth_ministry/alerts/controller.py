from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok, optional_int
from ..container import Container
from ..core.enums import AlertStatus
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/alerts", methods=["GET"], endpoint="alerts_current")
    def alerts_current():
        try:
            views = container.alert_service.current_alerts()
        except DomainError as e:
            return error_response(e)
        return ok({"count": len(views), "alerts": [v.to_dict() for v in views]})

    @app.route("/api/alerts/generate", methods=["POST"], endpoint="alerts_generate")
    def alerts_generate():
        try:
            summary = container.alert_service.generate_alerts()
        except DomainError as e:
            return error_response(e)
        return ok({"upserted": summary.upserted, "unassigned_student_ids": summary.unassigned_student_ids})

    @app.route("/api/servants/<int:servant_id>/alerts", methods=["GET"], endpoint="alerts_for_servant")
    def alerts_for_servant(servant_id: int):
        # "pending" (default) or "all"
        wanted = (request.args.get("status") or "pending").lower()
        if wanted not in {"pending", "all"}:
            return error_response(ValidationError("status must be 'pending' or 'all'"))
        status = AlertStatus.PENDING if wanted == "pending" else None
        rows = container.alert_service.list_for_servant(servant_id, status=status)
        return ok([a.to_dict() for a in rows])

    @app.route("/api/alerts/<int:alert_id>/follow-up", methods=["POST"], endpoint="alerts_follow_up")
    def alerts_follow_up(alert_id: int):
        data = request.get_json(silent=True) or {}
        try:
            servant_id = optional_int(data.get("servant_id"), "servant_id")
            if servant_id is None:
                raise ValidationError("servant_id is required")
            alert = container.alert_service.mark_followed_up(alert_id, by_servant_id=servant_id)
        except DomainError as e:
            return error_response(e)
        return ok(alert.to_dict())
