from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings/absence-threshold", methods=["GET"], endpoint="settings_threshold_get")
    def settings_threshold_get():
        return ok(
            {
                "weeks": container.settings_service.get_absence_threshold(),
                "default": container.settings_service.default_threshold,
            }
        )

    @app.route("/api/settings/absence-threshold", methods=["PUT"], endpoint="settings_threshold_put")
    def settings_threshold_put():
        data = request.get_json(silent=True) or {}
        try:
            weeks = container.settings_service.set_absence_threshold(data.get("weeks"))
        except DomainError as e:
            return error_response(e)
        return ok({"weeks": weeks})
