from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok, optional_int
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..students.controller import student_to_dict


def _servant_dict(s) -> dict:
    return {
        "servant_id": s.servant_id,
        "name": s.name,
        "phone": s.phone,
        "email": s.email,
        "is_admin": s.is_admin,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/servants", methods=["GET"], endpoint="servants_list")
    def servants_list():
        return ok([_servant_dict(s) for s in container.servant_service.list_servants()])

    @app.route("/api/servants", methods=["POST"], endpoint="servants_add")
    def servants_add():
        data = request.get_json(silent=True) or {}
        try:
            servant_id = container.servant_service.add_servant(
                name=data.get("name") or "",
                phone=data.get("phone"),
                email=data.get("email"),
                is_admin=bool(data.get("is_admin", False)),
            )
        except DomainError as e:
            return error_response(e)
        return ok({"servant_id": servant_id}, 201)

    @app.route("/api/servants/<int:servant_id>/students", methods=["GET"], endpoint="servants_students")
    def servants_students(servant_id: int):
        try:
            rows = container.servant_service.list_assigned_students(servant_id)
        except DomainError as e:
            return error_response(e)
        return ok([student_to_dict(s) for s in rows])

    @app.route("/api/servants/<int:servant_id>/students", methods=["POST"], endpoint="servants_assign")
    def servants_assign(servant_id: int):
        data = request.get_json(silent=True) or {}
        try:
            student_id = optional_int(data.get("student_id"), "student_id")
            if student_id is None:
                raise ValidationError("student_id is required")
            container.servant_service.assign_student(servant_id=servant_id, student_id=student_id)
        except DomainError as e:
            return error_response(e)
        return ok({"servant_id": servant_id, "student_id": student_id})

    @app.route("/api/assignments", methods=["GET"], endpoint="servants_assignments")
    def servants_assignments():
        return ok(
            [{"student_id": a.student_id, "servant_id": a.servant_id} for a in container.servant_service.list_assignments()]
        )

    @app.route("/api/students/<int:student_id>/servant", methods=["DELETE"], endpoint="servants_unassign")
    def servants_unassign(student_id: int):
        try:
            container.servant_service.unassign_student(student_id=student_id)
        except DomainError as e:
            return error_response(e)
        return ok({"student_id": student_id})
