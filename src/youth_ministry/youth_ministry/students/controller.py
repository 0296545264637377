from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok
from ..container import Container
from ..core.exceptions import DomainError


def student_to_dict(s) -> dict:
    return {
        "student_id": s.student_id,
        "name": s.name,
        "grade": s.grade,
        "is_active": s.is_active,
        "phone": s.phone,
        "parent_phone": s.parent_phone,
        "parent_email": s.parent_email,
        "address": s.address,
        "date_of_birth": s.date_of_birth.isoformat() if s.date_of_birth else None,
        "notes": s.notes,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        try:
            rows = container.student_service.list_active(
                search=request.args.get("search"),
                sort_by=request.args.get("sort_by") or "name",
            )
        except DomainError as e:
            return error_response(e)
        return ok([student_to_dict(s) for s in rows])

    @app.route("/api/students", methods=["POST"], endpoint="students_add")
    def students_add():
        try:
            student_id = container.student_service.add_student(request.get_json(silent=True) or {})
        except DomainError as e:
            return error_response(e)
        return ok({"student_id": student_id}, 201)

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="students_get")
    def students_get(student_id: int):
        try:
            student = container.student_service.get_student(student_id)
        except DomainError as e:
            return error_response(e)
        return ok(student_to_dict(student))

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    def students_update(student_id: int):
        try:
            container.student_service.update_student(student_id, request.get_json(silent=True) or {})
        except DomainError as e:
            return error_response(e)
        return ok({"student_id": student_id})

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="students_deactivate")
    def students_deactivate(student_id: int):
        # Soft delete: attendance history keeps referencing the student.
        try:
            container.student_service.deactivate_student(student_id)
        except DomainError as e:
            return error_response(e)
        return ok({"student_id": student_id, "is_active": False})
