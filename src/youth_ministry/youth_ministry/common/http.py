from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import jsonify

from ..core.exceptions import DataLoadError, DomainError, InvalidStateError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (DataLoadError, 503),
)


def ok(payload: Any = None, status: int = 200):
    return jsonify({"success": True, "data": payload}), status


def error_response(exc: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return jsonify({"success": False, "message": str(exc)}), status
    return jsonify({"success": False, "message": str(exc)}), 400


def parse_date_arg(value: Optional[str], field_name: str = "date") -> date:
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def parse_enum(enum_type, value: Any, field_name: str, default=None):
    if value in (None, "") and default is not None:
        return default
    try:
        return enum_type(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_type)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
