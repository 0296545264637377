from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the youth roster.

    Note: Students are never hard-deleted while attendance references them;
    clearing ``is_active`` removes them from roll call and absence alerts.
    """

    student_id: int
    name: str
    grade: int
    is_active: bool = True
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    parent_email: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class StudentDraft:
    """Validated field set used for create/update."""

    name: str
    grade: int
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    parent_email: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    notes: Optional[str] = None
