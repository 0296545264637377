from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Servant:
    """Domain entity: a volunteer mentor who receives absence alerts."""

    servant_id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False


@dataclass(frozen=True)
class ServantAssignment:
    student_id: int
    servant_id: int
