from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ClassCancellation:
    """A calendar date on which no class took place."""

    cancellation_id: int
    cancellation_date: date
    reason: Optional[str] = None
    marked_by_servant_id: Optional[int] = None
