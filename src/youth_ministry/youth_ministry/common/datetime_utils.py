from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value) -> date:
    """Normalize a stored date value.

    The connector returns ``date`` for DATE columns, but rows written by older
    tooling may carry ``datetime`` or ISO strings. Anything else raises ValueError.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def now_local() -> datetime:
    """Local wall-clock time; the single place services read "now" from."""
    return datetime.now()


def first_name(full_name: str) -> str:
    """Token up to the first space ("Amir Hanna" -> "Amir")."""
    return (full_name or "").strip().split(" ")[0]
