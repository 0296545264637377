from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .connection import ConnectionFactory


@contextmanager
def db_cursor(factory: ConnectionFactory, *, dictionary: bool = True) -> Iterator[Any]:
    """Cursor on a fresh connection; commit on success, roll back on error."""

    conn = factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def as_bool(value: Any, default: bool = False) -> bool:
    """MySQL BOOLEAN columns come back as 0/1 ints."""

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return bool(int(value))
