from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # A Friday evening, after class.
    return datetime(2026, 3, 6, 19, 30, 0)
