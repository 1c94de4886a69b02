from __future__ import annotations

import os
from datetime import datetime

import pytest
import pytz

os.environ.setdefault("APP_ENV", "testing")


@pytest.fixture
def fixed_now() -> datetime:
    return pytz.utc.localize(datetime(2024, 3, 15, 12, 30, 0))
