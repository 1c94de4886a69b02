from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import CommandMode


@dataclass(frozen=True)
class ControlCommand:
    """Side-channel instruction read by the fingerprint device (not by this app)."""

    id: str
    mode: CommandMode
    staff_id: int
    created_at: datetime
