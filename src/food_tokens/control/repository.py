from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..core.enums import CommandMode
from .model import ControlCommand


class ControlRepository(Protocol):
    def insert_control_command(self, *, mode: CommandMode, staff_id: int, created_at: datetime) -> ControlCommand:
        raise NotImplementedError
