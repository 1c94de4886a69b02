from __future__ import annotations

import uuid
from datetime import datetime

from ..core.enums import CommandMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, from_db_datetime, to_db_datetime
from .model import ControlCommand
from .repository import ControlRepository


class MySQLControlRepository(ControlRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_control_command(self, *, mode: CommandMode, staff_id: int, created_at: datetime) -> ControlCommand:
        command = ControlCommand(
            id=str(uuid.uuid4()),
            mode=CommandMode(mode),
            staff_id=int(staff_id),
            created_at=from_db_datetime(to_db_datetime(created_at)),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO control(id, mode, staffid, created_at) VALUES(%s,%s,%s,%s)",
                (command.id, command.mode.value, command.staff_id, to_db_datetime(command.created_at)),
            )
        return command
