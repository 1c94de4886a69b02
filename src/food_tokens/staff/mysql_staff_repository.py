from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Staff
from .repository import StaffRepository

_COLUMNS = "staffid, staffname, tag, email, lab"


def _to_staff(row: dict) -> Staff:
    return Staff(
        staff_id=int(row["staffid"]),
        staff_name=row["staffname"],
        tag=int(row["tag"]),
        email=row["email"],
        lab=row["lab"],
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_staff(self) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY staffname ASC")
            return [_to_staff(r) for r in fetchall(cur)]

    def find_staff_by_ids(self, ids: Iterable[int]) -> Sequence[Staff]:
        wanted = sorted({int(i) for i in ids})
        if not wanted:
            return []
        placeholders = ",".join(["%s"] * len(wanted))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM staff WHERE staffid IN ({placeholders})",
                tuple(wanted),
            )
            return [_to_staff(r) for r in fetchall(cur)]

    def get_by_email(self, email: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM staff WHERE LOWER(email)=LOWER(%s) ORDER BY staffid LIMIT 1",
                (email,),
            )
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def insert_staff(self, staff: Staff) -> Staff:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff(staffid, staffname, tag, email, lab)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (staff.staff_id, staff.staff_name, staff.tag, staff.email, staff.lab),
            )
        return staff
