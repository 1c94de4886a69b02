from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import CollectionEvent
from .repository import CollectionRepository


def _to_event(row: dict) -> CollectionEvent:
    return CollectionEvent(
        id=str(row["id"]),
        staff_id=int(row["staffid"]),
        tag=int(row["tag"]),
        time_collected=from_db_datetime(row["time_collected"]),
    )


class MySQLCollectionRepository(CollectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_collection_events(
        self,
        window_start: datetime,
        window_end: datetime,
        *,
        staff_id: Optional[int] = None,
    ) -> Sequence[CollectionEvent]:
        where = ["time_collected >= %s", "time_collected <= %s"]
        params: list = [to_db_datetime(window_start), to_db_datetime(window_end)]
        if staff_id is not None:
            where.append("staffid=%s")
            params.append(int(staff_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, staffid, tag, time_collected
                FROM food_collections
                WHERE {' AND '.join(where)}
                ORDER BY time_collected DESC
                """,
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def insert_collection_event(
        self,
        *,
        staff_id: int,
        tag: int,
        time_collected: datetime,
    ) -> CollectionEvent:
        event = CollectionEvent(
            id=str(uuid.uuid4()),
            staff_id=int(staff_id),
            tag=int(tag),
            time_collected=from_db_datetime(to_db_datetime(time_collected)),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO food_collections(id, staffid, tag, time_collected)
                VALUES(%s,%s,%s,%s)
                """,
                (event.id, event.staff_id, event.tag, to_db_datetime(event.time_collected)),
            )
        return event

    def count_collection_events(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM food_collections")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
