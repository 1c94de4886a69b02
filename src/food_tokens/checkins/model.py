from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CollectionEvent:
    """Domain entity: one food-token collection.

    ``time_collected`` is always a timezone-aware UTC datetime.
    """

    id: str
    staff_id: int
    tag: int
    time_collected: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "staff_id": self.staff_id,
            "tag": self.tag,
            "time_collected": self.time_collected.isoformat(),
        }


@dataclass(frozen=True)
class InsertNotice:
    """Delivered to subscribers when new rows show up in a watched table."""

    table: str
    new_rows: int
