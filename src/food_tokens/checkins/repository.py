from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import CollectionEvent


class CollectionRepository(Protocol):
    def list_collection_events(
        self,
        window_start: datetime,
        window_end: datetime,
        *,
        staff_id: Optional[int] = None,
    ) -> Sequence[CollectionEvent]:
        """Events with window_start <= time_collected <= window_end, newest first."""

        raise NotImplementedError

    def insert_collection_event(
        self,
        *,
        staff_id: int,
        tag: int,
        time_collected: datetime,
    ) -> CollectionEvent:
        raise NotImplementedError

    def count_collection_events(self) -> int:
        raise NotImplementedError
