from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..checkins.model import CollectionEvent
from ..core.enums import CollectionStatus
from ..staff.model import Staff


@dataclass(frozen=True)
class JoinedCollection:
    """Read-model: a collection event with its staff record, when one was found."""

    event: CollectionEvent
    staff: Optional[Staff] = None


@dataclass(frozen=True)
class CollectionSummary:
    total_staff: int
    collected_count: int
    not_collected_count: int
    collection_count: int = 0
    unmatched_count: int = 0

    def to_dict(self) -> dict:
        return {
            "total_staff": self.total_staff,
            "collected_count": self.collected_count,
            "not_collected_count": self.not_collected_count,
            "collection_count": self.collection_count,
            "unmatched_count": self.unmatched_count,
        }


@dataclass(frozen=True)
class StaffFilter:
    """Dashboard filter criteria; ``None`` or blank means "match everything"."""

    search_text: Optional[str] = None
    lab: Optional[str] = None
    tag: Optional[str] = None
    status: Optional[CollectionStatus] = None

    @property
    def is_empty(self) -> bool:
        return not any(
            [
                (self.search_text or "").strip(),
                (self.lab or "").strip(),
                (self.tag or "").strip(),
                self.status,
            ]
        )
