from __future__ import annotations

import logging
from datetime import datetime

import pytz

from ..common.datetime_utils import end_of_day, now_utc, start_of_day, to_utc
from ..core.exceptions import ConflictError, NotFoundError
from ..staff.repository import StaffRepository
from .model import CollectionEvent
from .repository import CollectionRepository

logger = logging.getLogger(__name__)


class CollectionService:
    """Use case: a staff member collects today's food token.

    At most one collection per staff member per calendar day (display
    timezone), checked before insert.
    """

    def __init__(self, collections: CollectionRepository, staff: StaffRepository, *, tz=pytz.utc):
        self._collections = collections
        self._staff = staff
        self._tz = tz

    def record_collection(self, staff_id: int, *, now: datetime | None = None) -> CollectionEvent:
        now = to_utc(now) if now else now_utc()

        matches = self._staff.find_staff_by_ids({int(staff_id)})
        if not matches:
            raise NotFoundError(f"Staff {staff_id} is not registered")
        member = matches[0]

        existing = self._collections.list_collection_events(
            start_of_day(now, self._tz),
            end_of_day(now, self._tz),
            staff_id=member.staff_id,
        )
        if existing:
            raise ConflictError(f"{member.staff_name} has already collected a token today")

        event = self._collections.insert_collection_event(
            staff_id=member.staff_id,
            tag=member.tag,
            time_collected=now,
        )
        logger.info("Recorded collection %s for staff %s", event.id, member.staff_id)
        return event
