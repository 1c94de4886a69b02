from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Sequence

import pytz

from ..aggregation.engine import (
    compute_checked_in_set,
    compute_summary,
    filter_staff,
    initials,
    join_events_with_staff,
)
from ..aggregation.model import CollectionSummary, JoinedCollection, StaffFilter
from ..checkins.repository import CollectionRepository
from ..checkins.watcher import InsertWatcher, Subscription
from ..common.datetime_utils import end_of_day, format_date, format_time, local_date, now_utc, start_of_day
from ..core.constants import COLLECTIONS_TABLE
from ..core.exceptions import RepositoryError
from ..staff.model import Staff
from ..staff.repository import StaffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    selected_date: date
    collections: Sequence[JoinedCollection]
    roster: Sequence[Staff]
    filtered_staff: Sequence[Staff]
    checked_in: frozenset
    summary: Optional[CollectionSummary]
    filters: StaffFilter = field(default_factory=StaffFilter)
    is_loading_collections: bool = False
    is_loading_staff: bool = False

    def to_dict(self, tz=pytz.utc) -> dict:
        return {
            "selected_date": self.selected_date.isoformat(),
            "selected_date_label": format_date(self.selected_date),
            "summary": self.summary.to_dict() if self.summary else None,
            "is_loading": {
                "collections": self.is_loading_collections,
                "staff": self.is_loading_staff,
            },
            "staff": [
                {
                    **m.to_dict(),
                    "initials": initials(m.staff_name),
                    "checked_in": m.staff_id in self.checked_in,
                    "status": "Checked In" if m.staff_id in self.checked_in else "Not Checked In",
                }
                for m in self.filtered_staff
            ],
            "collections": [
                {
                    **row.event.to_dict(),
                    "staff_name": row.staff.staff_name if row.staff else None,
                    "initials": initials(row.staff.staff_name) if row.staff else "",
                    "time": format_time(row.event.time_collected, tz),
                    "date": format_date(row.event.time_collected, tz),
                    "status": "Collected",
                }
                for row in self.collections
            ],
        }


class DashboardViewModel:
    """Admin dashboard: one day's collections joined with staff, plus roster stats.

    Every fetch is tagged with a generation number; a response that comes back
    after a newer fetch was started is discarded. State changes happen under a
    lock, data store calls never do.
    """

    def __init__(
        self,
        staff: StaffRepository,
        collections: CollectionRepository,
        *,
        tz=pytz.utc,
        enable_filters: bool = True,
        today: Optional[date] = None,
    ):
        self._staff = staff
        self._collections = collections
        self._tz = tz
        self._enable_filters = enable_filters

        self._lock = threading.Lock()
        self._day_generation = 0
        self._staff_generation = 0
        self._selected_date = today or local_date(now_utc(), tz)
        self._events: Optional[List[JoinedCollection]] = None
        self._roster: Optional[List[Staff]] = None
        self._filters = StaffFilter()
        self._loading_collections = False
        self._loading_staff = False

        self._subscription: Optional[Subscription] = None
        self._listeners: List[Callable[[DashboardState], None]] = []

    @property
    def selected_date(self) -> date:
        with self._lock:
            return self._selected_date

    # ----- fetches -----

    def select_date(self, day: date) -> None:
        with self._lock:
            self._selected_date = day
            self._day_generation += 1
            generation = self._day_generation
            self._loading_collections = True

        joined = self._fetch_day(day)

        with self._lock:
            if generation != self._day_generation:
                logger.debug("Discarding stale collections response for %s", day)
                return
            self._events = joined
            self._loading_collections = False
        self._emit()

    def refresh(self) -> None:
        self.select_date(self.selected_date)

    def load_staff(self) -> None:
        with self._lock:
            self._staff_generation += 1
            generation = self._staff_generation
            self._loading_staff = True

        try:
            roster = list(self._staff.list_staff())
        except RepositoryError as exc:
            logger.error("Error fetching staff: %s", exc)
            roster = []

        with self._lock:
            if generation != self._staff_generation:
                return
            self._roster = roster
            self._loading_staff = False
        self._emit()

    def _fetch_day(self, day: date) -> List[JoinedCollection]:
        try:
            events = list(
                self._collections.list_collection_events(
                    start_of_day(day, self._tz),
                    end_of_day(day, self._tz),
                )
            )
        except RepositoryError as exc:
            logger.error("Error fetching collections for %s: %s", day, exc)
            return []

        if not events:
            return []

        try:
            roster = self._staff.find_staff_by_ids(compute_checked_in_set(events))
        except RepositoryError as exc:
            # Still show the events, just without names.
            logger.error("Error fetching staff for collections: %s", exc)
            roster = []
        return join_events_with_staff(events, roster)

    # ----- filters -----

    def set_filters(self, criteria: Optional[StaffFilter]) -> None:
        with self._lock:
            self._filters = criteria if (criteria and self._enable_filters) else StaffFilter()
        self._emit()

    # ----- state -----

    def snapshot(self) -> DashboardState:
        with self._lock:
            events = list(self._events or [])
            roster = list(self._roster or [])
            have_both = self._events is not None and self._roster is not None
            filters = self._filters
            selected = self._selected_date
            loading_collections = self._loading_collections
            loading_staff = self._loading_staff

        raw_events = [row.event for row in events]
        checked_in = compute_checked_in_set(raw_events)
        return DashboardState(
            selected_date=selected,
            collections=tuple(events),
            roster=tuple(roster),
            filtered_staff=tuple(filter_staff(roster, filters, checked_in)),
            checked_in=checked_in,
            summary=compute_summary(roster, raw_events) if have_both else None,
            filters=filters,
            is_loading_collections=loading_collections,
            is_loading_staff=loading_staff,
        )

    # ----- push -----

    def add_listener(self, listener: Callable[[DashboardState], None]) -> None:
        self._listeners.append(listener)

    def _emit(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)

    def bind(self, watcher: InsertWatcher) -> Subscription:
        """Refetch the selected day whenever new collections are inserted."""
        self.close()
        self._subscription = watcher.subscribe_to_inserts(COLLECTIONS_TABLE, lambda _notice: self.refresh())
        return self._subscription

    def close(self) -> None:
        if self._subscription:
            self._subscription.cancel()
            self._subscription = None
