from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

import pytz

from ..checkins.model import CollectionEvent
from ..checkins.repository import CollectionRepository
from ..common.datetime_utils import (
    add_months,
    days_in_month,
    end_of_month,
    format_date,
    format_time,
    is_same_day,
    local_date,
    now_utc,
    start_of_month,
)
from ..core.exceptions import RepositoryError
from ..staff.model import Staff

logger = logging.getLogger(__name__)

WEEKDAY_HEADERS = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")


@dataclass(frozen=True)
class CalendarDay:
    day: date
    has_collection: bool
    is_selected: bool


@dataclass(frozen=True)
class ProfileState:
    staff: Staff
    month: date
    days: Sequence[CalendarDay]
    leading_blanks: int
    selected_date: Optional[date]
    selected_collections: Sequence[CollectionEvent]
    is_loading: bool

    def to_dict(self, tz=pytz.utc) -> dict:
        return {
            "staff": self.staff.to_dict(),
            "month": self.month.strftime("%Y-%m"),
            "month_label": self.month.strftime("%B %Y"),
            "weekdays": list(WEEKDAY_HEADERS),
            "leading_blanks": self.leading_blanks,
            "days": [
                {
                    "date": d.day.isoformat(),
                    "day": d.day.day,
                    "has_collection": d.has_collection,
                    "is_selected": d.is_selected,
                }
                for d in self.days
            ],
            "selected_date": self.selected_date.isoformat() if self.selected_date else None,
            "selected_date_label": format_date(self.selected_date) if self.selected_date else None,
            "selected_times": [format_time(e.time_collected, tz) for e in self.selected_collections],
            "is_loading": self.is_loading,
        }


class ProfileViewModel:
    """A staff member's month calendar of their own collections."""

    def __init__(
        self,
        collections: CollectionRepository,
        current_user: Optional[Staff],
        *,
        tz=pytz.utc,
        month: Optional[date] = None,
    ):
        self._collections = collections
        self._user = current_user
        self._tz = tz

        self._lock = threading.Lock()
        self._generation = 0
        self._month = (month or local_date(now_utc(), tz)).replace(day=1)
        self._events: List[CollectionEvent] = []
        self._selected: Optional[date] = None
        self._selected_events: List[CollectionEvent] = []
        self._loading = False

    @property
    def month(self) -> date:
        with self._lock:
            return self._month

    def load(self) -> None:
        if self._user is None:
            return

        with self._lock:
            self._generation += 1
            generation = self._generation
            month = self._month
            self._loading = True

        try:
            events = list(
                self._collections.list_collection_events(
                    start_of_month(month, self._tz),
                    end_of_month(month, self._tz),
                    staff_id=self._user.staff_id,
                )
            )
        except RepositoryError as exc:
            logger.error("Error fetching collections for staff %s: %s", self._user.staff_id, exc)
            events = []

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale month response for %s", month)
                return
            self._events = events
            self._loading = False

    def change_month(self, month: date) -> None:
        with self._lock:
            self._month = month.replace(day=1)
            self._selected = None
            self._selected_events = []
        self.load()

    def previous_month(self) -> None:
        self.change_month(add_months(self.month, -1))

    def next_month(self) -> None:
        self.change_month(add_months(self.month, 1))

    def _events_on(self, day: date) -> List[CollectionEvent]:
        with self._lock:
            events = list(self._events)
        return [e for e in events if is_same_day(e.time_collected, day, self._tz)]

    def has_collection(self, day: date) -> bool:
        return bool(self._events_on(day))

    def handle_date_click(self, day: date) -> bool:
        """Select ``day``; no-op when it has no collections. Returns True if selected."""
        day_events = self._events_on(day)
        if not day_events:
            return False
        with self._lock:
            self._selected = day
            self._selected_events = day_events
        return True

    def calendar(self) -> List[CalendarDay]:
        with self._lock:
            month = self._month
            selected = self._selected
            events = list(self._events)

        collected_days = {local_date(e.time_collected, self._tz) for e in events}
        return [
            CalendarDay(day=d, has_collection=d in collected_days, is_selected=d == selected)
            for d in days_in_month(month)
        ]

    def snapshot(self) -> Optional[ProfileState]:
        if self._user is None:
            return None
        days = self.calendar()
        with self._lock:
            month = self._month
            selected = self._selected
            selected_events = tuple(self._selected_events)
            loading = self._loading
        return ProfileState(
            staff=self._user,
            month=month,
            days=tuple(days),
            # Sunday-first grid
            leading_blanks=(month.weekday() + 1) % 7,
            selected_date=selected,
            selected_collections=selected_events,
            is_loading=loading,
        )
