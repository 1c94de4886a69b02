from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from food_tokens.checkins.model import CollectionEvent
from food_tokens.checkins.service import CollectionService
from food_tokens.core.exceptions import ConflictError, NotFoundError
from food_tokens.staff.model import Staff

ALICE = Staff(staff_id=1, staff_name="Alice", tag=10, email="alice@lab.io", lab="X")


class InMemoryStaff:
    def __init__(self, members):
        self.members = list(members)

    def find_staff_by_ids(self, ids):
        return [m for m in self.members if m.staff_id in set(ids)]


class InMemoryCollections:
    def __init__(self):
        self.events: list[CollectionEvent] = []

    def list_collection_events(self, window_start, window_end, *, staff_id=None):
        return [
            e
            for e in self.events
            if window_start <= e.time_collected <= window_end and (staff_id is None or e.staff_id == staff_id)
        ]

    def insert_collection_event(self, *, staff_id, tag, time_collected):
        event = CollectionEvent(id=f"e{len(self.events) + 1}", staff_id=staff_id, tag=tag, time_collected=time_collected)
        self.events.append(event)
        return event


def test_record_collection_uses_staff_tag(fixed_now):
    repo = InMemoryCollections()
    svc = CollectionService(repo, InMemoryStaff([ALICE]))

    event = svc.record_collection(1, now=fixed_now)

    assert event.staff_id == 1
    assert event.tag == 10
    assert event.time_collected == fixed_now


def test_second_collection_same_day_is_rejected(fixed_now):
    repo = InMemoryCollections()
    svc = CollectionService(repo, InMemoryStaff([ALICE]))
    svc.record_collection(1, now=fixed_now)

    with pytest.raises(ConflictError):
        svc.record_collection(1, now=fixed_now.replace(hour=23, minute=59))

    assert len(repo.events) == 1


def test_next_day_collection_is_allowed(fixed_now):
    repo = InMemoryCollections()
    svc = CollectionService(repo, InMemoryStaff([ALICE]))
    svc.record_collection(1, now=fixed_now)

    svc.record_collection(1, now=fixed_now.replace(day=16, hour=0, minute=1))

    assert len(repo.events) == 2


def test_day_boundary_follows_display_timezone():
    kolkata = pytz.timezone("Asia/Kolkata")
    repo = InMemoryCollections()
    svc = CollectionService(repo, InMemoryStaff([ALICE]), tz=kolkata)

    # 17:00 UTC (22:30 IST) and 19:00 UTC (00:30 IST next day) are different local days
    svc.record_collection(1, now=pytz.utc.localize(datetime(2024, 3, 15, 17, 0)))
    svc.record_collection(1, now=pytz.utc.localize(datetime(2024, 3, 15, 19, 0)))

    assert len(repo.events) == 2


def test_unknown_staff_is_not_found(fixed_now):
    svc = CollectionService(InMemoryCollections(), InMemoryStaff([]))

    with pytest.raises(NotFoundError):
        svc.record_collection(404, now=fixed_now)
