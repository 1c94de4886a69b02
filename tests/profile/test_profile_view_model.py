from __future__ import annotations

from datetime import date, datetime

import pytz

from food_tokens.checkins.model import CollectionEvent
from food_tokens.core.exceptions import TransportError
from food_tokens.profile.view_model import ProfileViewModel
from food_tokens.staff.model import Staff

CAROL = Staff(staff_id=7, staff_name="Carol", tag=5, email="c@x.com", lab="Z")


class InMemoryCollections:
    def __init__(self, events=()):
        self.events = list(events)
        self.error = None
        self.calls = []
        self.before_return = None

    def list_collection_events(self, window_start, window_end, *, staff_id=None):
        self.calls.append({"start": window_start, "end": window_end, "staff_id": staff_id})
        if self.error:
            raise self.error
        rows = [
            e
            for e in self.events
            if window_start <= e.time_collected <= window_end and (staff_id is None or e.staff_id == staff_id)
        ]
        if self.before_return:
            hook, self.before_return = self.before_return, None
            hook()
        return sorted(rows, key=lambda e: e.time_collected, reverse=True)


def _event(event_id, staff_id, y, m, d, hour=12, minute=0):
    return CollectionEvent(
        id=event_id,
        staff_id=staff_id,
        tag=5,
        time_collected=pytz.utc.localize(datetime(y, m, d, hour, minute)),
    )


def test_load_fetches_current_staff_month_window():
    repo = InMemoryCollections()
    vm = ProfileViewModel(repo, CAROL, month=date(2024, 3, 20))

    vm.load()

    call = repo.calls[0]
    assert call["staff_id"] == 7
    assert call["start"] == pytz.utc.localize(datetime(2024, 3, 1))
    assert call["end"] == pytz.utc.localize(datetime(2024, 3, 31, 23, 59, 59, 999999))


def test_click_on_empty_day_is_noop():
    repo = InMemoryCollections([_event("e1", 7, 2024, 3, 14)])
    vm = ProfileViewModel(repo, CAROL, month=date(2024, 3, 1))
    vm.load()
    assert vm.handle_date_click(date(2024, 3, 14))

    assert vm.handle_date_click(date(2024, 3, 15)) is False

    state = vm.snapshot()
    assert state.selected_date == date(2024, 3, 14)
    assert [e.id for e in state.selected_collections] == ["e1"]


def test_click_on_empty_day_without_selection_stays_unselected():
    vm = ProfileViewModel(InMemoryCollections(), CAROL, month=date(2024, 3, 1))
    vm.load()

    vm.handle_date_click(date(2024, 3, 15))

    assert vm.snapshot().selected_date is None


def test_calendar_marks_collection_days_and_selection():
    repo = InMemoryCollections(
        [
            _event("e1", 7, 2024, 3, 2, hour=8),
            _event("e2", 7, 2024, 3, 2, hour=13),
            _event("e3", 7, 2024, 3, 20),
            _event("other", 8, 2024, 3, 21),
        ]
    )
    vm = ProfileViewModel(repo, CAROL, month=date(2024, 3, 1))
    vm.load()
    vm.handle_date_click(date(2024, 3, 2))

    days = vm.calendar()

    assert len(days) == 31
    assert [d.day.day for d in days if d.has_collection] == [2, 20]
    assert [d.day.day for d in days if d.is_selected] == [2]

    state = vm.snapshot()
    assert len(state.selected_collections) == 2
    # March 1st 2024 is a Friday: five blanks in a Sunday-first grid
    assert state.leading_blanks == 5
    assert state.to_dict()["selected_times"] == ["01:00:00 PM", "08:00:00 AM"]


def test_month_navigation_clears_selection_and_refetches():
    repo = InMemoryCollections([_event("e1", 7, 2024, 3, 2), _event("e2", 7, 2024, 2, 28)])
    vm = ProfileViewModel(repo, CAROL, month=date(2024, 3, 1))
    vm.load()
    vm.handle_date_click(date(2024, 3, 2))

    vm.previous_month()

    assert vm.month == date(2024, 2, 1)
    assert vm.snapshot().selected_date is None
    assert vm.has_collection(date(2024, 2, 28))
    assert len(repo.calls) == 2

    vm.next_month()
    vm.next_month()
    assert vm.month == date(2024, 4, 1)


def test_stale_month_response_is_discarded():
    repo = InMemoryCollections([_event("e1", 7, 2024, 3, 2), _event("e2", 7, 2024, 4, 9)])
    vm = ProfileViewModel(repo, CAROL, month=date(2024, 3, 1))

    repo.before_return = lambda: vm.change_month(date(2024, 4, 1))
    vm.load()

    assert vm.month == date(2024, 4, 1)
    assert vm.has_collection(date(2024, 4, 9))
    assert not vm.has_collection(date(2024, 3, 2))


def test_fetch_error_shows_empty_calendar():
    repo = InMemoryCollections()
    repo.error = TransportError("offline")
    vm = ProfileViewModel(repo, CAROL, month=date(2024, 3, 1))

    vm.load()

    assert not any(d.has_collection for d in vm.calendar())
    assert vm.snapshot().is_loading is False


def test_without_session_user_nothing_is_fetched():
    repo = InMemoryCollections()
    vm = ProfileViewModel(repo, None)

    vm.load()

    assert repo.calls == []
    assert vm.snapshot() is None
