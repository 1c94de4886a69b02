from __future__ import annotations

from datetime import datetime

import pytz

from food_tokens.aggregation.engine import (
    compute_checked_in_set,
    compute_summary,
    filter_staff,
    initials,
    join_events_with_staff,
)
from food_tokens.aggregation.model import StaffFilter
from food_tokens.checkins.model import CollectionEvent
from food_tokens.core.enums import CollectionStatus
from food_tokens.staff.model import Staff

ALICE = Staff(staff_id=1, staff_name="Alice", tag=10, email="alice@lab.io", lab="X")
BOB = Staff(staff_id=2, staff_name="Bob", tag=20, email="bob@lab.io", lab="Y")


def _event(event_id: str, staff_id: int, hour: int = 12) -> CollectionEvent:
    return CollectionEvent(
        id=event_id,
        staff_id=staff_id,
        tag=staff_id * 10,
        time_collected=pytz.utc.localize(datetime(2024, 3, 15, hour, 0)),
    )


def test_alice_and_bob_scenario():
    roster = [ALICE, BOB]
    today = [_event("e1", 1)]
    checked_in = compute_checked_in_set(today)

    summary = compute_summary(roster, today)

    assert summary.total_staff == 2
    assert summary.collected_count == 1
    assert summary.not_collected_count == 1
    assert filter_staff(roster, StaffFilter(status=CollectionStatus.CHECKED_IN), checked_in) == [ALICE]
    assert filter_staff(roster, StaffFilter(status=CollectionStatus.NOT_CHECKED_IN), checked_in) == [BOB]


def test_checked_in_set_dedups_by_staff_not_event():
    events = [_event("e1", 1, hour=9), _event("e2", 1, hour=13)]

    checked_in = compute_checked_in_set(events)

    assert checked_in == {1}
    assert len(checked_in) <= len(events)


def test_checked_in_set_of_nothing_is_empty():
    assert compute_checked_in_set([]) == frozenset()


def test_summary_counts_add_up_without_dangling_ids():
    roster = [ALICE, BOB]
    events = [_event("e1", 1), _event("e2", 2), _event("e3", 2)]

    summary = compute_summary(roster, events)

    assert summary.collected_count + summary.not_collected_count == summary.total_staff
    assert summary.collection_count == 3
    assert summary.unmatched_count == 0


def test_summary_floors_at_zero_for_unknown_staff_ids():
    events = [_event("e1", 1), _event("e2", 99), _event("e3", 98)]

    summary = compute_summary([ALICE], events)

    assert summary.collected_count == 3
    assert summary.not_collected_count == 0
    assert summary.unmatched_count == 2


def test_join_is_total_and_keeps_order():
    events = [_event("e1", 2), _event("e2", 42), _event("e3", 1)]

    joined = join_events_with_staff(events, [ALICE, BOB])

    assert [row.event.id for row in joined] == ["e1", "e2", "e3"]
    assert joined[0].staff == BOB
    assert joined[1].staff is None
    assert joined[2].staff == ALICE


def test_join_with_duplicate_roster_ids_takes_first_match():
    impostor = Staff(staff_id=1, staff_name="Alicia", tag=11, email="a2@lab.io", lab="Z")

    joined = join_events_with_staff([_event("e1", 1)], [ALICE, impostor])

    assert joined[0].staff == ALICE


def test_filter_without_predicates_returns_roster_unchanged():
    roster = [BOB, ALICE]

    assert filter_staff(roster, StaffFilter()) == roster
    assert filter_staff(roster, None) == roster
    assert filter_staff(roster, StaffFilter(search_text="  ", lab="")) == roster


def test_search_matches_name_email_or_tag():
    roster = [ALICE, BOB]

    assert filter_staff(roster, StaffFilter(search_text="ALI")) == [ALICE]
    assert filter_staff(roster, StaffFilter(search_text="bob@")) == [BOB]
    assert filter_staff(roster, StaffFilter(search_text="2")) == [BOB]
    assert filter_staff(roster, StaffFilter(search_text="lab.io")) == [ALICE, BOB]


def test_predicates_are_and_combined():
    roster = [ALICE, BOB]
    checked_in = frozenset({1, 2})

    assert filter_staff(roster, StaffFilter(lab="y", tag="2"), checked_in) == [BOB]
    assert filter_staff(roster, StaffFilter(lab="x", tag="2"), checked_in) == []
    assert filter_staff(
        roster,
        StaffFilter(search_text="b", status=CollectionStatus.NOT_CHECKED_IN),
        checked_in,
    ) == []


def test_initials():
    assert initials("carol ann smith") == "CAS"
    assert initials("  Bob ") == "B"
