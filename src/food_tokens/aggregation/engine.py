"""Join collection events with staff records and derive dashboard figures.

All functions are pure: inputs are immutable snapshots fetched by the caller
and nothing here talks to the data store.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence

from ..checkins.model import CollectionEvent
from ..core.enums import CollectionStatus
from ..staff.model import Staff
from .model import CollectionSummary, JoinedCollection, StaffFilter

logger = logging.getLogger(__name__)


def index_roster(roster: Iterable[Staff]) -> Dict[int, Staff]:
    """Map staff id to record; the first record wins for a duplicated id."""
    index: Dict[int, Staff] = {}
    duplicates = set()
    for member in roster:
        if member.staff_id in index:
            duplicates.add(member.staff_id)
            continue
        index[member.staff_id] = member
    if duplicates:
        logger.warning("Roster contains duplicate staff ids %s; keeping first match", sorted(duplicates))
    return index


def join_events_with_staff(events: Sequence[CollectionEvent], roster: Iterable[Staff]) -> List[JoinedCollection]:
    """Pair every event with its staff record.

    Total: one output per input event, in input order. Events whose staff id
    is missing from the roster keep ``staff=None`` so partial data still renders.
    """
    index = index_roster(roster)
    return [JoinedCollection(event=e, staff=index.get(e.staff_id)) for e in events]


def compute_checked_in_set(events: Iterable[CollectionEvent]) -> frozenset:
    """Distinct staff ids with at least one event (dedup by staff, not by event)."""
    return frozenset(e.staff_id for e in events)


def compute_summary(all_staff: Sequence[Staff], todays_events: Sequence[CollectionEvent]) -> CollectionSummary:
    checked_in = compute_checked_in_set(todays_events)
    known_ids = {s.staff_id for s in all_staff}
    total = len(all_staff)
    collected = len(checked_in)
    unmatched = len(checked_in - known_ids)
    if unmatched:
        logger.warning("%d collected staff ids are missing from the roster", unmatched)

    return CollectionSummary(
        total_staff=total,
        collected_count=collected,
        # Floored: stale ids in events must not produce a negative count.
        not_collected_count=max(total - collected, 0),
        collection_count=len(todays_events),
        unmatched_count=unmatched,
    )


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def _matches(member: Staff, criteria: StaffFilter, checked_in: AbstractSet[int]) -> bool:
    search = (criteria.search_text or "").strip()
    if search and not (
        _contains(member.staff_name, search)
        or _contains(member.email, search)
        or search in str(member.tag)
    ):
        return False

    lab = (criteria.lab or "").strip()
    if lab and not _contains(member.lab, lab):
        return False

    tag = (criteria.tag or "").strip()
    if tag and tag not in str(member.tag):
        return False

    if criteria.status == CollectionStatus.CHECKED_IN and member.staff_id not in checked_in:
        return False
    if criteria.status == CollectionStatus.NOT_CHECKED_IN and member.staff_id in checked_in:
        return False

    return True


def filter_staff(
    roster: Sequence[Staff],
    criteria: Optional[StaffFilter] = None,
    checked_in: AbstractSet[int] = frozenset(),
) -> List[Staff]:
    """Subsequence of ``roster`` matching every non-empty predicate."""
    if criteria is None or criteria.is_empty:
        return list(roster)
    return [m for m in roster if _matches(m, criteria, checked_in)]


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()
