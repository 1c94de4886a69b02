from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for Staff.

    Note (DIP): services and view models depend on this interface, not on a concrete DB.
    """

    def list_staff(self) -> Sequence[Staff]:
        """All staff ordered by name ascending."""
        raise NotImplementedError

    def find_staff_by_ids(self, ids: Iterable[int]) -> Sequence[Staff]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Staff]:
        raise NotImplementedError

    def insert_staff(self, staff: Staff) -> Staff:
        """Raises ConflictError on a duplicate staff id."""
        raise NotImplementedError
