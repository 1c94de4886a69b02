from __future__ import annotations

from enum import Enum


class CommandMode(str, Enum):
    """Modes written to the control table for the fingerprint device."""

    REGISTER = "register"


class CollectionStatus(str, Enum):
    """Dashboard status filter: has the staff member collected in the window."""

    CHECKED_IN = "checked-in"
    NOT_CHECKED_IN = "not-checked-in"
