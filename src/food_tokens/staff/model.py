from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Staff:
    """Domain entity: a registered staff member entitled to one token per day.

    Note: Plain data object; ``staff_id`` is assigned by the caller, never generated.
    """

    staff_id: int
    staff_name: str
    tag: int
    email: str
    lab: str

    def to_dict(self) -> dict:
        return {
            "staff_id": self.staff_id,
            "staff_name": self.staff_name,
            "tag": self.tag,
            "email": self.email,
            "lab": self.lab,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Staff":
        return cls(
            staff_id=int(data["staff_id"]),
            staff_name=str(data["staff_name"]),
            tag=int(data["tag"]),
            email=str(data["email"]),
            lab=str(data["lab"]),
        )
