from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_int
from ..control.repository import ControlRepository
from ..core.constants import DEFAULT_REDIRECT_SECONDS
from ..core.enums import CommandMode
from ..core.exceptions import DomainError, ValidationError
from .model import Staff
from .repository import StaffRepository

logger = logging.getLogger(__name__)

FORM_FIELDS = ("staffid", "staffname", "tag", "email", "lab")


@dataclass(frozen=True)
class RegistrationResult:
    ok: bool
    message: str
    staff: Optional[Staff] = None
    redirect_to: Optional[str] = None
    redirect_after_seconds: int = 0
    error: Optional[DomainError] = field(default=None, compare=False)

    def to_dict(self) -> dict:
        return {
            "success": self.ok,
            "message": self.message,
            "staff": self.staff.to_dict() if self.staff else None,
            "redirect_to": self.redirect_to,
            "redirect_after_seconds": self.redirect_after_seconds,
        }


class RegistrationForm:
    """Use case: admin registers a staff member and arms the fingerprint device.

    Writes the staff row first, then a ``register`` control command. If the
    staff insert fails nothing else is written. Failures are not retried.
    """

    def __init__(
        self,
        staff: StaffRepository,
        control: ControlRepository,
        *,
        redirect_to: str = "/admin",
        redirect_after_seconds: int = DEFAULT_REDIRECT_SECONDS,
    ):
        self._staff = staff
        self._control = control
        self._redirect_to = redirect_to
        self._redirect_after = int(redirect_after_seconds)

    def submit(self, fields: Mapping[str, Any], *, now: datetime | None = None) -> RegistrationResult:
        values = {name: "" if fields.get(name) is None else str(fields.get(name)).strip() for name in FORM_FIELDS}
        if not all(values.values()):
            return self._fail(ValidationError("Please fill in all required fields"))

        try:
            staff = Staff(
                staff_id=require_int(values["staffid"], "Staff ID"),
                staff_name=values["staffname"],
                tag=require_int(values["tag"], "Tag"),
                email=values["email"],
                lab=values["lab"],
            )
        except ValidationError as exc:
            return self._fail(exc)

        try:
            created = self._staff.insert_staff(staff)
            self._control.insert_control_command(
                mode=CommandMode.REGISTER,
                staff_id=created.staff_id,
                created_at=now or now_utc(),
            )
        except DomainError as exc:
            logger.error("Registration of staff %s failed: %s", staff.staff_id, exc)
            return self._fail(exc)

        logger.info("Registered staff %s (%s)", created.staff_id, created.staff_name)
        return RegistrationResult(
            ok=True,
            message="Staff member registered successfully",
            staff=created,
            redirect_to=self._redirect_to,
            redirect_after_seconds=self._redirect_after,
        )

    @staticmethod
    def _fail(exc: DomainError) -> RegistrationResult:
        return RegistrationResult(ok=False, message=str(exc), error=exc)
