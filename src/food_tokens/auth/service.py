from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import RepositoryError
from ..staff.model import Staff
from ..staff.repository import StaffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    email: str
    staff: Optional[Staff]


class AuthService:
    """Use case: sign in.

    Credentials are only checked for presence, never verified. The email is
    resolved to a staff record when one exists so the profile calendar works.
    """

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        email = require_non_empty(email, "Email")
        require_non_empty(password, "Password")

        try:
            member = self._staff.get_by_email(email)
        except RepositoryError as exc:
            logger.error("Staff lookup during login failed: %s", exc)
            member = None
        return LoginResult(email=email, staff=member)
