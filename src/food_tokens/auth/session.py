from __future__ import annotations

import logging
from typing import MutableMapping, Optional

from ..staff.model import Staff

logger = logging.getLogger(__name__)

USER_KEY = "current_user"
EMAIL_KEY = "email"


class SessionState:
    """Current-user identity kept in a persisted key-value store (the Flask session).

    Lifecycle: ``load()`` at request start, ``login()`` stores the identity,
    ``logout()`` clears it. This is identity only, not authorization.
    """

    def __init__(self, store: MutableMapping):
        self._store = store
        self._user: Optional[Staff] = None

    def load(self) -> Optional[Staff]:
        raw = self._store.get(USER_KEY)
        self._user = None
        if raw:
            try:
                self._user = Staff.from_dict(raw)
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping malformed session user")
                self._store.pop(USER_KEY, None)
        return self._user

    @property
    def current_user(self) -> Optional[Staff]:
        return self._user

    @property
    def email(self) -> Optional[str]:
        return self._store.get(EMAIL_KEY)

    @property
    def is_logged_in(self) -> bool:
        return EMAIL_KEY in self._store

    def login(self, email: str, user: Optional[Staff] = None) -> None:
        self._store[EMAIL_KEY] = email
        if user is not None:
            self._store[USER_KEY] = user.to_dict()
        else:
            self._store.pop(USER_KEY, None)
        self._user = user

    def logout(self) -> None:
        self._store.pop(USER_KEY, None)
        self._store.pop(EMAIL_KEY, None)
        self._user = None
