from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from ..core.constants import COLLECTIONS_TABLE, DEFAULT_INSERT_POLL_SECONDS
from ..core.exceptions import RepositoryError, ValidationError
from .model import InsertNotice
from .repository import CollectionRepository

logger = logging.getLogger(__name__)

InsertCallback = Callable[[InsertNotice], None]


class Subscription:
    """Handle returned by ``subscribe_to_inserts``; ``cancel()`` is idempotent."""

    def __init__(self, watcher: "InsertWatcher", callback: InsertCallback):
        self._watcher = watcher
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._watcher._remove(self)


class InsertWatcher:
    """Push-style insert notifications over a polled, append-only table.

    Collection rows are never updated or deleted, so growth of the row count
    means new inserts. Every poll that sees growth calls each live subscriber
    once. Delivery is at-least-once; subscribers are expected to refetch
    rather than merge.
    """

    def __init__(self, collections: CollectionRepository, *, poll_seconds: float = DEFAULT_INSERT_POLL_SECONDS):
        self._collections = collections
        self._poll_seconds = float(poll_seconds)
        self._lock = threading.Lock()
        self._subscriptions: List[Subscription] = []
        self._last_count: Optional[int] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def subscribe_to_inserts(self, table: str, callback: InsertCallback) -> Subscription:
        if table != COLLECTIONS_TABLE:
            raise ValidationError(f"Insert notifications are not available for table {table!r}")
        sub = Subscription(self, callback)
        with self._lock:
            self._subscriptions.append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def poll_once(self) -> int:
        """Run one detection cycle; returns the number of new rows seen.

        The first successful poll only records a baseline.
        """
        try:
            count = self._collections.count_collection_events()
        except RepositoryError as exc:
            logger.warning("Insert poll failed: %s", exc)
            return 0

        with self._lock:
            previous = self._last_count
            self._last_count = count
            subscribers = list(self._subscriptions)

        if previous is None or count <= previous:
            return 0

        notice = InsertNotice(table=COLLECTIONS_TABLE, new_rows=count - previous)
        logger.debug("Detected %d new collection rows", notice.new_rows)
        for sub in subscribers:
            if not sub.active:
                continue
            try:
                sub.callback(notice)
            except Exception:
                logger.exception("Insert subscriber failed")
        return notice.new_rows

    def start(self) -> None:
        if self._poll_seconds <= 0 or (self._thread and self._thread.is_alive()):
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="insert-watcher", daemon=True)
        self._thread.start()
        logger.info("Insert watcher started (every %.1fs)", self._poll_seconds)

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=self._poll_seconds + 1)
            self._thread = None

    def _run(self) -> None:
        self.poll_once()
        while not self._stop.wait(self._poll_seconds):
            self.poll_once()
