#!/usr/bin/env python3
"""
Notification Tracker - optional cool-down for top-match notifications.

Repeated matching calls for the same candidate re-trigger the top-match
notification. That is accepted behavior, so the tracker ships disabled;
when enabled it suppresses a resend for the same (candidate, job) pair
inside the configured interval.

Usage:
    tracker = NotificationTracker(resend_interval_hours=24)

    if tracker.should_send(notification.dedup_key):
        send(...)
        tracker.record(notification.dedup_key)
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationTracker:
    """
    In-process record of when each (candidate, job) pair was last notified.
    """

    def __init__(
        self,
        resend_interval_hours: int = 24,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.resend_interval = timedelta(hours=resend_interval_hours)
        self._clock = clock or _utcnow
        self._last_sent: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def should_send(self, key: str) -> bool:
        """True when the pair was never notified or the interval has elapsed."""
        with self._lock:
            last_sent = self._last_sent.get(key)
        if last_sent is None:
            return True

        elapsed = self._clock() - last_sent
        if elapsed < self.resend_interval:
            logger.info(f"Suppressing duplicate notification for {key} (sent {elapsed} ago)")
            return False
        return True

    def record(self, key: str) -> None:
        with self._lock:
            self._last_sent[key] = self._clock()

    def clear(self) -> None:
        with self._lock:
            self._last_sent.clear()
