from __future__ import annotations

import itertools
import logging
import threading
from collections import deque
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.constants import NOTIFICATION_INBOX_LIMIT
from ..core.enums import NotificationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    body: str
    created_at: datetime
    notification_id: Optional[int] = None
    is_read: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "kind": self.kind.value,
            "title": self.title,
            "body": self.body,
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "is_read": self.is_read,
        }


class NotificationDispatcher(Protocol):
    def send(self, notification: Notification) -> None:
        raise NotImplementedError


def dispatch_best_effort(dispatcher: Optional[NotificationDispatcher], notification: Notification) -> bool:
    """Fire-and-forget delivery. Failures are logged, never raised."""
    if dispatcher is None:
        return False
    try:
        dispatcher.send(notification)
        return True
    except Exception:
        logger.warning("Notification %r could not be delivered", notification.title, exc_info=True)
        return False


class LoggingNotifier(NotificationDispatcher):
    def send(self, notification: Notification) -> None:
        logger.info("[%s] %s: %s", notification.kind.value, notification.title, notification.body)


class InMemoryNotificationOutbox(NotificationDispatcher):
    """Administrative inbox kept in process (latest first, bounded)."""

    def __init__(self, *, limit: int = NOTIFICATION_INBOX_LIMIT):
        self._lock = threading.Lock()
        self._items: deque[Notification] = deque(maxlen=limit)
        self._ids = itertools.count(1)

    def send(self, notification: Notification) -> None:
        with self._lock:
            self._items.appendleft(replace(notification, notification_id=next(self._ids), is_read=False))

    def list(self) -> Sequence[Notification]:
        with self._lock:
            return list(self._items)

    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._items if not n.is_read)

    def mark_read(self, notification_id: int) -> bool:
        with self._lock:
            for idx, n in enumerate(self._items):
                if n.notification_id == notification_id:
                    self._items[idx] = replace(n, is_read=True)
                    return True
        return False

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
