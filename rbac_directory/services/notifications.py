"""
Notifier implementations.

The presentation layer normally supplies its own notifier (a toast queue).
These cover headless use: one writes notifications to the standard logger,
the other keeps them in memory for inspection.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from ..domain.ports.notifier import NotificationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    message: str
    duration_ms: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class LoggingNotifier:
    """Writes each notification to the standard logger as JSON."""

    def __init__(self, duration_ms: int = 3000):
        self.duration_ms = duration_ms

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        notification = Notification(kind, title, message, self.duration_ms)
        entry = {**asdict(notification), "created_at": notification.created_at.isoformat()}
        level = logging.WARNING if kind == "error" else logging.INFO
        logger.log(
            level,
            "NOTIFY: %s",
            json.dumps(entry, ensure_ascii=False),
            extra={"notification": entry},
        )


class RecordingNotifier:
    """Keeps notifications in memory, newest last."""

    def __init__(self, duration_ms: int = 3000):
        self.duration_ms = duration_ms
        self.notifications: list[Notification] = []

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        self.notifications.append(Notification(kind, title, message, self.duration_ms))

    def clear(self) -> None:
        self.notifications.clear()
