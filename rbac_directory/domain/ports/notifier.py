from __future__ import annotations

from typing import Literal, Protocol

NotificationKind = Literal["success", "error"]


class Notifier(Protocol):
    """Fire-and-forget notification sink supplied by the presentation layer."""

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        ...
