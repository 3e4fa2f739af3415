from __future__ import annotations

from typing import Protocol

from ...schemas.role import RoleDraft


class DraftCache(Protocol):
    """Keeps an in-progress draft around so an interrupted edit can be recovered."""

    def save(self, key: str, draft: RoleDraft) -> None:
        ...

    def load(self, key: str) -> RoleDraft | None:
        ...

    def discard(self, key: str) -> None:
        ...
