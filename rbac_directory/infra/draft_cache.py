from __future__ import annotations

from ..schemas.role import RoleDraft


class InMemoryDraftCache:
    """Process-local draft store, cleared when the process exits."""

    def __init__(self) -> None:
        self._drafts: dict[str, RoleDraft] = {}

    def save(self, key: str, draft: RoleDraft) -> None:
        self._drafts[key] = draft.model_copy(deep=True)

    def load(self, key: str) -> RoleDraft | None:
        draft = self._drafts.get(key)
        return draft.model_copy(deep=True) if draft is not None else None

    def discard(self, key: str) -> None:
        self._drafts.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._drafts
