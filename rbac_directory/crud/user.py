from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import count
from typing import Any

from ..domain.result import Result
from ..domain.validation import validate_user
from ..errors import DuplicateError, NotFoundError, ValidationError
from ..schemas.user import User, UserDraft, UserPatch

DUPLICATE_USER_MESSAGE = "A user with this name or email already exists."


def _lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def next_id_sequence(existing_ids: Iterable[int]) -> Iterator[int]:
    """Return a counter that starts past every id already in use."""
    return count(max(existing_ids, default=0) + 1)


class UserRepository:
    """In-memory user collection.

    Records are immutable models; an update swaps the stored model for a new
    one at the same position, so readers never observe a half-applied patch.
    """

    def __init__(self, users: Iterable[User] = ()):
        self._users: list[User] = list(users)
        ids = [user.id for user in self._users]
        if len(ids) != len(set(ids)):
            raise ValueError("User ids must be unique")
        self._ids = next_id_sequence(ids)

    def _index_of(self, user_id: int) -> int | None:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return None

    def get_by_id(self, user_id: int) -> User | None:
        index = self._index_of(user_id)
        return self._users[index] if index is not None else None

    def list_all(self) -> tuple[User, ...]:
        return tuple(self._users)

    def is_duplicate(self, candidate: Any, exclude_id: int | None = None) -> bool:
        """True if another user shares the candidate's name or email, ignoring case."""
        name = _lower(candidate.name)
        email = _lower(candidate.email)
        for user in self._users:
            if user.id == exclude_id:
                continue
            if email is not None and user.email.lower() == email:
                return True
            if name is not None and user.name.lower() == name:
                return True
        return False

    def create(self, draft: UserDraft) -> Result[User]:
        """Store a new user. An invalid draft is rejected before the duplicate check."""
        errors = validate_user(draft)
        if errors:
            return Result.failure(ValidationError(errors))
        if self.is_duplicate(draft):
            return Result.failure(DuplicateError(DUPLICATE_USER_MESSAGE))

        user = User(id=next(self._ids), **draft.model_dump())
        self._users.append(user)
        return Result.success(user)

    def update(self, user_id: int, patch: UserPatch) -> Result[User]:
        index = self._index_of(user_id)
        if index is None:
            return Result.failure(NotFoundError(f"User {user_id} not found"))

        current = self._users[index]
        merged_draft = UserDraft.from_user(current).model_copy(update=patch.changes())
        errors = validate_user(merged_draft, is_update=True, original=current)
        if errors:
            return Result.failure(ValidationError(errors))

        merged = User(id=user_id, **merged_draft.model_dump())
        if self.is_duplicate(merged, exclude_id=user_id):
            return Result.failure(DuplicateError(DUPLICATE_USER_MESSAGE))

        self._users[index] = merged
        return Result.success(merged)

    def delete(self, user_id: int) -> bool:
        index = self._index_of(user_id)
        if index is None:
            return False
        del self._users[index]
        return True
