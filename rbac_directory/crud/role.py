from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..domain.ranking import rank_roles
from ..domain.result import Result
from ..domain.validation import validate_role
from ..errors import DuplicateError, NotFoundError, ValidationError
from ..schemas.role import Role, RoleDraft, RolePatch
from .user import next_id_sequence

DUPLICATE_ROLE_MESSAGE = "A role with this name already exists."


class RoleRepository:
    """In-memory role collection, kept in ranked order.

    The collection is re-ranked after every successful create, update and
    delete, so ``list_all`` always returns the canonical ranked order.
    """

    def __init__(self, roles: Iterable[Role] = ()):
        self._roles: list[Role] = rank_roles(roles)
        ids = [role.id for role in self._roles]
        if len(ids) != len(set(ids)):
            raise ValueError("Role ids must be unique")
        self._ids = next_id_sequence(ids)

    def _index_of(self, role_id: int) -> int | None:
        for index, role in enumerate(self._roles):
            if role.id == role_id:
                return index
        return None

    def _commit(self, roles: list[Role]) -> None:
        self._roles = rank_roles(roles)

    def get_by_id(self, role_id: int) -> Role | None:
        index = self._index_of(role_id)
        return self._roles[index] if index is not None else None

    def list_all(self) -> tuple[Role, ...]:
        return tuple(self._roles)

    def is_duplicate(self, candidate: Any, exclude_id: int | None = None) -> bool:
        """True if another role has the candidate's name, ignoring case."""
        if candidate.name is None:
            return False
        name = candidate.name.lower()
        return any(
            role.id != exclude_id and role.name.lower() == name for role in self._roles
        )

    def create(self, draft: RoleDraft) -> Result[Role]:
        """Store a new role. An invalid draft is rejected before the duplicate check."""
        errors = validate_role(draft)
        if errors:
            return Result.failure(ValidationError(errors))
        if self.is_duplicate(draft):
            return Result.failure(DuplicateError(DUPLICATE_ROLE_MESSAGE))

        role = Role(id=next(self._ids), **draft.model_dump())
        self._commit([*self._roles, role])
        return Result.success(role)

    def update(self, role_id: int, patch: RolePatch) -> Result[Role]:
        index = self._index_of(role_id)
        if index is None:
            return Result.failure(NotFoundError(f"Role {role_id} not found"))

        current = self._roles[index]
        merged_draft = RoleDraft.from_role(current).model_copy(update=patch.changes())
        errors = validate_role(merged_draft)
        if errors:
            return Result.failure(ValidationError(errors))

        merged = Role(id=role_id, **merged_draft.model_dump())
        if self.is_duplicate(merged, exclude_id=role_id):
            return Result.failure(DuplicateError(DUPLICATE_ROLE_MESSAGE))

        roles = list(self._roles)
        roles[index] = merged
        self._commit(roles)
        return Result.success(merged)

    def delete(self, role_id: int) -> bool:
        """Remove a role. Users naming it keep their ``role`` string as is."""
        index = self._index_of(role_id)
        if index is None:
            return False
        self._commit([role for role in self._roles if role.id != role_id])
        return True
