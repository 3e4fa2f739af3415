from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..domain.result import Result
from ..schemas.role import Role, RoleDraft, RolePatch
from ..schemas.user import User, UserDraft, UserPatch
from .role import RoleRepository
from .user import UserRepository


class DirectoryStore:
    """Authoritative holder of the user and role collections.

    The store enforces uniqueness and nothing else: drafts must already pass
    validation. It neither logs nor notifies; every mutation returns a
    ``Result`` the caller turns into feedback.
    """

    def __init__(self, users: Iterable[User] = (), roles: Iterable[Role] = ()):
        self.users = UserRepository(users)
        self.roles = RoleRepository(roles)

    # Users

    def is_duplicate_user(self, candidate: Any, exclude_id: int | None = None) -> bool:
        return self.users.is_duplicate(candidate, exclude_id)

    def add_user(self, draft: UserDraft) -> Result[User]:
        return self.users.create(draft)

    def update_user(self, user_id: int, patch: UserPatch) -> Result[User]:
        return self.users.update(user_id, patch)

    def delete_user(self, user_id: int) -> bool:
        return self.users.delete(user_id)

    def get_user(self, user_id: int) -> User | None:
        return self.users.get_by_id(user_id)

    def list_users(self) -> tuple[User, ...]:
        return self.users.list_all()

    # Roles

    def is_duplicate_role(self, candidate: Any, exclude_id: int | None = None) -> bool:
        return self.roles.is_duplicate(candidate, exclude_id)

    def add_role(self, draft: RoleDraft) -> Result[Role]:
        return self.roles.create(draft)

    def update_role(self, role_id: int, patch: RolePatch) -> Result[Role]:
        return self.roles.update(role_id, patch)

    def delete_role(self, role_id: int) -> bool:
        return self.roles.delete(role_id)

    def get_role(self, role_id: int) -> Role | None:
        return self.roles.get_by_id(role_id)

    def list_roles(self) -> tuple[Role, ...]:
        return self.roles.list_all()
