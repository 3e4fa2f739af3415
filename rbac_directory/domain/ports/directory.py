from __future__ import annotations

from typing import Protocol

from ...schemas.role import Role, RoleDraft, RolePatch
from ...schemas.user import User, UserDraft, UserPatch
from ..result import Result


class UserWriter(Protocol):
    def add_user(self, draft: UserDraft) -> Result[User]:
        ...

    def update_user(self, user_id: int, patch: UserPatch) -> Result[User]:
        ...


class RoleWriter(Protocol):
    def add_role(self, draft: RoleDraft) -> Result[Role]:
        ...

    def update_role(self, role_id: int, patch: RolePatch) -> Result[Role]:
        ...
