"""
Directory Service - the administrator-facing entry point to the directory.

Wraps a ``DirectoryStore`` with validation, logging and notifications. Every
mutation attempt ends in exactly one notification: ``success`` when it was
applied, ``error`` when it was rejected. The store itself stays silent.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TypeVar

from ..crud.directory import DirectoryStore
from ..domain.ports.notifier import Notifier
from ..domain.ranking import (
    ALL_STATUSES,
    DirectorySummary,
    filter_roles_by_permissions,
    filter_users_by_status,
    summarize,
)
from ..domain.result import Result
from ..domain.validation import validate_role, validate_user
from ..errors import NotFoundError, ValidationError
from ..permissions import DEFAULT_CATALOG, PermissionCatalogProvider
from ..schemas.role import Role, RoleDraft, RolePatch
from ..schemas.user import User, UserDraft, UserPatch

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUCCESS_TITLE = "Success"
ERROR_TITLE = "Error"

USER_ADDED = "User added successfully."
USER_UPDATED = "User updated successfully."
USER_DELETED = "User deleted successfully."
ROLE_CREATED = "Role created successfully."
ROLE_UPDATED = "Role updated successfully."
ROLE_DELETED = "Role deleted successfully."
USER_INVALID = "User details are invalid."
ROLE_INVALID = "Role details are invalid."


class DirectoryService:
    def __init__(
        self,
        store: DirectoryStore,
        notifier: Notifier,
        catalog: PermissionCatalogProvider = DEFAULT_CATALOG,
    ):
        self.store = store
        self.notifier = notifier
        self.catalog = catalog

    def _report(self, result: Result[T], action: str, success_message: str) -> Result[T]:
        if result.ok:
            logger.info(
                "directory_mutation action=%s outcome=success target_id=%s",
                action,
                getattr(result.value, "id", None),
            )
            self.notifier.notify("success", SUCCESS_TITLE, success_message)
        else:
            error = result.error
            logger.warning(
                "directory_mutation action=%s outcome=rejected code=%s message=%s details=%s",
                action,
                error.code,
                error.message,
                error.details,
            )
            self.notifier.notify("error", ERROR_TITLE, error.message)
        return result

    # Users

    def add_user(self, draft: UserDraft) -> Result[User]:
        errors = validate_user(draft)
        if errors:
            return self._report(
                Result.failure(ValidationError(errors, USER_INVALID)), "user.create", USER_ADDED
            )
        return self._report(self.store.add_user(draft), "user.create", USER_ADDED)

    def update_user(self, user_id: int, patch: UserPatch) -> Result[User]:
        """
        Apply a partial update to a user.

        Only the fields present in ``patch`` are validated, and only if they
        actually change the stored value.
        """
        current = self.store.get_user(user_id)
        if current is None:
            return self._report(
                Result.failure(NotFoundError(f"User {user_id} not found")),
                "user.update",
                USER_UPDATED,
            )

        merged = UserDraft.from_user(current).model_copy(update=patch.changes())
        errors = validate_user(merged, is_update=True, original=current)
        if errors:
            return self._report(
                Result.failure(ValidationError(errors, USER_INVALID)), "user.update", USER_UPDATED
            )
        return self._report(self.store.update_user(user_id, patch), "user.update", USER_UPDATED)

    def delete_user(self, user_id: int) -> bool:
        removed = self.store.delete_user(user_id)
        logger.info(
            "directory_mutation action=user.delete outcome=success target_id=%s removed=%s",
            user_id,
            removed,
        )
        self.notifier.notify("success", SUCCESS_TITLE, USER_DELETED)
        return removed

    def get_user(self, user_id: int) -> User | None:
        return self.store.get_user(user_id)

    def list_users(self, status: str = ALL_STATUSES) -> list[User]:
        return filter_users_by_status(self.store.list_users(), status)

    # Roles

    def add_role(self, draft: RoleDraft) -> Result[Role]:
        errors = validate_role(draft)
        if errors:
            return self._report(
                Result.failure(ValidationError(errors, ROLE_INVALID)), "role.create", ROLE_CREATED
            )
        return self._report(self.store.add_role(draft), "role.create", ROLE_CREATED)

    def update_role(self, role_id: int, patch: RolePatch) -> Result[Role]:
        current = self.store.get_role(role_id)
        if current is None:
            return self._report(
                Result.failure(NotFoundError(f"Role {role_id} not found")),
                "role.update",
                ROLE_UPDATED,
            )

        merged = RoleDraft.from_role(current).model_copy(update=patch.changes())
        errors = validate_role(merged)
        if errors:
            return self._report(
                Result.failure(ValidationError(errors, ROLE_INVALID)), "role.update", ROLE_UPDATED
            )
        return self._report(self.store.update_role(role_id, patch), "role.update", ROLE_UPDATED)

    def delete_role(self, role_id: int) -> bool:
        """Delete a role. Users that name it are left as they are."""
        removed = self.store.delete_role(role_id)
        logger.info(
            "directory_mutation action=role.delete outcome=success target_id=%s removed=%s",
            role_id,
            removed,
        )
        self.notifier.notify("success", SUCCESS_TITLE, ROLE_DELETED)
        return removed

    def get_role(self, role_id: int) -> Role | None:
        return self.store.get_role(role_id)

    def list_roles(self, permissions: Iterable[str] = ()) -> list[Role]:
        return filter_roles_by_permissions(self.store.list_roles(), permissions)

    # Overview

    def summary(self) -> DirectorySummary:
        return summarize(self.store.list_users(), self.store.list_roles(), self.catalog)
