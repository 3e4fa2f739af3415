"""
Edit sessions - draft and error tracking behind the create/edit dialogs.

A session moves through ``closed -> editing -> committing -> closed`` on a
successful submit, or ``editing -> cancelled -> closed`` when abandoned.
Create sessions submit the whole draft; edit sessions submit only the
fields that differ from the entity the session was opened with.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from ..domain.ports.directory import RoleWriter, UserWriter
from ..domain.ports.draft_cache import DraftCache
from ..domain.result import Result
from ..domain.validation import check_role_field, check_user_field, validate_role, validate_user
from ..errors import ValidationError
from ..permissions import validate_permission
from ..schemas.role import ROLE_FIELDS, Role, RoleDraft, RolePatch
from ..schemas.user import USER_FIELDS, User, UserDraft, UserPatch

# Error key for failures that belong to the form rather than one field
FORM_ERROR_KEY = "form"

EntityT = TypeVar("EntityT", User, Role)
DraftT = TypeVar("DraftT", UserDraft, RoleDraft)


class SessionState(str, Enum):
    CLOSED = "closed"
    EDITING = "editing"
    COMMITTING = "committing"
    CANCELLED = "cancelled"


class SessionStateError(RuntimeError):
    """Raised when a session operation is issued in a state that does not allow it."""


def _role_cache_key(role_id: int) -> str:
    return f"role:{role_id}"


class EditSession(Generic[EntityT, DraftT]):
    fields: tuple[str, ...] = ()

    def __init__(self) -> None:
        self.state = SessionState.CLOSED
        self.original: EntityT | None = None
        self.draft: DraftT = self._empty_draft()
        self.errors: dict[str, str] = {}

    # Hooks

    def _empty_draft(self) -> DraftT:
        raise NotImplementedError

    def _draft_from(self, entity: EntityT) -> DraftT:
        raise NotImplementedError

    def _validate(self) -> dict[str, str]:
        raise NotImplementedError

    def _create(self, draft: DraftT) -> Result[EntityT]:
        raise NotImplementedError

    def _update(self, entity_id: int, changes: dict[str, Any]) -> Result[EntityT]:
        raise NotImplementedError

    def _on_change(self) -> None:
        pass

    def _on_close(self) -> None:
        pass

    # Lifecycle

    @property
    def is_create(self) -> bool:
        return self.original is None

    def _require(self, state: SessionState) -> None:
        if self.state is not state:
            raise SessionStateError(
                f"Operation requires state '{state.value}', session is '{self.state.value}'"
            )

    def open_create(self) -> None:
        self._require(SessionState.CLOSED)
        self.original = None
        self.draft = self._empty_draft()
        self.errors = {}
        self.state = SessionState.EDITING

    def open_edit(self, entity: EntityT) -> None:
        self._require(SessionState.CLOSED)
        self.original = entity
        self.draft = self._draft_from(entity)
        self.errors = {}
        self.state = SessionState.EDITING
        self._on_change()

    def _same_value(self, field: str, draft_value: Any, original_value: Any) -> bool:
        return draft_value == original_value

    def diff(self) -> dict[str, Any]:
        """Fields whose draft value differs from the original; all fields when creating."""
        if self.original is None:
            return {field: getattr(self.draft, field) for field in self.fields}
        baseline = self._draft_from(self.original)
        return {
            field: getattr(self.draft, field)
            for field in self.fields
            if not self._same_value(field, getattr(self.draft, field), getattr(baseline, field))
        }

    def submit(self) -> Result[EntityT]:
        """
        Validate the draft and hand it to the writer.

        Returns:
            The writer's result, or a ``ValidationError`` result when the draft
            is invalid. The session stays in ``editing`` on any failure.
        """
        self._require(SessionState.EDITING)

        errors = self._validate()
        if errors:
            self.errors = errors
            return Result.failure(ValidationError(errors))

        self.state = SessionState.COMMITTING
        if self.original is None:
            result = self._create(self.draft)
        else:
            result = self._update(self.original.id, self.diff())

        if result.ok:
            self._close()
            return result

        self.state = SessionState.EDITING
        error = result.error
        if isinstance(error, ValidationError):
            self.errors = error.field_errors
        else:
            self.errors = {FORM_ERROR_KEY: error.message}
        return result

    def cancel(self) -> None:
        """Abandon the session. Does nothing if the session is already closed."""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CANCELLED
        self._close()

    def _close(self) -> None:
        self._on_close()
        self.state = SessionState.CLOSED
        self.original = None
        self.draft = self._empty_draft()
        self.errors = {}


class UserEditSession(EditSession[User, UserDraft]):
    fields = USER_FIELDS

    def __init__(self, writer: UserWriter):
        self.writer = writer
        super().__init__()

    def _empty_draft(self) -> UserDraft:
        return UserDraft()

    def _draft_from(self, entity: User) -> UserDraft:
        return UserDraft.from_user(entity)

    def _validate(self) -> dict[str, str]:
        return validate_user(self.draft, is_update=not self.is_create, original=self.original)

    def _create(self, draft: UserDraft) -> Result[User]:
        return self.writer.add_user(draft)

    def _update(self, entity_id: int, changes: dict[str, Any]) -> Result[User]:
        return self.writer.update_user(entity_id, UserPatch(**changes))

    def change_field(self, field: str, value: str | None) -> None:
        """
        Update one draft field and refresh its error eagerly.

        A field's error is cleared as soon as its value satisfies the rule.
        Email is re-checked on every change: a non-blank, badly shaped value
        surfaces the format error right away, a well-shaped one clears it.
        """
        self._require(SessionState.EDITING)
        if field not in self.fields:
            raise ValueError(f"Unknown user field '{field}'")

        setattr(self.draft, field, value)

        message = check_user_field(field, value)
        if message is None:
            self.errors.pop(field, None)
        elif field == "email" and value is not None and value.strip():
            self.errors[field] = message


class RoleEditSession(EditSession[Role, RoleDraft]):
    fields = ROLE_FIELDS

    def __init__(self, writer: RoleWriter, draft_cache: DraftCache | None = None):
        self.writer = writer
        self.draft_cache = draft_cache
        super().__init__()

    def _empty_draft(self) -> RoleDraft:
        return RoleDraft(name="", permissions=[])

    def _draft_from(self, entity: Role) -> RoleDraft:
        return RoleDraft.from_role(entity)

    def _validate(self) -> dict[str, str]:
        return validate_role(self.draft)

    def _create(self, draft: RoleDraft) -> Result[Role]:
        return self.writer.add_role(draft)

    def _update(self, entity_id: int, changes: dict[str, Any]) -> Result[Role]:
        return self.writer.update_role(entity_id, RolePatch(**changes))

    def _same_value(self, field: str, draft_value: Any, original_value: Any) -> bool:
        if field == "permissions":
            return set(draft_value or ()) == set(original_value or ())
        return draft_value == original_value

    @property
    def cache_key(self) -> str | None:
        if self.original is None:
            return None
        return _role_cache_key(self.original.id)

    def _on_change(self) -> None:
        if self.draft_cache is not None and self.cache_key is not None:
            self.draft_cache.save(self.cache_key, self.draft.model_copy(deep=True))

    def _on_close(self) -> None:
        if self.draft_cache is not None and self.cache_key is not None:
            self.draft_cache.discard(self.cache_key)

    def recover(self, role: Role) -> bool:
        """
        Open an edit session for ``role`` seeded from a cached draft.

        Returns:
            bool: True if a cached draft was found; otherwise the session is
            opened from the role itself.
        """
        cached = None
        if self.draft_cache is not None:
            cached = self.draft_cache.load(_role_cache_key(role.id))

        self.open_edit(role)
        if cached is None:
            return False
        self.draft = cached.model_copy(deep=True)
        self._on_change()
        return True

    def change_field(self, field: str, value: Any) -> None:
        """Replace one draft field; its error is cleared once the value satisfies the rule."""
        self._require(SessionState.EDITING)
        if field not in self.fields:
            raise ValueError(f"Unknown role field '{field}'")

        if field == "permissions" and value is not None:
            value = list(value)
        setattr(self.draft, field, value)
        if check_role_field(field, value) is None:
            self.errors.pop(field, None)
        self._on_change()

    def toggle_permission(self, permission: str) -> None:
        """
        Grant or revoke one permission on the draft.

        Raises:
            ValueError: If the permission is not in the catalog
        """
        self._require(SessionState.EDITING)
        validate_permission(permission)

        current = list(self.draft.permissions or [])
        if permission in current:
            current.remove(permission)
        else:
            current.append(permission)
        self.draft.permissions = current

        if current:
            self.errors.pop("permissions", None)
        self._on_change()
