"""
Field validation rules for users and roles.

Every function here is pure: it reads a draft and returns a mapping of
field name to human-readable message. An empty mapping means the draft is
valid. Nothing is raised for an invalid draft and nothing is logged; the
caller decides how errors are surfaced.

RULES:
1. User create - name, email, role and status are all required; email must
   have a local-part@domain.tld shape; status must be Active or Inactive.
2. User update - only fields whose value differs from the original are
   checked. Untouched fields keep whatever value they had, valid or not.
3. Role - name is required; at least one permission from the catalog.
"""
from __future__ import annotations

import re
from typing import Any

from ..permissions import is_known_permission
from ..schemas.role import RoleDraft
from ..schemas.user import USER_FIELDS, USER_STATUSES, UserDraft

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

NAME_REQUIRED = "Name is required."
EMAIL_REQUIRED = "Email is required."
EMAIL_INVALID = "Invalid email format."
ROLE_REQUIRED = "Role is required."
STATUS_REQUIRED = "Status is required."
STATUS_INVALID = "Invalid status."
ROLE_NAME_REQUIRED = "Role name is required."
PERMISSIONS_REQUIRED = "Select at least one permission."


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(value: str | None) -> bool:
    """Return True if ``value`` has a local-part@domain.tld shape."""
    if value is None:
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def check_user_field(field: str, value: str | None) -> str | None:
    """
    Check a single user field against its rule.

    Args:
        field: One of ``name``, ``email``, ``role``, ``status``
        value: The draft value for that field

    Returns:
        The error message, or None if the value satisfies the rule

    Raises:
        ValueError: If ``field`` is not a user field
    """
    if field == "name":
        return NAME_REQUIRED if _is_blank(value) else None
    if field == "email":
        if _is_blank(value):
            return EMAIL_REQUIRED
        return None if is_valid_email(value) else EMAIL_INVALID
    if field == "role":
        return ROLE_REQUIRED if _is_blank(value) else None
    if field == "status":
        if _is_blank(value):
            return STATUS_REQUIRED
        return None if value in USER_STATUSES else STATUS_INVALID
    raise ValueError(f"Unknown user field '{field}'")


def check_role_field(field: str, value: Any) -> str | None:
    """Check a single role field against its rule; see ``check_user_field``."""
    if field == "name":
        return ROLE_NAME_REQUIRED if _is_blank(value) else None
    if field == "permissions":
        if not value:
            return PERMISSIONS_REQUIRED
        unknown = [permission for permission in value if not is_known_permission(permission)]
        if unknown:
            return f"Unknown permission: {', '.join(unknown)}"
        return None
    raise ValueError(f"Unknown role field '{field}'")


def validate_user(
    draft: UserDraft,
    is_update: bool = False,
    original: Any | None = None,
) -> dict[str, str]:
    """
    Validate a user draft.

    In update mode a field is only checked when its draft value differs from
    the same field on ``original``. This lets a partial edit go through
    without re-satisfying rules on fields the editor never touched.

    Args:
        draft: The draft to validate
        is_update: Whether the draft edits an existing user
        original: The committed user (or a draft copy of it); required in update mode

    Returns:
        dict[str, str]: Field name to error message; empty if valid

    Raises:
        ValueError: If ``is_update`` is set without an ``original``
    """
    if is_update and original is None:
        raise ValueError("original is required when validating an update")

    errors: dict[str, str] = {}
    for field in USER_FIELDS:
        value = getattr(draft, field)
        if is_update and value == getattr(original, field):
            continue
        message = check_user_field(field, value)
        if message is not None:
            errors[field] = message
    return errors


def validate_role(draft: RoleDraft) -> dict[str, str]:
    """
    Validate a role draft. Create and update are checked the same way.

    Returns:
        dict[str, str]: Field name to error message; empty if valid
    """
    errors: dict[str, str] = {}
    name_error = check_role_field("name", draft.name)
    if name_error is not None:
        errors["name"] = name_error
    permissions_error = check_role_field("permissions", draft.permissions)
    if permissions_error is not None:
        errors["permissions"] = permissions_error
    return errors
