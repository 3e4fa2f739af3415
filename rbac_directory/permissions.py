"""
Permission catalog - the fixed set of permissions a role can be granted.

The catalog is ordered and immutable for the life of the process. Categories
exist only to group permissions for display; they play no part in validation.
Membership in ``PERMISSIONS`` is the only rule a role's permission has to meet.
"""
from __future__ import annotations

from typing import Final, Protocol


# ============================================================================
# PERMISSIONS - ORDERED, EXPLICIT
# ============================================================================

USER_MANAGEMENT_PERMISSIONS: Final[tuple[str, ...]] = (
    "manage_users",
    "manage_roles",
)

CONTENT_MANAGEMENT_PERMISSIONS: Final[tuple[str, ...]] = (
    "create_content",
    "edit_content",
    "delete_content",
    "approve_content",
    "view_content",
)

ANALYTICS_SETTINGS_PERMISSIONS: Final[tuple[str, ...]] = (
    "view_analytics",
    "manage_settings",
)

# Display order, independent of category order
PERMISSIONS: Final[tuple[str, ...]] = (
    "manage_users",
    "manage_roles",
    "create_content",
    "edit_content",
    "delete_content",
    "approve_content",
    "view_content",
    "view_analytics",
    "manage_settings",
)

ALLOWED_PERMISSIONS: Final[frozenset[str]] = frozenset(PERMISSIONS)

PERMISSION_CATEGORIES: Final[dict[str, tuple[str, ...]]] = {
    "User Management": USER_MANAGEMENT_PERMISSIONS,
    "Content Management": CONTENT_MANAGEMENT_PERMISSIONS,
    "Analytics & Settings": ANALYTICS_SETTINGS_PERMISSIONS,
}


def is_known_permission(permission: str) -> bool:
    return permission in ALLOWED_PERMISSIONS


def validate_permission(permission: str) -> None:
    """
    Validate that a permission is part of the catalog.

    Raises:
        ValueError: If the permission is not in the catalog
    """
    if permission not in ALLOWED_PERMISSIONS:
        raise ValueError(
            f"Invalid permission '{permission}'. "
            f"Permission must be one of: {', '.join(PERMISSIONS)}"
        )


def format_permission_label(permission: str) -> str:
    """``manage_users`` -> ``Manage Users``."""
    return " ".join(word[:1].upper() + word[1:] for word in permission.split("_"))


class PermissionCatalogProvider(Protocol):
    def permissions(self) -> tuple[str, ...]:
        ...

    def categories(self) -> dict[str, tuple[str, ...]]:
        ...


class PermissionCatalog:
    """Default provider backed by the module-level catalog."""

    def permissions(self) -> tuple[str, ...]:
        return PERMISSIONS

    def categories(self) -> dict[str, tuple[str, ...]]:
        return dict(PERMISSION_CATEGORIES)


DEFAULT_CATALOG: Final[PermissionCatalog] = PermissionCatalog()


def _validate_catalog() -> None:
    """Check the catalog for internal consistency at import time."""
    errors = []

    if len(PERMISSIONS) != len(ALLOWED_PERMISSIONS):
        errors.append("Duplicate permission identifiers in PERMISSIONS")

    categorized: list[str] = []
    for category, permissions in PERMISSION_CATEGORIES.items():
        for permission in permissions:
            if permission not in ALLOWED_PERMISSIONS:
                errors.append(f"Category '{category}' lists unknown permission '{permission}'")
        categorized.extend(permissions)

    uncategorized = ALLOWED_PERMISSIONS - set(categorized)
    if uncategorized:
        errors.append(f"Permissions without a category: {sorted(uncategorized)}")

    if errors:
        raise RuntimeError(
            "Permission catalog validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )


_validate_catalog()
