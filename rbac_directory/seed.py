"""
Demo directory contents.

Loaded into a fresh store at startup when ``SEED_DEMO_DATA`` is enabled.
Every role only grants permissions from the catalog; this is checked on
import so a bad edit here fails fast.
"""
from __future__ import annotations

from .crud.directory import DirectoryStore
from .permissions import validate_permission
from .schemas.role import Role
from .schemas.user import User

DEFAULT_USERS = [
    {
        "id": 1,
        "name": "John Doe",
        "email": "john@example.com",
        "role": "Super Admin",
        "status": "Active",
    },
    {
        "id": 2,
        "name": "Jane Smith",
        "email": "jane@example.com",
        "role": "Editor",
        "status": "Inactive",
    },
]

DEFAULT_ROLES = [
    {
        "id": 1,
        "name": "Super Admin",
        "permissions": [
            "manage_users",
            "manage_roles",
            "view_analytics",
            "manage_settings",
            "approve_content",
            "delete_content",
        ],
    },
    {
        "id": 2,
        "name": "Content Manager",
        "permissions": [
            "create_content",
            "edit_content",
            "delete_content",
            "view_analytics",
        ],
    },
    {
        "id": 3,
        "name": "Editor",
        "permissions": [
            "create_content",
            "edit_content",
            "view_analytics",
        ],
    },
    {
        "id": 4,
        "name": "Viewer",
        "permissions": [
            "view_content",
            "view_analytics",
        ],
    },
]


def _validate_seed() -> None:
    for role in DEFAULT_ROLES:
        for permission in role["permissions"]:
            validate_permission(permission)


def build_demo_store() -> DirectoryStore:
    """Return a store holding the demo users and roles."""
    return DirectoryStore(
        users=[User.model_validate(user) for user in DEFAULT_USERS],
        roles=[Role.model_validate(role) for role in DEFAULT_ROLES],
    )


_validate_seed()
