"""
Role ranking and directory filters.

All functions return new sequences and leave their input untouched.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..permissions import DEFAULT_CATALOG, PermissionCatalogProvider
from ..schemas.role import Role
from ..schemas.user import User, UserStatus

ALL_STATUSES = "all"


def _rank_key(role: Role) -> tuple[int, str]:
    return (-len(role.permissions), role.name)


def rank_roles(roles: Iterable[Role]) -> list[Role]:
    """Order roles by permission count (descending), then name (ascending).

    Name comparison is case-sensitive code-point order. The sort is stable,
    so ranking an already ranked list returns it unchanged.
    """
    return sorted(roles, key=_rank_key)


def filter_users_by_status(users: Iterable[User], status: str) -> list[User]:
    """Return users whose status equals ``status`` exactly; ``"all"`` keeps everyone."""
    if status == ALL_STATUSES:
        return list(users)
    return [user for user in users if user.status == status]


def filter_roles_by_permissions(
    roles: Iterable[Role],
    required_permissions: Iterable[str],
) -> list[Role]:
    """Return roles granting every permission in ``required_permissions``.

    An empty requirement matches all roles.
    """
    required = frozenset(required_permissions)
    if not required:
        return list(roles)
    return [role for role in roles if role.has_permissions(required)]


@dataclass(frozen=True)
class DirectorySummary:
    total_users: int
    active_users: int
    total_roles: int
    total_permissions: int


def summarize(
    users: Sequence[User],
    roles: Sequence[Role],
    catalog: PermissionCatalogProvider = DEFAULT_CATALOG,
) -> DirectorySummary:
    return DirectorySummary(
        total_users=len(users),
        active_users=len(filter_users_by_status(users, UserStatus.ACTIVE.value)),
        total_roles=len(roles),
        total_permissions=len(catalog.permissions()),
    )
