"""
Directory HTTP API.

A thin JSON surface over ``DirectoryService``. Handlers unwrap service
results; failures are raised as ``AppError`` and rendered by the exception
handlers registered in ``rbac_directory.main``.

- GET    /permissions         - Permission catalog with categories
- GET    /users               - Users, optionally filtered by status
- POST   /users               - Create a user
- PATCH  /users/{user_id}     - Partially update a user
- DELETE /users/{user_id}     - Delete a user (idempotent)
- GET    /roles               - Ranked roles, optionally filtered by permissions
- POST   /roles               - Create a role
- PATCH  /roles/{role_id}     - Partially update a role
- DELETE /roles/{role_id}     - Delete a role (idempotent)
- GET    /summary             - Dashboard counters
"""
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status

from ..errors import NotFoundError, ValidationError
from ..permissions import format_permission_label, is_known_permission
from ..schemas.permission import DirectorySummaryRead, PermissionCatalogRead, PermissionRead
from ..schemas.role import Role, RoleDraft, RolePatch
from ..schemas.user import User, UserDraft, UserPatch
from ..services.directory_service import DirectoryService
from .dependencies import get_directory_service

router = APIRouter(tags=["directory"])


@router.get("/permissions", response_model=PermissionCatalogRead)
async def list_permissions(
    service: DirectoryService = Depends(get_directory_service),
) -> PermissionCatalogRead:
    categories = service.catalog.categories()
    category_by_permission = {
        permission: category
        for category, permissions in categories.items()
        for permission in permissions
    }
    return PermissionCatalogRead(
        permissions=[
            PermissionRead(
                name=permission,
                label=format_permission_label(permission),
                category=category_by_permission.get(permission, ""),
            )
            for permission in service.catalog.permissions()
        ],
        categories={category: list(permissions) for category, permissions in categories.items()},
    )


@router.get("/users", response_model=list[User])
async def list_users(
    status_filter: Literal["all", "Active", "Inactive"] = Query("all", alias="status"),
    service: DirectoryService = Depends(get_directory_service),
) -> list[User]:
    return service.list_users(status_filter)


@router.get("/users/{user_id}", response_model=User)
async def get_user(
    user_id: int,
    service: DirectoryService = Depends(get_directory_service),
) -> User:
    user = service.get_user(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    draft: UserDraft,
    service: DirectoryService = Depends(get_directory_service),
) -> User:
    return service.add_user(draft).unwrap()


@router.patch("/users/{user_id}", response_model=User)
async def update_user(
    user_id: int,
    patch: UserPatch,
    service: DirectoryService = Depends(get_directory_service),
) -> User:
    return service.update_user(user_id, patch).unwrap()


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    service: DirectoryService = Depends(get_directory_service),
) -> Response:
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/roles", response_model=list[Role])
async def list_roles(
    permission: list[str] | None = Query(None),
    service: DirectoryService = Depends(get_directory_service),
) -> list[Role]:
    permission = permission or []
    unknown = [name for name in permission if not is_known_permission(name)]
    if unknown:
        raise ValidationError(
            {"permission": f"Unknown permission: {', '.join(unknown)}"},
            "Invalid permission filter",
        )
    return service.list_roles(permission)


@router.get("/roles/{role_id}", response_model=Role)
async def get_role(
    role_id: int,
    service: DirectoryService = Depends(get_directory_service),
) -> Role:
    role = service.get_role(role_id)
    if role is None:
        raise NotFoundError(f"Role {role_id} not found")
    return role


@router.post("/roles", response_model=Role, status_code=status.HTTP_201_CREATED)
async def create_role(
    draft: RoleDraft,
    service: DirectoryService = Depends(get_directory_service),
) -> Role:
    return service.add_role(draft).unwrap()


@router.patch("/roles/{role_id}", response_model=Role)
async def update_role(
    role_id: int,
    patch: RolePatch,
    service: DirectoryService = Depends(get_directory_service),
) -> Role:
    return service.update_role(role_id, patch).unwrap()


@router.delete("/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: int,
    service: DirectoryService = Depends(get_directory_service),
) -> Response:
    service.delete_role(role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/summary", response_model=DirectorySummaryRead)
async def get_summary(
    service: DirectoryService = Depends(get_directory_service),
) -> DirectorySummaryRead:
    summary = service.summary()
    return DirectorySummaryRead(
        total_users=summary.total_users,
        active_users=summary.active_users,
        total_roles=summary.total_roles,
        total_permissions=summary.total_permissions,
    )
