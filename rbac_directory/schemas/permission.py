from pydantic import BaseModel


class PermissionRead(BaseModel):
    name: str
    label: str
    category: str


class PermissionCatalogRead(BaseModel):
    permissions: list[PermissionRead]
    categories: dict[str, list[str]]


class DirectorySummaryRead(BaseModel):
    total_users: int
    active_users: int
    total_roles: int
    total_permissions: int
