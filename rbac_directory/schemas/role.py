from pydantic import BaseModel, ConfigDict, field_validator

from ..permissions import validate_permission

ROLE_FIELDS: tuple[str, ...] = ("name", "permissions")


class Role(BaseModel):
    """A committed role: a name bound to a non-empty set of permissions.

    Permissions are kept as a tuple in the order they were granted; set
    semantics apply to every comparison.
    """

    id: int
    name: str
    permissions: tuple[str, ...]

    model_config = ConfigDict(frozen=True)

    @field_validator("permissions")
    @classmethod
    def _check_permissions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("A role must grant at least one permission")
        for permission in value:
            validate_permission(permission)
        return tuple(dict.fromkeys(value))

    def has_permissions(self, required: "set[str] | frozenset[str]") -> bool:
        return set(required) <= set(self.permissions)


class RoleDraft(BaseModel):
    """A role being created or edited. ``None`` means not yet set."""

    name: str | None = None
    permissions: list[str] | None = None

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def from_role(cls, role: Role) -> "RoleDraft":
        return cls(name=role.name, permissions=list(role.permissions))


class RolePatch(BaseModel):
    """Changed role fields only. Unset fields are left untouched on update."""

    name: str | None = None
    permissions: list[str] | None = None

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)
