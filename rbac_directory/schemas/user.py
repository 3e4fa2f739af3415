from enum import Enum

from pydantic import BaseModel, ConfigDict


class UserStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


USER_STATUSES = frozenset(status.value for status in UserStatus)

# Fields a user draft carries; ``id`` is minted by the store
USER_FIELDS: tuple[str, ...] = ("name", "email", "role", "status")


class User(BaseModel):
    """A committed directory user.

    ``role`` is a plain role name. It is not checked against the role
    collection and survives deletion of the role it names.
    """

    id: int
    name: str
    email: str
    role: str
    status: UserStatus

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class UserDraft(BaseModel):
    """A user being created or edited. ``None`` means not yet set."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    status: str | None = None

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def from_user(cls, user: User) -> "UserDraft":
        return cls(name=user.name, email=user.email, role=user.role, status=user.status)


class UserPatch(BaseModel):
    """Changed user fields only. Unset fields are left untouched on update."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    status: str | None = None

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict[str, str | None]:
        return self.model_dump(exclude_unset=True)
