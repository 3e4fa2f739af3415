from .role import ROLE_FIELDS, Role, RoleDraft, RolePatch
from .user import USER_FIELDS, USER_STATUSES, User, UserDraft, UserPatch, UserStatus

__all__ = [
    "ROLE_FIELDS",
    "Role",
    "RoleDraft",
    "RolePatch",
    "USER_FIELDS",
    "USER_STATUSES",
    "User",
    "UserDraft",
    "UserPatch",
    "UserStatus",
]
