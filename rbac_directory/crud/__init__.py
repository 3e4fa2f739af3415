from .directory import DirectoryStore
from .role import DUPLICATE_ROLE_MESSAGE, RoleRepository
from .user import DUPLICATE_USER_MESSAGE, UserRepository

__all__ = [
    "DUPLICATE_ROLE_MESSAGE",
    "DUPLICATE_USER_MESSAGE",
    "DirectoryStore",
    "RoleRepository",
    "UserRepository",
]
