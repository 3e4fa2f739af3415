from .directory import RoleWriter, UserWriter
from .draft_cache import DraftCache
from .notifier import NotificationKind, Notifier

__all__ = ["DraftCache", "NotificationKind", "Notifier", "RoleWriter", "UserWriter"]
