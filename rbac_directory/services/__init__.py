from .directory_service import DirectoryService
from .edit_session import (
    FORM_ERROR_KEY,
    RoleEditSession,
    SessionState,
    SessionStateError,
    UserEditSession,
)
from .notifications import LoggingNotifier, Notification, RecordingNotifier

__all__ = [
    "DirectoryService",
    "FORM_ERROR_KEY",
    "LoggingNotifier",
    "Notification",
    "RecordingNotifier",
    "RoleEditSession",
    "SessionState",
    "SessionStateError",
    "UserEditSession",
]
