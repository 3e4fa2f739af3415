"""Shared test fixtures and configuration."""
import os

import pytest

# Keep tests independent of any local .env that seeds or tunes the app
os.environ.setdefault("SEED_DEMO_DATA", "true")
os.environ.setdefault("LOG_LEVEL", "INFO")

from rbac_directory.crud.directory import DirectoryStore  # noqa: E402
from rbac_directory.schemas.role import Role  # noqa: E402
from rbac_directory.schemas.user import User  # noqa: E402
from rbac_directory.seed import build_demo_store  # noqa: E402
from rbac_directory.services.directory_service import DirectoryService  # noqa: E402
from rbac_directory.services.notifications import RecordingNotifier  # noqa: E402


@pytest.fixture
def jane() -> User:
    return User(id=1, name="Jane", email="jane@x.com", role="Editor", status="Active")


@pytest.fixture
def editor_role() -> Role:
    return Role(id=1, name="Editor", permissions=("create_content", "edit_content", "view_analytics"))


@pytest.fixture
def store(jane: User, editor_role: Role) -> DirectoryStore:
    return DirectoryStore(users=[jane], roles=[editor_role])


@pytest.fixture
def demo_store() -> DirectoryStore:
    return build_demo_store()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(demo_store: DirectoryStore, notifier: RecordingNotifier) -> DirectoryService:
    return DirectoryService(demo_store, notifier)
