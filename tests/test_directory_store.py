"""
Tests for the in-memory directory store.

Covers uniqueness enforcement, id minting, partial updates, idempotent
deletes and the ranked role collection.
"""
import pydantic
import pytest

from rbac_directory.crud import DUPLICATE_ROLE_MESSAGE, DUPLICATE_USER_MESSAGE, DirectoryStore
from rbac_directory.errors import DuplicateError, NotFoundError, ValidationError
from rbac_directory.schemas.role import Role, RoleDraft, RolePatch
from rbac_directory.schemas.user import User, UserDraft, UserPatch


def _user_draft(name: str, email: str, **overrides) -> UserDraft:
    values = {"name": name, "email": email, "role": "Viewer", "status": "Active"}
    values.update(overrides)
    return UserDraft(**values)


class TestUserUniqueness:
    """Names and emails are unique ignoring case."""

    def test_duplicate_email_differing_in_case(self, store):
        result = store.add_user(_user_draft("Someone Else", "JANE@X.COM"))

        assert not result.ok
        assert isinstance(result.error, DuplicateError)
        assert result.error.message == DUPLICATE_USER_MESSAGE

    def test_duplicate_name_differing_in_case(self, store):
        result = store.add_user(_user_draft("jAnE", "other@x.com"))
        assert isinstance(result.error, DuplicateError)

    def test_is_duplicate_user_excludes_self(self, store, jane):
        assert store.is_duplicate_user(jane) is True
        assert store.is_duplicate_user(jane, exclude_id=jane.id) is False

    def test_rejected_add_leaves_collection_unchanged(self, store):
        before = store.list_users()
        store.add_user(_user_draft("Jane", "new@x.com"))
        assert store.list_users() == before

    def test_duplicate_error_does_not_name_the_conflict(self, store):
        result = store.add_user(_user_draft("Jane", "new@x.com"))
        assert "jane@x.com" not in result.error.message
        assert result.error.details is None


class TestUserCreate:
    """New users get fresh ids."""

    def test_add_user_mints_id(self, store, jane):
        result = store.add_user(_user_draft("Ann", "ann@x.com"))

        assert result.ok
        assert result.value.id > jane.id
        assert store.get_user(result.value.id) == result.value

    def test_ids_never_collide(self):
        store = DirectoryStore()
        ids = {store.add_user(_user_draft(f"user{i}", f"u{i}@x.com")).value.id for i in range(20)}
        assert len(ids) == 20

    def test_ids_not_reused_after_delete(self):
        store = DirectoryStore()
        first = store.add_user(_user_draft("One", "one@x.com")).value
        store.delete_user(first.id)
        second = store.add_user(_user_draft("Two", "two@x.com")).value
        assert second.id != first.id

    def test_seeded_ids_must_be_unique(self, jane):
        with pytest.raises(ValueError, match="User ids must be unique"):
            DirectoryStore(users=[jane, jane])


class TestUserUpdate:
    """Patches merge onto the stored record."""

    def test_update_keeps_id_and_untouched_fields(self, store, jane):
        result = store.update_user(jane.id, UserPatch(status="Inactive"))

        assert result.ok
        assert result.value.id == jane.id
        assert result.value.status == "Inactive"
        assert result.value.email == jane.email

    def test_update_in_place(self, store, jane):
        store.add_user(_user_draft("Ann", "ann@x.com"))
        store.update_user(jane.id, UserPatch(name="Janet"))

        assert [user.name for user in store.list_users()] == ["Janet", "Ann"]

    def test_update_missing_user(self, store):
        result = store.update_user(999, UserPatch(name="Ghost"))

        assert isinstance(result.error, NotFoundError)

    def test_update_into_collision(self, store, jane):
        ann = store.add_user(_user_draft("Ann", "ann@x.com")).value

        result = store.update_user(ann.id, UserPatch(email="Jane@X.com"))

        assert isinstance(result.error, DuplicateError)
        assert store.get_user(ann.id).email == "ann@x.com"

    def test_update_own_name_case_is_allowed(self, store, jane):
        result = store.update_user(jane.id, UserPatch(name="JANE"))
        assert result.ok

    def test_update_with_odd_historic_email(self):
        """Editing only the name works even if the stored email looks invalid."""
        legacy = User(id=1, name="Jane", email="jane(at)x", role="Editor", status="Active")
        store = DirectoryStore(users=[legacy])

        result = store.update_user(1, UserPatch(name="Jane Q"))

        assert result.ok
        assert result.value.email == "jane(at)x"


class TestUserDelete:
    """Deletes are idempotent."""

    def test_delete_existing(self, store, jane):
        assert store.delete_user(jane.id) is True
        assert store.get_user(jane.id) is None

    def test_delete_missing_is_noop(self, store):
        before = store.list_users()
        assert store.delete_user(12345) is False
        assert store.list_users() == before


class TestRoles:
    """Role operations mirror user operations and keep the collection ranked."""

    def test_add_role_duplicate_name(self, store):
        result = store.add_role(RoleDraft(name="editor", permissions=["view_content"]))

        assert isinstance(result.error, DuplicateError)
        assert result.error.message == DUPLICATE_ROLE_MESSAGE

    def test_collection_is_ranked_after_add(self, store):
        store.add_role(RoleDraft(name="Admin", permissions=["manage_users", "manage_roles", "manage_settings", "view_analytics"]))
        store.add_role(RoleDraft(name="Viewer", permissions=["view_content"]))

        assert [role.name for role in store.list_roles()] == ["Admin", "Editor", "Viewer"]

    def test_collection_is_reranked_after_update(self, store, editor_role):
        viewer = store.add_role(RoleDraft(name="Viewer", permissions=["view_content"])).value

        store.update_role(
            viewer.id,
            RolePatch(permissions=["view_content", "view_analytics", "edit_content", "create_content"]),
        )

        assert [role.name for role in store.list_roles()] == ["Viewer", "Editor"]

    def test_update_role_rename_collision(self, store):
        viewer = store.add_role(RoleDraft(name="Viewer", permissions=["view_content"])).value

        result = store.update_role(viewer.id, RolePatch(name="EDITOR"))

        assert isinstance(result.error, DuplicateError)
        assert store.get_role(viewer.id).name == "Viewer"

    def test_update_missing_role(self, store):
        result = store.update_role(404, RolePatch(name="Nobody"))
        assert isinstance(result.error, NotFoundError)

    def test_delete_role_leaves_users_alone(self, store, jane, editor_role):
        """Deleting a role referenced by a user leaves a dangling role name."""
        assert store.delete_role(editor_role.id) is True

        assert store.get_user(jane.id).role == "Editor"
        assert store.list_roles() == ()

    def test_delete_missing_role_is_noop(self, store):
        assert store.delete_role(999) is False

    def test_role_permissions_are_deduplicated(self):
        role = Role(id=1, name="X", permissions=["view_content", "view_content"])
        assert role.permissions == ("view_content",)


class TestStoreRejectsInvalidRecords:
    """Incomplete or rule-breaking input comes back as a failed result."""

    def test_incomplete_user_draft(self):
        store = DirectoryStore()

        result = store.add_user(UserDraft(name="a", email="a@b.co"))

        assert isinstance(result.error, ValidationError)
        assert result.error.field_errors == {
            "role": "Role is required.",
            "status": "Status is required.",
        }
        assert store.list_users() == ()

    def test_unknown_status_on_update(self, store, jane):
        result = store.update_user(jane.id, UserPatch(status="Bogus"))

        assert result.error.field_errors == {"status": "Invalid status."}
        assert store.get_user(jane.id) == jane

    def test_clearing_a_required_user_field(self, store, jane):
        result = store.update_user(jane.id, UserPatch(name=None))

        assert result.error.field_errors == {"name": "Name is required."}

    def test_role_update_cannot_drop_every_permission(self, store, editor_role):
        result = store.update_role(editor_role.id, RolePatch(permissions=[]))

        assert result.error.field_errors == {"permissions": "Select at least one permission."}
        assert store.get_role(editor_role.id) == editor_role

    def test_role_with_unknown_permission(self, store):
        result = store.add_role(RoleDraft(name="X", permissions=["launch_missiles"]))

        assert result.error.field_errors == {"permissions": "Unknown permission: launch_missiles"}
        assert [role.name for role in store.list_roles()] == ["Editor"]

    def test_role_without_name(self, store):
        result = store.add_role(RoleDraft(name="  ", permissions=["view_content"]))

        assert result.error.field_errors == {"name": "Role name is required."}

    @pytest.mark.parametrize("permissions", [(), ("launch_missiles",)])
    def test_role_model_enforces_permission_rules(self, permissions):
        with pytest.raises(pydantic.ValidationError):
            Role(id=1, name="X", permissions=permissions)


class TestUniquenessHoldsAcrossSequences:
    """Pairwise uniqueness after a mixed run of operations."""

    def test_users_and_roles_stay_unique(self, store, jane):
        store.add_user(_user_draft("Ann", "ann@x.com"))
        store.add_user(_user_draft("ANN", "ann2@x.com"))
        store.add_user(_user_draft("Bob", "Ann@X.com"))
        bob = store.add_user(_user_draft("Bob", "bob@x.com")).value
        store.update_user(bob.id, UserPatch(name="jane"))
        store.update_user(jane.id, UserPatch(email="BOB@x.com"))
        store.add_role(RoleDraft(name="EDITOR", permissions=["view_content"]))
        store.add_role(RoleDraft(name="Viewer", permissions=["view_content"]))

        users = store.list_users()
        assert len({user.name.lower() for user in users}) == len(users)
        assert len({user.email.lower() for user in users}) == len(users)
        roles = store.list_roles()
        assert len({role.name.lower() for role in roles}) == len(roles)
        assert len(users) == 3
