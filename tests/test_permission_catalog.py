"""
Tests for the permission catalog.

The catalog is fixed for the life of the process; these tests pin its
contents, ordering and category groupings.
"""
import pytest

from rbac_directory import permissions


class TestCatalogContents:
    """Test the ordered permission list."""

    def test_permissions_are_ordered(self):
        """The catalog keeps its display order."""
        assert permissions.PERMISSIONS == (
            "manage_users",
            "manage_roles",
            "create_content",
            "edit_content",
            "delete_content",
            "approve_content",
            "view_content",
            "view_analytics",
            "manage_settings",
        )

    def test_permissions_are_unique(self):
        """No permission appears twice."""
        assert len(permissions.PERMISSIONS) == len(permissions.ALLOWED_PERMISSIONS)

    def test_every_permission_has_a_category(self):
        """Categories cover the whole catalog."""
        categorized = {
            permission
            for group in permissions.PERMISSION_CATEGORIES.values()
            for permission in group
        }
        assert categorized == permissions.ALLOWED_PERMISSIONS

    def test_category_names(self):
        """Categories group permissions for display."""
        assert list(permissions.PERMISSION_CATEGORIES) == [
            "User Management",
            "Content Management",
            "Analytics & Settings",
        ]


class TestPermissionValidation:
    """Test membership checks against the catalog."""

    def test_validate_permission_allows_known(self):
        """Known permissions pass."""
        permissions.validate_permission("manage_users")  # Should not raise

    def test_validate_permission_rejects_unknown(self):
        """Unknown permissions must be rejected."""
        with pytest.raises(ValueError, match="Invalid permission 'launch_rockets'"):
            permissions.validate_permission("launch_rockets")

    def test_is_known_permission(self):
        assert permissions.is_known_permission("view_content") is True
        assert permissions.is_known_permission("View_Content") is False


class TestCatalogProvider:
    """Test the default catalog provider."""

    def test_provider_returns_catalog(self):
        catalog = permissions.PermissionCatalog()
        assert catalog.permissions() == permissions.PERMISSIONS
        assert catalog.categories() == permissions.PERMISSION_CATEGORIES

    def test_provider_categories_are_a_copy(self):
        """Mutating the returned mapping leaves the catalog intact."""
        categories = permissions.DEFAULT_CATALOG.categories()
        categories.pop("User Management")
        assert "User Management" in permissions.DEFAULT_CATALOG.categories()


@pytest.mark.parametrize(
    "permission, label",
    [
        ("manage_users", "Manage Users"),
        ("view_analytics", "View Analytics"),
        ("approve_content", "Approve Content"),
    ],
)
def test_format_permission_label(permission: str, label: str) -> None:
    """Permission identifiers render as title-cased labels."""
    assert permissions.format_permission_label(permission) == label
