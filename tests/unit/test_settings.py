"""
Unit tests for AppSettings and role-based navigation.
"""

import pytest

from pengadaan_admin.core.exceptions import ValidationError
from pengadaan_admin.core.menu import MenuItem
from pengadaan_admin.core.settings import (
    ADMIN_ROLE, AppSettings, default_menu_items, visible_menu_tree,
)


class TestDefaults:

    @pytest.mark.unit
    def test_default_menu_structure(self):
        items = default_menu_items()
        assert len(items) == 15
        assert len({item.id for item in items}) == 15
        assert all(item.editable for item in items)

    @pytest.mark.unit
    def test_default_items_are_fresh_lists(self):
        first = AppSettings()
        first.menu_items.append(MenuItem("extra", "Extra"))
        assert len(AppSettings().menu_items) == 15

    @pytest.mark.unit
    def test_background_class(self):
        assert AppSettings().background_class() == "min-h-screen bg-white"


class TestSerialization:

    @pytest.mark.unit
    def test_round_trip(self):
        settings = AppSettings(app_title="Pengadaan", navbar_style="dark")
        restored = AppSettings.from_dict(settings.to_dict())
        assert restored == settings

    @pytest.mark.unit
    def test_camel_case_keys(self):
        data = AppSettings().to_dict()
        assert set(data) == {"appTitle", "primaryColor", "backgroundColor", "navbarStyle", "menuItems"}
        assert data["menuItems"][2]["parentId"] == "data-management"

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [None, {}, {"menuItems": []}])
    def test_empty_data_falls_back_to_defaults(self, data):
        settings = AppSettings.from_dict(data)
        assert settings.app_title == "Sistem Manajemen Data"
        assert len(settings.menu_items) == 15

    @pytest.mark.unit
    def test_stored_menu_replaces_defaults(self):
        settings = AppSettings.from_dict({"menuItems": [{"id": "only", "label": "Only"}]})
        assert [item.id for item in settings.menu_items] == ["only"]


class TestUpdate:

    @pytest.mark.unit
    def test_update_returns_new_settings(self):
        settings = AppSettings()
        updated = settings.update(app_title="  Pengadaan  ", navbar_style="colored", primary_color="green")
        assert updated.app_title == "Pengadaan"
        assert updated.navbar_style == "colored"
        assert updated.primary_color == "green"
        assert settings.navbar_style == "default"

    @pytest.mark.unit
    def test_unknown_navbar_style(self):
        with pytest.raises(ValidationError) as exc:
            AppSettings().update(navbar_style="neon")
        assert exc.value.field == "navbarStyle"

    @pytest.mark.unit
    def test_empty_title(self):
        with pytest.raises(ValidationError):
            AppSettings().update(app_title="")


class TestVisibleMenu:

    @staticmethod
    def _settings_children(tree):
        settings = next(node for node in tree if node.id == "settings")
        return [node.id for node in settings.children]

    @pytest.mark.unit
    def test_administrator_sees_user_management(self, default_items):
        tree = visible_menu_tree(default_items, ADMIN_ROLE)
        assert self._settings_children(tree) == ["login-settings", "users", "app-settings"]

    @pytest.mark.unit
    @pytest.mark.parametrize("role", [None, "Operator", "administrator"])
    def test_other_roles_do_not(self, default_items, role):
        tree = visible_menu_tree(default_items, role)
        assert self._settings_children(tree) == ["login-settings", "app-settings"]
