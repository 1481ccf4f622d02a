"""
Unit tests for icon resolution and HTML rendering of the menu tree.
"""

import pytest

from pengadaan_admin.core.icons import ICON_OPTIONS, BootstrapIconResolver, LucideIconResolver
from pengadaan_admin.core.menu import MenuItem, build_tree
from pengadaan_admin.renderers import FlatMenuRenderer, MenuEditorRenderer, NavbarRenderer


class TestIconResolvers:

    @pytest.mark.unit
    def test_bootstrap_covers_all_options(self):
        resolver = BootstrapIconResolver()
        for name in ICON_OPTIONS:
            assert resolver.resolve(name).startswith("bi bi-")
            assert resolver.resolve(name) != resolver.fallback

    @pytest.mark.unit
    def test_bootstrap_fallback_and_passthrough(self):
        resolver = BootstrapIconResolver()
        assert resolver.resolve("Unknown") == "bi bi-circle"
        assert resolver.resolve("bi bi-person") == "bi bi-person"

    @pytest.mark.unit
    @pytest.mark.parametrize("name,expected", [
        ("BarChart3", "lucide-bar-chart-3"),
        ("MessageSquare", "lucide-message-square"),
        ("Home", "lucide-home"),
        ("", "lucide-circle"),
    ])
    def test_lucide(self, name, expected):
        assert LucideIconResolver().resolve(name) == expected


class TestNavbarRenderer:

    @pytest.mark.unit
    def test_dropdowns_and_active_state(self, default_items):
        html = NavbarRenderer().render(build_tree(default_items), {
            "active": "import",
            "title": "Sistem Manajemen Data",
        })
        assert "Sistem Manajemen Data" in html
        assert 'class="nav-link dropdown-toggle active" href="#" role="button" data-bs-toggle="dropdown" data-menu-id="import-export"' in html
        assert 'class="dropdown-item active" href="#" data-menu-id="import"' in html
        assert 'class="nav-link" href="#" data-menu-id="dashboard"' in html
        assert "bi bi-bar-chart" in html

    @pytest.mark.unit
    def test_styles(self, default_items):
        tree = build_tree(default_items)
        assert "navbar-dark bg-dark" in NavbarRenderer().render(tree, {"navbar_style": "dark"})
        colored = NavbarRenderer().render(tree, {"navbar_style": "colored", "primary_color": "green"})
        assert "bg-green" in colored
        assert "bg-white" in NavbarRenderer().render(tree, {"navbar_style": "unknown"})

    @pytest.mark.unit
    def test_nested_submenu(self, chain_items):
        html = NavbarRenderer().render(build_tree(chain_items))
        assert '<li class="dropend">' in html

    @pytest.mark.unit
    def test_labels_escaped(self):
        tree = build_tree([MenuItem("x", "<script>alert(1)</script>")])
        html = NavbarRenderer().render(tree)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestEditorRenderers:

    @pytest.mark.unit
    def test_hierarchical_editor(self, mixed_items):
        html = MenuEditorRenderer().render(build_tree(mixed_items))
        assert "padding-left: 20px" in html
        assert "Parent: settings" in html
        # system items have no delete button
        assert 'data-action="delete" data-menu-id="settings"' not in html
        assert 'data-action="delete" data-menu-id="login"' in html
        # only children can be made root
        assert 'data-action="make-root" data-menu-id="login"' in html
        assert 'data-action="make-root" data-menu-id="dashboard"' not in html

    @pytest.mark.unit
    def test_flat_editor_lists_in_display_order(self, mixed_items):
        html = FlatMenuRenderer().render(build_tree(mixed_items))
        positions = [html.index(f'data-menu-id="{menu_id}"') for menu_id in
                     ["dashboard", "settings", "login", "users", "app"]]
        assert positions == sorted(positions)

    @pytest.mark.unit
    def test_custom_resolver(self, chain_items):
        html = FlatMenuRenderer(LucideIconResolver()).render(build_tree(chain_items))
        assert "lucide-home" in html
