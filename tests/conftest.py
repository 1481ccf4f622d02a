"""
Shared pytest fixtures for pengadaan_admin tests.
"""

import os
import sys

import pytest

# Add project root to path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from pengadaan_admin.core.menu import MenuItem  # noqa: E402
from pengadaan_admin.core.settings import default_menu_items  # noqa: E402


@pytest.fixture
def chain_items():
    """A (root) -> B -> C"""
    return [
        MenuItem("A", "Alpha", "Home", order=1, editable=True),
        MenuItem("B", "Beta", "Database", parent_id="A", order=1, editable=True),
        MenuItem("C", "Gamma", "Plus", parent_id="B", order=1, editable=True),
    ]


@pytest.fixture
def default_items():
    return default_menu_items()


@pytest.fixture
def mixed_items():
    """Two roots, children given out of order, one system item."""
    return [
        MenuItem("settings", "Settings", "Settings", order=2, editable=False),
        MenuItem("dashboard", "Dashboard", "BarChart3", order=1, editable=True),
        MenuItem("app", "App Settings", "Settings", parent_id="settings", order=3, editable=True),
        MenuItem("login", "Login", "Palette", parent_id="settings", order=1, editable=True),
        MenuItem("users", "Users", "Users", parent_id="settings", order=2, editable=False),
    ]
