"""
Tests for the settings stores. The Tortoise store runs against an in-memory SQLite database.
"""

from contextlib import asynccontextmanager

import pytest
from tortoise import Tortoise

from pengadaan_admin.core.menu import reparent
from pengadaan_admin.core.settings import AppSettings
from pengadaan_admin.core.storage import MemorySettingsStore, TortoiseSettingsStore
from pengadaan_admin.models import SettingRecord


@asynccontextmanager
async def sqlite_memory():
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": ["pengadaan_admin.models"]})
    await Tortoise.generate_schemas()
    try:
        yield
    finally:
        await Tortoise.close_connections()


@pytest.mark.unit
async def test_memory_store_isolates_copies():
    store = MemorySettingsStore()
    assert await store.load_raw() is None

    settings = AppSettings(app_title="Pengadaan")
    await store.save(settings)
    raw = await store.load_raw()
    raw["appTitle"] = "changed"
    assert (await store.load()).app_title == "Pengadaan"


@pytest.mark.unit
async def test_tortoise_store_defaults_when_empty():
    async with sqlite_memory():
        store = TortoiseSettingsStore("test_settings")
        settings = await store.load()
        assert settings == AppSettings()
        assert await SettingRecord.filter(key="test_settings").count() == 0


@pytest.mark.unit
async def test_tortoise_store_round_trip():
    async with sqlite_memory():
        store = TortoiseSettingsStore("test_settings")
        settings = AppSettings(navbar_style="dark")
        settings = settings.with_menu(reparent(settings.menu_items, "chat", "settings"))
        await store.save(settings)
        await store.save(settings.update(app_title="Pengadaan"))

        assert await SettingRecord.filter(key="test_settings").count() == 1
        loaded = await store.load()
        assert loaded.app_title == "Pengadaan"
        assert loaded.navbar_style == "dark"
        chat = next(item for item in loaded.menu_items if item.id == "chat")
        assert chat.parent_id == "settings"


@pytest.mark.unit
async def test_tortoise_store_keys_are_separate():
    async with sqlite_memory():
        first = TortoiseSettingsStore("first")
        second = TortoiseSettingsStore("second")
        await first.save(AppSettings(app_title="First"))
        assert (await second.load()).app_title == "Sistem Manajemen Data"
