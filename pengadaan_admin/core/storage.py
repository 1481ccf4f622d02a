import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .settings import AppSettings

logger = logging.getLogger(__name__)


class SettingsStore(ABC):
    """配置存储基类, 保存序列化后的 AppSettings"""

    @abstractmethod
    async def load_raw(self) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def save_raw(self, data: Dict[str, Any]) -> None:
        pass

    async def load(self) -> AppSettings:
        """读取配置, 未保存过时返回默认配置"""
        return AppSettings.from_dict(await self.load_raw())

    async def save(self, settings: AppSettings) -> None:
        await self.save_raw(settings.to_dict())
        logger.info("Settings saved with %d menu items", len(settings.menu_items))


class MemorySettingsStore(SettingsStore):
    """内存存储, 用于单进程运行和测试"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data = copy.deepcopy(initial) if initial else None

    async def load_raw(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)

    async def save_raw(self, data: Dict[str, Any]) -> None:
        self._data = copy.deepcopy(data)


class TortoiseSettingsStore(SettingsStore):
    """保存到 app_settings 表"""

    def __init__(self, key: str = "app_settings"):
        self.key = key

    async def load_raw(self) -> Optional[Dict[str, Any]]:
        from ..models import SettingRecord

        record = await SettingRecord.get_or_none(key=self.key)
        if record is None:
            logger.info("No stored settings for key %s, using defaults", self.key)
            return None
        return record.value

    async def save_raw(self, data: Dict[str, Any]) -> None:
        from ..models import SettingRecord

        await SettingRecord.update_or_create(key=self.key, defaults={"value": data})
