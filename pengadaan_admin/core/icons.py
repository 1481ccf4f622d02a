import re
from abc import ABC, abstractmethod
from typing import Dict

# 菜单编辑器中可选的图标
ICON_OPTIONS = (
    'BarChart3', 'Database', 'Plus', 'Upload', 'Download', 'Users',
    'Settings', 'FileText', 'Calendar', 'Mail', 'Bell', 'Home',
    'Archive', 'MessageSquare', 'Shield', 'Palette',
)


class IconResolver(ABC):
    """图标解析器, 将菜单中的图标名称转换为前端可用的 class"""

    @abstractmethod
    def resolve(self, name: str) -> str:
        pass


class BootstrapIconResolver(IconResolver):
    """Bootstrap Icons"""
    mapping: Dict[str, str] = {
        'BarChart3': 'bi bi-bar-chart',
        'Database': 'bi bi-database',
        'Plus': 'bi bi-plus-lg',
        'Upload': 'bi bi-upload',
        'Download': 'bi bi-download',
        'Users': 'bi bi-people',
        'Settings': 'bi bi-gear',
        'FileText': 'bi bi-file-earmark-text',
        'Calendar': 'bi bi-calendar',
        'Mail': 'bi bi-envelope',
        'Bell': 'bi bi-bell',
        'Home': 'bi bi-house',
        'Archive': 'bi bi-archive',
        'MessageSquare': 'bi bi-chat-square',
        'Shield': 'bi bi-shield',
        'Palette': 'bi bi-palette',
    }
    fallback = 'bi bi-circle'

    def resolve(self, name: str) -> str:
        if name and name.startswith('bi '):
            # 已经是 bootstrap class
            return name
        return self.mapping.get(name, self.fallback)


class LucideIconResolver(IconResolver):
    """lucide 图标, BarChart3 -> lucide-bar-chart-3"""
    fallback = 'lucide-circle'

    def resolve(self, name: str) -> str:
        if not name:
            return self.fallback
        kebab = re.sub(r'(?<=[a-z])(?=[A-Z0-9])|(?<=[0-9])(?=[A-Z])', '-', name).lower()
        return f"lucide-{kebab}"
