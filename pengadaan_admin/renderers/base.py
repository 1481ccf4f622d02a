from abc import ABC, abstractmethod
from html import escape
from typing import Any, Dict, Optional

from ..core.icons import BootstrapIconResolver, IconResolver


class BaseRenderer(ABC):
    """渲染器基类"""

    def __init__(self, icon_resolver: Optional[IconResolver] = None):
        self.icon_resolver = icon_resolver or BootstrapIconResolver()

    @abstractmethod
    def render(self, value: Any, context: Dict[str, Any] = None) -> str:
        """渲染值"""
        pass

    def _icon(self, name: str) -> str:
        return f'<i class="{escape(self.icon_resolver.resolve(name))}"></i>'
