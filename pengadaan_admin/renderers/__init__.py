from .base import BaseRenderer
from .menu import FlatMenuRenderer, MenuEditorRenderer, NavbarRenderer

__all__ = [
    'BaseRenderer',
    'NavbarRenderer',
    'MenuEditorRenderer',
    'FlatMenuRenderer',
]
