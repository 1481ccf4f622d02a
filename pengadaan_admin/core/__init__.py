from .admin import MenuAdmin
from .exceptions import (
    MenuError, ValidationError, NotFoundError, NotEditableError,
    DuplicateIdError, CycleError,
)
from .icons import IconResolver, BootstrapIconResolver, LucideIconResolver
from .menu import (
    MenuItem, MenuNode, build_tree, flatten_tree, add_item, update_item,
    remove_item, reparent, make_root, is_ancestor,
)
from .settings import AppSettings
from .storage import SettingsStore, MemorySettingsStore, TortoiseSettingsStore

__all__ = [
    'MenuAdmin',
    'MenuItem',
    'MenuNode',
    'AppSettings',
    'build_tree',
    'flatten_tree',
    'add_item',
    'update_item',
    'remove_item',
    'reparent',
    'make_root',
    'is_ancestor',
    'MenuError',
    'ValidationError',
    'NotFoundError',
    'NotEditableError',
    'DuplicateIdError',
    'CycleError',
    'IconResolver',
    'BootstrapIconResolver',
    'LucideIconResolver',
    'SettingsStore',
    'MemorySettingsStore',
    'TortoiseSettingsStore',
]
