import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from . import menu
from .exceptions import DuplicateIdError, NotEditableError, ValidationError
from .menu import MenuItem, MenuNode
from .settings import AppSettings, default_menu_items, visible_menu_tree
from .storage import MemorySettingsStore, SettingsStore

logger = logging.getLogger(__name__)


class MenuAdmin:
    """菜单管理

    每次修改都先读取配置, 调用菜单引擎生成新的菜单列表, 成功后再保存。
    引擎抛出的 MenuError 直接向上传递, 此时配置不会被保存。
    """

    def __init__(self, store: Optional[SettingsStore] = None):
        self.store = store or MemorySettingsStore()

    async def get_settings(self) -> AppSettings:
        return await self.store.load()

    async def menu_tree(self, role: Optional[str] = None) -> List[MenuNode]:
        """当前角色可见的菜单树"""
        settings = await self.store.load()
        return visible_menu_tree(settings.menu_items, role)

    async def flat_menu(self) -> List[MenuItem]:
        settings = await self.store.load()
        return list(settings.menu_items)

    async def _commit(self, settings: AppSettings, items: List[MenuItem]) -> List[MenuItem]:
        await self.store.save(settings.with_menu(items))
        return items

    async def add_menu(self, data: Dict[str, Any]) -> MenuItem:
        """添加菜单, data 为表单数据: id, label, icon, parentId, order"""
        order = data.get('order')
        try:
            order = int(order) if order not in (None, '') else None
        except (TypeError, ValueError):
            raise ValidationError(f"invalid order '{order}'", field='order')

        new_item = MenuItem(
            id=str(data.get('id') or ''),
            label=str(data.get('label') or ''),
            icon=str(data.get('icon') or 'BarChart3'),
            parent_id=data.get('parentId') or None,
            order=order,
        )
        settings = await self.store.load()
        items = await self._commit(settings, menu.add_item(settings.menu_items, new_item))
        logger.info("Menu item %s added", new_item.id)
        return items[-1]

    async def edit_menu(self, item_id: str, data: Dict[str, Any]) -> MenuItem:
        settings = await self.store.load()
        items = menu.update_item(
            settings.menu_items, item_id, label=data.get('label'), icon=data.get('icon') or None
        )
        await self._commit(settings, items)
        logger.info("Menu item %s updated", item_id)
        return menu.find_item(items, item_id)

    async def delete_menu(self, item_id: str) -> List[str]:
        """删除菜单及子菜单, 返回被删除的ID"""
        settings = await self.store.load()
        items = menu.remove_item(settings.menu_items, item_id)
        await self._commit(settings, items)
        remaining = {item.id for item in items}
        removed = [item.id for item in settings.menu_items if item.id not in remaining]
        logger.info("Menu item %s deleted with %d descendants", item_id, len(removed) - 1)
        return removed

    async def move_menu(self, item_id: str, parent_id: Optional[str]) -> MenuItem:
        """拖拽移动菜单"""
        settings = await self.store.load()
        items = menu.reparent(settings.menu_items, item_id, parent_id)
        await self._commit(settings, items)
        moved = menu.find_item(items, item_id)
        logger.info("Menu item %s moved under %s", item_id, moved.parent_id)
        return moved

    async def make_root(self, item_id: str) -> MenuItem:
        return await self.move_menu(item_id, None)

    async def save_structure(self, tree: List[Dict[str, Any]]) -> List[MenuItem]:
        """保存编辑器提交的菜单树, 按树结构重新编号"""
        if not isinstance(tree, list):
            raise ValidationError("menu structure must be a list", field='menuItems')
        try:
            nodes = [MenuNode.from_dict(node) for node in tree]
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"invalid menu structure: {e}", field='menuItems')

        submitted = menu.flatten_tree(nodes)
        seen = set()
        for item in submitted:
            if not item.id or not item.label.strip():
                raise ValidationError("menu id and label are required", field='menuItems')
            if item.id in seen:
                raise DuplicateIdError(item.id)
            seen.add(item.id)

        settings = await self.store.load()
        # 系统菜单不能通过提交菜单树删除
        for stored in settings.menu_items:
            if not stored.editable and stored.id not in seen:
                raise NotEditableError(stored.id)

        # editable 以已保存的记录为准, 新菜单可编辑
        editable = {stored.id: stored.editable for stored in settings.menu_items}
        items = menu.normalize([
            replace(item, editable=editable.get(item.id, True)) for item in submitted
        ])
        await self._commit(settings, items)
        logger.info("Menu structure saved, %d items", len(items))
        return items

    async def reset_menu(self) -> List[MenuItem]:
        settings = await self.store.load()
        return await self._commit(settings, default_menu_items())

    async def update_appearance(self, data: Dict[str, Any]) -> AppSettings:
        """修改标题和主题"""
        settings = await self.store.load()
        updated = settings.update(
            app_title=data.get('appTitle'),
            primary_color=data.get('primaryColor'),
            background_color=data.get('backgroundColor'),
            navbar_style=data.get('navbarStyle'),
        )
        await self.store.save(updated)
        return updated
