import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from .exceptions import (
    CycleError, DuplicateIdError, NotEditableError, NotFoundError, ValidationError,
)

logger = logging.getLogger(__name__)

# 编辑器下拉框中"无父菜单"选项的取值
NO_PARENT = "none"


@dataclass
class MenuItem:
    """菜单项(扁平存储结构)"""
    id: str                           # 菜单ID, 全局唯一
    label: str                        # 显示名称
    icon: str = ""                    # 图标名称, 由 IconResolver 解析
    parent_id: Optional[str] = None   # 父菜单ID, None 表示顶级菜单
    order: Optional[int] = None       # 同级排序值
    editable: bool = False            # 系统菜单不可删除

    def to_dict(self) -> Dict[str, Any]:
        """转换为持久化格式"""
        data: Dict[str, Any] = {
            'id': self.id,
            'label': self.label,
            'icon': self.icon,
            'editable': self.editable,
        }
        if self.order is not None:
            data['order'] = self.order
        if self.parent_id is not None:
            data['parentId'] = self.parent_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuItem":
        parent_id = data.get('parentId', data.get('parent_id'))
        order = data.get('order')
        return cls(
            id=str(data['id']),
            label=str(data.get('label', '')),
            icon=str(data.get('icon') or ''),
            parent_id=_normalize_parent(parent_id),
            order=int(order) if order is not None else None,
            editable=bool(data.get('editable', False)),
        )


@dataclass
class MenuNode:
    """菜单树节点, 由 build_tree 生成, 不做持久化"""
    id: str
    label: str
    icon: str = ""
    editable: bool = False
    order: Optional[int] = None
    children: List["MenuNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'icon': self.icon,
            'editable': self.editable,
            'order': self.order,
            'children': [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuNode":
        order = data.get('order')
        return cls(
            id=str(data['id']),
            label=str(data.get('label', '')),
            icon=str(data.get('icon') or ''),
            editable=bool(data.get('editable', False)),
            order=int(order) if order is not None else None,
            children=[cls.from_dict(child) for child in data.get('children') or []],
        )


def _normalize_parent(parent_id: Optional[str]) -> Optional[str]:
    if parent_id is None:
        return None
    parent_id = str(parent_id)
    if not parent_id or parent_id == NO_PARENT:
        return None
    return parent_id


def _sort_key(item: MenuItem) -> int:
    return item.order if item.order is not None else 0


def _index_by_id(items: Iterable[MenuItem]) -> Dict[str, MenuItem]:
    """按ID建立索引, ID重复时保留第一条"""
    index: Dict[str, MenuItem] = {}
    for item in items:
        index.setdefault(item.id, item)
    return index


def find_item(items: Sequence[MenuItem], item_id: str) -> Optional[MenuItem]:
    """查找菜单项"""
    for item in items:
        if item.id == item_id:
            return item
    return None


def build_tree(items: Sequence[MenuItem]) -> List[MenuNode]:
    """将扁平菜单列表转换为菜单树

    - parent_id 为空或指向不存在的菜单时, 作为顶级菜单
    - 同级菜单按 order 升序排列, order 相同时保持输入顺序
    - 已存在的循环引用不会导致死循环, 循环中的菜单会被提升为顶级菜单
    """
    known_ids = {item.id for item in items}

    # 按父菜单分组
    groups: Dict[Optional[str], List[MenuItem]] = {}
    for item in items:
        parent = item.parent_id
        if parent is None or parent not in known_ids or parent == item.id:
            parent = None
        groups.setdefault(parent, []).append(item)

    visited: Set[str] = set()

    def build_node(item: MenuItem, path: Set[str]) -> MenuNode:
        visited.add(item.id)
        path = path | {item.id}
        children = [
            build_node(child, path)
            for child in sorted(groups.get(item.id, []), key=_sort_key)
            if child.id not in path
        ]
        return MenuNode(
            id=item.id,
            label=item.label,
            icon=item.icon,
            editable=item.editable,
            order=item.order,
            children=children,
        )

    roots = [build_node(item, set()) for item in sorted(groups.get(None, []), key=_sort_key)]

    # 循环引用中的菜单无法从顶级菜单访问到, 逐个提升为顶级菜单
    for item in items:
        if item.id in visited:
            continue
        logger.warning("Menu item %s is part of a parent cycle, promoted to root", item.id)
        roots.append(build_node(item, set()))

    return roots


def flatten_tree(tree: Sequence[MenuNode]) -> List[MenuItem]:
    """前序遍历菜单树, 重新生成 parent_id 和从1开始的 order"""
    flattened: List[MenuItem] = []

    def flatten(nodes: Sequence[MenuNode], parent_id: Optional[str]):
        for index, node in enumerate(nodes):
            flattened.append(MenuItem(
                id=node.id,
                label=node.label,
                icon=node.icon,
                parent_id=parent_id,
                order=index + 1,
                editable=node.editable,
            ))
            if node.children:
                flatten(node.children, node.id)

    flatten(tree, None)
    return flattened


def normalize(items: Sequence[MenuItem]) -> List[MenuItem]:
    """按树结构重新编号"""
    return flatten_tree(build_tree(items))


def is_ancestor(items: Sequence[MenuItem], candidate_ancestor_id: str, node_id: str) -> bool:
    """判断 candidate_ancestor_id 是否是 node_id 的祖先

    向上遍历的步数不超过菜单总数, 已损坏的循环数据返回 False
    """
    index = _index_by_id(items)
    current = index.get(node_id)
    steps = 0
    while current is not None and current.parent_id is not None and steps < len(items):
        if current.parent_id == candidate_ancestor_id:
            return True
        current = index.get(current.parent_id)
        steps += 1
    return False


def descendant_ids(items: Sequence[MenuItem], item_id: str) -> Set[str]:
    """获取所有子孙菜单ID(不含自身)"""
    children: Dict[str, List[str]] = {}
    for item in items:
        if item.parent_id is not None:
            children.setdefault(item.parent_id, []).append(item.id)

    found: Set[str] = set()
    pending = list(children.get(item_id, []))
    while pending:
        current = pending.pop()
        if current in found or current == item_id:
            continue
        found.add(current)
        pending.extend(children.get(current, []))
    return found


def add_item(items: Sequence[MenuItem], new_item: MenuItem) -> List[MenuItem]:
    """添加菜单项, 返回新列表"""
    item_id = (new_item.id or '').strip()
    if not item_id:
        raise ValidationError("menu id is required", field='id')
    if not (new_item.label or '').strip():
        raise ValidationError("menu label is required", field='label')
    if find_item(items, item_id) is not None:
        raise DuplicateIdError(item_id)

    parent_id = _normalize_parent(new_item.parent_id)
    order = new_item.order
    if order is None:
        order = sum(1 for item in items if item.parent_id == parent_id) + 1

    added = replace(new_item, id=item_id, parent_id=parent_id, order=order, editable=True)
    return list(items) + [added]


def update_item(
    items: Sequence[MenuItem],
    item_id: str,
    label: Optional[str] = None,
    icon: Optional[str] = None,
) -> List[MenuItem]:
    """修改菜单名称和图标, 菜单不存在时抛出 NotFoundError"""
    if find_item(items, item_id) is None:
        raise NotFoundError(item_id)
    if label is not None and not label.strip():
        raise ValidationError("menu label is required", field='label')

    changes: Dict[str, Any] = {}
    if label is not None:
        changes['label'] = label
    if icon is not None:
        changes['icon'] = icon
    return [replace(item, **changes) if item.id == item_id else item for item in items]


def remove_item(items: Sequence[MenuItem], item_id: str) -> List[MenuItem]:
    """删除菜单及其全部子菜单"""
    target = find_item(items, item_id)
    if target is None:
        raise NotFoundError(item_id)
    if not target.editable:
        raise NotEditableError(item_id)

    removed = descendant_ids(items, item_id) | {item_id}
    return [item for item in items if item.id not in removed]


def reparent(
    items: Sequence[MenuItem],
    moved_id: str,
    new_parent_id: Optional[str],
) -> List[MenuItem]:
    """移动菜单到新的父菜单下, new_parent_id 为 None 时设为顶级菜单"""
    new_parent_id = _normalize_parent(new_parent_id)
    if find_item(items, moved_id) is None:
        raise NotFoundError(moved_id)
    if new_parent_id is not None:
        if find_item(items, new_parent_id) is None:
            raise NotFoundError(new_parent_id)
        if new_parent_id == moved_id or is_ancestor(items, moved_id, new_parent_id):
            raise CycleError(moved_id, new_parent_id)

    return [
        replace(item, parent_id=new_parent_id) if item.id == moved_id else item
        for item in items
    ]


def make_root(items: Sequence[MenuItem], item_id: str) -> List[MenuItem]:
    """设为顶级菜单"""
    return reparent(items, item_id, None)


def prune_tree(tree: Sequence[MenuNode], hidden_ids: Iterable[str]) -> List[MenuNode]:
    """去掉指定菜单及其子树, 返回新的菜单树"""
    hidden = set(hidden_ids)

    def prune(nodes: Sequence[MenuNode]) -> List[MenuNode]:
        return [
            replace(node, children=prune(node.children))
            for node in nodes
            if node.id not in hidden
        ]

    return prune(tree)


def is_active(node: MenuNode, active_id: Optional[str]) -> bool:
    """当前菜单或其任一子菜单处于激活状态"""
    if active_id is None:
        return False
    if node.id == active_id:
        return True
    return any(is_active(child, active_id) for child in node.children)
