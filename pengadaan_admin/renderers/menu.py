from html import escape
from typing import Any, Dict, List, Sequence

from ..core.menu import MenuNode, is_active
from .base import BaseRenderer


class NavbarRenderer(BaseRenderer):
    """导航栏渲染器, 有子菜单的节点渲染为下拉菜单

    context:
        active: 当前激活的菜单ID
        title: 站点标题
        navbar_style: default / dark / colored / transparent
        primary_color: colored 样式使用的颜色
    """
    style_classes = {
        'default': 'navbar-light bg-white',
        'dark': 'navbar-dark bg-dark',
        'colored': 'navbar-dark bg-{color}',
        'transparent': 'navbar-light bg-transparent',
    }

    def render(self, value: Sequence[MenuNode], context: Dict[str, Any] = None) -> str:
        context = context or {}
        active = context.get('active')
        style = self.style_classes.get(
            context.get('navbar_style', 'default'), self.style_classes['default']
        ).format(color=escape(context.get('primary_color', 'primary')))

        items = '\n'.join(self._render_top(node, active) for node in value)
        title = escape(context.get('title', ''))
        return (
            f'<nav class="navbar navbar-expand-lg shadow-sm border-bottom {style}">\n'
            f'<div class="container">\n'
            f'<span class="navbar-brand fw-bold">{title}</span>\n'
            f'<ul class="navbar-nav">\n{items}\n</ul>\n'
            f'</div>\n'
            f'</nav>'
        )

    def _render_top(self, node: MenuNode, active) -> str:
        active_cls = ' active' if is_active(node, active) else ''
        label = escape(node.label)
        if not node.children:
            return (
                f'<li class="nav-item">'
                f'<a class="nav-link{active_cls}" href="#" data-menu-id="{escape(node.id)}">'
                f'{self._icon(node.icon)} <span>{label}</span></a></li>'
            )
        children = '\n'.join(self._render_dropdown_item(child, active) for child in node.children)
        return (
            f'<li class="nav-item dropdown">'
            f'<a class="nav-link dropdown-toggle{active_cls}" href="#" role="button" '
            f'data-bs-toggle="dropdown" data-menu-id="{escape(node.id)}">'
            f'{self._icon(node.icon)} <span>{label}</span></a>\n'
            f'<ul class="dropdown-menu">\n{children}\n</ul></li>'
        )

    def _render_dropdown_item(self, node: MenuNode, active) -> str:
        active_cls = ' active' if is_active(node, active) else ''
        label = escape(node.label)
        link = (
            f'<a class="dropdown-item{active_cls}" href="#" data-menu-id="{escape(node.id)}">'
            f'{self._icon(node.icon)} <span>{label}</span></a>'
        )
        if not node.children:
            return f'<li>{link}</li>'
        # 多级子菜单向右展开
        children = '\n'.join(self._render_dropdown_item(child, active) for child in node.children)
        return f'<li class="dropend">{link}\n<ul class="dropdown-menu">\n{children}\n</ul></li>'


class MenuEditorRenderer(BaseRenderer):
    """层级菜单编辑器, 每级缩进20px"""
    indent = 20

    def render(self, value: Sequence[MenuNode], context: Dict[str, Any] = None) -> str:
        rows: List[str] = []
        for node in value:
            self._render_node(node, 0, None, rows)
        return '<div class="menu-editor">\n' + '\n'.join(rows) + '\n</div>'

    def _render_node(self, node: MenuNode, level: int, parent_id, rows: List[str]):
        menu_id = escape(node.id)
        parent_hint = (
            f'<div class="small text-primary">Parent: {escape(parent_id)}</div>'
            if parent_id else ''
        )
        buttons = []
        if parent_id:
            buttons.append(
                f'<button class="btn btn-outline-secondary btn-sm" data-action="make-root" '
                f'data-menu-id="{menu_id}"><i class="bi bi-arrows-move"></i></button>'
            )
        buttons.append(
            f'<button class="btn btn-outline-secondary btn-sm" data-action="edit" '
            f'data-menu-id="{menu_id}"><i class="bi bi-pencil"></i></button>'
        )
        if node.editable:
            buttons.append(
                f'<button class="btn btn-danger btn-sm" data-action="delete" '
                f'data-menu-id="{menu_id}"><i class="bi bi-trash"></i></button>'
            )

        rows.append(
            f'<div class="card mb-2" draggable="true" data-menu-id="{menu_id}" '
            f'style="padding-left: {level * self.indent}px">'
            f'<div class="card-body d-flex justify-content-between p-3">'
            f'<div class="d-flex gap-3">{self._icon(node.icon)}'
            f'<div><div class="fw-medium">{escape(node.label)}</div>'
            f'<div class="small text-muted">ID: {menu_id}</div>{parent_hint}</div></div>'
            f'<div class="d-flex gap-2">{"".join(buttons)}</div>'
            f'</div></div>'
        )
        for child in node.children:
            self._render_node(child, level + 1, node.id, rows)


class FlatMenuRenderer(BaseRenderer):
    """简单菜单编辑器, 按显示顺序平铺所有菜单"""

    def render(self, value: Sequence[MenuNode], context: Dict[str, Any] = None) -> str:
        rows: List[str] = []

        def walk(nodes: Sequence[MenuNode]):
            for node in nodes:
                delete_btn = (
                    f'<button class="btn btn-danger btn-sm" data-action="delete" '
                    f'data-menu-id="{escape(node.id)}"><i class="bi bi-trash"></i></button>'
                    if node.editable else ''
                )
                rows.append(
                    f'<li class="list-group-item d-flex justify-content-between" '
                    f'data-menu-id="{escape(node.id)}">'
                    f'<span>{self._icon(node.icon)} {escape(node.label)}</span>{delete_btn}</li>'
                )
                walk(node.children)

        walk(value)
        return '<ul class="list-group">\n' + '\n'.join(rows) + '\n</ul>'
