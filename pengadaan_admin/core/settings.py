from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from .exceptions import ValidationError
from .menu import MenuItem, MenuNode, build_tree, prune_tree

ADMIN_ROLE = "Administrator"

# 仅管理员可见的菜单
ADMIN_ONLY_MENU_IDS = frozenset({"users"})

NAVBAR_STYLES = ("default", "dark", "colored", "transparent")


def default_menu_items() -> List[MenuItem]:
    """系统默认菜单"""
    return [
        MenuItem("dashboard", "Dashboard", "BarChart3", order=1, editable=True),
        MenuItem("data-management", "Data Management", "Database", order=2, editable=True),
        MenuItem("data", "View Data", "Database", parent_id="data-management", order=1, editable=True),
        MenuItem("add", "Tambah Data", "Plus", parent_id="data-management", order=2, editable=True),
        MenuItem("import-export", "Import/Export", "Upload", order=3, editable=True),
        MenuItem("import", "Import Data", "Upload", parent_id="import-export", order=1, editable=True),
        MenuItem("export", "Export Data", "Download", parent_id="import-export", order=2, editable=True),
        MenuItem("backup-system", "Backup System", "Archive", order=4, editable=True),
        MenuItem("backup", "Backup Data", "Archive", parent_id="backup-system", order=1, editable=True),
        MenuItem("communication", "Communication", "MessageSquare", order=5, editable=True),
        MenuItem("chat", "Chat System", "MessageSquare", parent_id="communication", order=1, editable=True),
        MenuItem("settings", "Settings", "Settings", order=6, editable=True),
        MenuItem("login-settings", "Login Customization", "Palette", parent_id="settings", order=1, editable=True),
        MenuItem("users", "User Management", "Users", parent_id="settings", order=2, editable=True),
        MenuItem("app-settings", "App Settings", "Settings", parent_id="settings", order=3, editable=True),
    ]


@dataclass
class AppSettings:
    """应用外观与菜单配置"""
    app_title: str = "Sistem Manajemen Data"
    primary_color: str = "blue"
    background_color: str = "white"
    navbar_style: str = "default"
    menu_items: List[MenuItem] = field(default_factory=default_menu_items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'appTitle': self.app_title,
            'primaryColor': self.primary_color,
            'backgroundColor': self.background_color,
            'navbarStyle': self.navbar_style,
            'menuItems': [item.to_dict() for item in self.menu_items],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AppSettings":
        """从持久化数据恢复, 缺失字段使用默认值"""
        defaults = cls()
        if not data:
            return defaults
        menu_items = data.get('menuItems')
        return cls(
            app_title=data.get('appTitle', defaults.app_title),
            primary_color=data.get('primaryColor', defaults.primary_color),
            background_color=data.get('backgroundColor', defaults.background_color),
            navbar_style=data.get('navbarStyle', defaults.navbar_style),
            menu_items=(
                [MenuItem.from_dict(item) for item in menu_items]
                if menu_items else defaults.menu_items
            ),
        )

    def with_menu(self, menu_items: Sequence[MenuItem]) -> "AppSettings":
        return replace(self, menu_items=list(menu_items))

    def update(
        self,
        app_title: Optional[str] = None,
        primary_color: Optional[str] = None,
        background_color: Optional[str] = None,
        navbar_style: Optional[str] = None,
    ) -> "AppSettings":
        """修改外观配置, 返回新的配置"""
        changes: Dict[str, Any] = {}
        if app_title is not None:
            if not app_title.strip():
                raise ValidationError("app title is required", field='appTitle')
            changes['app_title'] = app_title.strip()
        if primary_color is not None:
            changes['primary_color'] = primary_color
        if background_color is not None:
            changes['background_color'] = background_color
        if navbar_style is not None:
            if navbar_style not in NAVBAR_STYLES:
                raise ValidationError(
                    f"unknown navbar style '{navbar_style}'", field='navbarStyle'
                )
            changes['navbar_style'] = navbar_style
        return replace(self, **changes)

    def background_class(self) -> str:
        return f"min-h-screen bg-{self.background_color}"


def visible_menu_tree(items: Sequence[MenuItem], role: Optional[str]) -> List[MenuNode]:
    """按角色生成导航菜单树, 非管理员看不到用户管理"""
    tree = build_tree(items)
    if role == ADMIN_ROLE:
        return tree
    return prune_tree(tree, ADMIN_ONLY_MENU_IDS)
