from typing import Any, Dict


class MenuError(Exception):
    """菜单操作错误基类

    key: 翻译键, 由 get_text 转换为界面提示
    status_code: 返回给前端的状态码
    """
    key: str = "menu_error"
    status_code: int = 400

    def __init__(self, message: str, **params: Any):
        super().__init__(message)
        self.message = message
        self.params: Dict[str, Any] = params


class ValidationError(MenuError):
    """必填字段为空或取值非法"""
    key = "validation_error"
    status_code = 400

    def __init__(self, message: str, field: str = "", **params: Any):
        super().__init__(message, field=field, **params)
        self.field = field


class NotFoundError(MenuError):
    """目标菜单不存在"""
    key = "menu_not_found"
    status_code = 404

    def __init__(self, item_id: str):
        super().__init__(f"menu item '{item_id}' does not exist", id=item_id)
        self.item_id = item_id


class NotEditableError(MenuError):
    """系统菜单不可删除"""
    key = "menu_not_editable"
    status_code = 403

    def __init__(self, item_id: str):
        super().__init__(f"menu item '{item_id}' is a system item", id=item_id)
        self.item_id = item_id


class DuplicateIdError(MenuError):
    """菜单ID重复"""
    key = "menu_duplicate_id"
    status_code = 409

    def __init__(self, item_id: str):
        super().__init__(f"menu item '{item_id}' already exists", id=item_id)
        self.item_id = item_id


class CycleError(MenuError):
    """移动后会形成循环引用"""
    key = "menu_cycle"
    status_code = 409

    def __init__(self, moved_id: str, new_parent_id: str):
        super().__init__(
            f"cannot move '{moved_id}' under its own descendant '{new_parent_id}'",
            id=moved_id,
            parent=new_parent_id,
        )
        self.moved_id = moved_id
        self.new_parent_id = new_parent_id
