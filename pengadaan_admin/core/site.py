import json
import logging
import os
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional, Union
from urllib.parse import parse_qs

from robyn import Request, Response, Robyn, jsonify
from robyn.templating import JinjaTemplate

from .. import config
from ..i18n.translations import get_text
from ..renderers import FlatMenuRenderer, MenuEditorRenderer, NavbarRenderer
from .admin import MenuAdmin
from .exceptions import MenuError
from .icons import ICON_OPTIONS, BootstrapIconResolver, IconResolver
from .settings import NAVBAR_STYLES, AppSettings, visible_menu_tree
from .storage import SettingsStore, TortoiseSettingsStore

logger = logging.getLogger(__name__)


def parse_session(cookie_header: Optional[str]) -> Dict[str, Any]:
    """从 Cookie 头中解析 session, session={"role": "Administrator", "language": "id_ID"}"""
    if not cookie_header:
        return {}
    for item in cookie_header.split(";"):
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        if key.strip() != "session":
            continue
        try:
            data = json.loads(value.strip())
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}
    return {}


def parse_form(body: Union[str, bytes, None]) -> Dict[str, str]:
    """解析表单数据, 同名字段取第一个值"""
    if not body:
        return {}
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    params = parse_qs(body, keep_blank_values=True)
    return {key: value[0] for key, value in params.items()}


def json_response(payload: Dict[str, Any], status_code: int = 200, headers: Optional[dict] = None) -> Response:
    response_headers = {"Content-Type": "application/json"}
    if headers:
        response_headers.update(headers)
    return Response(status_code=status_code, headers=response_headers, description=jsonify(payload))


class AdminSite:
    """菜单管理站点"""
    def __init__(
        self,
        app: Robyn,
        name: str = config.ADMIN_ROUTE,
        store: Optional[SettingsStore] = None,
        db_url: Optional[str] = None,
        modules: Optional[Dict[str, List[Union[str, ModuleType]]]] = None,
        generate_schemas: bool = True,
        default_language: str = config.DEFAULT_LANGUAGE,
        icon_resolver: Optional[IconResolver] = None,
    ):
        """
        初始化Admin站点

        :param app: Robyn应用实例
        :param name: Admin路由前缀
        :param store: 配置存储, 默认保存到数据库 app_settings 表
        :param db_url: 数据库连接URL, 为None则复用 register_tortoise 的配置
        :param modules: 模型模块配置
        :param generate_schemas: 是否自动生成数据库表结构
        :param icon_resolver: 菜单图标解析器, 默认 Bootstrap Icons
        """
        self.app = app
        self.name = name
        self.default_language = default_language
        self.store = store or TortoiseSettingsStore(config.SETTINGS_KEY)
        self.menu_admin = MenuAdmin(self.store)
        self.icon_resolver = icon_resolver or BootstrapIconResolver()

        self._setup_templates()

        self.db_url = db_url
        self.modules = modules
        self.generate_schemas = generate_schemas
        # 未提供 db_url 时由 register_tortoise 负责初始化数据库
        if db_url and isinstance(self.store, TortoiseSettingsStore):
            self._init_admin_db()

        self._setup_routes()

    def _setup_templates(self):
        """设置模板目录"""
        current_dir = Path(__file__).parent.parent
        template_dir = os.path.join(current_dir, 'templates')
        self.template_dir = template_dir
        self.jinja_template = JinjaTemplate(template_dir)
        self.jinja_template.env.globals.update({
            'get_text': get_text
        })

    def _init_admin_db(self):
        """初始化配置表"""
        from tortoise import Tortoise

        @self.app.startup_handler
        async def init_admin():
            modules = self.modules or {"models": ["pengadaan_admin.models"]}
            models = modules.setdefault("models", [])
            if isinstance(models, list):
                if "pengadaan_admin.models" not in models:
                    models.append("pengadaan_admin.models")
            else:
                modules["models"] = ["pengadaan_admin.models", models]

            if not Tortoise._inited:
                await Tortoise.init(db_url=self.db_url, modules=modules)
                logger.info("Admin database initialized: %s", self.db_url)
            if self.generate_schemas:
                await Tortoise.generate_schemas()

    def _session(self, request: Request) -> Dict[str, Any]:
        return parse_session(request.headers.get('Cookie'))

    def _language(self, request: Request) -> str:
        return self._session(request).get("language", self.default_language)

    def _error_response(self, error: MenuError, language: str) -> Response:
        logger.info("Menu operation rejected: %s", error.message)
        return json_response({
            "code": error.status_code,
            "message": get_text(error.key, language, **error.params),
            "success": False,
            "data": {"error": type(error).__name__, "field": error.params.get("field")},
        }, status_code=error.status_code)

    def _server_error(self, language: str) -> Response:
        return json_response({
            "code": 500,
            "message": get_text("server_error", language),
            "success": False,
        }, status_code=500)

    def _ok(self, message: str, data: Any = None) -> Response:
        return json_response({
            "code": 200,
            "message": message,
            "success": True,
            "data": data,
        })

    def render_navbar(self, settings: AppSettings, role: Optional[str], active: Optional[str] = None) -> str:
        renderer = NavbarRenderer(self.icon_resolver)
        return renderer.render(visible_menu_tree(settings.menu_items, role), {
            'active': active,
            'title': settings.app_title,
            'navbar_style': settings.navbar_style,
            'primary_color': settings.primary_color,
        })

    def _setup_routes(self):
        """设置路由"""
        menu_admin = self.menu_admin

        @self.app.get(f"/{self.name}")
        async def admin_index(request: Request):
            session = self._session(request)
            language = session.get("language", self.default_language)
            role = session.get("role")
            settings = await menu_admin.get_settings()
            tree = await menu_admin.menu_tree(role)
            context = {
                "site_title": settings.app_title,
                "settings": settings,
                "background_class": settings.background_class(),
                "navbar": self.render_navbar(settings, role, request.query_params.get("active", None)),
                "editor": MenuEditorRenderer(self.icon_resolver).render(tree),
                "flat_editor": FlatMenuRenderer(self.icon_resolver).render(tree),
                "icon_options": ICON_OPTIONS,
                "navbar_styles": NAVBAR_STYLES,
                "admin_route": self.name,
                "language": language,
            }
            return self.jinja_template.render_template("admin/menu_editor.html", **context)

        @self.app.get(f"/{self.name}/menus")
        async def menu_tree(request: Request):
            role = self._session(request).get("role")
            tree = await menu_admin.menu_tree(role)
            return self._ok("ok", [node.to_dict() for node in tree])

        @self.app.get(f"/{self.name}/menus/flat")
        async def menu_flat(request: Request):
            items = await menu_admin.flat_menu()
            return self._ok("ok", [item.to_dict() for item in items])

        @self.app.get(f"/{self.name}/menus/navbar")
        async def menu_navbar(request: Request):
            role = self._session(request).get("role")
            settings = await menu_admin.get_settings()
            html = self.render_navbar(settings, role, request.query_params.get("active", None))
            return Response(
                status_code=200,
                headers={"Content-Type": "text/html; charset=utf-8"},
                description=html,
            )

        @self.app.post(f"/{self.name}/menus/add")
        async def menu_add(request: Request):
            language = self._language(request)
            try:
                item = await menu_admin.add_menu(parse_form(request.body))
                return self._ok(get_text("menu_added", language), item.to_dict())
            except MenuError as e:
                return self._error_response(e, language)
            except Exception:
                logger.exception("Failed to add menu item")
                return self._server_error(language)

        @self.app.post(f"/{self.name}/menus/:menu_id/edit")
        async def menu_edit(request: Request):
            language = self._language(request)
            menu_id = request.path_params.get("menu_id")
            try:
                item = await menu_admin.edit_menu(menu_id, parse_form(request.body))
                return self._ok(get_text("menu_updated", language), item.to_dict())
            except MenuError as e:
                return self._error_response(e, language)
            except Exception:
                logger.exception("Failed to edit menu item %s", menu_id)
                return self._server_error(language)

        @self.app.post(f"/{self.name}/menus/:menu_id/delete")
        async def menu_delete(request: Request):
            language = self._language(request)
            menu_id = request.path_params.get("menu_id")
            try:
                removed = await menu_admin.delete_menu(menu_id)
                return self._ok(get_text("menu_deleted", language), {"removed": removed})
            except MenuError as e:
                return self._error_response(e, language)
            except Exception:
                logger.exception("Failed to delete menu item %s", menu_id)
                return self._server_error(language)

        @self.app.post(f"/{self.name}/menus/:menu_id/move")
        async def menu_move(request: Request):
            language = self._language(request)
            menu_id = request.path_params.get("menu_id")
            form = parse_form(request.body)
            try:
                item = await menu_admin.move_menu(menu_id, form.get("parentId") or None)
                key = "menu_moved" if item.parent_id else "menu_made_root"
                return self._ok(get_text(key, language, label=item.label), item.to_dict())
            except MenuError as e:
                return self._error_response(e, language)
            except Exception:
                logger.exception("Failed to move menu item %s", menu_id)
                return self._server_error(language)

        @self.app.post(f"/{self.name}/menus/save")
        async def menu_save(request: Request):
            language = self._language(request)
            try:
                body = request.body
                if isinstance(body, bytes):
                    body = body.decode("utf-8")
                payload = json.loads(body or "{}")
            except (json.JSONDecodeError, UnicodeDecodeError):
                return json_response({
                    "code": 400,
                    "message": get_text("invalid_request", language),
                    "success": False,
                }, status_code=400)
            try:
                tree = payload.get("menuItems") if isinstance(payload, dict) else payload
                items = await menu_admin.save_structure(tree)
                return self._ok(get_text("menu_saved", language), [item.to_dict() for item in items])
            except MenuError as e:
                return self._error_response(e, language)
            except Exception:
                logger.exception("Failed to save menu structure")
                return self._server_error(language)

        @self.app.post(f"/{self.name}/menus/reset")
        async def menu_reset(request: Request):
            language = self._language(request)
            try:
                items = await menu_admin.reset_menu()
                return self._ok(get_text("menu_reset", language), [item.to_dict() for item in items])
            except Exception:
                logger.exception("Failed to reset menu")
                return self._server_error(language)

        @self.app.get(f"/{self.name}/settings")
        async def settings_get(request: Request):
            settings = await menu_admin.get_settings()
            return self._ok("ok", settings.to_dict())

        @self.app.post(f"/{self.name}/settings")
        async def settings_post(request: Request):
            language = self._language(request)
            try:
                settings = await menu_admin.update_appearance(parse_form(request.body))
                return self._ok(get_text("settings_saved", language), settings.to_dict())
            except MenuError as e:
                return self._error_response(e, language)
            except Exception:
                logger.exception("Failed to update settings")
                return self._server_error(language)

        @self.app.post(f"/{self.name}/set_language")
        async def set_language(request: Request):
            """设置语言"""
            form = parse_form(request.body)
            language = form.get('language', self.default_language)

            data = self._session(request)
            data["language"] = language

            cookie_attrs = [
                f"session={json.dumps(data, separators=(',', ':'))}",
                "HttpOnly",
                "SameSite=Lax",
                "Path=/",
            ]
            return json_response(
                {"code": 200, "message": get_text("language_set", language), "success": True},
                headers={"Set-Cookie": "; ".join(cookie_attrs)},
            )
