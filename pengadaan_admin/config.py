"""
运行配置, 均可通过环境变量覆盖
"""

import os

DATABASE_URL = os.environ.get("PENGADAAN_DATABASE_URL", "sqlite://db.sqlite3")

# admin 路由前缀
ADMIN_ROUTE = os.environ.get("PENGADAAN_ADMIN_ROUTE", "admin")

DEFAULT_LANGUAGE = os.environ.get("PENGADAAN_DEFAULT_LANGUAGE", "en_US")

# 配置文档在 app_settings 表中的键
SETTINGS_KEY = os.environ.get("PENGADAAN_SETTINGS_KEY", "app_settings")

HOST = os.environ.get("PENGADAAN_HOST", "127.0.0.1")
PORT = int(os.environ.get("PENGADAAN_PORT", "8100"))
