import logging

from robyn import Robyn

from pengadaan_admin import config
from pengadaan_admin.core.site import AdminSite
from pengadaan_admin.models import register_tortoise

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = Robyn(__file__)

# 配置数据库
register_tortoise(
    app,
    db_url=config.DATABASE_URL,
    modules={"models": ["pengadaan_admin.models"]},
    generate_schemas=True
)

# 创建admin站点 - 复用已有配置
admin_site = AdminSite(app, name=config.ADMIN_ROUTE)


if __name__ == "__main__":
    app.start(host=config.HOST, port=config.PORT)
