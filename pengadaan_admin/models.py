from types import FunctionType, ModuleType
from typing import Dict, Iterable, Optional, Union

from robyn import Robyn
from tortoise import Tortoise, connections, fields
from tortoise.log import logger
from tortoise.models import Model


class SettingRecord(Model):
    """应用配置文档"""
    id = fields.IntField(pk=True)
    key = fields.CharField(max_length=100, unique=True)
    value = fields.JSONField()
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "app_settings"


## 注册tortoise-orm
def register_tortoise(
    app: Robyn,
    config: Optional[dict] = None,
    config_file: Optional[str] = None,
    db_url: Optional[str] = None,
    modules: Optional[Dict[str, Iterable[Union[str, ModuleType]]]] = None,
    generate_schemas: bool = False,
    start_up_function: Optional[FunctionType] = None
):
    if modules is None and config is None and config_file is None:
        modules = {"models": ["pengadaan_admin.models"]}

    @app.startup_handler
    async def init_orm():  # pylint: disable=W0612
        if start_up_function:
            await start_up_function()
        await Tortoise.init(config=config, config_file=config_file, db_url=db_url, modules=modules)
        logger.info(
            "Tortoise-ORM started, %s, %s", connections._get_storage(), Tortoise.apps
        )
        if generate_schemas:
            logger.info("Tortoise-ORM generating schema")
            await Tortoise.generate_schemas()

    @app.shutdown_handler
    async def shutdown_orm():  # pylint: disable=W0612
        await Tortoise.close_connections()
        logger.info("Tortoise-ORM connections closed")
