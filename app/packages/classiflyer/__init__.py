"""Classiflyer 业务包：分类夹、文件夹、文件与归档的目录服务。"""

from fastapi import HTTPException

from app.packages.types import AppPackage

from .api.v1 import api_router
from .core.config import get_settings
from .core.exceptions import generic_exception_handler, http_exception_handler
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import init_db

package = AppPackage(
    name="classiflyer",
    api_router=api_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    on_startup=init_db,
    create_response=create_response,
    exception_handlers={
        HTTPException: http_exception_handler,
        Exception: generic_exception_handler,
    },
)

__all__ = ["package", "api_router", "get_settings"]
