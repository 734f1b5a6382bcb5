"""异常处理模块：定义统一的业务异常与响应格式。

- 业务校验类异常（父级不存在、父级非法等）继承 ``AppException``，
  由全局处理器转换为 ``{msg, data, code}`` 结构；
- 物理文件操作异常 ``PhysicalIOError`` 仅在存储后端与服务层之间传递，
  服务层记录日志后吞掉，不会作为接口失败返回；
- 快照读取异常 ``SerializationError`` 由 ``DocumentStore`` 在加载时处理。
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.classiflyer.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_NOT_FOUND,
)
from app.packages.classiflyer.core.logger import logger


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class NotFoundError(AppException):
    """目标 ID 未指向任何有效记录。"""

    def __init__(self, msg: str = "记录不存在或已删除", data=None) -> None:
        super().__init__(msg, HTTP_STATUS_NOT_FOUND, data)


class InvalidParentError(AppException):
    """创建时父级引用不合法（缺失、同时给出多个、跨分支等）。"""

    def __init__(self, msg: str = "父级引用不合法", code: int = HTTP_STATUS_BAD_REQUEST, data=None) -> None:
        super().__init__(msg, code, data)


class ParentNotFoundError(InvalidParentError):
    """父级分类夹/文件夹/归档文件夹不存在或已进入回收站。"""

    def __init__(self, msg: str = "父级不存在或已删除", data=None) -> None:
        super().__init__(msg, HTTP_STATUS_NOT_FOUND, data)


class PhysicalIOError(OSError):
    """物理文件系统操作失败（创建/移动/删除目录或文件）。"""


class SerializationError(ValueError):
    """快照文件无法读取、不是合法 JSON 或结构校验失败。"""


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(status_code=exc.status_code, content=payload)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    payload = {
        "msg": "服务器内部错误",
        "data": None,
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
