"""业务包元数据定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger
from typing import Any, Awaitable, Callable, Dict, Type

from fastapi import APIRouter


@dataclass(frozen=True)
class AppPackage:
    """描述一个业务包暴露给主应用的必要接口。

    ``on_startup`` 在应用启动时调用一次（打开存储等）；``exception_handlers``
    以异常类型为键，由主应用逐个注册。
    """

    name: str
    api_router: APIRouter
    get_settings: Callable[[], Any]
    setup_logging: Callable[[], None]
    logger: Logger
    on_startup: Callable[[], Any]
    create_response: Callable[..., dict]
    exception_handlers: Dict[Type[Exception], Callable[..., Awaitable[Any]]] = field(default_factory=dict)
