"""通用响应封装模型。"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """系统统一的响应外层结构。"""

    msg: str
    data: Optional[T] = None
    code: int
    meta: Optional[Dict[str, Any]] = None


class CamelRequest(BaseModel):
    """请求体基类：接受 camelCase 字段，同时兼容 snake_case。"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
