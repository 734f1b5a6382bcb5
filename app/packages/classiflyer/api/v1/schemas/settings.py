"""用户设置相关的请求与响应模型。"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.packages.classiflyer.api.v1.schemas.common import CamelRequest, ResponseEnvelope
from app.packages.classiflyer.models.snapshot import SnapshotSettings


class SettingsUpdateRequest(CamelRequest):
    root_path: Optional[str] = Field(default=None, description="新的存储根目录")
    view_mode: Optional[Literal["grid", "list"]] = None


class RootPathPayload(BaseModel):
    path: str


SettingsResponse = ResponseEnvelope[SnapshotSettings]
RootPathResponse = ResponseEnvelope[RootPathPayload]
