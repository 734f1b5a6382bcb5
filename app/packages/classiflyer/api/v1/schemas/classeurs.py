"""分类夹相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.packages.classiflyer.api.v1.schemas.common import CamelRequest, ResponseEnvelope
from app.packages.classiflyer.models.classeur import Classeur


class ClasseurCreateRequest(CamelRequest):
    """新建分类夹的请求体。"""

    name: str = Field(..., min_length=1, description="分类夹名称，同时作为目录名")
    primary_color: str = Field(..., description="主色")
    secondary_color: str = Field(..., description="辅色")
    path: Optional[str] = Field(default=None, description="兼容字段，服务端以推导路径为准")


class ClasseurUpdateRequest(CamelRequest):
    name: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class ClasseurArchiveRequest(CamelRequest):
    archive_folder: Optional[str] = Field(default=None, description="目标归档文件夹名称，留空表示默认位置")


class ClasseurStats(BaseModel):
    files: int
    folders: int


ClasseurListResponse = ResponseEnvelope[List[Classeur]]
ClasseurResponse = ResponseEnvelope[Classeur]
ClasseurStatsResponse = ResponseEnvelope[ClasseurStats]
