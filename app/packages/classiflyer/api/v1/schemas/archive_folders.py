"""归档文件夹相关的请求与响应模型。"""

from __future__ import annotations

from typing import List

from pydantic import Field

from app.packages.classiflyer.api.v1.schemas.common import CamelRequest, ResponseEnvelope
from app.packages.classiflyer.models.archive_folder import ArchiveFolder


class ArchiveFolderCreateRequest(CamelRequest):
    name: str = Field(..., min_length=1)


ArchiveFolderListResponse = ResponseEnvelope[List[ArchiveFolder]]
ArchiveFolderResponse = ResponseEnvelope[ArchiveFolder]
