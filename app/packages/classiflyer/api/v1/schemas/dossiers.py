"""文件夹相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from app.packages.classiflyer.api.v1.schemas.common import CamelRequest, ResponseEnvelope
from app.packages.classiflyer.models.dossier import Dossier


class DossierCreateRequest(CamelRequest):
    """新建文件夹：``classeurId``、``parentId``、``archiveFolderId`` 至少给出一个。"""

    name: str = Field(..., min_length=1)
    classeur_id: Optional[int] = None
    parent_id: Optional[int] = Field(default=None, description="父文件夹 ID")
    archive_folder_id: Optional[int] = Field(default=None, description="直接放入归档文件夹时使用")


DossierListResponse = ResponseEnvelope[List[Dossier]]
DossierResponse = ResponseEnvelope[Dossier]
