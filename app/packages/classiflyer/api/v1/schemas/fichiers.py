"""文件相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from app.packages.classiflyer.api.v1.schemas.common import CamelRequest, ResponseEnvelope
from app.packages.classiflyer.models.fichier import Fichier


class FichierCreateRequest(CamelRequest):
    """登记文件元数据；``classeurId`` 与 ``dossierId`` 必须且只能给出一个。"""

    name: str = Field(..., min_length=1)
    type: Optional[str] = Field(default=None, description="MIME 类型，缺省时按扩展名推断")
    size: int = Field(default=0, ge=0)
    classeur_id: Optional[int] = None
    dossier_id: Optional[int] = None


class FichierImportRequest(CamelRequest):
    source_path: str = Field(..., min_length=1, description="待导入的本地文件路径")
    name: Optional[str] = None
    classeur_id: Optional[int] = None
    dossier_id: Optional[int] = None


FichierListResponse = ResponseEnvelope[List[Fichier]]
FichierResponse = ResponseEnvelope[Fichier]
