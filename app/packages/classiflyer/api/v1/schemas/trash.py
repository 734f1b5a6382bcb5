"""回收站与搜索的响应模型。"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from app.packages.classiflyer.api.v1.schemas.common import ResponseEnvelope
from app.packages.classiflyer.models.classeur import Classeur
from app.packages.classiflyer.models.dossier import Dossier
from app.packages.classiflyer.models.fichier import Fichier


class TrashPurgeSummary(BaseModel):
    """清空回收站时各类型被永久移除的记录数。"""

    classeurs: int
    dossiers: int
    fichiers: int


class SearchResult(BaseModel):
    classeurs: List[Classeur]
    dossiers: List[Dossier]
    fichiers: List[Fichier]


TrashPurgeResponse = ResponseEnvelope[TrashPurgeSummary]
SearchResponse = ResponseEnvelope[SearchResult]
