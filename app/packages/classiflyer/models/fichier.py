"""文件（fichier）模型：只记录元数据，字节内容位于物理路径 ``path``。"""

from datetime import datetime
from typing import Optional

from .base import SnapshotModel, SoftDeleteMixin


class Fichier(SoftDeleteMixin, SnapshotModel):
    id: int
    classeur_id: Optional[int] = None
    dossier_id: Optional[int] = None
    name: str
    path: str
    type: str
    size: int = 0
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: datetime
