"""归档文件夹模型：位于归档根目录下的顶层分组，仅支持物理删除。"""

from datetime import datetime

from .base import SnapshotModel


class ArchiveFolder(SnapshotModel):
    id: int
    name: str
    path: str
    created_at: datetime
