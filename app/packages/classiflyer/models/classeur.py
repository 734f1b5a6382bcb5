"""分类夹（classeur）模型。"""

from datetime import datetime
from typing import Optional

from .base import SnapshotModel, SoftDeleteMixin


class Classeur(SoftDeleteMixin, SnapshotModel):
    """用户创建的顶层容器，带主/辅两种颜色。

    归档与删除是两个独立维度：同时处于归档与删除状态的分类夹只出现在回收站。
    ``archive_folder`` 为空表示默认归档位置（``Archives/General``）。
    """

    id: int
    name: str
    primary_color: str
    secondary_color: str
    path: str
    is_archived: bool = False
    archive_folder: Optional[str] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
