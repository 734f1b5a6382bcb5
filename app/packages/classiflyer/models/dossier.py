"""文件夹（dossier）模型。"""

from datetime import datetime
from typing import Optional

from .base import SnapshotModel, SoftDeleteMixin


class Dossier(SoftDeleteMixin, SnapshotModel):
    """层级容器，属于某个分类夹子树或某个归档文件夹子树，二者只居其一。

    - 分类夹根文件夹：``classeur_id`` 有值、``parent_id`` 为空；
    - 归档文件夹的直接子文件夹：``archive_folder_id`` 与 ``parent_id`` 均为归档文件夹 ID；
    - 其余子文件夹：``parent_id`` 指向另一个文件夹。
    """

    id: int
    classeur_id: Optional[int] = None
    name: str
    path: str
    parent_id: Optional[int] = None
    archive_folder_id: Optional[int] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: datetime

    @property
    def parent_folder_id(self) -> Optional[int]:
        """父文件夹 ID；归档文件夹的直接子文件夹没有父文件夹。"""
        if self.archive_folder_id is not None:
            return None
        return self.parent_id
