"""快照文档模型：单个 JSON 文件中保存的全部集合、设置与 ID 计数器。"""

from typing import Literal

from pydantic import Field

from app.packages.classiflyer.core.constants import DEFAULT_VIEW_MODE, SNAPSHOT_SCHEMA_VERSION

from .archive_folder import ArchiveFolder
from .base import SnapshotModel
from .classeur import Classeur
from .dossier import Dossier
from .fichier import Fichier


class SnapshotSettings(SnapshotModel):
    """用户设置单例：存储根目录与视图模式。"""

    root_path: str
    view_mode: Literal["grid", "list"] = DEFAULT_VIEW_MODE


class NextIds(SnapshotModel):
    """各实体类型的自增计数器，单调递增且删除后不复用。"""

    classeurs: int = 1
    dossiers: int = 1
    fichiers: int = 1
    archive_folders: int = 1


class Snapshot(SnapshotModel):
    schema_version: int = SNAPSHOT_SCHEMA_VERSION
    classeurs: list[Classeur] = Field(default_factory=list)
    dossiers: list[Dossier] = Field(default_factory=list)
    fichiers: list[Fichier] = Field(default_factory=list)
    archive_folders: list[ArchiveFolder] = Field(default_factory=list)
    settings: SnapshotSettings
    next_id: NextIds = Field(default_factory=NextIds)

    @classmethod
    def empty(cls, root_path: str, view_mode: str = DEFAULT_VIEW_MODE) -> "Snapshot":
        return cls(settings=SnapshotSettings(root_path=root_path, view_mode=view_mode))
