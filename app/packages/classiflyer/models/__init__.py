"""快照实体模型汇总导出。"""

from .archive_folder import ArchiveFolder
from .base import SnapshotModel
from .classeur import Classeur
from .dossier import Dossier
from .fichier import Fichier
from .snapshot import NextIds, Snapshot, SnapshotSettings

__all__ = [
    "ArchiveFolder",
    "Classeur",
    "Dossier",
    "Fichier",
    "NextIds",
    "Snapshot",
    "SnapshotModel",
    "SnapshotSettings",
]
