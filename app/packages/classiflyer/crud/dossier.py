"""文件夹数据访问。"""

from typing import List, Optional

from app.packages.classiflyer.crud.base import CRUDBase
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.dossier import Dossier


class CRUDDossier(CRUDBase[Dossier]):
    def list_by_classeur(self, store: DocumentStore, *, classeur_id: int, parent_id: Optional[int] = None) -> List[Dossier]:
        """分类夹内指定层级的文件夹；``parent_id`` 为空表示根层级。"""
        return self.query(
            store,
            where=lambda d: d.classeur_id == classeur_id
            and d.archive_folder_id is None
            and d.parent_id == parent_id,
        )

    def list_children(self, store: DocumentStore, *, parent_id: int, include_deleted: bool = False) -> List[Dossier]:
        """父文件夹为 ``parent_id`` 的子文件夹（不含归档文件夹的直接子项）。"""
        return self.query(
            store,
            include_deleted=include_deleted,
            where=lambda d: d.parent_folder_id is not None and d.parent_folder_id == parent_id,
        )

    def list_by_archive_folder(self, store: DocumentStore, *, archive_folder_id: int) -> List[Dossier]:
        return self.query(store, where=lambda d: d.archive_folder_id == archive_folder_id)

    def list_root_by_classeur(self, store: DocumentStore, *, classeur_id: int) -> List[Dossier]:
        return self.list_by_classeur(store, classeur_id=classeur_id, parent_id=None)


dossier_crud = CRUDDossier(Dossier, "dossiers")
