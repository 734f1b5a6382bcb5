"""文件数据访问。"""

from typing import List

from app.packages.classiflyer.crud.base import CRUDBase
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.fichier import Fichier


class CRUDFichier(CRUDBase[Fichier]):
    def list_by_dossier(self, store: DocumentStore, *, dossier_id: int) -> List[Fichier]:
        return self.query(store, where=lambda f: f.dossier_id == dossier_id)

    def list_by_classeur_root(self, store: DocumentStore, *, classeur_id: int) -> List[Fichier]:
        """直接位于分类夹根目录的文件（不含子文件夹中的文件）。"""
        return self.query(store, where=lambda f: f.classeur_id == classeur_id and f.dossier_id is None)


fichier_crud = CRUDFichier(Fichier, "fichiers")
