"""分类夹数据访问。"""

from typing import List

from app.packages.classiflyer.crud.base import CRUDBase
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.classeur import Classeur


class CRUDClasseur(CRUDBase[Classeur]):
    def list_active(self, store: DocumentStore) -> List[Classeur]:
        return self.query(store, where=lambda c: not c.is_archived)

    def list_archived(self, store: DocumentStore) -> List[Classeur]:
        return self.query(store, where=lambda c: c.is_archived)


classeur_crud = CRUDClasseur(Classeur, "classeurs")
