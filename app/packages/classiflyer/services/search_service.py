"""全局搜索：按名称做不区分大小写的子串匹配，不排序、不分词。"""

from __future__ import annotations

from typing import Any, Dict, List

from app.packages.classiflyer.crud.classeur import classeur_crud
from app.packages.classiflyer.crud.dossier import dossier_crud
from app.packages.classiflyer.crud.fichier import fichier_crud
from app.packages.classiflyer.db.store import DocumentStore


class SearchService:
    def search_all(self, store: DocumentStore, query: str) -> Dict[str, List[Any]]:
        needle = (query or "").lower()
        return {
            "classeurs": classeur_crud.query(
                store, where=lambda c: not c.is_archived and needle in c.name.lower()
            ),
            "dossiers": dossier_crud.query(store, where=lambda d: needle in d.name.lower()),
            "fichiers": fichier_crud.query(store, where=lambda f: needle in f.name.lower()),
        }


search_service = SearchService()
