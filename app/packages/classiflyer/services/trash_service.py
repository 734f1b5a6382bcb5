"""回收站服务：列出软删除记录、单条还原与清空。"""

from __future__ import annotations

from typing import Dict, List

from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.crud.classeur import classeur_crud
from app.packages.classiflyer.crud.dossier import dossier_crud
from app.packages.classiflyer.crud.fichier import fichier_crud
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.classeur import Classeur
from app.packages.classiflyer.models.dossier import Dossier
from app.packages.classiflyer.models.fichier import Fichier
from app.packages.classiflyer.services.classeur_service import classeur_service
from app.packages.classiflyer.services.dossier_service import dossier_service
from app.packages.classiflyer.services.fichier_service import fichier_service
from app.packages.classiflyer.services.storage_backends import run_best_effort


class TrashService:
    def list_trash_binders(self, store: DocumentStore) -> List[Classeur]:
        return classeur_crud.list_deleted(store)

    def list_trash_folders(self, store: DocumentStore) -> List[Dossier]:
        return dossier_crud.list_deleted(store)

    def list_trash_files(self, store: DocumentStore) -> List[Fichier]:
        return fichier_crud.list_deleted(store)

    def restore_binder(self, store: DocumentStore, id: int) -> bool:
        return classeur_service.restore_binder(store, id)

    def restore_folder(self, store: DocumentStore, id: int) -> bool:
        return dossier_service.restore_folder(store, id)

    def restore_file(self, store: DocumentStore, id: int) -> bool:
        return fichier_service.restore_file(store, id)

    def empty_trash(self, store: DocumentStore) -> Dict[str, int]:
        """物理删除全部软删除项（文件、文件夹、分类夹依次进行），再一次性清除其记录。

        单个物理删除失败只记录日志，不会中断批处理，也不会阻止记录清除。
        """
        fichiers = fichier_crud.list_deleted(store)
        dossiers = dossier_crud.list_deleted(store)
        classeurs = classeur_crud.list_deleted(store)
        if not (fichiers or dossiers or classeurs):
            return {"fichiers": 0, "dossiers": 0, "classeurs": 0}

        failures = 0
        for fichier in fichiers:
            if not run_best_effort("purge file", store.file_ops.remove_file, fichier.path):
                failures += 1
        for dossier in dossiers:
            if not run_best_effort("purge folder", store.file_ops.remove_directory_recursive, dossier.path):
                failures += 1
        for classeur in classeurs:
            if not run_best_effort("purge binder", store.file_ops.remove_directory_recursive, classeur.path):
                failures += 1

        fichier_crud.purge_deleted(store, auto_commit=False)
        dossier_crud.purge_deleted(store, auto_commit=False)
        classeur_crud.purge_deleted(store, auto_commit=False)
        store.flush()

        summary = {"fichiers": len(fichiers), "dossiers": len(dossiers), "classeurs": len(classeurs)}
        logger.info("Trash emptied: %s (%d physical failures)", summary, failures)
        return summary


trash_service = TrashService()
