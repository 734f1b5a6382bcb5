"""文件夹服务：创建、层级查询、级联软删除与单节点还原。"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from app.packages.classiflyer.core.constants import HTTP_STATUS_BAD_REQUEST
from app.packages.classiflyer.core.exceptions import AppException
from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.crud.dossier import dossier_crud
from app.packages.classiflyer.crud.fichier import fichier_crud
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.dossier import Dossier
from app.packages.classiflyer.services.path_resolver import path_resolver
from app.packages.classiflyer.services.storage_backends import run_best_effort
from app.packages.classiflyer.utils.path_utils import norm_entry_name


class DossierService:
    # ----------------------------
    # 查询
    # ----------------------------
    def get_folder(self, store: DocumentStore, id: int) -> Optional[Dossier]:
        return dossier_crud.get(store, id)

    def list_folders_by_binder(
        self, store: DocumentStore, classeur_id: int, parent_id: Optional[int] = None
    ) -> List[Dossier]:
        return dossier_crud.list_by_classeur(store, classeur_id=classeur_id, parent_id=parent_id)

    def list_all_folders(self, store: DocumentStore) -> List[Dossier]:
        return dossier_crud.query(store)

    def list_subfolders(self, store: DocumentStore, parent_id: int) -> List[Dossier]:
        return dossier_crud.list_children(store, parent_id=parent_id)

    def list_folders_by_archive_folder(self, store: DocumentStore, archive_folder_id: int) -> List[Dossier]:
        """归档文件夹只直接容纳文件夹与分类夹；文件总是经由文件夹访问，因此不提供按归档文件夹列出文件的接口。"""
        return dossier_crud.list_by_archive_folder(store, archive_folder_id=archive_folder_id)

    # ----------------------------
    # 变更
    # ----------------------------
    def create_folder(
        self,
        store: DocumentStore,
        *,
        name: str,
        classeur_id: Optional[int] = None,
        parent_id: Optional[int] = None,
        archive_folder_id: Optional[int] = None,
    ) -> Dossier:
        """解析父级并创建文件夹；父级无效时在分配 ID 之前抛出异常，快照保持不变。"""
        normalized_name = norm_entry_name(name)
        if not normalized_name:
            raise AppException("文件夹名称不能为空，且不能包含路径分隔符", HTTP_STATUS_BAD_REQUEST)

        placement = path_resolver.resolve_dossier_parent(
            store,
            name=normalized_name,
            classeur_id=classeur_id,
            parent_id=parent_id,
            archive_folder_id=archive_folder_id,
        )
        path_resolver.ensure_available(store, placement.path)

        created = dossier_crud.create(
            store,
            {
                "classeur_id": placement.classeur_id,
                "name": normalized_name,
                "path": placement.path,
                "parent_id": placement.parent_id,
                "archive_folder_id": placement.archive_folder_id,
                "is_deleted": False,
                "deleted_at": None,
            },
        )
        run_best_effort("create folder directory", store.file_ops.ensure_directory, created.path)
        return created

    def delete_folder(self, store: DocumentStore, id: int) -> bool:
        """级联软删除：文件夹本身、全部未删除的子孙文件夹及其中未删除的文件，一次写入。"""
        dossier = dossier_crud.get(store, id)
        if dossier is None:
            return False
        when = store.now()
        folders, files = self._cascade_delete(store, dossier, when)
        dossier_crud.save(store, dossier)
        logger.info("Dossier id=%s moved to trash (%d folders, %d files)", id, folders, files)
        return True

    def restore_folder(self, store: DocumentStore, id: int) -> bool:
        """只还原指定文件夹本身，不级联还原其子项。"""
        dossier = dossier_crud.get(store, id)
        if dossier is None:
            return False
        dossier_crud.restore(store, dossier)
        return True

    def _cascade_delete(self, store: DocumentStore, dossier: Dossier, when: datetime) -> tuple[int, int]:
        dossier_crud.soft_delete(store, dossier, when=when, auto_commit=False)
        folders, files = 1, 0
        for child in dossier_crud.list_children(store, parent_id=dossier.id):
            child_folders, child_files = self._cascade_delete(store, child, when)
            folders += child_folders
            files += child_files
        for fichier in fichier_crud.list_by_dossier(store, dossier_id=dossier.id):
            fichier_crud.soft_delete(store, fichier, when=when, auto_commit=False)
            files += 1
        return folders, files


dossier_service = DossierService()
