"""归档文件夹服务。

归档文件夹只做物理删除记录，且不级联：其下的文件夹、文件与归档分类夹记录保持不变。
"""

from __future__ import annotations

from typing import List, Optional

from app.packages.classiflyer.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_CONFLICT
from app.packages.classiflyer.core.exceptions import AppException
from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.crud.archive_folder import archive_folder_crud
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.archive_folder import ArchiveFolder
from app.packages.classiflyer.services.path_resolver import path_resolver
from app.packages.classiflyer.services.storage_backends import run_best_effort
from app.packages.classiflyer.utils.path_utils import norm_entry_name


class ArchiveService:
    def list_archive_folders(self, store: DocumentStore) -> List[ArchiveFolder]:
        return archive_folder_crud.query(store)

    def get_archive_folder(self, store: DocumentStore, id: int) -> Optional[ArchiveFolder]:
        return archive_folder_crud.get(store, id)

    def create_archive_folder(self, store: DocumentStore, *, name: str) -> ArchiveFolder:
        normalized_name = norm_entry_name(name)
        if not normalized_name:
            raise AppException("归档文件夹名称不能为空，且不能包含路径分隔符", HTTP_STATUS_BAD_REQUEST)
        if archive_folder_crud.get_by_name(store, normalized_name) is not None:
            raise AppException("归档文件夹已存在", HTTP_STATUS_CONFLICT)

        path = path_resolver.archive_folder_path(store, normalized_name)
        created = archive_folder_crud.create(store, {"name": normalized_name, "path": path})
        run_best_effort("create archive folder directory", store.file_ops.ensure_directory, created.path)
        return created

    def delete_archive_folder(self, store: DocumentStore, id: int) -> bool:
        archive_folder = archive_folder_crud.get(store, id)
        if archive_folder is None:
            return False
        archive_folder_crud.hard_delete(store, archive_folder)
        logger.info("Archive folder id=%s (%s) removed from catalog", id, archive_folder.name)
        return True


archive_service = ArchiveService()
