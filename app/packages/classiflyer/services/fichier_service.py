"""文件服务：文件元数据的创建、查询、软删除与还原，以及上传/导入/读取字节内容。

``create_file`` 只登记记录；字节内容由 ``upload_file``（写入）或 ``import_file``
（从磁盘复制）通过存储后端落地。
"""

from __future__ import annotations

import os
from typing import List, Optional

from app.packages.classiflyer.core.constants import HTTP_STATUS_BAD_REQUEST
from app.packages.classiflyer.core.exceptions import AppException, NotFoundError
from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.crud.fichier import fichier_crud
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.fichier import Fichier
from app.packages.classiflyer.services.path_resolver import path_resolver
from app.packages.classiflyer.services.storage_backends import norm_mime, run_best_effort
from app.packages.classiflyer.utils.path_utils import norm_entry_name


class FichierService:
    # ----------------------------
    # 查询
    # ----------------------------
    def get_file(self, store: DocumentStore, id: int) -> Optional[Fichier]:
        return fichier_crud.get(store, id)

    def list_files_by_folder(self, store: DocumentStore, dossier_id: int) -> List[Fichier]:
        return fichier_crud.list_by_dossier(store, dossier_id=dossier_id)

    def list_files_by_binder(self, store: DocumentStore, classeur_id: int) -> List[Fichier]:
        """分类夹根目录下的文件（``dossierId`` 为空）。"""
        return fichier_crud.list_by_classeur_root(store, classeur_id=classeur_id)

    def get_content_path(self, store: DocumentStore, id: int) -> str:
        """返回可读取的物理路径；记录不存在、已删除或物理文件不可访问时抛出 404。"""
        fichier = fichier_crud.get_live(store, id)
        if fichier is None:
            raise NotFoundError("文件不存在或已删除")
        if not os.path.isfile(fichier.path) or not os.access(fichier.path, os.R_OK):
            logger.warning("File id=%s is not accessible at %s", id, fichier.path)
            raise NotFoundError("文件不可访问", data={"path": fichier.path})
        return fichier.path

    # ----------------------------
    # 变更
    # ----------------------------
    def create_file(
        self,
        store: DocumentStore,
        *,
        name: str,
        type: Optional[str] = None,
        size: int = 0,
        classeur_id: Optional[int] = None,
        dossier_id: Optional[int] = None,
    ) -> Fichier:
        normalized_name = norm_entry_name(name)
        if not normalized_name:
            raise AppException("文件名称不能为空，且不能包含路径分隔符", HTTP_STATUS_BAD_REQUEST)
        if size < 0:
            raise AppException("文件大小不能为负数", HTTP_STATUS_BAD_REQUEST)

        placement = path_resolver.resolve_fichier_parent(
            store, name=normalized_name, classeur_id=classeur_id, dossier_id=dossier_id
        )
        path_resolver.ensure_available(store, placement.path)

        return fichier_crud.create(
            store,
            {
                "classeur_id": placement.classeur_id,
                "dossier_id": placement.dossier_id,
                "name": normalized_name,
                "path": placement.path,
                "type": type or norm_mime(normalized_name),
                "size": int(size),
                "is_deleted": False,
                "deleted_at": None,
            },
        )

    def upload_file(
        self,
        store: DocumentStore,
        *,
        name: str,
        content: bytes,
        type: Optional[str] = None,
        classeur_id: Optional[int] = None,
        dossier_id: Optional[int] = None,
    ) -> Fichier:
        """登记文件并写入字节内容；写入失败只记录日志，记录仍然保留。"""
        created = self.create_file(
            store,
            name=name,
            type=type,
            size=len(content),
            classeur_id=classeur_id,
            dossier_id=dossier_id,
        )
        run_best_effort("write uploaded file", store.file_ops.write_bytes, created.path, content)
        return created

    def import_file(
        self,
        store: DocumentStore,
        *,
        source_path: str,
        name: Optional[str] = None,
        classeur_id: Optional[int] = None,
        dossier_id: Optional[int] = None,
    ) -> Fichier:
        """把磁盘上已有的文件复制进分类夹层级并登记。"""
        source = os.path.abspath(os.path.expanduser(source_path or ""))
        if not os.path.isfile(source):
            raise AppException("源文件不存在或不是文件", HTTP_STATUS_BAD_REQUEST)
        created = self.create_file(
            store,
            name=name or os.path.basename(source),
            type=norm_mime(source),
            size=os.path.getsize(source),
            classeur_id=classeur_id,
            dossier_id=dossier_id,
        )
        run_best_effort("copy imported file", store.file_ops.copy, source, created.path)
        return created

    def delete_file(self, store: DocumentStore, id: int) -> bool:
        fichier = fichier_crud.get(store, id)
        if fichier is None:
            return False
        fichier_crud.soft_delete(store, fichier)
        return True

    def restore_file(self, store: DocumentStore, id: int) -> bool:
        fichier = fichier_crud.get(store, id)
        if fichier is None:
            return False
        fichier_crud.restore(store, fichier)
        return True


fichier_service = FichierService()
