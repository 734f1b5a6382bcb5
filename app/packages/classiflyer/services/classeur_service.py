"""分类夹服务：创建、查询、更新、软删除、归档与取消归档。

分类夹路径始终由 ``PathResolver`` 推导：活动分类夹位于 ``All_Classeurs``，
归档分类夹位于 ``Archives/<归档文件夹或 General>``。归档、取消归档与重命名会
通过存储后端移动物理目录，并同步其下所有文件夹与文件记录的 ``path``。
"""

from __future__ import annotations

from typing import Dict, List, Optional

from app.packages.classiflyer.core.constants import HTTP_STATUS_BAD_REQUEST
from app.packages.classiflyer.core.exceptions import AppException
from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.crud.classeur import classeur_crud
from app.packages.classiflyer.crud.dossier import dossier_crud
from app.packages.classiflyer.crud.fichier import fichier_crud
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.classeur import Classeur
from app.packages.classiflyer.services.path_resolver import path_resolver
from app.packages.classiflyer.services.storage_backends import run_best_effort
from app.packages.classiflyer.utils.path_utils import norm_entry_name


class ClasseurService:
    # ----------------------------
    # 查询
    # ----------------------------
    def list_binders(self, store: DocumentStore) -> List[Classeur]:
        """未删除且未归档的分类夹。"""
        return classeur_crud.list_active(store)

    def list_archived_binders(self, store: DocumentStore) -> List[Classeur]:
        """已归档且未删除的分类夹；归档后又删除的只出现在回收站。"""
        return classeur_crud.list_archived(store)

    def get_binder(self, store: DocumentStore, id: int) -> Optional[Classeur]:
        return classeur_crud.get(store, id)

    def get_stats(self, store: DocumentStore, id: int) -> Dict[str, int]:
        """仪表盘计数：仅统计分类夹根层级的文件与文件夹，不递归。"""
        return {
            "files": len(fichier_crud.list_by_classeur_root(store, classeur_id=id)),
            "folders": len(dossier_crud.list_root_by_classeur(store, classeur_id=id)),
        }

    # ----------------------------
    # 变更
    # ----------------------------
    def create_binder(
        self,
        store: DocumentStore,
        *,
        name: str,
        primary_color: str,
        secondary_color: str,
        path: Optional[str] = None,
    ) -> Classeur:
        """创建分类夹并尽力创建其物理目录。

        ``path`` 仅为兼容旧调用方保留：与推导结果不一致时以推导结果为准。

        回收站中的分类夹仍占用其路径：删除后以同名重新创建会返回 409，
        直到清空回收站或还原该分类夹。
        """
        normalized_name = self._normalize_name(name)
        resolved = path_resolver.classeur_path(store, normalized_name)
        if path and path != resolved:
            logger.info("Ignoring caller-supplied binder path %s, using %s", path, resolved)
        path_resolver.ensure_available(store, resolved)

        timestamp = store.now()
        created = classeur_crud.create(
            store,
            {
                "name": normalized_name,
                "primary_color": primary_color,
                "secondary_color": secondary_color,
                "path": resolved,
                "is_archived": False,
                "archive_folder": None,
                "is_deleted": False,
                "deleted_at": None,
                "created_at": timestamp,
                "updated_at": timestamp,
            },
        )
        run_best_effort("create binder directory", store.file_ops.ensure_directory, created.path)
        logger.info("Created classeur id=%s path=%s", created.id, created.path)
        return created

    def update_binder(
        self,
        store: DocumentStore,
        id: int,
        *,
        name: Optional[str] = None,
        primary_color: Optional[str] = None,
        secondary_color: Optional[str] = None,
    ) -> bool:
        """合并字段并刷新 ``updatedAt``；改名时同步移动目录。记录不存在时返回 ``False``。"""
        classeur = classeur_crud.get(store, id)
        if classeur is None:
            return False

        if name is not None:
            normalized_name = self._normalize_name(name)
            if normalized_name != classeur.name:
                new_path = path_resolver.classeur_path(
                    store,
                    normalized_name,
                    is_archived=classeur.is_archived,
                    archive_folder=classeur.archive_folder,
                )
                path_resolver.ensure_available(store, new_path, exclude=classeur)
                self._relocate(store, classeur, new_path)
                classeur.name = normalized_name
        if primary_color is not None:
            classeur.primary_color = primary_color
        if secondary_color is not None:
            classeur.secondary_color = secondary_color
        classeur.updated_at = store.now()
        classeur_crud.save(store, classeur)
        return True

    def delete_binder(self, store: DocumentStore, id: int) -> bool:
        """软删除；其文件夹与文件保持原状，仅因分类夹进入回收站而不再出现在列表中。"""
        classeur = classeur_crud.get(store, id)
        if classeur is None:
            return False
        classeur_crud.soft_delete(store, classeur)
        logger.info("Classeur id=%s moved to trash", id)
        return True

    def restore_binder(self, store: DocumentStore, id: int) -> bool:
        classeur = classeur_crud.get(store, id)
        if classeur is None:
            return False
        classeur_crud.restore(store, classeur)
        return True

    def archive_binder(self, store: DocumentStore, id: int, archive_folder_name: Optional[str] = None) -> bool:
        """归档分类夹：计算新路径、移动物理目录、同步子树路径，一次写入快照。

        ``archive_folder_name`` 为空表示默认归档位置（``Archives/General``）。
        """
        classeur = classeur_crud.get(store, id)
        if classeur is None:
            return False

        archive_folder = (archive_folder_name or "").strip() or None
        if archive_folder is not None and not norm_entry_name(archive_folder):
            raise AppException("归档文件夹名称不合法", HTTP_STATUS_BAD_REQUEST)
        new_path = path_resolver.classeur_path(
            store, classeur.name, is_archived=True, archive_folder=archive_folder
        )
        path_resolver.ensure_available(store, new_path, exclude=classeur)

        self._relocate(store, classeur, new_path)
        classeur.is_archived = True
        classeur.archive_folder = archive_folder
        classeur.updated_at = store.now()
        classeur_crud.save(store, classeur)
        logger.info("Archived classeur id=%s into %s", id, archive_folder or "default archive")
        return True

    def unarchive_binder(self, store: DocumentStore, id: int) -> bool:
        classeur = classeur_crud.get(store, id)
        if classeur is None:
            return False

        new_path = path_resolver.classeur_path(store, classeur.name)
        path_resolver.ensure_available(store, new_path, exclude=classeur)

        self._relocate(store, classeur, new_path)
        classeur.is_archived = False
        classeur.archive_folder = None
        classeur.updated_at = store.now()
        classeur_crud.save(store, classeur)
        logger.info("Unarchived classeur id=%s", id)
        return True

    # ----------------------------
    # 内部工具
    # ----------------------------
    def _relocate(self, store: DocumentStore, classeur: Classeur, new_path: str) -> None:
        """移动物理目录（尽力而为），并把分类夹及其子树的 ``path`` 指向新位置（不落盘）。"""
        old_path = classeur.path
        if old_path == new_path:
            return
        run_best_effort("move binder directory", store.file_ops.move, old_path, new_path)
        rebased = path_resolver.rebase_classeur_tree(store, classeur, old_path, new_path)
        classeur.path = new_path
        logger.debug("Classeur id=%s relocated %s -> %s (%d children rebased)", classeur.id, old_path, new_path, rebased)

    def _normalize_name(self, name: Optional[str]) -> str:
        normalized = norm_entry_name(name)
        if not normalized:
            raise AppException("分类夹名称不能为空，且不能包含路径分隔符", HTTP_STATUS_BAD_REQUEST)
        return normalized


classeur_service = ClasseurService()
