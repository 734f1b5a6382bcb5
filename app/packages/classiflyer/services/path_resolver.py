"""路径解析服务：根据快照当前状态推导实体应当占用的物理路径。

所有路径推导都经过这里：创建分类夹/文件夹/文件/归档文件夹、归档与取消归档、
重命名分类夹。父级引用在此校验，校验失败时抛出 ``InvalidParentError`` /
``ParentNotFoundError``，调用方据此在写入任何记录或目录之前中止。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from app.packages.classiflyer.core.constants import HTTP_STATUS_CONFLICT
from app.packages.classiflyer.core.exceptions import AppException, InvalidParentError, ParentNotFoundError
from app.packages.classiflyer.crud.archive_folder import archive_folder_crud
from app.packages.classiflyer.crud.classeur import classeur_crud
from app.packages.classiflyer.crud.dossier import dossier_crud
from app.packages.classiflyer.crud.fichier import fichier_crud
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.base import SnapshotModel
from app.packages.classiflyer.models.classeur import Classeur
from app.packages.classiflyer.utils import path_utils


@dataclass(frozen=True)
class DossierPlacement:
    path: str
    classeur_id: Optional[int]
    parent_id: Optional[int]
    archive_folder_id: Optional[int]


@dataclass(frozen=True)
class FichierPlacement:
    path: str
    classeur_id: Optional[int]
    dossier_id: Optional[int]


class PathResolver:
    def classeur_path(
        self,
        store: DocumentStore,
        name: str,
        *,
        is_archived: bool = False,
        archive_folder: Optional[str] = None,
    ) -> str:
        return path_utils.classeur_path(
            store.settings_root, name, is_archived=is_archived, archive_folder=archive_folder
        )

    def archive_folder_path(self, store: DocumentStore, name: str) -> str:
        return path_utils.archive_folder_path(store.settings_root, name)

    def resolve_dossier_parent(
        self,
        store: DocumentStore,
        *,
        name: str,
        classeur_id: Optional[int] = None,
        parent_id: Optional[int] = None,
        archive_folder_id: Optional[int] = None,
    ) -> DossierPlacement:
        """沿父级链路解析新文件夹的位置。

        ``parent_id`` 单独出现时先按归档文件夹查找，未命中再按文件夹查找；两类 ID
        计数器相互独立，数值相同时归档文件夹优先。要在分类夹内的文件夹下创建子文件夹
        且不受该规则影响，应同时传入 ``classeur_id``。``archive_folder_id`` 是归档
        文件夹的显式写法。
        """
        if classeur_id is not None:
            if archive_folder_id is not None:
                raise InvalidParentError("不能同时指定分类夹与归档文件夹")
            classeur = classeur_crud.get_live(store, classeur_id)
            if classeur is None:
                raise ParentNotFoundError("分类夹不存在或已删除")
            if parent_id is None:
                return DossierPlacement(
                    path=path_utils.child_path(classeur.path, name),
                    classeur_id=classeur.id,
                    parent_id=None,
                    archive_folder_id=None,
                )
            parent = dossier_crud.get_live(store, parent_id)
            if parent is None:
                raise ParentNotFoundError("父文件夹不存在或已删除")
            if parent.classeur_id != classeur.id:
                raise InvalidParentError("父文件夹不属于该分类夹")
            return DossierPlacement(
                path=path_utils.child_path(parent.path, name),
                classeur_id=classeur.id,
                parent_id=parent.id,
                archive_folder_id=None,
            )

        if archive_folder_id is not None:
            if parent_id is not None and parent_id != archive_folder_id:
                raise InvalidParentError("归档文件夹的直接子文件夹不能再指定父文件夹")
            archive_folder = archive_folder_crud.get(store, archive_folder_id)
            if archive_folder is None:
                raise ParentNotFoundError("归档文件夹不存在")
            return DossierPlacement(
                path=path_utils.child_path(archive_folder.path, name),
                classeur_id=None,
                parent_id=archive_folder.id,
                archive_folder_id=archive_folder.id,
            )

        if parent_id is not None:
            archive_folder = archive_folder_crud.get(store, parent_id)
            if archive_folder is not None:
                return DossierPlacement(
                    path=path_utils.child_path(archive_folder.path, name),
                    classeur_id=None,
                    parent_id=archive_folder.id,
                    archive_folder_id=archive_folder.id,
                )
            parent = dossier_crud.get_live(store, parent_id)
            if parent is None:
                raise ParentNotFoundError("父文件夹不存在或已删除")
            # 子文件夹继承父文件夹所属的分类夹
            return DossierPlacement(
                path=path_utils.child_path(parent.path, name),
                classeur_id=parent.classeur_id,
                parent_id=parent.id,
                archive_folder_id=None,
            )

        raise ParentNotFoundError("必须指定分类夹、父文件夹或归档文件夹")

    def resolve_fichier_parent(
        self,
        store: DocumentStore,
        *,
        name: str,
        classeur_id: Optional[int] = None,
        dossier_id: Optional[int] = None,
    ) -> FichierPlacement:
        """文件要么直接位于分类夹根目录，要么位于某个文件夹，二者必须且只能给出一个。"""
        if (classeur_id is None) == (dossier_id is None):
            raise InvalidParentError("文件必须且只能指定分类夹或文件夹之一")
        if classeur_id is not None:
            classeur = classeur_crud.get_live(store, classeur_id)
            if classeur is None:
                raise ParentNotFoundError("分类夹不存在或已删除")
            return FichierPlacement(
                path=path_utils.child_path(classeur.path, name),
                classeur_id=classeur.id,
                dossier_id=None,
            )
        dossier = dossier_crud.get_live(store, dossier_id)
        if dossier is None:
            raise ParentNotFoundError("文件夹不存在或已删除")
        return FichierPlacement(
            path=path_utils.child_path(dossier.path, name),
            classeur_id=None,
            dossier_id=dossier.id,
        )

    def ensure_available(self, store: DocumentStore, path: str, *, exclude: Optional[SnapshotModel] = None) -> None:
        """确保没有其他记录（含回收站中的记录）占用同一物理路径。"""
        target = os.path.normpath(path)
        for crud in (classeur_crud, dossier_crud, fichier_crud, archive_folder_crud):
            for item in crud.query(store, include_deleted=True):
                if item is exclude:
                    continue
                if os.path.normpath(item.path) == target:
                    raise AppException("同名分类夹、文件夹或文件已存在", HTTP_STATUS_CONFLICT)

    def rebase_classeur_tree(self, store: DocumentStore, classeur: Classeur, old_path: str, new_path: str) -> int:
        """分类夹目录迁移后，同步其下全部文件夹与文件的 ``path``，返回更新条数。"""
        if old_path == new_path:
            return 0
        owned_dossiers = dossier_crud.query(
            store, include_deleted=True, where=lambda d: d.classeur_id == classeur.id
        )
        owned_ids = {d.id for d in owned_dossiers}
        updated = 0
        for dossier in owned_dossiers:
            rebased = path_utils.rebase_path(dossier.path, old_path, new_path)
            if rebased is not None:
                dossier.path = rebased
                updated += 1
        owned_fichiers = fichier_crud.query(
            store,
            include_deleted=True,
            where=lambda f: f.classeur_id == classeur.id or (f.dossier_id is not None and f.dossier_id in owned_ids),
        )
        for fichier in owned_fichiers:
            rebased = path_utils.rebase_path(fichier.path, old_path, new_path)
            if rebased is not None:
                fichier.path = rebased
                updated += 1
        return updated


path_resolver = PathResolver()
