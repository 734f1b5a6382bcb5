"""分类夹相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.packages.classiflyer.api.v1.schemas.classeurs import (
    ClasseurArchiveRequest,
    ClasseurCreateRequest,
    ClasseurListResponse,
    ClasseurResponse,
    ClasseurStatsResponse,
    ClasseurUpdateRequest,
)
from app.packages.classiflyer.api.v1.schemas.dossiers import DossierListResponse
from app.packages.classiflyer.api.v1.schemas.fichiers import FichierListResponse
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.exceptions import NotFoundError
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.classeur_service import classeur_service
from app.packages.classiflyer.services.dossier_service import dossier_service
from app.packages.classiflyer.services.fichier_service import fichier_service

router = APIRouter(prefix="/classeurs", tags=["classeurs"])


@router.get("", response_model=ClasseurListResponse)
def list_classeurs(store: DocumentStore = Depends(get_store)):
    """返回未删除、未归档的分类夹。"""
    with store.lock:
        items = classeur_service.list_binders(store)
        return create_response("获取分类夹列表成功", [item.to_dict() for item in items])


@router.post("", response_model=ClasseurResponse)
def create_classeur(payload: ClasseurCreateRequest, store: DocumentStore = Depends(get_store)):
    with store.lock:
        created = classeur_service.create_binder(
            store,
            name=payload.name,
            primary_color=payload.primary_color,
            secondary_color=payload.secondary_color,
            path=payload.path,
        )
        return create_response("分类夹创建成功", created.to_dict())


@router.get("/archived", response_model=ClasseurListResponse)
def list_archived_classeurs(store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = classeur_service.list_archived_binders(store)
        return create_response("获取归档分类夹列表成功", [item.to_dict() for item in items])


@router.get("/{classeur_id}", response_model=ClasseurResponse)
def get_classeur(classeur_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        classeur = classeur_service.get_binder(store, classeur_id)
        if classeur is None:
            raise NotFoundError("分类夹不存在")
        return create_response("获取分类夹成功", classeur.to_dict())


@router.patch("/{classeur_id}", response_model=ClasseurResponse)
def update_classeur(
    classeur_id: int,
    payload: ClasseurUpdateRequest,
    store: DocumentStore = Depends(get_store),
):
    """部分更新：只修改请求中给出的字段。"""
    with store.lock:
        updated = classeur_service.update_binder(
            store,
            classeur_id,
            name=payload.name,
            primary_color=payload.primary_color,
            secondary_color=payload.secondary_color,
        )
        if not updated:
            raise NotFoundError("分类夹不存在")
        return create_response("分类夹更新成功", classeur_service.get_binder(store, classeur_id).to_dict())


@router.delete("/{classeur_id}", response_model=ClasseurResponse)
def delete_classeur(classeur_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        if not classeur_service.delete_binder(store, classeur_id):
            raise NotFoundError("分类夹不存在")
        return create_response("分类夹已移入回收站", classeur_service.get_binder(store, classeur_id).to_dict())


@router.post("/{classeur_id}/archive", response_model=ClasseurResponse)
def archive_classeur(
    classeur_id: int,
    payload: Optional[ClasseurArchiveRequest] = None,
    store: DocumentStore = Depends(get_store),
):
    archive_folder = payload.archive_folder if payload is not None else None
    with store.lock:
        if not classeur_service.archive_binder(store, classeur_id, archive_folder):
            raise NotFoundError("分类夹不存在")
        return create_response("分类夹归档成功", classeur_service.get_binder(store, classeur_id).to_dict())


@router.post("/{classeur_id}/unarchive", response_model=ClasseurResponse)
def unarchive_classeur(classeur_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        if not classeur_service.unarchive_binder(store, classeur_id):
            raise NotFoundError("分类夹不存在")
        return create_response("分类夹已取消归档", classeur_service.get_binder(store, classeur_id).to_dict())


@router.get("/{classeur_id}/stats", response_model=ClasseurStatsResponse)
def get_classeur_stats(classeur_id: int, store: DocumentStore = Depends(get_store)):
    """分类夹根层级的文件数与文件夹数。"""
    with store.lock:
        return create_response("获取分类夹统计成功", classeur_service.get_stats(store, classeur_id))


@router.get("/{classeur_id}/fichiers", response_model=FichierListResponse)
def list_classeur_fichiers(classeur_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = fichier_service.list_files_by_binder(store, classeur_id)
        return create_response("获取文件列表成功", [item.to_dict() for item in items])


@router.get("/{classeur_id}/dossiers", response_model=DossierListResponse)
def list_classeur_dossiers(
    classeur_id: int,
    parent_id: Optional[int] = Query(None, alias="parentId"),
    store: DocumentStore = Depends(get_store),
):
    """不带 ``parentId`` 时返回根层级文件夹，否则返回该父文件夹的直接子文件夹。"""
    with store.lock:
        items = dossier_service.list_folders_by_binder(store, classeur_id, parent_id)
        return create_response("获取文件夹列表成功", [item.to_dict() for item in items])
