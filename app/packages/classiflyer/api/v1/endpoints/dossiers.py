"""文件夹相关的路由定义。"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.packages.classiflyer.api.v1.schemas.dossiers import (
    DossierCreateRequest,
    DossierListResponse,
    DossierResponse,
)
from app.packages.classiflyer.api.v1.schemas.fichiers import FichierListResponse
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.exceptions import NotFoundError
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.dossier_service import dossier_service
from app.packages.classiflyer.services.fichier_service import fichier_service

router = APIRouter(prefix="/dossiers", tags=["dossiers"])


@router.get("", response_model=DossierListResponse)
def list_dossiers(store: DocumentStore = Depends(get_store)):
    """全部未删除的文件夹（不区分所属分类夹）。"""
    with store.lock:
        items = dossier_service.list_all_folders(store)
        return create_response("获取文件夹列表成功", [item.to_dict() for item in items])


@router.post("", response_model=DossierResponse)
def create_dossier(payload: DossierCreateRequest, store: DocumentStore = Depends(get_store)):
    with store.lock:
        created = dossier_service.create_folder(
            store,
            name=payload.name,
            classeur_id=payload.classeur_id,
            parent_id=payload.parent_id,
            archive_folder_id=payload.archive_folder_id,
        )
        return create_response("文件夹创建成功", created.to_dict())


@router.get("/{dossier_id}", response_model=DossierResponse)
def get_dossier(dossier_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        dossier = dossier_service.get_folder(store, dossier_id)
        if dossier is None:
            raise NotFoundError("文件夹不存在")
        return create_response("获取文件夹成功", dossier.to_dict())


@router.delete("/{dossier_id}", response_model=DossierResponse)
def delete_dossier(dossier_id: int, store: DocumentStore = Depends(get_store)):
    """连同全部子孙文件夹与其中的文件一起移入回收站。"""
    with store.lock:
        if not dossier_service.delete_folder(store, dossier_id):
            raise NotFoundError("文件夹不存在")
        return create_response("文件夹已移入回收站", dossier_service.get_folder(store, dossier_id).to_dict())


@router.get("/{dossier_id}/children", response_model=DossierListResponse)
def list_dossier_children(dossier_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = dossier_service.list_subfolders(store, dossier_id)
        return create_response("获取子文件夹成功", [item.to_dict() for item in items])


@router.get("/{dossier_id}/fichiers", response_model=FichierListResponse)
def list_dossier_fichiers(dossier_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = fichier_service.list_files_by_folder(store, dossier_id)
        return create_response("获取文件列表成功", [item.to_dict() for item in items])
