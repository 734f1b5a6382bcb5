"""归档文件夹相关的路由定义。"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.packages.classiflyer.api.v1.schemas.archive_folders import (
    ArchiveFolderCreateRequest,
    ArchiveFolderListResponse,
    ArchiveFolderResponse,
)
from app.packages.classiflyer.api.v1.schemas.dossiers import DossierListResponse
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.exceptions import NotFoundError
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.archive_service import archive_service
from app.packages.classiflyer.services.dossier_service import dossier_service

router = APIRouter(prefix="/archive-folders", tags=["archive-folders"])


@router.get("", response_model=ArchiveFolderListResponse)
def list_archive_folders(store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = archive_service.list_archive_folders(store)
        return create_response("获取归档文件夹列表成功", [item.to_dict() for item in items])


@router.post("", response_model=ArchiveFolderResponse)
def create_archive_folder(payload: ArchiveFolderCreateRequest, store: DocumentStore = Depends(get_store)):
    with store.lock:
        created = archive_service.create_archive_folder(store, name=payload.name)
        return create_response("归档文件夹创建成功", created.to_dict())


@router.delete("/{archive_folder_id}", response_model=ArchiveFolderResponse)
def delete_archive_folder(archive_folder_id: int, store: DocumentStore = Depends(get_store)):
    """永久删除归档文件夹记录，不影响其中的内容。"""
    with store.lock:
        archive_folder = archive_service.get_archive_folder(store, archive_folder_id)
        if archive_folder is None or not archive_service.delete_archive_folder(store, archive_folder_id):
            raise NotFoundError("归档文件夹不存在")
        return create_response("归档文件夹已删除", archive_folder.to_dict())


@router.get("/{archive_folder_id}/dossiers", response_model=DossierListResponse)
def list_archive_folder_dossiers(archive_folder_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = dossier_service.list_folders_by_archive_folder(store, archive_folder_id)
        return create_response("获取文件夹列表成功", [item.to_dict() for item in items])
