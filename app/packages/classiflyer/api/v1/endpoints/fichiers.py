"""文件相关的路由定义：元数据登记、上传、导入与内容读取。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse

from app.packages.classiflyer.api.v1.schemas.fichiers import (
    FichierCreateRequest,
    FichierImportRequest,
    FichierResponse,
)
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.exceptions import NotFoundError
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.fichier_service import fichier_service

router = APIRouter(prefix="/fichiers", tags=["fichiers"])


@router.post("", response_model=FichierResponse)
def create_fichier(payload: FichierCreateRequest, store: DocumentStore = Depends(get_store)):
    """只登记文件记录，不写入字节内容。"""
    with store.lock:
        created = fichier_service.create_file(
            store,
            name=payload.name,
            type=payload.type,
            size=payload.size,
            classeur_id=payload.classeur_id,
            dossier_id=payload.dossier_id,
        )
        return create_response("文件创建成功", created.to_dict())


@router.post("/upload", response_model=FichierResponse)
def upload_fichier(
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
    classeur_id: Optional[int] = Form(None, alias="classeurId"),
    dossier_id: Optional[int] = Form(None, alias="dossierId"),
    store: DocumentStore = Depends(get_store),
):
    content = file.file.read()
    with store.lock:
        created = fichier_service.upload_file(
            store,
            name=name or file.filename or "",
            content=content,
            type=file.content_type if file.content_type not in (None, "application/octet-stream") else None,
            classeur_id=classeur_id,
            dossier_id=dossier_id,
        )
        return create_response("文件上传成功", created.to_dict())


@router.post("/import", response_model=FichierResponse)
def import_fichier(payload: FichierImportRequest, store: DocumentStore = Depends(get_store)):
    with store.lock:
        created = fichier_service.import_file(
            store,
            source_path=payload.source_path,
            name=payload.name,
            classeur_id=payload.classeur_id,
            dossier_id=payload.dossier_id,
        )
        return create_response("文件导入成功", created.to_dict())


@router.get("/{fichier_id}", response_model=FichierResponse)
def get_fichier(fichier_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        fichier = fichier_service.get_file(store, fichier_id)
        if fichier is None:
            raise NotFoundError("文件不存在")
        return create_response("获取文件成功", fichier.to_dict())


@router.delete("/{fichier_id}", response_model=FichierResponse)
def delete_fichier(fichier_id: int, store: DocumentStore = Depends(get_store)):
    with store.lock:
        if not fichier_service.delete_file(store, fichier_id):
            raise NotFoundError("文件不存在")
        return create_response("文件已移入回收站", fichier_service.get_file(store, fichier_id).to_dict())


@router.get("/{fichier_id}/content")
def get_fichier_content(fichier_id: int, store: DocumentStore = Depends(get_store)):
    """以文件流返回字节内容。"""
    with store.lock:
        path = fichier_service.get_content_path(store, fichier_id)
        fichier = fichier_service.get_file(store, fichier_id)
    return FileResponse(path, media_type=fichier.type, filename=fichier.name)
