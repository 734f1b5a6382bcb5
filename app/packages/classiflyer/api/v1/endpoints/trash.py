"""回收站相关的路由定义。"""

from __future__ import annotations

from typing import Callable, Dict

from fastapi import APIRouter, Depends

from app.packages.classiflyer.api.v1.schemas.classeurs import ClasseurListResponse
from app.packages.classiflyer.api.v1.schemas.common import ResponseEnvelope
from app.packages.classiflyer.api.v1.schemas.dossiers import DossierListResponse
from app.packages.classiflyer.api.v1.schemas.fichiers import FichierListResponse
from app.packages.classiflyer.api.v1.schemas.trash import TrashPurgeResponse
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.exceptions import NotFoundError
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.trash_service import trash_service

router = APIRouter(prefix="/trash", tags=["trash"])

_RESTORERS: Dict[str, Callable[[DocumentStore, int], bool]] = {
    "classeurs": trash_service.restore_binder,
    "dossiers": trash_service.restore_folder,
    "fichiers": trash_service.restore_file,
}


@router.get("/classeurs", response_model=ClasseurListResponse)
def list_trash_classeurs(store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = trash_service.list_trash_binders(store)
        return create_response("获取回收站分类夹成功", [item.to_dict() for item in items])


@router.get("/dossiers", response_model=DossierListResponse)
def list_trash_dossiers(store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = trash_service.list_trash_folders(store)
        return create_response("获取回收站文件夹成功", [item.to_dict() for item in items])


@router.get("/fichiers", response_model=FichierListResponse)
def list_trash_fichiers(store: DocumentStore = Depends(get_store)):
    with store.lock:
        items = trash_service.list_trash_files(store)
        return create_response("获取回收站文件成功", [item.to_dict() for item in items])


@router.post("/{kind}/{item_id}/restore", response_model=ResponseEnvelope[dict])
def restore_trash_item(kind: str, item_id: int, store: DocumentStore = Depends(get_store)):
    """还原单条记录；文件夹还原不会连带还原其子项。"""
    restorer = _RESTORERS.get(kind)
    if restorer is None:
        raise NotFoundError(f"未知的回收站类型: {kind}")
    with store.lock:
        if not restorer(store, item_id):
            raise NotFoundError("记录不存在")
        return create_response("还原成功", {"kind": kind, "id": item_id})


@router.delete("", response_model=TrashPurgeResponse)
def empty_trash(store: DocumentStore = Depends(get_store)):
    with store.lock:
        return create_response("回收站已清空", trash_service.empty_trash(store))
