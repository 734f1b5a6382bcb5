"""用户设置相关的路由定义。"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.packages.classiflyer.api.v1.schemas.settings import (
    RootPathResponse,
    SettingsResponse,
    SettingsUpdateRequest,
)
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.settings_service import settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def get_settings(store: DocumentStore = Depends(get_store)):
    with store.lock:
        return create_response("获取设置成功", settings_service.get_settings(store).to_dict())


@router.patch("", response_model=SettingsResponse)
def update_settings(payload: SettingsUpdateRequest, store: DocumentStore = Depends(get_store)):
    """更新视图模式或存储根目录；根目录变化后后续请求使用新根目录下的快照。"""
    with store.lock:
        current = settings_service.update_settings(
            store, root_path=payload.root_path, view_mode=payload.view_mode
        )
    with current.lock:
        return create_response("设置已更新", settings_service.get_settings(current).to_dict())


@router.get("/root-path", response_model=RootPathResponse)
def get_root_path(store: DocumentStore = Depends(get_store)):
    with store.lock:
        return create_response("获取根目录成功", {"path": settings_service.get_root_path(store)})
