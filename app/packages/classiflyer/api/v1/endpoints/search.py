"""全局搜索路由。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.packages.classiflyer.api.v1.schemas.trash import SearchResponse
from app.packages.classiflyer.core.dependencies import get_store
from app.packages.classiflyer.core.responses import create_response
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.search_service import search_service

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse)
def search_all(
    q: str = Query("", description="按名称做不区分大小写的子串匹配，空字符串匹配全部"),
    store: DocumentStore = Depends(get_store),
):
    with store.lock:
        result = search_service.search_all(store, q)
        return create_response(
            "搜索成功",
            {kind: [item.to_dict() for item in items] for kind, items in result.items()},
        )
