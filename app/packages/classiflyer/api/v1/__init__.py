"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.packages.classiflyer.api.v1.endpoints import (
    archive_folders,
    classeurs,
    dossiers,
    fichiers,
    search,
    settings,
    trash,
)

api_router = APIRouter()
api_router.include_router(classeurs.router)
api_router.include_router(dossiers.router)
api_router.include_router(fichiers.router)
api_router.include_router(archive_folders.router)
api_router.include_router(trash.router)
api_router.include_router(search.router)
api_router.include_router(settings.router)
