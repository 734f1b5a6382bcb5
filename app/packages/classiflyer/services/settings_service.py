"""用户设置服务：视图模式与存储根目录。"""

from __future__ import annotations

import os
from typing import Optional

from app.packages.classiflyer.core.constants import HTTP_STATUS_BAD_REQUEST, VIEW_MODES
from app.packages.classiflyer.core.exceptions import AppException
from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.db import session as db_session
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.snapshot import SnapshotSettings
from app.packages.classiflyer.utils.path_utils import classiflyer_root


class SettingsService:
    def get_settings(self, store: DocumentStore) -> SnapshotSettings:
        return store.data.settings

    def get_root_path(self, store: DocumentStore) -> str:
        """返回 ``<rootPath>/Classiflyer`` 目录。"""
        return classiflyer_root(store.settings_root)

    def update_settings(
        self,
        store: DocumentStore,
        *,
        root_path: Optional[str] = None,
        view_mode: Optional[str] = None,
    ) -> DocumentStore:
        """更新设置并返回此后应使用的存储。

        根目录变化时，旧快照保留指向新根目录的 ``rootPath``，随后在新根目录上
        打开（或新建）快照，进程内的存储句柄随之切换。
        """
        if view_mode is not None:
            if view_mode not in VIEW_MODES:
                raise AppException("视图模式仅支持 grid 或 list", HTTP_STATUS_BAD_REQUEST)
            store.data.settings.view_mode = view_mode

        new_root = None
        if root_path is not None:
            if not root_path.strip():
                raise AppException("存储根目录不能为空", HTTP_STATUS_BAD_REQUEST)
            new_root = os.path.abspath(os.path.expanduser(root_path.strip()))
            if new_root == os.path.abspath(store.settings_root):
                new_root = None
            else:
                store.data.settings.root_path = new_root

        store.flush()
        if new_root is None:
            return store
        logger.info("Storage root changed to %s", new_root)
        return db_session.switch_root(new_root)


settings_service = SettingsService()
