"""Process-wide document store handle.

The store is constructed once per process by ``init_store`` and handed to
request handlers through ``core.dependencies.get_store``. Tests replace the
handle with ``set_store``.
"""

from __future__ import annotations

import os
from typing import Optional

from app.packages.classiflyer.core.config import get_settings
from app.packages.classiflyer.db.store import DocumentStore

_store: Optional[DocumentStore] = None


def create_store(root_path: Optional[str] = None) -> DocumentStore:
    settings = get_settings()
    return DocumentStore(
        root_path or str(settings.storage_root),
        db_file_name=settings.db_file_name,
        default_view_mode=settings.default_view_mode,
    )


def get_store() -> DocumentStore:
    global _store
    if _store is None:
        _store = create_store().open()
    return _store


def set_store(store: Optional[DocumentStore]) -> None:
    global _store
    _store = store


def switch_root(new_root: str) -> DocumentStore:
    """关闭当前存储，并在新的根目录上打开（不存在快照时新建）。"""
    global _store
    new_root = os.path.abspath(os.path.expanduser(new_root))
    file_ops = _store.file_ops if _store is not None else None
    view_mode = _store.data.settings.view_mode if _store is not None else None
    if _store is not None:
        _store.close()

    store = create_store(new_root)
    if file_ops is not None:
        store.file_ops = file_ops
    snapshot = store.data
    if snapshot.settings.root_path != new_root or (view_mode and snapshot.settings.view_mode != view_mode):
        snapshot.settings.root_path = new_root
        if view_mode:
            snapshot.settings.view_mode = view_mode
        store.flush()
    _store = store.open()
    return _store
