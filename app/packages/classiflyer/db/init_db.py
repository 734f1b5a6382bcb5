"""Document store bootstrapping utilities."""

from __future__ import annotations

import os

from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.db import session as db_session
from app.packages.classiflyer.db.store import DocumentStore


def init_db() -> DocumentStore:
    """打开默认根目录的快照；若其中记录了其他存储根目录，则切换过去。

    用户在设置中修改根目录后，旧根目录下的快照保留 ``rootPath`` 指针，
    重启时据此找到真正的数据位置。
    """
    store = db_session.get_store()
    pointer = store.data.settings.root_path
    if os.path.abspath(pointer) != store.root_path:
        logger.info("Snapshot at %s points to root %s, switching", store.root_path, pointer)
        store = db_session.switch_root(pointer)
    logger.info(
        "Document store ready at %s (%d classeurs, %d dossiers, %d fichiers)",
        store.db_path,
        len(store.data.classeurs),
        len(store.data.dossiers),
        len(store.data.fichiers),
    )
    return store
