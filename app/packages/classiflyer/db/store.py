"""文档存储：单个 JSON 快照文件承载的全部目录数据。

``DocumentStore`` 是进程内唯一的写入者：首次使用时把快照整体加载进内存，
业务操作在内存中修改，随后整体序列化回磁盘。写入采用“临时文件 + fsync +
os.replace”，保证磁盘上的快照要么是旧版本、要么是新版本。
不提供跨进程保护，外部并发修改快照文件属于未定义行为（后写者覆盖）。
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.packages.classiflyer.core.constants import (
    DEFAULT_DB_FILE_NAME,
    DEFAULT_VIEW_MODE,
    SNAPSHOT_COLLECTIONS,
)
from app.packages.classiflyer.core.exceptions import SerializationError
from app.packages.classiflyer.core.logger import logger
from app.packages.classiflyer.core.timezone import now as tz_now
from app.packages.classiflyer.db.migrations import migrate_snapshot
from app.packages.classiflyer.models.snapshot import Snapshot
from app.packages.classiflyer.services.storage_backends import (
    FileOperations,
    build_backend,
    run_best_effort,
)
from app.packages.classiflyer.utils.path_utils import (
    all_classeurs_root,
    archives_root,
    classiflyer_root,
)


class DocumentStore:
    def __init__(
        self,
        root_path: str,
        *,
        db_file_name: str = DEFAULT_DB_FILE_NAME,
        file_ops: Optional[FileOperations] = None,
        default_view_mode: str = DEFAULT_VIEW_MODE,
    ) -> None:
        self.root_path = os.path.abspath(os.path.expanduser(root_path))
        self.db_path = os.path.join(self.root_path, db_file_name)
        self.file_ops = file_ops or build_backend(type="LOCAL")
        self.default_view_mode = default_view_mode
        # 请求级串行化：API 依赖在整个请求期间持有该锁
        self.lock = threading.RLock()
        self._data: Optional[Snapshot] = None

    # ----------------------------
    # 生命周期
    # ----------------------------
    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> Snapshot:
        """当前快照；尚未加载时按需从磁盘加载。"""
        if self._data is None:
            self.load()
        return self._data  # type: ignore[return-value]

    def open(self) -> "DocumentStore":
        """加载快照（若尚未驻留内存），并尽力创建根目录布局。"""
        snapshot = self.data
        root = snapshot.settings.root_path
        for directory in (classiflyer_root(root), all_classeurs_root(root), archives_root(root)):
            run_best_effort("ensure root layout", self.file_ops.ensure_directory, directory)
        return self

    def load(self) -> Snapshot:
        if self._data is not None:
            return self._data
        if not os.path.exists(self.db_path):
            logger.info("No snapshot at %s, creating a new database", self.db_path)
            self._data = self._fresh_snapshot()
            self.flush()
            return self._data
        try:
            self._data = self._read_snapshot()
        except SerializationError:
            logger.error("Snapshot %s is unreadable, starting from an empty database", self.db_path, exc_info=True)
            self._quarantine_corrupt_file()
            self._data = self._fresh_snapshot()
        # 迁移后的结构立即落盘，之后的读取无需再迁移
        self.flush()
        return self._data

    def flush(self) -> None:
        """将内存快照整体写回磁盘（原子替换）。"""
        if self._data is None:
            return
        payload = json.dumps(self._data.to_dict(), ensure_ascii=False, indent=2)
        directory = os.path.dirname(self.db_path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".db-", suffix=".json.tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.db_path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def close(self) -> None:
        """丢弃内存状态；下次访问时重新从磁盘加载。"""
        self._data = None

    # ----------------------------
    # 工具
    # ----------------------------
    def next_id(self, kind: str) -> int:
        """分配指定类型的下一个 ID；计数器单调递增，删除后也不会复用。"""
        if kind not in SNAPSHOT_COLLECTIONS:
            raise KeyError(kind)
        counters = self.data.next_id
        attr = "archive_folders" if kind == "archiveFolders" else kind
        value = getattr(counters, attr)
        setattr(counters, attr, value + 1)
        return value

    def now(self) -> datetime:
        return tz_now()

    @property
    def settings_root(self) -> str:
        """路径推导使用的存储根目录（快照设置中的 ``rootPath``）。"""
        return self.data.settings.root_path

    # ----------------------------
    # 读写细节
    # ----------------------------
    def _fresh_snapshot(self) -> Snapshot:
        return Snapshot.empty(self.root_path, self.default_view_mode)

    def _read_snapshot(self) -> Snapshot:
        try:
            with open(self.db_path, "r", encoding="utf-8") as f:
                raw: Any = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SerializationError(f"无法读取快照文件: {exc}") from exc
        if not isinstance(raw, dict):
            raise SerializationError("快照根节点必须是 JSON 对象")
        try:
            migrated: Dict[str, Any] = migrate_snapshot(
                raw, root_path=self.root_path, view_mode=self.default_view_mode
            )
            return Snapshot.model_validate(migrated)
        except (AttributeError, KeyError, TypeError) as exc:
            raise SerializationError(f"快照结构无法迁移: {exc}") from exc
        except ValidationError as exc:
            raise SerializationError(f"快照结构校验失败: {exc}") from exc

    def _quarantine_corrupt_file(self) -> None:
        stamp = self.now().strftime("%Y%m%d%H%M%S")
        backup = f"{self.db_path}.corrupt-{stamp}"
        try:
            os.replace(self.db_path, backup)
            logger.warning("Corrupt snapshot moved to %s", backup)
        except OSError:
            logger.warning("Failed to move corrupt snapshot %s aside", self.db_path, exc_info=True)
