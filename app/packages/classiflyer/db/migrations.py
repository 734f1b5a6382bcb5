"""快照结构迁移：在加载时一次性把旧版本快照升级到当前 ``schemaVersion``。

- v1（无 ``schemaVersion`` 字段的历史快照）：字段可能缺失，需要补齐生命周期字段、
  集合、设置与 ID 计数器；
- v2：文件夹新增 ``archiveFolderId``，用于区分“父级为归档文件夹”与“父级为文件夹”。
"""

from __future__ import annotations

import os
from typing import Any, Callable, Dict

from app.packages.classiflyer.core.constants import (
    DEFAULT_VIEW_MODE,
    SNAPSHOT_COLLECTIONS,
    SNAPSHOT_SCHEMA_VERSION,
)
from app.packages.classiflyer.core.exceptions import SerializationError
from app.packages.classiflyer.core.logger import logger

LEGACY_SCHEMA_VERSION = 1


def _fill_lifecycle_fields(raw: Dict[str, Any]) -> None:
    for item in raw["classeurs"]:
        item.setdefault("isArchived", False)
        item.setdefault("archiveFolder", None)
        item.setdefault("isDeleted", False)
        item.setdefault("deletedAt", None)
        item.setdefault("updatedAt", item.get("createdAt"))
    for key in ("dossiers", "fichiers"):
        for item in raw[key]:
            item.setdefault("isDeleted", False)
            item.setdefault("deletedAt", None)


def _recompute_next_ids(raw: Dict[str, Any]) -> None:
    counters = raw.get("nextId")
    if not isinstance(counters, dict):
        counters = {}
    for key in SNAPSHOT_COLLECTIONS:
        ids = [item.get("id") for item in raw[key] if isinstance(item.get("id"), int)]
        floor = (max(ids) + 1) if ids else 1
        current = counters.get(key)
        counters[key] = max(current, floor) if isinstance(current, int) else floor
    raw["nextId"] = counters


def _derive_archive_folder_ids(raw: Dict[str, Any]) -> None:
    """为归档文件夹的直接子文件夹补写 ``archiveFolderId``。

    历史数据中 ``parentId`` 既可能是文件夹 ID 也可能是归档文件夹 ID；
    以物理父目录是否等于某个归档文件夹的路径来判定。
    """
    archive_paths = {
        os.path.normpath(af["path"]): af["id"]
        for af in raw["archiveFolders"]
        if af.get("path") and af.get("id") is not None
    }
    for item in raw["dossiers"]:
        if "archiveFolderId" in item:
            continue
        item["archiveFolderId"] = None
        if item.get("classeurId") or item.get("parentId") is None or not item.get("path"):
            continue
        parent_dir = os.path.normpath(os.path.dirname(item["path"]))
        af_id = archive_paths.get(parent_dir)
        if af_id is not None and af_id == item["parentId"]:
            item["archiveFolderId"] = af_id


def _upgrade_v1_to_v2(raw: Dict[str, Any], *, root_path: str, view_mode: str) -> Dict[str, Any]:
    for key in SNAPSHOT_COLLECTIONS:
        if not isinstance(raw.get(key), list):
            raw[key] = []
    settings = raw.get("settings")
    if not isinstance(settings, dict):
        settings = {}
    settings.setdefault("rootPath", root_path)
    settings.setdefault("viewMode", view_mode)
    raw["settings"] = settings

    _fill_lifecycle_fields(raw)
    _recompute_next_ids(raw)
    _derive_archive_folder_ids(raw)
    return raw


MIGRATIONS: Dict[int, Callable[..., Dict[str, Any]]] = {
    1: _upgrade_v1_to_v2,
}


def migrate_snapshot(
    raw: Dict[str, Any],
    *,
    root_path: str,
    view_mode: str = DEFAULT_VIEW_MODE,
) -> Dict[str, Any]:
    """把原始快照字典升级到 ``SNAPSHOT_SCHEMA_VERSION``，返回升级后的字典。"""
    version = raw.get("schemaVersion", LEGACY_SCHEMA_VERSION)
    if not isinstance(version, int) or version < LEGACY_SCHEMA_VERSION:
        raise SerializationError(f"无法识别的快照版本: {version!r}")
    if version > SNAPSHOT_SCHEMA_VERSION:
        raise SerializationError(f"快照版本 {version} 高于当前支持的版本 {SNAPSHOT_SCHEMA_VERSION}")

    while version < SNAPSHOT_SCHEMA_VERSION:
        logger.info("Migrating snapshot schema v%s -> v%s", version, version + 1)
        raw = MIGRATIONS[version](raw, root_path=root_path, view_mode=view_mode)
        version += 1
        raw["schemaVersion"] = version
    return raw
