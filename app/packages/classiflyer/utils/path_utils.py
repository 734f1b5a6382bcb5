"""Path utilities: derive physical locations of binders, archive folders and children.

These helpers centralize the directory layout rules used by every service:
- active binders live in ``<root>/Classiflyer/All_Classeurs/<name>``;
- archived binders live in ``<root>/Classiflyer/Archives/<archive or General>/<name>``;
- archive folders live in ``<root>/Classiflyer/Archives/<name>``;
- folders and files live in ``<parent path>/<name>``.
"""

from __future__ import annotations

import os
from typing import Optional

from app.packages.classiflyer.core.constants import (
    ALL_CLASSEURS_DIR_NAME,
    ARCHIVES_DIR_NAME,
    CLASSIFLYER_DIR_NAME,
    DEFAULT_ARCHIVE_FOLDER_NAME,
)


def classiflyer_root(root_path: str) -> str:
    return os.path.join(os.path.abspath(root_path), CLASSIFLYER_DIR_NAME)


def all_classeurs_root(root_path: str) -> str:
    return os.path.join(classiflyer_root(root_path), ALL_CLASSEURS_DIR_NAME)


def archives_root(root_path: str) -> str:
    return os.path.join(classiflyer_root(root_path), ARCHIVES_DIR_NAME)


def archive_folder_path(root_path: str, name: str) -> str:
    return os.path.join(archives_root(root_path), name)


def classeur_path(
    root_path: str,
    name: str,
    *,
    is_archived: bool = False,
    archive_folder: Optional[str] = None,
) -> str:
    """返回分类夹应当所在的物理目录；归档且未指定归档文件夹时落在 ``General``。"""
    if is_archived:
        return os.path.join(archive_folder_path(root_path, archive_folder or DEFAULT_ARCHIVE_FOLDER_NAME), name)
    return os.path.join(all_classeurs_root(root_path), name)


def child_path(parent_path: str, name: str) -> str:
    return os.path.join(parent_path, name)


def is_within(path: str, ancestor: str) -> bool:
    """``path`` 等于 ``ancestor`` 或位于其之下（按路径段比较，而非字符串前缀）。"""
    path_n = os.path.normpath(path)
    ancestor_n = os.path.normpath(ancestor)
    if path_n == ancestor_n:
        return True
    return path_n.startswith(ancestor_n.rstrip(os.sep) + os.sep)


def rebase_path(path: str, old_prefix: str, new_prefix: str) -> Optional[str]:
    """把位于 ``old_prefix`` 之下的路径迁移到 ``new_prefix``；不在其下时返回 ``None``。"""
    if not is_within(path, old_prefix):
        return None
    rel = os.path.relpath(os.path.normpath(path), os.path.normpath(old_prefix))
    if rel == os.curdir:
        return new_prefix
    return os.path.join(new_prefix, rel)


def norm_entry_name(name: Optional[str]) -> str:
    """规范化实体名称：去除首尾空白；名称为空、为 ``.``/``..`` 或包含路径分隔符时返回空串。"""
    s = (name or "").strip()
    if s in {os.curdir, os.pardir}:
        return ""
    if "/" in s or "\\" in s or (os.sep in s) or "\x00" in s:
        return ""
    return s
