"""存储后端：封装分类夹目录树的物理文件操作。

目录服务只通过这里触达磁盘（复制/移动/删除/建目录/写入），所有操作都是
幂等安全的：目标已不存在时直接视为成功。真实失败统一抛出 ``PhysicalIOError``，
由业务层按“目录为准、磁盘尽力同步”的原则记录日志后吞掉。
"""

from __future__ import annotations

import errno
import mimetypes
import os
import shutil
from pathlib import Path
from typing import Any, Callable, Optional

from app.packages.classiflyer.core.constants import DEFAULT_MIME_TYPE
from app.packages.classiflyer.core.exceptions import PhysicalIOError
from app.packages.classiflyer.core.logger import logger


def norm_mime(path: str) -> str:
    mime, _ = mimetypes.guess_type(path)
    return mime or DEFAULT_MIME_TYPE


class FileOperations:
    """物理文件操作接口。"""

    def copy(self, src: str, dst: str) -> None:
        raise NotImplementedError

    def move(self, src: str, dst: str) -> None:
        raise NotImplementedError

    def remove_file(self, path: str) -> None:
        raise NotImplementedError

    def remove_directory_recursive(self, path: str) -> None:
        raise NotImplementedError

    def ensure_directory(self, path: str) -> None:
        raise NotImplementedError

    def write_bytes(self, path: str, content: bytes) -> None:
        raise NotImplementedError


# ------------------------------------------
# 本地文件系统实现
# ------------------------------------------


class LocalFileOperations(FileOperations):
    def copy(self, src: str, dst: str) -> None:
        source = Path(src)
        target = Path(dst)
        if not source.exists():
            logger.debug("copy skipped, source absent: %s", src)
            return
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if source.is_dir():
                shutil.copytree(source, target, dirs_exist_ok=True)
            else:
                shutil.copy2(source, target)
        except OSError as exc:
            raise PhysicalIOError(exc.errno, f"复制失败: {src} -> {dst}: {exc}") from exc

    def move(self, src: str, dst: str) -> None:
        """移动文件或目录；跨卷等无法原子重命名时回退为复制后删除源。"""
        source = Path(src)
        target = Path(dst)
        if not source.exists():
            logger.debug("move skipped, source absent: %s", src)
            return
        if source.resolve() == target.resolve():
            return
        if target.exists():
            raise PhysicalIOError(errno.EEXIST, f"目标已存在: {dst}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PhysicalIOError(exc.errno, f"无法创建目标目录: {target.parent}: {exc}") from exc
        try:
            os.rename(source, target)
            return
        except OSError as exc:
            logger.info("rename %s -> %s failed (%s), falling back to copy+delete", src, dst, exc)
        self.copy(src, dst)
        if source.is_dir():
            self.remove_directory_recursive(src)
        else:
            self.remove_file(src)

    def remove_file(self, path: str) -> None:
        try:
            os.unlink(path)
        except FileNotFoundError:
            return
        except IsADirectoryError as exc:
            raise PhysicalIOError(exc.errno, f"目标不是文件: {path}") from exc
        except OSError as exc:
            raise PhysicalIOError(exc.errno, f"删除文件失败: {path}: {exc}") from exc

    def remove_directory_recursive(self, path: str) -> None:
        target = Path(path)
        if not target.exists():
            return
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise PhysicalIOError(exc.errno, f"删除目录失败: {path}: {exc}") from exc

    def ensure_directory(self, path: str) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise PhysicalIOError(exc.errno, f"创建目录失败: {path}: {exc}") from exc

    def write_bytes(self, path: str, content: bytes) -> None:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as f:
                f.write(content)
        except OSError as exc:
            raise PhysicalIOError(exc.errno, f"写入文件失败: {path}: {exc}") from exc


def run_best_effort(description: str, func: Callable[..., Any], *args: Any) -> bool:
    """执行一次物理操作，失败时记录告警并返回 ``False``，不中断业务流程。"""
    try:
        func(*args)
        return True
    except PhysicalIOError:
        logger.warning("Physical operation failed (%s): %s", description, args, exc_info=True)
        return False


def build_backend(*, type: Optional[str] = "LOCAL") -> FileOperations:
    t = (type or "LOCAL").upper()
    if t == "LOCAL":
        return LocalFileOperations()
    raise ValueError(f"不支持的存储类型: {type}")
