"""测试夹具：为 pytest 提供临时存储根目录、文档存储与客户端的共享配置。"""

import os
import tempfile
from typing import Generator

import pytest

# 必须在导入应用之前设置，避免测试进程触碰用户真实的文档目录
_SESSION_ROOT = tempfile.mkdtemp(prefix="classiflyer_tests_")
os.environ.setdefault("CLASSIFLYER_ROOT_PATH", _SESSION_ROOT)
os.environ.setdefault("LOG_DIR", os.path.join(_SESSION_ROOT, "log"))

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.packages.classiflyer.core.dependencies import get_store  # noqa: E402
from app.packages.classiflyer.db import session as db_session  # noqa: E402
from app.packages.classiflyer.db.store import DocumentStore  # noqa: E402


@pytest.fixture()
def root_path(tmp_path) -> str:
    """每个用例独立的存储根目录。"""
    return str(tmp_path / "storage")


@pytest.fixture()
def store(root_path) -> Generator[DocumentStore, None, None]:
    """在临时根目录上打开的全新文档存储，并注册为进程内的当前存储。"""
    instance = DocumentStore(root_path).open()
    db_session.set_store(instance)
    try:
        yield instance
    finally:
        db_session.set_store(None)


@pytest.fixture()
def client(store):
    """构建 FastAPI TestClient，并注入测试专用的文档存储。"""
    def override_get_store() -> DocumentStore:
        return db_session.get_store()

    app.dependency_overrides[get_store] = override_get_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
