"""路径工具与本地存储后端测试。"""

import os

import pytest

from app.packages.classiflyer.core.exceptions import PhysicalIOError
from app.packages.classiflyer.services.storage_backends import LocalFileOperations, run_best_effort
from app.packages.classiflyer.utils.path_utils import is_within, norm_entry_name, rebase_path


def test_is_within_compares_segments():
    assert is_within("/a/b/c", "/a/b")
    assert is_within("/a/b", "/a/b/")
    assert not is_within("/a/bc", "/a/b")


def test_rebase_path():
    assert rebase_path("/r/All/Taxes/2024/w2.pdf", "/r/All/Taxes", "/r/Arch/General/Taxes") == (
        os.path.join("/r/Arch/General/Taxes", "2024", "w2.pdf")
    )
    assert rebase_path("/r/All/Taxes", "/r/All/Taxes", "/r/New") == "/r/New"
    assert rebase_path("/r/All/Taxes2/x", "/r/All/Taxes", "/r/New") is None


@pytest.mark.parametrize("raw, expected", [(" Taxes ", "Taxes"), ("", ""), (None, ""), ("..", ""), ("a/b", ""), ("a\\b", "")])
def test_norm_entry_name(raw, expected):
    assert norm_entry_name(raw) == expected


def test_operations_are_noops_on_absent_paths(tmp_path):
    ops = LocalFileOperations()
    missing = str(tmp_path / "missing")

    ops.remove_file(missing)
    ops.remove_directory_recursive(missing)
    ops.move(missing, str(tmp_path / "dest"))
    ops.copy(missing, str(tmp_path / "dest"))
    ops.ensure_directory(str(tmp_path / "made"))
    ops.ensure_directory(str(tmp_path / "made"))

    assert not os.path.exists(tmp_path / "dest")
    assert os.path.isdir(tmp_path / "made")


def test_move_directory_and_refuse_overwrite(tmp_path):
    ops = LocalFileOperations()
    src = tmp_path / "src"
    ops.write_bytes(str(src / "a.txt"), b"a")
    dst = tmp_path / "nested" / "dst"

    ops.move(str(src), str(dst))

    assert (dst / "a.txt").read_bytes() == b"a"
    assert not src.exists()

    other = tmp_path / "other"
    other.mkdir()
    with pytest.raises(PhysicalIOError):
        ops.move(str(other), str(dst))


def test_run_best_effort_swallows_physical_errors():
    def _fail(path):
        raise PhysicalIOError(5, f"io error: {path}")

    assert run_best_effort("fail", _fail, "/nowhere") is False
    assert run_best_effort("ok", lambda path: None, "/nowhere") is True
