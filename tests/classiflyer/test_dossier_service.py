"""文件夹服务测试：父级解析、级联软删除与单节点还原。"""

import json
import os

import pytest

from app.packages.classiflyer.core.exceptions import InvalidParentError, ParentNotFoundError
from app.packages.classiflyer.services.archive_service import archive_service
from app.packages.classiflyer.services.classeur_service import classeur_service
from app.packages.classiflyer.services.dossier_service import dossier_service
from app.packages.classiflyer.services.fichier_service import fichier_service
from app.packages.classiflyer.services.trash_service import trash_service


@pytest.fixture()
def taxes(store):
    return classeur_service.create_binder(store, name="Taxes", primary_color="#123", secondary_color="#456")


def test_root_folder_under_binder(store, taxes):
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)

    assert year.classeur_id == taxes.id
    assert year.parent_id is None
    assert year.archive_folder_id is None
    assert year.path == os.path.join(taxes.path, "2024")
    assert os.path.isdir(year.path)
    assert [d.id for d in dossier_service.list_folders_by_binder(store, taxes.id)] == [year.id]


def test_subfolder_inherits_binder(store, taxes):
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    q1 = dossier_service.create_folder(store, name="Q1", parent_id=year.id)

    assert q1.classeur_id == taxes.id
    assert q1.parent_id == year.id
    assert q1.path == os.path.join(year.path, "Q1")
    assert [d.id for d in dossier_service.list_folders_by_binder(store, taxes.id, year.id)] == [q1.id]
    assert [d.id for d in dossier_service.list_subfolders(store, year.id)] == [q1.id]
    assert dossier_service.list_folders_by_binder(store, taxes.id) == [year]


def test_folder_inside_archive_folder(store, taxes):
    clients = archive_service.create_archive_folder(store, name="Clients")
    # 让文件夹 ID 与归档文件夹 ID 错开
    dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    acme = dossier_service.create_folder(store, name="Acme", archive_folder_id=clients.id)
    contracts = dossier_service.create_folder(store, name="Contracts", parent_id=acme.id)

    assert acme.classeur_id is None
    assert acme.parent_id == clients.id
    assert acme.archive_folder_id == clients.id
    assert acme.path == os.path.join(clients.path, "Acme")
    assert contracts.archive_folder_id is None
    assert contracts.path == os.path.join(acme.path, "Contracts")
    assert dossier_service.list_folders_by_archive_folder(store, clients.id) == [acme]
    assert dossier_service.list_subfolders(store, acme.id) == [contracts]


def test_bare_parent_id_resolves_to_archive_folder(store):
    clients = archive_service.create_archive_folder(store, name="Clients")

    acme = dossier_service.create_folder(store, name="Acme", parent_id=clients.id)

    assert acme.classeur_id is None
    assert acme.parent_id == clients.id
    assert acme.archive_folder_id == clients.id
    assert acme.path == os.path.join(clients.path, "Acme")
    assert os.path.isdir(acme.path)
    assert dossier_service.list_folders_by_archive_folder(store, clients.id) == [acme]


def test_parent_id_matching_both_kinds_prefers_archive_folder(store, taxes):
    # 文件夹与归档文件夹的 ID 计数器相互独立，数值可能相同
    clients = archive_service.create_archive_folder(store, name="Clients")
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    assert year.id == clients.id == 1

    acme = dossier_service.create_folder(store, name="Acme", parent_id=1)
    assert acme.path == os.path.join(clients.path, "Acme")
    assert acme.archive_folder_id == clients.id
    assert acme.classeur_id is None

    q1 = dossier_service.create_folder(store, name="Q1", classeur_id=taxes.id, parent_id=year.id)
    assert q1.path == os.path.join(year.path, "Q1")
    assert q1.archive_folder_id is None


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"classeur_id": 999}, ParentNotFoundError),
        ({"parent_id": 999}, ParentNotFoundError),
        ({"archive_folder_id": 999}, ParentNotFoundError),
        ({}, ParentNotFoundError),
    ],
)
def test_create_folder_with_bad_parent_leaves_snapshot_untouched(store, taxes, kwargs, error):
    with open(store.db_path, "r", encoding="utf-8") as f:
        before = json.load(f)

    with pytest.raises(error):
        dossier_service.create_folder(store, name="Ghost", **kwargs)

    with open(store.db_path, "r", encoding="utf-8") as f:
        assert json.load(f) == before
    assert store.data.dossiers == []
    assert store.data.next_id.dossiers == 1


def test_create_folder_with_deleted_parent_fails(store, taxes):
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    dossier_service.delete_folder(store, year.id)

    with pytest.raises(ParentNotFoundError):
        dossier_service.create_folder(store, name="Q1", parent_id=year.id)
    assert store.data.next_id.dossiers == 2


def test_create_folder_rejects_foreign_parent(store, taxes):
    other = classeur_service.create_binder(store, name="Other", primary_color="#000", secondary_color="#fff")
    year = dossier_service.create_folder(store, name="2024", classeur_id=other.id)

    with pytest.raises(InvalidParentError):
        dossier_service.create_folder(store, name="Q1", classeur_id=taxes.id, parent_id=year.id)


def test_delete_folder_cascades_to_live_descendants(store, taxes):
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    q1 = dossier_service.create_folder(store, name="Q1", parent_id=year.id)
    jan = dossier_service.create_folder(store, name="Jan", parent_id=q1.id)
    sibling = dossier_service.create_folder(store, name="2023", classeur_id=taxes.id)
    w2 = fichier_service.create_file(store, name="w2.pdf", dossier_id=year.id)
    receipt = fichier_service.create_file(store, name="receipt.png", dossier_id=jan.id)
    sibling_file = fichier_service.create_file(store, name="old.pdf", dossier_id=sibling.id)
    root_file = fichier_service.create_file(store, name="readme.txt", classeur_id=taxes.id)

    assert dossier_service.delete_folder(store, year.id) is True

    for item in (year, q1, jan, w2, receipt):
        assert item.is_deleted is True
        assert item.deleted_at == year.deleted_at
    for item in (sibling, sibling_file, root_file):
        assert item.is_deleted is False
    assert dossier_service.delete_folder(store, 999) is False


def test_restore_folder_does_not_cascade(store, taxes):
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    q1 = dossier_service.create_folder(store, name="Q1", parent_id=year.id)
    w2 = fichier_service.create_file(store, name="w2.pdf", dossier_id=year.id)
    dossier_service.delete_folder(store, year.id)

    assert dossier_service.restore_folder(store, year.id) is True

    assert year.is_deleted is False
    assert year.deleted_at is None
    assert q1.is_deleted is True
    assert w2.is_deleted is True
    assert [d.id for d in dossier_service.list_folders_by_binder(store, taxes.id)] == [year.id]
    assert [d.id for d in trash_service.list_trash_folders(store)] == [q1.id]


def test_taxes_scenario(store, taxes):
    year = dossier_service.create_folder(store, name="2024", classeur_id=taxes.id)
    fichier_service.create_file(store, name="w2.pdf", type="application/pdf", size=12, dossier_id=year.id)

    dossier_service.delete_folder(store, year.id)

    assert [d.name for d in trash_service.list_trash_folders(store)] == ["2024"]
    assert [f.name for f in trash_service.list_trash_files(store)] == ["w2.pdf"]
    assert classeur_service.get_stats(store, taxes.id)["folders"] == 0
