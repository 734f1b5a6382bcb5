"""文档存储测试：持久化、版本迁移与损坏快照恢复。"""

import glob
import json
import os

from app.packages.classiflyer.core.constants import SNAPSHOT_SCHEMA_VERSION
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.services.classeur_service import classeur_service
from app.packages.classiflyer.utils.path_utils import archive_folder_path, classiflyer_root


def test_open_creates_snapshot_and_layout(root_path):
    store = DocumentStore(root_path).open()

    with open(store.db_path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    assert raw["schemaVersion"] == SNAPSHOT_SCHEMA_VERSION
    assert raw["nextId"] == {"classeurs": 1, "dossiers": 1, "fichiers": 1, "archiveFolders": 1}
    assert raw["settings"] == {"rootPath": store.root_path, "viewMode": "grid"}
    for name in ("All_Classeurs", "Archives"):
        assert os.path.isdir(os.path.join(classiflyer_root(root_path), name))


def test_snapshot_survives_reload(store):
    taxes = classeur_service.create_binder(store, name="Taxes", primary_color="#1", secondary_color="#2")
    classeur_service.delete_binder(store, taxes.id)

    reopened = DocumentStore(store.root_path).open()

    loaded = reopened.data.classeurs[0]
    assert loaded.name == "Taxes"
    assert loaded.primary_color == "#1"
    assert loaded.is_deleted is True
    assert loaded.deleted_at == taxes.deleted_at
    assert reopened.data.next_id.classeurs == 2


def test_snapshot_uses_camel_case_keys(store):
    classeur_service.create_binder(store, name="Taxes", primary_color="#1", secondary_color="#2")

    with open(store.db_path, "r", encoding="utf-8") as f:
        binder = json.load(f)["classeurs"][0]
    assert set(binder) == {
        "id", "name", "primaryColor", "secondaryColor", "path", "isArchived",
        "archiveFolder", "isDeleted", "deletedAt", "createdAt", "updatedAt",
    }
    assert not glob.glob(os.path.join(store.root_path, ".db-*"))


def test_close_drops_memory_state(store):
    classeur_service.create_binder(store, name="Taxes", primary_color="#1", secondary_color="#2")
    store.close()
    assert store.is_loaded is False
    assert [c.name for c in store.data.classeurs] == ["Taxes"]


def test_legacy_snapshot_is_migrated(root_path):
    os.makedirs(root_path)
    clients_path = archive_folder_path(root_path, "Clients")
    legacy = {
        "classeurs": [
            {
                "id": 3,
                "name": "Old",
                "primaryColor": "#1",
                "secondaryColor": "#2",
                "path": os.path.join(root_path, "Classiflyer", "All_Classeurs", "Old"),
                "createdAt": "2023-01-01T00:00:00.000Z",
            }
        ],
        "dossiers": [
            {
                "id": 5,
                "classeurId": None,
                "name": "Acme",
                "path": os.path.join(clients_path, "Acme"),
                "parentId": 2,
                "createdAt": "2023-01-02T00:00:00.000Z",
            },
            {
                "id": 6,
                "classeurId": 3,
                "name": "2023",
                "path": os.path.join(root_path, "Classiflyer", "All_Classeurs", "Old", "2023"),
                "parentId": None,
                "createdAt": "2023-01-03T00:00:00.000Z",
            },
        ],
        "archiveFolders": [
            {"id": 2, "name": "Clients", "path": clients_path, "createdAt": "2023-01-01T00:00:00.000Z"}
        ],
        "settings": {"rootPath": os.path.abspath(root_path), "viewMode": "list"},
    }
    with open(os.path.join(root_path, "db.json"), "w", encoding="utf-8") as f:
        json.dump(legacy, f)

    store = DocumentStore(root_path).open()

    old = store.data.classeurs[0]
    assert old.is_archived is False
    assert old.is_deleted is False
    assert old.updated_at == old.created_at
    acme, year = store.data.dossiers
    assert acme.archive_folder_id == 2
    assert year.archive_folder_id is None
    assert store.data.fichiers == []
    assert store.data.settings.view_mode == "list"
    counters = store.data.next_id
    assert (counters.classeurs, counters.dossiers, counters.fichiers, counters.archive_folders) == (4, 7, 1, 3)
    with open(store.db_path, "r", encoding="utf-8") as f:
        assert json.load(f)["schemaVersion"] == SNAPSHOT_SCHEMA_VERSION


def test_corrupt_snapshot_is_moved_aside(root_path):
    os.makedirs(root_path)
    db_path = os.path.join(root_path, "db.json")
    with open(db_path, "w", encoding="utf-8") as f:
        f.write("{not json")

    store = DocumentStore(root_path).open()

    assert store.data.classeurs == []
    backups = glob.glob(db_path + ".corrupt-*")
    assert len(backups) == 1
    with open(backups[0], "r", encoding="utf-8") as f:
        assert f.read() == "{not json"
    with open(db_path, "r", encoding="utf-8") as f:
        assert json.load(f)["classeurs"] == []


def test_snapshot_from_newer_version_is_not_loaded(root_path):
    os.makedirs(root_path)
    db_path = os.path.join(root_path, "db.json")
    with open(db_path, "w", encoding="utf-8") as f:
        json.dump({"schemaVersion": SNAPSHOT_SCHEMA_VERSION + 1, "classeurs": []}, f)

    store = DocumentStore(root_path).open()

    assert store.data.schema_version == SNAPSHOT_SCHEMA_VERSION
    assert len(glob.glob(db_path + ".corrupt-*")) == 1
