"""REST 接口集成测试：统一响应结构、错误码与主要业务流程。"""

from fastapi.testclient import TestClient

API = "/api/v1"


def _create_binder(client: TestClient, name: str = "Taxes") -> dict:
    resp = client.post(
        f"{API}/classeurs",
        json={"name": name, "primaryColor": "#112233", "secondaryColor": "#445566"},
    )
    assert resp.status_code == 200
    return resp.json()["data"]


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"msg": "OK", "data": {"status": "healthy"}, "code": 200}
    assert resp.headers.get("X-Request-ID")


def test_binder_lifecycle(client: TestClient):
    binder = _create_binder(client)
    assert binder["id"] == 1
    assert binder["primaryColor"] == "#112233"
    assert binder["isArchived"] is False
    assert binder["path"].endswith("Taxes")

    listing = client.get(f"{API}/classeurs").json()
    assert listing["code"] == 200
    assert [b["id"] for b in listing["data"]] == [binder["id"]]

    patched = client.patch(f"{API}/classeurs/{binder['id']}", json={"secondaryColor": "#000000"}).json()
    assert patched["data"]["secondaryColor"] == "#000000"
    assert patched["data"]["primaryColor"] == "#112233"

    archived = client.post(f"{API}/classeurs/{binder['id']}/archive", json={"archiveFolder": "Legal"}).json()
    assert archived["data"]["archiveFolder"] == "Legal"
    assert client.get(f"{API}/classeurs").json()["data"] == []
    assert [b["id"] for b in client.get(f"{API}/classeurs/archived").json()["data"]] == [binder["id"]]

    client.post(f"{API}/classeurs/{binder['id']}/unarchive")
    deleted = client.delete(f"{API}/classeurs/{binder['id']}").json()
    assert deleted["data"]["isDeleted"] is True
    assert deleted["data"]["deletedAt"]

    trash = client.get(f"{API}/trash/classeurs").json()["data"]
    assert [b["id"] for b in trash] == [binder["id"]]

    restored = client.post(f"{API}/trash/classeurs/{binder['id']}/restore").json()
    assert restored["code"] == 200
    assert client.get(f"{API}/classeurs/{binder['id']}").json()["data"]["isDeleted"] is False


def test_missing_records_return_not_found_envelope(client: TestClient):
    for method, url in (
        ("get", f"{API}/classeurs/42"),
        ("patch", f"{API}/classeurs/42"),
        ("delete", f"{API}/dossiers/42"),
        ("get", f"{API}/fichiers/42"),
        ("delete", f"{API}/archive-folders/42"),
        ("post", f"{API}/trash/fichiers/42/restore"),
        ("post", f"{API}/trash/unknown/1/restore"),
    ):
        kwargs = {"json": {}} if method == "patch" else {}
        resp = getattr(client, method)(url, **kwargs)
        assert resp.status_code == 404, url
        body = resp.json()
        assert body["code"] == 404
        assert body["msg"]


def test_folder_and_file_flow(client: TestClient):
    binder = _create_binder(client)
    folder = client.post(f"{API}/dossiers", json={"name": "2024", "classeurId": binder["id"]}).json()["data"]
    assert folder["classeurId"] == binder["id"]
    assert folder["parentId"] is None

    sub = client.post(f"{API}/dossiers", json={"name": "Q1", "parentId": folder["id"]}).json()["data"]
    assert [d["id"] for d in client.get(f"{API}/dossiers/{folder['id']}/children").json()["data"]] == [sub["id"]]
    roots = client.get(f"{API}/classeurs/{binder['id']}/dossiers").json()["data"]
    assert [d["id"] for d in roots] == [folder["id"]]
    nested = client.get(f"{API}/classeurs/{binder['id']}/dossiers", params={"parentId": folder["id"]}).json()["data"]
    assert [d["id"] for d in nested] == [sub["id"]]

    created = client.post(
        f"{API}/fichiers",
        json={"name": "w2.pdf", "type": "application/pdf", "size": 10, "dossierId": folder["id"]},
    ).json()["data"]
    assert created["dossierId"] == folder["id"]
    assert [f["id"] for f in client.get(f"{API}/dossiers/{folder['id']}/fichiers").json()["data"]] == [created["id"]]

    uploaded = client.post(
        f"{API}/fichiers/upload",
        data={"classeurId": str(binder["id"])},
        files={"file": ("notes.txt", b"hello", "text/plain")},
    ).json()["data"]
    assert uploaded["size"] == 5
    assert uploaded["type"] == "text/plain"
    content = client.get(f"{API}/fichiers/{uploaded['id']}/content")
    assert content.status_code == 200
    assert content.content == b"hello"
    assert [f["id"] for f in client.get(f"{API}/classeurs/{binder['id']}/fichiers").json()["data"]] == [uploaded["id"]]

    stats = client.get(f"{API}/classeurs/{binder['id']}/stats").json()["data"]
    assert stats == {"files": 1, "folders": 1}

    client.delete(f"{API}/dossiers/{folder['id']}")
    assert {d["name"] for d in client.get(f"{API}/trash/dossiers").json()["data"]} == {"2024", "Q1"}
    assert [f["name"] for f in client.get(f"{API}/trash/fichiers").json()["data"]] == ["w2.pdf"]

    purge = client.delete(f"{API}/trash").json()["data"]
    assert purge == {"classeurs": 0, "dossiers": 2, "fichiers": 1}
    assert client.get(f"{API}/trash/dossiers").json()["data"] == []


def test_invalid_parent_errors(client: TestClient):
    resp = client.post(f"{API}/dossiers", json={"name": "Ghost", "parentId": 99})
    assert resp.status_code == 404
    assert resp.json()["code"] == 404

    resp = client.post(f"{API}/dossiers", json={"name": "Ghost"})
    assert resp.status_code == 404

    binder = _create_binder(client)
    resp = client.post(f"{API}/fichiers", json={"name": "a.txt"})
    assert resp.status_code == 400
    resp = client.post(f"{API}/fichiers", json={"name": "a.txt", "classeurId": binder["id"], "dossierId": 1})
    assert resp.status_code == 400


def test_conflicts_and_validation(client: TestClient):
    _create_binder(client)
    resp = client.post(
        f"{API}/classeurs",
        json={"name": "Taxes", "primaryColor": "#000", "secondaryColor": "#fff"},
    )
    assert resp.status_code == 409
    assert resp.json()["code"] == 409

    resp = client.post(f"{API}/classeurs", json={"name": "Missing colors"})
    assert resp.status_code == 422
    assert resp.json()["code"] == 422


def test_archive_folders_and_search(client: TestClient):
    clients = client.post(f"{API}/archive-folders", json={"name": "Clients"}).json()["data"]
    dup = client.post(f"{API}/archive-folders", json={"name": "Clients"})
    assert dup.status_code == 409

    acme = client.post(f"{API}/dossiers", json={"name": "Acme Report", "archiveFolderId": clients["id"]}).json()["data"]
    assert acme["archiveFolderId"] == clients["id"]
    listed = client.get(f"{API}/archive-folders/{clients['id']}/dossiers").json()["data"]
    assert [d["id"] for d in listed] == [acme["id"]]

    memos = client.post(f"{API}/dossiers", json={"name": "Memos", "parentId": clients["id"], "classeurId": None})
    assert memos.status_code == 200
    assert memos.json()["data"]["archiveFolderId"] == clients["id"]
    assert memos.json()["data"]["path"].startswith(clients["path"])

    binder = _create_binder(client, "Reports 2024")
    client.post(f"{API}/classeurs/{binder['id']}/archive", json={"archiveFolder": "Clients"})
    archived = client.get(f"{API}/classeurs/archived").json()["data"][0]
    assert archived["path"].startswith(clients["path"])

    found = client.get(f"{API}/search", params={"q": "report"}).json()["data"]
    assert found["classeurs"] == []
    assert [d["id"] for d in found["dossiers"]] == [acme["id"]]
    assert found["fichiers"] == []

    removed = client.delete(f"{API}/archive-folders/{clients['id']}").json()
    assert removed["data"]["name"] == "Clients"
    assert client.get(f"{API}/archive-folders").json()["data"] == []


def test_settings_endpoints(client: TestClient, store):
    settings = client.get(f"{API}/settings").json()["data"]
    assert settings == {"rootPath": store.root_path, "viewMode": "grid"}

    updated = client.patch(f"{API}/settings", json={"viewMode": "list"}).json()["data"]
    assert updated["viewMode"] == "list"

    invalid = client.patch(f"{API}/settings", json={"viewMode": "tiles"})
    assert invalid.status_code == 422

    root = client.get(f"{API}/settings/root-path").json()["data"]
    assert root["path"].endswith("Classiflyer")
