from core.errors import StorageError


def test_list_paginates_with_total(client, user, imported):
    r = client.get("/trades", params={"page": 1, "page_size": 1}, headers=user)
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert len(body["trades"]) == 1
    assert body["trades"][0]["date"] == "2024-01-02"
    assert body["trades"][0]["duration_seconds"] == 900

    page2 = client.get("/trades", params={"page": 2, "page_size": 1}, headers=user).json()
    assert page2["trades"][0]["ticker"] == "NQH"


def test_trades_are_private(client, imported):
    assert client.get("/trades", headers={"X-User-Id": "u2"}).json()["total"] == 0


def test_delete_trades(client, user, imported):
    ids = [t["id"] for t in client.get("/trades", headers=user).json()["trades"]]
    other = client.request("DELETE", "/trades", json={"ids": ids}, headers={"X-User-Id": "u2"})
    assert other.json()["deleted"] == 0

    r = client.request("DELETE", "/trades", json={"ids": ids[:1]}, headers=user)
    assert r.status_code == 200
    assert r.json()["deleted"] == 1
    assert client.get("/trades", headers=user).json()["total"] == 1


def test_delete_storage_failure_is_502(client, user, services, monkeypatch):
    def boom(*args, **kwargs):
        raise StorageError("disk I/O error")

    monkeypatch.setattr(services.store, "delete_trades", boom)
    r = client.request("DELETE", "/trades", json={"ids": ["t1"]}, headers=user)
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to delete trades"
