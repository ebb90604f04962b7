from core.errors import StorageError


def test_preview_maps_every_row(broker_id, upload, csv_with_bad_row):
    r = upload(broker_id, csv_with_bad_row)
    assert r.status_code == 200
    body = r.json()
    assert body["headers"] == ["Symbol", "Qty", "Buy", "Sell", "PnL", "Comment"]
    assert (body["valid"], body["invalid"]) == (2, 1)

    first, second, bad = body["trades"]
    assert first["ticker"] == "ESZ"
    assert first["direction"] == "long"
    assert first["net_profit"] == 148.7
    assert first["notes"] == "opening drive"
    assert second["direction"] == "short"
    assert bad["valid"] is False
    assert bad["errors"] == ["Invalid quantity"]


def test_preview_unknown_broker(client, upload, csv_ok):
    assert upload("missing", csv_ok).status_code == 404


def test_preview_empty_file(broker_id, upload):
    r = upload(broker_id, "\n\n")
    assert r.status_code == 400
    assert r.json()["detail"] == "CSV file is empty"


def test_preview_non_utf8_file(client, user, broker_id, csv_ok):
    r = client.post(
        "/imports/preview",
        data={"broker_id": broker_id},
        files={"file": ("trades.csv", csv_ok.replace("$", "£").encode("cp1252"), "text/csv")},
        headers=user,
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Failed to parse CSV file"


def test_commit_blocked_by_invalid_rows_unless_partial(client, user, broker_id, upload, csv_with_bad_row):
    upload(broker_id, csv_with_bad_row)
    blocked = client.post("/imports/commit", headers=user)
    assert blocked.status_code == 409

    r = client.post("/imports/commit", params={"allow_partial": "true"}, headers=user)
    assert r.status_code == 200
    assert r.json() == {"imported": 2, "message": "Successfully imported 2 trades"}
    assert client.get("/trades", headers=user).json()["total"] == 2

    # preview is cleared after a successful commit
    assert client.post("/imports/commit", headers=user).status_code == 404


def test_commit_without_valid_rows(client, user, broker_id, upload):
    upload(broker_id, "Symbol,Qty,Buy,Sell,PnL\nESZ4,0,x,y,z\n")
    r = client.post("/imports/commit", params={"allow_partial": "true"}, headers=user)
    assert r.status_code == 400
    assert r.json()["detail"] == "No valid trades to import"


def test_failed_write_keeps_preview(client, user, broker_id, upload, csv_ok, services, monkeypatch):
    upload(broker_id, csv_ok)

    def boom(records):
        raise StorageError("disk full")

    monkeypatch.setattr(services.store, "insert_trades", boom)
    r = client.post("/imports/commit", headers=user)
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to import trades"

    monkeypatch.undo()
    assert client.post("/imports/commit", headers=user).json()["imported"] == 2


def test_discard_preview(client, user, broker_id, upload, csv_ok):
    upload(broker_id, csv_ok)
    assert client.delete("/imports/preview", headers=user).status_code == 200
    assert client.post("/imports/commit", headers=user).status_code == 404


def test_previews_are_per_user(client, broker_id, upload, csv_ok):
    upload(broker_id, csv_ok)
    assert client.post("/imports/commit", headers={"X-User-Id": "u2"}).status_code == 404


def test_user_header_required(client):
    assert client.get("/trades").status_code == 422
    assert client.get("/trades", headers={"X-User-Id": "  "}).status_code == 401
