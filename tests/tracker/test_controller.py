from __future__ import annotations

import io
import json
import re


def test_state_defaults(client):
    resp = client.get("/api/state")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["settings"] == {"holidaysLimit": 25, "hourlyRate": 0, "currency": "PLN"}
    assert set(body["lists"]) == {"holidays", "sickness", "childcare", "overtimes", "hours"}


def test_add_single_then_duplicate(client):
    first = client.post("/api/hours/entries", json={"date": "2024-03-11", "minutes": 480})
    second = client.post("/api/hours/entries", json={"date": "2024-03-11", "minutes": 60})

    assert first.status_code == 201
    assert first.get_json()["added"] == 1
    assert second.status_code == 409
    assert second.get_json()["outcome"] == "DUPLICATE_DATE"

    listed = client.get("/api/hours/entries").get_json()
    assert [e["minutes"] for e in listed] == [480]


def test_add_range(client):
    resp = client.post("/api/sickness/entries", json={"from": "2024-03-11", "to": "2024-03-13", "cert": "Yes"})
    assert resp.status_code == 201
    assert resp.get_json()["added"] == 3

    again = client.post("/api/sickness/entries", json={"from": "2024-03-11", "to": "2024-03-13"})
    assert again.status_code == 409

    reversed_range = client.post("/api/sickness/entries", json={"from": "2024-03-13", "to": "2024-03-11"})
    assert reversed_range.status_code == 400


def test_invalid_input_is_bad_request(client):
    resp = client.post("/api/overtimes/entries", json={"date": "2024-03-11", "minutes": 0})
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False


def test_unknown_list_is_404(client):
    assert client.get("/api/vacations/entries").status_code == 404


def test_delete_and_clear(client):
    client.post("/api/childcare/entries", json={"from": "2024-03-11", "to": "2024-03-12"})

    assert client.delete("/api/childcare/entries/1").status_code == 200
    assert client.delete("/api/childcare/entries/1").status_code == 404

    cleared = client.delete("/api/childcare/entries")
    assert cleared.get_json() == {"success": True, "removed": 1}


def test_settings_update_and_validation(client):
    ok = client.put("/api/settings", json={"hourlyRate": "22.5", "currency": "EUR"})
    assert ok.status_code == 200
    assert ok.get_json()["currency"] == "EUR"

    bad = client.put("/api/settings", json={"currency": "USD"})
    assert bad.status_code == 400
    assert client.get("/api/settings").get_json()["currency"] == "EUR"


def test_holiday_limit_conflict(client):
    client.put("/api/settings", json={"holidaysLimit": 1})
    assert client.post("/api/holidays/entries", json={"date": "2024-03-11"}).status_code == 201

    resp = client.post("/api/holidays/entries", json={"date": "2024-03-12", "dayValue": 0.5})
    assert resp.status_code == 409
    assert resp.get_json()["outcome"] == "LIMIT_EXCEEDED"


def test_summaries(client):
    client.post("/api/overtimes/entries", json={"date": "2024-03-11", "minutes": 90})
    assert set(client.get("/api/summary/overtime").get_json()) == {"week", "month", "year"}
    assert set(client.get("/api/summary/hours").get_json()) == {"week", "month", "year"}
    assert len(client.get("/api/summary/weekly?limit=1").get_json()) == 1


def test_export_download(client):
    client.post("/api/hours/entries", json={"date": "2024-03-11", "minutes": 480})
    resp = client.get("/api/export")

    assert resp.status_code == 200
    assert resp.mimetype == "application/json"
    assert re.search(r"absence-backup-\d{4}-\d{2}-\d{2}\.json", resp.headers["Content-Disposition"])
    payload = json.loads(resp.data)
    assert payload["hours"][0]["date"] == "2024-03-11"


def test_import_upload_and_bad_json(client):
    backup = {"sickness": [{"date": "2024-01-05", "dayValue": 1}]}
    resp = client.post(
        "/api/import",
        data={"file": (io.BytesIO(json.dumps(backup).encode()), "backup.json")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 200
    assert resp.get_json()["counts"]["sickness"] == 1

    bad = client.post("/api/import", data=b"{oops", content_type="application/json")
    assert bad.status_code == 400
    assert len(client.get("/api/sickness/entries").get_json()) == 1


def test_reset(client):
    client.post("/api/hours/entries", json={"date": "2024-03-11", "minutes": 480})
    client.put("/api/settings", json={"currency": "GBP"})

    assert client.post("/api/reset").get_json() == {"success": True}
    assert client.get("/api/hours/entries").get_json() == []
    assert client.get("/api/settings").get_json()["currency"] == "PLN"
