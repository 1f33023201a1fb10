from __future__ import annotations

from datetime import date

import pytest

from src.labour_ledger.labour_ledger.main import create_app
from src.labour_ledger.labour_ledger.reports import controller as reports_controller


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("APP_NAME", "hulimane")
    monkeypatch.setattr(reports_controller, "today", lambda: date(2026, 3, 15))
    app = create_app(container=container)
    return app.test_client()


def _add_worker(client, **overrides) -> int:
    payload = {"name": "Ravi", "phone": "9876543210", "opening_balance": "100"}
    payload.update(overrides)
    res = client.post("/api/workers", json=payload)
    assert res.status_code == 201, res.get_json()
    return res.get_json()["data"]["worker_id"]


def _add_work(client) -> tuple[int, int]:
    cid = client.post("/api/categories", json={"name": "Coffee Estate"}).get_json()["data"]["category_id"]
    res = client.post(f"/api/categories/{cid}/subcategories", json={"name": "Picking"})
    return cid, res.get_json()["data"]["subcategory_id"]


def test_worker_crud_and_balance(client):
    wid = _add_worker(client)

    res = client.get(f"/api/workers/{wid}/balance")
    assert res.get_json()["data"]["balance"] == "100.00"

    res = client.put(f"/api/workers/{wid}", json={"name": "Ravi K", "phone": "9876543210", "opening_balance": "80"})
    assert res.status_code == 200
    assert res.get_json()["data"]["opening_balance"] == "80.00"

    listed = client.get("/api/workers").get_json()["data"]
    assert [w["name"] for w in listed] == ["Ravi K"]


def test_validation_errors_map_to_400_with_field_errors(client):
    res = client.post("/api/workers", json={"name": "", "phone": "123"})

    assert res.status_code == 400
    body = res.get_json()
    assert body["success"] is False
    assert set(body["errors"]) == {"name", "phone"}


def test_unknown_worker_is_404(client):
    assert client.get("/api/workers/999").status_code == 404


def test_worker_delete_needs_confirmation(client):
    wid = _add_worker(client)

    res = client.delete(f"/api/workers/{wid}")
    assert res.status_code == 409
    assert res.get_json()["requires_confirmation"] is True

    res = client.delete(f"/api/workers/{wid}?confirm=1")
    assert res.status_code == 200
    assert client.get(f"/api/workers/{wid}").status_code == 404


def test_duplicate_attendance_is_409(client):
    wid = _add_worker(client)
    cid, sid = _add_work(client)
    payload = {"worker_id": wid, "date": "2026-03-01", "category_id": cid, "subcategory_id": sid, "amount": "50"}

    assert client.post("/api/attendance", json=payload).status_code == 201
    res = client.post("/api/attendance", json=payload)
    assert res.status_code == 409
    assert "already exists" in res.get_json()["message"]


def test_overpayment_round_trip_with_confirmation(client):
    wid = _add_worker(client)
    payload = {"worker_id": wid, "amount": "150", "date": "2026-03-02", "payment_mode": "Cash"}

    res = client.post("/api/payments", json=payload)
    assert res.status_code == 409
    body = res.get_json()
    assert body["requires_confirmation"] is True
    assert (body["current_balance"], body["new_balance"]) == ("100.00", "-50.00")

    res = client.post("/api/payments", json={**payload, "confirm": True})
    assert res.status_code == 201
    assert res.get_json()["data"]["balance"] == "-50.00"


def test_previews(client):
    wid = _add_worker(client)

    att = client.get(f"/api/attendance/preview?worker_id={wid}&status=halfday&amount=25").get_json()["data"]
    assert att == {"previous_balance": "100.00", "current_wage": "25.00", "updated_balance": "125.00"}

    pay = client.get(f"/api/payments/preview?worker_id={wid}&amount=40").get_json()["data"]
    assert pay == {"total_payable": "100.00", "new_balance": "60.00", "exceeds_balance": False}

    assert "UPI" in client.get("/api/payments/modes").get_json()["data"]


def test_reports_default_to_current_month(client):
    wid = _add_worker(client)
    cid, sid = _add_work(client)
    client.post(
        "/api/attendance",
        json={"worker_id": wid, "date": "2026-03-01", "category_id": cid, "subcategory_id": sid, "amount": "50"},
    )
    client.post(
        "/api/attendance",
        json={"worker_id": wid, "date": "2026-02-27", "category_id": cid, "subcategory_id": sid, "amount": "20"},
    )
    client.post("/api/payments", json={"worker_id": wid, "amount": "30", "date": "2026-03-02", "payment_mode": "Cash"})

    data = client.get("/api/reports/detailed").get_json()["data"]
    assert (data["start"], data["end"]) == ("2026-03-01", "2026-03-31")
    assert [r["running_balance"] for r in data["rows"]] == ["150.00", "120.00"]

    summary = client.get(f"/api/reports/summary?worker_id={wid}").get_json()["data"]["rows"]
    assert summary[0]["net_balance"] == "140.00"
    assert summary[0]["total_wages"] == "50.00"


def test_csv_download(client):
    wid = _add_worker(client)
    client.post("/api/payments", json={"worker_id": wid, "amount": "30", "date": "2026-03-02", "payment_mode": "Cash"})

    res = client.get("/api/reports/detailed.csv")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "hulimane_detailed_report_20260315.csv" in res.headers["Content-Disposition"]
    assert res.data.decode("utf-8").splitlines()[1] == '2026-03-02,"Ravi","","","",0.00,30.00,70.00,""'


def test_empty_csv_is_rejected(client):
    res = client.get("/api/reports/summary.csv")
    assert res.status_code == 400
    assert res.get_json()["message"] == "No data available for export"


def test_bad_filter_date_is_400(client):
    res = client.get("/api/attendance?start=yesterday")
    assert res.status_code == 400
    assert "start" in res.get_json()["errors"]


def test_dashboard(client):
    wid = _add_worker(client)
    client.post("/api/payments", json={"worker_id": wid, "amount": "30", "date": "2026-03-02", "payment_mode": "Cash"})

    stats = client.get("/api/dashboard").get_json()["data"]

    assert stats["total_workers"] == 1
    assert stats["total_payments"] == "30.00"
    assert stats["net_balance"] == "70.00"
    assert stats["balances"] == [{"worker_id": wid, "worker_name": "Ravi", "balance": "70.00"}]
