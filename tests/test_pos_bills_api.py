from sqlalchemy.exc import OperationalError

from app.taaza.db.models import OrderCounter
from app.taaza.repos.orders import OrderRepository
from tests.taaza_helpers import add_line, open_bill, today_stamp


def test_bill_lifecycle_and_submit(client):
    bill_id = open_bill(client)
    add_line(client, bill_id, name="Chicken", qty=2, amount="150")
    body = add_line(client, bill_id, name="Egg Tray", qty=1, amount="180")
    assert body["totals"]["subtotal"] == "480"
    assert body["totals"]["item_count"] == 2
    assert body["payment_method"] == "Cash"

    response = client.delete(f"/taaza/pos/bills/{bill_id}/lines/0")
    assert response.status_code == 200
    body = response.json()
    assert [line["name"] for line in body["lines"]] == ["Egg Tray"]
    assert body["totals"]["subtotal"] == "180"

    response = client.put(f"/taaza/pos/bills/{bill_id}/payment-method", json={"payment_method": "Online"})
    assert response.status_code == 200
    assert response.json()["payment_method"] == "Online"

    response = client.post(f"/taaza/pos/bills/{bill_id}/submit", json={"with_receipt": True})
    assert response.status_code == 201
    order = response.json()
    assert order["order_id"] == f"ADM-{today_stamp()}-00001"
    assert order["channel"] == "admin"
    assert order["status"] == "completed"
    assert order["payment_method"] == "Online"
    assert order["with_receipt"] is True
    assert order["total"] == "180.0"

    response = client.get(f"/taaza/pos/bills/{bill_id}")
    assert response.status_code == 404
    assert response.json()["code"] == "BILL_NOT_FOUND"


def test_weight_entry_line(client):
    bill_id = open_bill(client)
    body = add_line(client, bill_id, name="Chicken", price_per_kg="240", weight="0.5", category="chicken")
    line = body["lines"][0]
    assert line["amount"] == "120.00"
    assert line["weight"] == "0.5"
    assert body["totals"]["total_weight"] == "0.5"


def test_invalid_line_and_index(client):
    bill_id = open_bill(client)
    response = client.post(f"/taaza/pos/bills/{bill_id}/lines", json={"name": "Chicken", "qty": 0, "amount": "10"})
    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_LINE_ITEM"

    response = client.delete(f"/taaza/pos/bills/{bill_id}/lines/3")
    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == "INDEX_OUT_OF_RANGE"
    assert payload["details"] == {"index": 3, "line_count": 0}


def test_empty_bill_submit_leaves_counter_alone(client, db_session):
    bill_id = open_bill(client)
    response = client.post(f"/taaza/pos/bills/{bill_id}/submit")
    assert response.status_code == 422
    assert response.json()["code"] == "EMPTY_BILL"
    assert db_session.get(OrderCounter, "admin") is None

    assert client.get(f"/taaza/pos/bills/{bill_id}").status_code == 200


def test_persist_failure_keeps_bill_and_burns_number(client, monkeypatch):
    bill_id = open_bill(client)
    add_line(client, bill_id, name="Mutton", qty=1, amount="800")

    original_create = OrderRepository.create

    def failing_create(self, record):
        raise OperationalError("INSERT INTO orders", {}, Exception("disk I/O error"))

    monkeypatch.setattr(OrderRepository, "create", failing_create)
    response = client.post(f"/taaza/pos/bills/{bill_id}/submit")
    assert response.status_code == 503
    payload = response.json()
    assert payload["code"] == "ORDER_PERSIST_FAILED"
    assert payload["details"]["order_id"] == f"ADM-{today_stamp()}-00001"

    body = client.get(f"/taaza/pos/bills/{bill_id}").json()
    assert len(body["lines"]) == 1

    monkeypatch.setattr(OrderRepository, "create", original_create)
    response = client.post(f"/taaza/pos/bills/{bill_id}/submit")
    assert response.status_code == 201
    assert response.json()["order_id"] == f"ADM-{today_stamp()}-00002"


def test_discard_bill(client):
    bill_id = open_bill(client)
    assert client.delete(f"/taaza/pos/bills/{bill_id}").status_code == 204
    response = client.delete(f"/taaza/pos/bills/{bill_id}")
    assert response.status_code == 404
