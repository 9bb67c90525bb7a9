from tests.taaza_helpers import checkout, submit_admin_bill, today_stamp


def _seed(client):
    admin = submit_admin_bill(client, [{"name": "Chicken", "qty": 2, "amount": "150"}])
    customer = checkout(client, [{"name": "Mutton", "qty": 1, "price": "800"}], name="Anita Rao").json()
    return admin, customer


def test_list_orders_latest_first(client):
    admin, customer = _seed(client)
    response = client.get("/taaza/orders", params={"range": "today"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 2
    assert [row["order_id"] for row in payload["rows"]] == [customer["order_id"], admin["order_id"]]
    assert payload["meta"]["trace_id"]


def test_list_orders_search_and_status(client):
    _admin, customer = _seed(client)
    response = client.get("/taaza/orders", params={"search": "anita"})
    assert [row["order_id"] for row in response.json()["rows"]] == [customer["order_id"]]

    response = client.get("/taaza/orders", params={"search": f"adm-{today_stamp()}"})
    assert response.json()["total"] == 1

    response = client.get("/taaza/orders", params={"status": "pending"})
    assert [row["channel"] for row in response.json()["rows"]] == ["customer"]


def test_list_orders_rejects_unknown_range(client):
    response = client.get("/taaza/orders", params={"range": "year"})
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_order_detail_status_receipt_delete(client):
    _admin, customer = _seed(client)
    order_id = customer["order_id"]

    response = client.get(f"/taaza/orders/{order_id}")
    assert response.status_code == 200
    assert response.json()["lines"][0]["name"] == "Mutton"

    response = client.patch(f"/taaza/orders/{order_id}/status", json={"status": "completed"})
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["updated_at"]

    response = client.get(f"/taaza/orders/{order_id}/receipt", params={"timezone": "Asia/Kolkata"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert f"BILL: C/{today_stamp()}-00001   TYPE: RETAIL" in response.text
    assert "TOTAL: 800.00" in response.text

    assert client.delete(f"/taaza/orders/{order_id}").status_code == 204
    response = client.get(f"/taaza/orders/{order_id}")
    assert response.status_code == 404
    assert response.json()["code"] == "ORDER_NOT_FOUND"


def test_deleted_order_number_is_not_reused(client):
    _admin, customer = _seed(client)
    client.delete(f"/taaza/orders/{customer['order_id']}")
    again = checkout(client, [{"name": "Eggs", "qty": 1, "price": "7"}]).json()
    assert again["sequence"] == 2


def test_invalid_status_value(client):
    admin, _customer = _seed(client)
    response = client.patch(f"/taaza/orders/{admin['order_id']}/status", json={"status": "lost"})
    assert response.status_code == 422
