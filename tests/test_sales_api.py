import pytest

from ration_store.config.settings import settings


def _create_item(client, **overrides):
    payload = {
        "itemName": "Rice",
        "category": "Grain",
        "totalStock": 100,
        "currentStock": 50,
        "threshold": 10,
    }
    payload.update(overrides)
    response = client.post("/api/stock", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _create_family(client, family_id="RC1001"):
    response = client.post(
        "/api/families",
        json={
            "familyId": family_id,
            "headOfFamily": "Ramesh Kumar",
            "numMembers": 2,
            "memberList": ["Ramesh Kumar", "Sita Devi"],
            "address": "12 Gandhi Road",
            "phone": "9876543210",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def _sell(client, item_id, quantity, unit_price=25, total_amount=None, family_id="RC1001"):
    return client.post(
        "/api/sales",
        json={
            "familyId": family_id,
            "itemId": item_id,
            "quantity": quantity,
            "unitPrice": unit_price,
            "totalAmount": total_amount if total_amount is not None else quantity * unit_price,
        },
    )


def test_sale_then_oversell_scenario(auth_client):
    item = _create_item(auth_client, totalStock=100, currentStock=50, threshold=10)
    _create_family(auth_client)

    response = _sell(auth_client, item["id"], 20)
    assert response.status_code == 201
    sale = response.json()
    assert sale["itemName"] == "Rice"
    assert sale["familyId"] == "RC1001"
    assert sale["quantity"] == 20
    assert sale["totalAmount"] == 500
    assert "saleDate" in sale

    assert auth_client.get(f"/api/stock/{item['id']}").json()["currentStock"] == 30

    stats = auth_client.get("/api/dashboard/stats").json()
    assert stats["lowStockItems"] == 0

    response = _sell(auth_client, item["id"], 40)
    assert response.status_code == 400
    assert response.json() == {"error": "Insufficient stock. Available: 30", "available": 30.0}
    assert auth_client.get(f"/api/stock/{item['id']}").json()["currentStock"] == 30
    assert len(auth_client.get("/api/sales").json()) == 1


def test_sale_for_unknown_family(auth_client):
    item = _create_item(auth_client)
    _create_family(auth_client)

    response = _sell(auth_client, item["id"], 5, family_id="RC9999")

    assert response.status_code == 404
    assert response.json() == {"error": "Family not found"}
    assert auth_client.get("/api/sales").json() == []
    assert auth_client.get(f"/api/stock/{item['id']}").json()["currentStock"] == 50


def test_sale_for_unknown_item(auth_client):
    _create_family(auth_client)

    response = _sell(auth_client, 999, 5)

    assert response.status_code == 404
    assert response.json() == {"error": "Stock item not found"}


@pytest.mark.parametrize("missing", ["familyId", "itemId", "quantity", "unitPrice", "totalAmount"])
def test_sale_requires_every_field(auth_client, missing):
    payload = {"familyId": "RC1001", "itemId": 1, "quantity": 1, "unitPrice": 1, "totalAmount": 1}
    del payload[missing]

    response = auth_client.post("/api/sales", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "All fields are required"}


def test_sale_rejects_zero_quantity(auth_client):
    item = _create_item(auth_client)
    _create_family(auth_client)

    response = _sell(auth_client, item["id"], 0, total_amount=10)

    assert response.status_code == 400
    assert "error" in response.json()


def test_client_total_is_trusted_by_default(auth_client):
    item = _create_item(auth_client)
    _create_family(auth_client)

    response = _sell(auth_client, item["id"], 2, unit_price=10, total_amount=15)

    assert response.status_code == 201
    assert response.json()["totalAmount"] == 15


def test_server_recomputes_total_when_configured(auth_client, monkeypatch):
    monkeypatch.setattr(settings, "derive_sale_total", True)
    item = _create_item(auth_client)
    _create_family(auth_client)

    response = _sell(auth_client, item["id"], 2, unit_price=10, total_amount=15)

    assert response.status_code == 201
    assert response.json()["totalAmount"] == 20


def test_sales_list_and_family_filter(auth_client):
    item = _create_item(auth_client, currentStock=100)
    _create_family(auth_client, "RC1001")
    _create_family(auth_client, "RC1002")

    _sell(auth_client, item["id"], 1, family_id="RC1001")
    _sell(auth_client, item["id"], 2, family_id="RC1002")
    _sell(auth_client, item["id"], 3, family_id="RC1001")

    sales = auth_client.get("/api/sales").json()
    assert [s["quantity"] for s in sales] == [3, 2, 1]

    family_sales = auth_client.get("/api/sales", params={"familyId": "RC1001"}).json()
    assert {s["familyId"] for s in family_sales} == {"RC1001"}
    assert len(family_sales) == 2


def test_today_totals(auth_client):
    item = _create_item(auth_client)
    _create_family(auth_client)

    assert auth_client.get("/api/sales/today").json() == {"todaySalesAmount": 0, "todaySalesCount": 0}

    _sell(auth_client, item["id"], 1, unit_price=100.25, total_amount=100.25)
    _sell(auth_client, item["id"], 1, unit_price=50.25, total_amount=50.25)

    today = auth_client.get("/api/sales/today").json()
    assert today["todaySalesAmount"] == pytest.approx(150.50)
    assert today["todaySalesCount"] == 2


def test_sales_survive_item_and_family_deletion(auth_client):
    item = _create_item(auth_client)
    family = _create_family(auth_client)
    _sell(auth_client, item["id"], 5)

    assert auth_client.delete(f"/api/stock/{item['id']}").status_code == 200
    assert auth_client.delete(f"/api/families/{family['id']}").status_code == 200

    sales = auth_client.get("/api/sales").json()
    assert len(sales) == 1
    assert sales[0]["itemName"] == "Rice"
    assert sales[0]["itemId"] == item["id"]
