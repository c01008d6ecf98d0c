"""Integration tests for Order Editing API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from order_editing.api.routes import order_edit_router, order_router
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client(catalog, inventory):
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(order_edit_router)
    register_exception_handlers(app)
    return TestClient(app)


def _register_order(client, order_id="ord-api-001"):
    response = client.post(
        "/orders",
        json={
            "order_id": order_id,
            "customer_id": "cust-api-001",
            "region": {"name": "US", "tax_rate": 10.0, "tax_code": "US-STD"},
            "items": [
                {
                    "line_item_id": f"{order_id}-shirt",
                    "variant_id": "var-shirt",
                    "product_id": "prod-shirt",
                    "title": "Shirt",
                    "unit_price": 20.0,
                    "quantity": 2,
                },
                {
                    "line_item_id": f"{order_id}-mug",
                    "variant_id": "var-mug",
                    "product_id": "prod-mug",
                    "title": "Mug",
                    "unit_price": 10.0,
                    "quantity": 1,
                },
            ],
            "shipping_methods": [{"name": "Standard", "price": 5.0}],
        },
    )
    assert response.status_code == 201
    return response.json()["order_id"]


def _create_edit(client, order_id):
    response = client.post("/order-edits", json={"order_id": order_id, "created_by": "agent-1"})
    assert response.status_code == 201
    return response.json()


class TestOrderRegistrationAPI:
    def test_register_returns_201(self, client):
        assert _register_order(client) == "ord-api-001"

    def test_register_twice_returns_400(self, client):
        _register_order(client)
        response = client.post(
            "/orders",
            json={"order_id": "ord-api-001", "items": [{"variant_id": "v", "title": "T", "unit_price": 1.0, "quantity": 1}]},
        )
        assert response.status_code == 400


class TestCreateAndRetrieveAPI:
    def test_create_returns_decorated_edit(self, client):
        order_id = _register_order(client)
        body = _create_edit(client, order_id)
        assert body["status"] == "created"
        assert [i["id"] for i in body["items"]] == [f"{order_id}-shirt", f"{order_id}-mug"]
        assert body["removed_items"] == []
        assert body["total"] == 60.0

    def test_get_edit(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.get(f"/order-edits/{edit['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == edit["id"]

    def test_get_missing_edit_returns_404(self, client):
        response = client.get("/order-edits/edit-missing")
        assert response.status_code == 404

    def test_second_active_edit_returns_400(self, client):
        order_id = _register_order(client)
        _create_edit(client, order_id)
        response = client.post("/order-edits", json={"order_id": order_id})
        assert response.status_code == 400

    def test_update_details(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.post(f"/order-edits/{edit['id']}", json={"internal_note": "Bigger size"})
        assert response.status_code == 200
        assert response.json()["internal_note"] == "Bigger size"


class TestItemChangesAPI:
    def test_update_line_item_quantity(self, client):
        order_id = _register_order(client)
        edit = _create_edit(client, order_id)
        response = client.post(f"/order-edits/{edit['id']}/items/{order_id}-shirt", json={"quantity": 3})
        assert response.status_code == 200
        body = response.json()
        assert body["items"][0]["id"] == f"{order_id}-shirt"
        assert body["items"][0]["quantity"] == 3
        assert body["subtotal"] == 70.0

    def test_add_line_item(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.post(f"/order-edits/{edit['id']}/items", json={"variant_id": "var-cap", "quantity": 1})
        assert response.status_code == 200
        assert [i["title"] for i in response.json()["items"]] == ["Shirt", "Mug", "Cap"]

    def test_remove_line_item(self, client):
        order_id = _register_order(client)
        edit = _create_edit(client, order_id)
        response = client.delete(f"/order-edits/{edit['id']}/items/{order_id}-mug")
        assert response.status_code == 200
        assert [i["id"] for i in response.json()["removed_items"]] == [f"{order_id}-mug"]

    def test_delete_item_change(self, client):
        order_id = _register_order(client)
        edit = _create_edit(client, order_id)
        body = client.delete(f"/order-edits/{edit['id']}/items/{order_id}-mug").json()
        change_id = body["changes"][0]["id"]

        response = client.delete(f"/order-edits/{edit['id']}/changes/{change_id}")
        assert response.status_code == 200
        assert response.json()["changes"] == []
        assert response.json()["removed_items"] == []

    def test_invalid_quantity_returns_422(self, client):
        order_id = _register_order(client)
        edit = _create_edit(client, order_id)
        response = client.post(f"/order-edits/{edit['id']}/items/{order_id}-shirt", json={"quantity": 0})
        assert response.status_code == 422


class TestLifecycleAPI:
    def test_request_then_confirm(self, client):
        order_id = _register_order(client)
        edit = _create_edit(client, order_id)
        client.delete(f"/order-edits/{edit['id']}/items/{order_id}-mug")

        response = client.post(f"/order-edits/{edit['id']}/request", json={"requested_by": "agent-1"})
        assert response.status_code == 200
        assert response.json()["status"] == "requested"

        response = client.post(f"/order-edits/{edit['id']}/confirm", json={"confirmed_by": "customer"})
        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"

    def test_request_without_changes_returns_400(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.post(f"/order-edits/{edit['id']}/request", json={})
        assert response.status_code == 400

    def test_decline_requested_edit(self, client):
        order_id = _register_order(client)
        edit = _create_edit(client, order_id)
        client.delete(f"/order-edits/{edit['id']}/items/{order_id}-mug")
        client.post(f"/order-edits/{edit['id']}/request", json={})

        response = client.post(
            f"/order-edits/{edit['id']}/decline",
            json={"declined_by": "customer", "declined_reason": "Too expensive"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "declined"
        assert response.json()["declined_reason"] == "Too expensive"

    def test_decline_created_edit_is_rejected(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.post(f"/order-edits/{edit['id']}/decline", json={})
        assert 400 <= response.status_code < 500
        assert client.get(f"/order-edits/{edit['id']}").json()["status"] == "created"

    def test_cancel(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.post(f"/order-edits/{edit['id']}/cancel", json={"canceled_by": "agent-1"})
        assert response.status_code == 200
        assert response.json()["status"] == "canceled"

    def test_delete(self, client):
        edit = _create_edit(client, _register_order(client))
        response = client.delete(f"/order-edits/{edit['id']}")
        assert response.status_code == 200
        assert response.json() == {"id": edit["id"], "object": "order_edit", "deleted": True}
        assert client.get(f"/order-edits/{edit['id']}").status_code == 404
