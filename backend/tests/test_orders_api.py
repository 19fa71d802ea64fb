"""
Tests for the /api/orders routes.
"""

from decimal import Decimal

import pytest

from conftest import FIRST_ORDER_ID, REFERENCE_ORDER_COUNT
from dependencies import get_order_service
from exceptions import DatabaseError
from main import app


CREATE_PAYLOAD = {
    "customerId": "ALFKI",
    "employeeId": 1,
    "requiredDate": "2023-03-30T00:00:00",
    "shipVia": 1,
    "freight": "12.34",
    "shipName": "Ship Name",
    "shipAddress": "Ship Address",
    "shipCity": "Ship City",
    "shipRegion": "Ship Region",
    "shipPostalCode": "12345",
    "shipCountry": "Ship Country",
    "orderDetails": [
        {"productId": 1, "quantity": 10, "unitPrice": "9.99", "discount": "0"}
    ],
}


def as_decimal(value) -> Decimal:
    return Decimal(str(value))


class TestListOrders:

    def test_returns_all_orders(self, client, reference_orders):
        response = client.get("/api/orders")

        assert response.status_code == 200
        assert len(response.json()) == REFERENCE_ORDER_COUNT

    def test_skip_and_take(self, client, reference_orders):
        response = client.get("/api/orders", params={"skip": 11, "take": 200})

        assert response.status_code == 200
        items = response.json()
        assert len(items) == 200
        assert items[0]["customerId"] == "ERNSH"
        assert items[0]["orderId"] == FIRST_ORDER_ID + 11

    def test_responses_use_camel_case(self, client, reference_orders):
        item = client.get("/api/orders", params={"take": 1}).json()[0]

        assert {"orderId", "customerId", "orderDate", "shipName", "orderDetails"} <= set(item)
        assert {"id", "orderId", "productId", "quantity", "unitPrice", "discount"} == set(item["orderDetails"][0])

    @pytest.mark.parametrize("params", [{"skip": -1, "take": -1}, {"skip": -1}, {"take": -1}])
    def test_negative_values_are_bad_request(self, client, reference_orders, params):
        response = client.get("/api/orders", params=params)

        assert response.status_code == 400
        assert "non-negative" in response.json()["detail"]

    @pytest.mark.parametrize("params,name", [({"skip": "abc"}, "skip"), ({"take": "1.5"}, "take")])
    def test_non_integer_values_are_bad_request(self, client, reference_orders, params, name):
        response = client.get("/api/orders", params=params)

        assert response.status_code == 400
        assert name in response.json()["detail"]

    def test_empty_store(self, client):
        response = client.get("/api/orders")

        assert response.status_code == 200
        assert response.json() == []


class TestGetOrder:

    def test_existing_order(self, client, reference_orders):
        response = client.get(f"/api/orders/{FIRST_ORDER_ID}")

        assert response.status_code == 200
        body = response.json()
        assert body["orderId"] == FIRST_ORDER_ID
        assert body["customerId"] == "VINET"
        assert body["shipName"] == "Vins et alcools Chevalier"
        assert body["shipAddress"] == "59 rue de l'Abbaye"

    def test_missing_order(self, client, reference_orders):
        response = client.get("/api/orders/0")

        assert response.status_code == 404


class TestCreateOrder:

    def test_created(self, client):
        response = client.post("/api/orders", json=CREATE_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["orderId"] is not None
        assert body["customerId"] == "ALFKI"
        assert body["shipCountry"] == "Ship Country"
        assert as_decimal(body["freight"]) == Decimal("12.34")
        assert len(body["orderDetails"]) == 1
        line = body["orderDetails"][0]
        assert line["orderId"] == body["orderId"]
        assert line["quantity"] == 10
        assert as_decimal(line["unitPrice"]) == Decimal("9.99")
        assert as_decimal(line["discount"]) == Decimal("0")

    def test_location_points_at_new_order(self, client):
        response = client.post("/api/orders", json=CREATE_PAYLOAD)
        order_id = response.json()["orderId"]

        location = response.headers["location"]
        assert location.endswith(f"/api/orders/{order_id}")

        fetched = client.get(f"/api/orders/{order_id}")
        assert fetched.status_code == 200
        assert fetched.json() == response.json()

    def test_order_date_from_request_is_ignored(self, client):
        payload = dict(CREATE_PAYLOAD, orderDate="1990-01-01T00:00:00")

        body = client.post("/api/orders", json=payload).json()

        assert not body["orderDate"].startswith("1990")

    def test_missing_customer_is_bad_request(self, client):
        payload = {k: v for k, v in CREATE_PAYLOAD.items() if k != "customerId"}

        response = client.post("/api/orders", json=payload)

        assert response.status_code == 400
        assert "customerId" in response.json()["detail"]
        assert client.get("/api/orders").json() == []

    def test_null_lines_is_bad_request(self, client):
        response = client.post("/api/orders", json=dict(CREATE_PAYLOAD, orderDetails=None))

        assert response.status_code == 400

    def test_missing_body_is_bad_request(self, client):
        response = client.post("/api/orders")

        assert response.status_code == 400

    def test_wrongly_typed_line_is_bad_request(self, client):
        payload = dict(CREATE_PAYLOAD, orderDetails=[{"productId": "x"}])

        response = client.post("/api/orders", json=payload)

        assert response.status_code == 400
        assert "productId" in response.json()["detail"]
        assert client.get("/api/orders").json() == []

    def test_amounts_keep_all_decimal_places(self, client):
        payload = dict(
            CREATE_PAYLOAD,
            freight="1.005",
            orderDetails=[{"productId": 1, "quantity": 10, "unitPrice": "9.995", "discount": "0.12345"}],
        )

        created = client.post("/api/orders", json=payload).json()
        fetched = client.get(f"/api/orders/{created['orderId']}").json()

        assert as_decimal(fetched["freight"]) == Decimal("1.005")
        line = fetched["orderDetails"][0]
        assert as_decimal(line["unitPrice"]) == Decimal("9.995")
        assert as_decimal(line["discount"]) == Decimal("0.12345")

    def test_price_with_too_many_places_is_bad_request(self, client):
        payload = dict(CREATE_PAYLOAD, orderDetails=[{"productId": 1, "unitPrice": "9.99999"}])

        response = client.post("/api/orders", json=payload)

        assert response.status_code == 400
        assert "orderDetails[0].unitPrice" in response.json()["detail"]


class TestAddOrderLines:

    LINES = [
        {"productId": 3, "quantity": 10, "unitPrice": "9.99", "discount": "0"},
        {"productId": 4, "quantity": 20, "unitPrice": "19.99", "discount": "2"},
    ]

    def test_adds_lines(self, client, single_order):
        response = client.post("/api/orders/1/lines", json=self.LINES)

        assert response.status_code == 200
        lines = response.json()
        assert len(lines) == 2
        assert {line["orderId"] for line in lines} == {1}
        assert [line["productId"] for line in lines] == [3, 4]

        order = client.get("/api/orders/1").json()
        assert [line["productId"] for line in order["orderDetails"]] == [11, 3, 4]

    def test_missing_order_is_not_found(self, client, single_order):
        response = client.post("/api/orders/999/lines", json=self.LINES)

        assert response.status_code == 404

    def test_missing_body_is_bad_request(self, client, single_order):
        response = client.post("/api/orders/1/lines")

        assert response.status_code == 400

    def test_wrongly_typed_line_is_bad_request(self, client, single_order):
        response = client.post("/api/orders/1/lines", json=[{"productId": "x"}])

        assert response.status_code == 400
        assert len(client.get("/api/orders/1").json()["orderDetails"]) == 1

    def test_line_without_product_is_bad_request(self, client, single_order):
        response = client.post("/api/orders/1/lines", json=[{"quantity": 1}])

        assert response.status_code == 400
        assert len(client.get("/api/orders/1").json()["orderDetails"]) == 1


class TestDeleteOrder:

    def test_deletes(self, client, single_order):
        response = client.delete("/api/orders/1")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/api/orders/1").status_code == 404

    def test_missing_order_is_not_found(self, client, single_order):
        response = client.delete("/api/orders/999")

        assert response.status_code == 404
        assert client.get("/api/orders/1").status_code == 200


class TestOutOfRangeIds:

    ORDER_ID = 2**64

    def test_get_is_not_found(self, client, single_order):
        response = client.get(f"/api/orders/{self.ORDER_ID}")

        assert response.status_code == 404

    def test_add_lines_is_not_found(self, client, single_order):
        response = client.post(f"/api/orders/{self.ORDER_ID}/lines", json=[{"productId": 3}])

        assert response.status_code == 404

    def test_delete_is_not_found(self, client, single_order):
        response = client.delete(f"/api/orders/{self.ORDER_ID}")

        assert response.status_code == 404
        assert client.get("/api/orders/1").status_code == 200

    def test_non_numeric_id_is_bad_request(self, client):
        assert client.get("/api/orders/abc").status_code == 400


class FailingOrderService:
    """Stand-in service whose every call fails."""

    def __init__(self, error: Exception):
        self.error = error

    def list_orders(self, skip=None, take=None):
        raise self.error

    def get_order(self, order_id):
        raise self.error


class TestFailures:

    @pytest.fixture
    def failing_service(self, client):
        def install(error: Exception):
            app.dependency_overrides[get_order_service] = lambda: FailingOrderService(error)
        return install

    def test_storage_failure_is_server_error(self, client, failing_service):
        failing_service(DatabaseError("list orders", "database is locked"))

        response = client.get("/api/orders")

        assert response.status_code == 500
        assert response.json()["detail"] == "Database operation failed: database is locked"

    def test_unexpected_failure_is_server_error_with_message(self, client, failing_service):
        failing_service(RuntimeError("boom"))

        response = client.get("/api/orders/1")

        assert response.status_code == 500
        assert "Get order failed" in response.json()["detail"]


class TestServiceEndpoints:

    def test_health_reports_order_count(self, client, reference_orders):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["orders"] == REFERENCE_ORDER_COUNT

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["x-request-id"] == "abc-123"

    def test_request_id_is_generated(self, client):
        response = client.get("/api/health")

        assert response.headers["x-request-id"]
