"""Integration tests for checkout and the admin order endpoints."""

from datetime import datetime, timedelta, timezone

from principals import ADMIN, CUSTOMER

JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestCheckoutEndpoint:
    def test_checkout(self, customer_client, make_product):
        product = make_product(price=150.00, stock_quantity=45)
        customer_client.post("/cart/items", json={"product_id": product.id, "quantity": 2, "size": 9, "color": "Black"})

        response = customer_client.post(
            "/orders", json={"shipping_address": "1 Main St", "payment_method": "card"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == 1
        assert body["user_id"] == CUSTOMER.uid
        assert body["total_amount"] == 324.00
        assert customer_client.get("/cart").json()["items"] == []

    def test_checkout_empty_cart(self, customer_client):
        response = customer_client.post(
            "/orders", json={"shipping_address": "1 Main St", "payment_method": "card"}
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Cart is empty"}

    def test_checkout_requires_address(self, customer_client):
        response = customer_client.post("/orders", json={"payment_method": "card"})
        assert response.status_code == 400

    def test_my_orders(self, customer_client, make_order):
        mine = make_order(user_id=CUSTOMER.uid)
        make_order(user_id="other")
        response = customer_client.get("/orders/my")
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [mine]


class TestAdminAccess:
    def test_customer_is_forbidden(self, customer_client):
        response = customer_client.get("/admin/orders")
        assert response.status_code == 403
        assert response.json() == {"message": "Admin privilege required."}

    def test_anonymous_is_unauthorized(self, client):
        assert client.get("/admin/orders/statistics").status_code == 401


class TestAdminOrders:
    def test_list_newest_first(self, admin_client, make_order):
        old = make_order(order_date=JAN_1)
        new = make_order(order_date=JAN_1 + timedelta(days=1))
        response = admin_client.get("/admin/orders")
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [new, old]

    def test_get_order(self, admin_client, make_order):
        order_id = make_order(total_amount=75.5)
        response = admin_client.get(f"/admin/orders/{order_id}")
        assert response.status_code == 200
        assert response.json()["total_amount"] == 75.5

    def test_get_missing_order(self, admin_client):
        response = admin_client.get("/admin/orders/missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_update_status(self, admin_client, make_order):
        order_id = make_order()
        response = admin_client.patch(
            f"/admin/orders/{order_id}/status", json={"status": 2, "tracking_number": "TRK-9"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == 2
        assert response.json()["tracking_number"] == "TRK-9"

    def test_update_status_out_of_range(self, admin_client, make_order):
        order_id = make_order(status=1)
        response = admin_client.patch(f"/admin/orders/{order_id}/status", json={"status": 5})
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid order status: 5")
        assert admin_client.get(f"/admin/orders/{order_id}").json()["status"] == 1

    def test_update_status_missing_order(self, admin_client):
        response = admin_client.patch("/admin/orders/missing/status", json={"status": 2})
        assert response.status_code == 404

    def test_by_status(self, admin_client, make_order):
        cancelled = make_order(status=4)
        make_order(status=1)
        response = admin_client.get("/admin/orders/status/4")
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [cancelled]

    def test_by_invalid_status(self, admin_client):
        assert admin_client.get("/admin/orders/status/7").status_code == 400

    def test_by_date_range(self, admin_client, make_order):
        inside = make_order(order_date=JAN_1 + timedelta(days=1))
        make_order(order_date=JAN_1 + timedelta(days=30))
        response = admin_client.get(
            "/admin/orders/date-range",
            params={"start_date": "2024-01-01T00:00:00Z", "end_date": "2024-01-10T00:00:00Z"},
        )
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [inside]

    def test_date_range_requires_both_bounds(self, admin_client):
        response = admin_client.get("/admin/orders/date-range", params={"start_date": "2024-01-01T00:00:00Z"})
        assert response.status_code == 400


class TestStatisticsEndpoint:
    def test_no_orders(self, admin_client):
        response = admin_client.get("/admin/orders/statistics")
        assert response.status_code == 200
        assert response.json() == {
            "total_orders": 0, "total_revenue": 0, "currency": "USD", "orders_by_status": []
        }

    def test_statistics(self, admin_client, make_order):
        make_order(status=1, total_amount=100.0)
        make_order(status=4, total_amount=40.0)
        body = admin_client.get("/admin/orders/statistics").json()
        assert body["total_orders"] == 2
        assert body["total_revenue"] == 100.0
        assert body["orders_by_status"] == [{"status": 1, "count": 1}, {"status": 4, "count": 1}]

    def test_admin_and_customer_share_the_app(self, admin_client, login, make_product):
        product = make_product()
        login(CUSTOMER)
        admin_client.post("/cart/items", json={"product_id": product.id, "quantity": 1})
        admin_client.post("/orders", json={"shipping_address": "1 Main St", "payment_method": "card"})

        login(ADMIN)
        body = admin_client.get("/admin/orders/statistics").json()
        assert body["total_orders"] == 1
        assert body["total_revenue"] == 162.0
