"""Integration tests for the caller's profile (/users/me)."""

from principals import CUSTOMER, OTHER_CUSTOMER


class TestGetProfile:
    def test_defaults_from_token(self, customer_client):
        response = customer_client.get("/users/me")
        assert response.status_code == 200
        body = response.json()
        assert body["uid"] == CUSTOMER.uid
        assert body["email"] == "jane@example.com"
        assert body["display_name"] == "Jane Doe"
        assert body["phone"] is None
        assert body["shipping_address"] is None

    def test_reading_does_not_create_a_document(self, customer_client, db):
        customer_client.get("/users/me")
        assert db.dump("users") == {}

    def test_requires_token(self, client):
        response = client.get("/users/me")
        assert response.status_code == 401
        assert response.json() == {"message": "Missing Authorization header."}


class TestUpdateProfile:
    def test_update(self, customer_client, db):
        response = customer_client.put(
            "/users/me",
            json={"display_name": "Jane Q. Doe", "phone": "+1 555 123 4567", "shipping_address": "9 Elm St"},
        )
        assert response.status_code == 200
        body = response.json()
        assert (body["display_name"], body["phone"], body["shipping_address"]) == (
            "Jane Q. Doe", "+1 555 123 4567", "9 Elm St"
        )
        assert body["created_at"] is not None
        assert db.dump("users")[CUSTOMER.uid]["shipping_address"] == "9 Elm St"

    def test_partial_update_keeps_other_fields(self, customer_client):
        customer_client.put("/users/me", json={"phone": "555 123 4567", "shipping_address": "9 Elm St"})
        body = customer_client.put("/users/me", json={"shipping_address": "1 Oak Ave"}).json()
        assert body["phone"] == "555 123 4567"
        assert body["shipping_address"] == "1 Oak Ave"
        assert customer_client.get("/users/me").json()["shipping_address"] == "1 Oak Ave"

    def test_invalid_phone(self, customer_client):
        response = customer_client.put("/users/me", json={"phone": "call me"})
        assert response.status_code == 400
        assert "phone" in response.json()["message"]

    def test_profiles_are_per_user(self, customer_client, login):
        customer_client.put("/users/me", json={"shipping_address": "9 Elm St"})
        login(OTHER_CUSTOMER)
        assert customer_client.get("/users/me").json()["shipping_address"] is None


class TestCheckoutUsesProfile:
    def test_saved_address_is_used(self, customer_client, make_product):
        product = make_product()
        customer_client.put("/users/me", json={"shipping_address": "9 Elm St, Shelbyville"})
        customer_client.post("/cart/items", json={"product_id": product.id, "quantity": 1})

        response = customer_client.post("/orders", json={"payment_method": "card"})
        assert response.status_code == 201
        assert response.json()["shipping_address"] == "9 Elm St, Shelbyville"

    def test_no_address_anywhere(self, customer_client, make_product):
        product = make_product()
        customer_client.post("/cart/items", json={"product_id": product.id, "quantity": 1})

        response = customer_client.post("/orders", json={"payment_method": "card"})
        assert response.status_code == 400
        assert response.json() == {"message": "shipping_address is required"}
