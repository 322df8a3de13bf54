from datetime import datetime, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from fake_firestore import FakeFirestore
from principals import ADMIN, CUSTOMER
from shoestore.config import get_db
from shoestore.core.auth import get_principal
from shoestore.repositories import orders as order_repo
from shoestore.schemas.principal import Principal
from shoestore.schemas.product import ProductCreate
from shoestore.services import catalog


@pytest.fixture()
def db():
    return FakeFirestore()


@pytest.fixture()
def app(db):
    from shoestore.main import app

    app.dependency_overrides[get_db] = lambda: db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def login(app):
    """Makes every following request run as `principal`."""
    def _login(principal: Principal):
        app.dependency_overrides[get_principal] = lambda: principal
    return _login


@pytest.fixture()
def client(app):
    """Anonymous client: protected routes go through the real bearer-token check."""
    return TestClient(app)


@pytest.fixture()
def customer_client(app, login):
    login(CUSTOMER)
    return TestClient(app)


@pytest.fixture()
def admin_client(app, login):
    login(ADMIN)
    return TestClient(app)


@pytest.fixture()
def make_product(db):
    def _make(**overrides):
        data = {
            "name": "Air Runner",
            "description": "Lightweight running shoe",
            "price": 150.00,
            "category": "Running",
            "sizes": [8, 9, 10],
            "colors": ["Black", "White"],
            "stock_quantity": 45,
        }
        data.update(overrides)
        return catalog.create_product(db, ProductCreate(**data))
    return _make


@pytest.fixture()
def make_order(db):
    def _make(status=1, total_amount=100.0, order_date=None, user_id=CUSTOMER.uid, **overrides):
        order_id = uuid4().hex
        order_date = order_date or datetime.now(timezone.utc)
        doc = {
            "user_id": user_id,
            "customer_name": "Jane Doe",
            "customer_email": "jane@example.com",
            "order_date": order_date,
            "status": status,
            "items": [{
                "product_id": "p-1", "name": "Air Runner", "price": total_amount,
                "quantity": 1, "size": 9.0, "color": "Black",
            }],
            "subtotal": total_amount,
            "shipping_cost": 0.0,
            "tax": 0.0,
            "total_amount": total_amount,
            "shipping_address": "1 Main St, Springfield",
            "payment_method": "card",
            "tracking_number": None,
            "delivery_date": None,
            "created_at": order_date,
            "updated_at": order_date,
        }
        doc.update(overrides)
        order_repo.create(db, order_id, doc)
        return order_id
    return _make
