# shoestore/services/orders.py
"""
Orders are written once, at checkout, and afterwards only `status`,
`tracking_number` and `delivery_date` change. Line items are `OrderLine`
snapshots (name and price as they were at checkout).

Status moves are deliberately unrestricted: any of the four statuses may
follow any other, Delivered -> Processing included.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

from shoestore.config import settings
from shoestore.core.errors import InsufficientStock, NotFound, ValidationError
from shoestore.repositories import carts as cart_repo
from shoestore.repositories import orders as order_repo
from shoestore.repositories import products as product_repo
from shoestore.repositories import users as user_repo
from shoestore.schemas.order import CheckoutBody, OrderLine, OrderOut, OrderStatus
from shoestore.schemas.principal import Principal
from shoestore.services.cart import quantize
from shoestore.services.catalog import unit_price

logger = logging.getLogger("shoestore.orders")


def parse_status(value: Any) -> OrderStatus:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid order status: {value}")
    try:
        return OrderStatus(int(value))
    except (TypeError, ValueError):
        allowed = ", ".join(f"{s.value} ({s.name.title()})" for s in OrderStatus)
        raise ValidationError(f"Invalid order status: {value}. Allowed: {allowed}")


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def to_out(doc: Dict[str, Any]) -> OrderOut:
    # orders written before currency was recorded are in the store currency
    return OrderOut(**{"currency": settings.currency, **doc})


def get_all(db) -> List[OrderOut]:
    return [to_out(d) for d in order_repo.list_all(db)]


def get_by_id(db, order_id: str) -> OrderOut:
    doc = order_repo.get(db, order_id)
    if doc is None:
        raise NotFound("Order not found")
    return to_out(doc)


def get_by_status(db, status: Any) -> List[OrderOut]:
    status = parse_status(status)
    return [to_out(d) for d in order_repo.list_by_field(db, "status", int(status))]


def get_by_date_range(db, start: datetime, end: datetime) -> List[OrderOut]:
    """Orders with start <= order_date <= end, newest first. Naive datetimes are UTC."""
    start, end = _as_utc(start), _as_utc(end)
    if start > end:
        raise ValidationError("start_date must not be after end_date")
    return [to_out(d) for d in order_repo.list_between(db, start, end)]


def list_for_user(db, uid: str) -> List[OrderOut]:
    return [to_out(d) for d in order_repo.list_by_field(db, "user_id", uid)]


def update_status(db, order_id: str, status: Any,
                  tracking_number: Optional[str] = None,
                  delivery_date: Optional[datetime] = None) -> OrderOut:
    doc = order_repo.get(db, order_id)
    if doc is None:
        raise NotFound("Order not found")
    new_status = parse_status(status)

    patch: Dict[str, Any] = {"status": int(new_status), "updated_at": datetime.now(timezone.utc)}
    if tracking_number is not None:
        patch["tracking_number"] = tracking_number
    if delivery_date is not None:
        patch["delivery_date"] = _as_utc(delivery_date)

    order_repo.update(db, order_id, patch)
    logger.info("Order %s status %s -> %s", order_id, doc.get("status"), int(new_status))
    return to_out({**doc, **patch})


def calc_totals(lines: List[OrderLine]) -> Dict[str, float]:
    """
    subtotal = Σ price × quantity; flat shipping waived from the free-shipping threshold;
    tax on the subtotal.
    """
    subtotal = quantize(sum((Decimal(str(line.price)) * line.quantity for line in lines), Decimal("0")))
    shipping = Decimal("0") if subtotal >= settings.free_shipping_threshold else settings.shipping_flat_rate
    shipping = quantize(shipping)
    tax = quantize(subtotal * settings.tax_rate)
    return {
        "subtotal": float(subtotal),
        "shipping_cost": float(shipping),
        "tax": float(tax),
        "total_amount": float(subtotal + shipping + tax),
    }


def checkout(db, principal: Principal, body: CheckoutBody) -> OrderOut:
    """
    Converts the caller's cart into an Order, decrements stock and empties the cart.
    Stock is read and written without a transaction.
    """
    uid = principal.uid
    cart = cart_repo.get(db, uid)
    items = (cart or {}).get("items") or []
    if not items:
        raise ValidationError("Cart is empty")

    customer_email = body.customer_email or principal.email
    if not customer_email:
        raise ValidationError("customer_email is required")
    profile = user_repo.get(db, uid) or {}
    shipping_address = body.shipping_address or profile.get("shipping_address")
    if not shipping_address:
        raise ValidationError("shipping_address is required")
    customer_name = body.customer_name or profile.get("display_name") or principal.display_name or "Customer"

    products: Dict[str, Dict[str, Any]] = {}
    wanted: Counter = Counter()
    for it in items:
        pid = it["product_id"]
        if pid not in products:
            product = product_repo.get(db, pid)
            if product is None:
                raise NotFound(f"Product {pid} no longer exists")
            products[pid] = product
        wanted[pid] += int(it["quantity"])

    for pid, qty in wanted.items():
        if int(products[pid].get("stock_quantity", 0) or 0) < qty:
            raise InsufficientStock(f"Not enough stock available for {products[pid].get('name', pid)}")

    lines = [
        OrderLine(
            product_id=it["product_id"],
            name=products[it["product_id"]].get("name", ""),
            price=float(unit_price(products[it["product_id"]])),
            quantity=int(it["quantity"]),
            size=it.get("size"),
            color=it.get("color"),
        )
        for it in items
    ]

    now = datetime.now(timezone.utc)
    order_id = uuid4().hex
    doc = {
        "user_id": uid,
        "customer_name": customer_name,
        "customer_email": customer_email,
        "order_date": now,
        "status": int(OrderStatus.PROCESSING),
        "items": [line.model_dump() for line in lines],
        **calc_totals(lines),
        "currency": settings.currency,
        "shipping_address": shipping_address,
        "payment_method": body.payment_method,
        "tracking_number": None,
        "delivery_date": None,
        "created_at": now,
        "updated_at": now,
    }
    order_repo.create(db, order_id, doc)

    for pid, qty in wanted.items():
        remaining = int(products[pid].get("stock_quantity", 0) or 0) - qty
        product_repo.update(db, pid, {"stock_quantity": remaining, "updated_at": now})

    cart["items"] = []
    cart["total_amount"] = 0.0
    cart["updated_at"] = now
    cart_repo.save(db, uid, cart)

    logger.info("Order %s placed by %s (total %s)", order_id, uid, doc["total_amount"])
    return to_out({**doc, "id": order_id})
