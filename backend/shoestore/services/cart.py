# shoestore/services/cart.py
"""
One cart per user, stored under `carts/{uid}`.

Each line holds `id`, `product_id`, `quantity`, `size` and `color`. Lines with the
same (product_id, size, color) are merged on add. After every mutation
`total_amount` is recomputed from the *current* catalog price of each product,
so a price change in the catalog shows up on the next cart mutation.

Stock is checked against the requested quantity only: merging into an existing
line does not re-check the combined quantity, and nothing is reserved.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

from shoestore.core.errors import InsufficientStock, NotFound, ValidationError
from shoestore.repositories import carts as cart_repo
from shoestore.repositories import products as product_repo
from shoestore.schemas.cart import CartItemOut, CartOut
from shoestore.services.catalog import to_out as product_to_out
from shoestore.services.catalog import unit_price

logger = logging.getLogger("shoestore.cart")

CENTS = Decimal("0.01")

Catalog = Dict[str, Optional[Dict[str, Any]]]


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


# ---------- tiny utils ----------
def _now() -> datetime:
    return datetime.now(timezone.utc)


def _size(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _check_quantity(quantity: int) -> None:
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1")


def _check_stock(product: Dict[str, Any], quantity: int) -> None:
    if int(product.get("stock_quantity", 0) or 0) < quantity:
        raise InsufficientStock("Not enough stock available")


def _empty_cart(uid: str) -> Dict[str, Any]:
    now = _now()
    return {"user_id": uid, "items": [], "total_amount": 0.0, "created_at": now, "updated_at": now}


def _load_or_404(db, uid: str) -> Dict[str, Any]:
    cart = cart_repo.get(db, uid)
    if cart is None:
        raise NotFound("Cart not found")
    return cart


# ---------- totals ----------
def load_catalog(db, items: List[Dict[str, Any]]) -> Catalog:
    """Current product documents for every product referenced by `items` (None if deleted)."""
    catalog: Catalog = {}
    for it in items:
        pid = it.get("product_id")
        if pid and pid not in catalog:
            catalog[pid] = product_repo.get(db, pid)
    return catalog


def compute_total(items: List[Dict[str, Any]], catalog: Catalog) -> Decimal:
    """Σ live price × quantity; lines whose product is gone count as 0."""
    total = Decimal("0")
    for it in items:
        product = catalog.get(it.get("product_id"))
        if not product:
            continue
        total += unit_price(product) * int(it.get("quantity", 0) or 0)
    return quantize(total)


def _to_out(cart: Dict[str, Any], catalog: Catalog) -> CartOut:
    items_out = []
    for it in cart.get("items", []):
        product = catalog.get(it.get("product_id"))
        items_out.append(CartItemOut(
            id=it["id"],
            product_id=it["product_id"],
            quantity=int(it.get("quantity", 0)),
            size=it.get("size"),
            color=it.get("color"),
            product=product_to_out(product) if product else None,
        ))
    return CartOut(
        user_id=cart["user_id"],
        items=items_out,
        total_amount=float(cart.get("total_amount", 0) or 0),
        created_at=cart.get("created_at"),
        updated_at=cart.get("updated_at"),
    )


def _save_recomputed(db, uid: str, cart: Dict[str, Any], catalog: Optional[Catalog] = None) -> CartOut:
    if catalog is None:
        catalog = load_catalog(db, cart["items"])
    cart["total_amount"] = float(compute_total(cart["items"], catalog))
    cart["updated_at"] = _now()
    cart_repo.save(db, uid, cart)
    return _to_out(cart, catalog)


# ---------- operations ----------
def get_or_create_cart(db, uid: str) -> CartOut:
    """Returns the stored cart (total as of the last mutation); creates an empty one on first access."""
    cart = cart_repo.get(db, uid)
    if cart is None:
        cart = _empty_cart(uid)
        cart_repo.save(db, uid, cart)
        logger.info("Created cart for %s", uid)
    return _to_out(cart, load_catalog(db, cart["items"]))


def add_item(db, uid: str, product_id: str, quantity: int,
             size: Optional[float] = None, color: Optional[str] = None) -> CartOut:
    _check_quantity(quantity)
    product = product_repo.get(db, product_id)
    if product is None:
        raise NotFound("Product not found")
    try:
        _check_stock(product, quantity)
    except InsufficientStock:
        logger.warning("Add rejected for %s: product %s has %s left, %s requested",
                       uid, product_id, product.get("stock_quantity", 0), quantity)
        raise

    cart = cart_repo.get(db, uid) or _empty_cart(uid)
    items: List[Dict[str, Any]] = cart["items"]
    size = _size(size)

    for it in items:
        if it.get("product_id") == product_id and it.get("size") == size and it.get("color") == color:
            it["quantity"] = int(it.get("quantity", 0)) + quantity
            break
    else:
        items.append({
            "id": uuid4().hex,
            "product_id": product_id,
            "quantity": quantity,
            "size": size,
            "color": color,
        })

    catalog = load_catalog(db, items)
    catalog[product_id] = product
    out = _save_recomputed(db, uid, cart, catalog)
    logger.info("Cart %s: added %s x %s (total %s)", uid, quantity, product_id, out.total_amount)
    return out


def update_item(db, uid: str, item_id: str, quantity: int) -> CartOut:
    _check_quantity(quantity)
    cart = _load_or_404(db, uid)
    item = next((it for it in cart["items"] if it.get("id") == item_id), None)
    if item is None:
        raise NotFound("Item not found in cart")

    product = product_repo.get(db, item["product_id"])
    if product is None:
        raise NotFound("Product not found")
    _check_stock(product, quantity)

    item["quantity"] = quantity
    catalog = load_catalog(db, cart["items"])
    catalog[item["product_id"]] = product
    return _save_recomputed(db, uid, cart, catalog)


def remove_item(db, uid: str, item_id: str) -> CartOut:
    """Removing an item that is not in the cart is not an error."""
    cart = _load_or_404(db, uid)
    cart["items"] = [it for it in cart["items"] if it.get("id") != item_id]
    return _save_recomputed(db, uid, cart)


def clear(db, uid: str) -> CartOut:
    cart = _load_or_404(db, uid)
    cart["items"] = []
    cart["total_amount"] = 0.0
    cart["updated_at"] = _now()
    cart_repo.save(db, uid, cart)
    logger.info("Cart %s cleared", uid)
    return _to_out(cart, {})
