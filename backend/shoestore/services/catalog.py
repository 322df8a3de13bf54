# shoestore/services/catalog.py
"""
Product catalog: CRUD, featured/category listings and stock updates.

Stock updates are a plain read-then-write with no transaction: two concurrent
writers can overwrite each other (lost update). Orders keep their own copy of
name/price, so deleting a product never rewrites history.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from shoestore.core.errors import NotFound, ValidationError
from shoestore.repositories import products as product_repo
from shoestore.schemas.product import ProductCreate, ProductOut, ProductUpdate

logger = logging.getLogger("shoestore.catalog")


def unit_price(product: Dict[str, Any]) -> Decimal:
    return Decimal(str(product.get("price", 0) or 0))


def to_out(product: Dict[str, Any]) -> ProductOut:
    stock = int(product.get("stock_quantity", 0) or 0)
    return ProductOut(
        id=product["id"],
        name=product.get("name", ""),
        description=product.get("description", "") or "",
        price=float(product.get("price", 0) or 0),
        image_url=product.get("image_url", "") or "",
        discount=float(product.get("discount", 0) or 0),
        category=product.get("category", ""),
        sizes=product.get("sizes") or [],
        colors=product.get("colors") or [],
        featured=bool(product.get("featured", False)),
        stock_quantity=stock,
        rating=float(product.get("rating", 0) or 0),
        review_count=int(product.get("review_count", 0) or 0),
        in_stock=stock > 0,
        created_at=product.get("created_at"),
        updated_at=product.get("updated_at"),
    )


def fetch(db, product_id: str) -> Dict[str, Any]:
    product = product_repo.get(db, product_id)
    if product is None:
        raise NotFound("Product not found")
    return product


def list_products(db) -> List[ProductOut]:
    return [to_out(p) for p in product_repo.list_all(db)]


def get_product(db, product_id: str) -> ProductOut:
    return to_out(fetch(db, product_id))


def list_featured(db) -> List[ProductOut]:
    return [to_out(p) for p in product_repo.list_where(db, "featured", True)]


def list_by_category(db, category: str) -> List[ProductOut]:
    return [to_out(p) for p in product_repo.list_where(db, "category", category)]


def create_product(db, payload: ProductCreate) -> ProductOut:
    now = datetime.now(timezone.utc)
    data = payload.model_dump()
    data.update(created_at=now, updated_at=now)
    created = product_repo.create(db, data)
    logger.info("Product %s created (%s)", created["id"], created["name"])
    return to_out(created)


def update_product(db, product_id: str, payload: ProductUpdate) -> ProductOut:
    current = fetch(db, product_id)
    patch = payload.model_dump(exclude_unset=True)
    # explicit nulls mean "leave as is"
    patch = {k: v for k, v in patch.items() if v is not None}
    if not patch:
        return to_out(current)
    patch["updated_at"] = datetime.now(timezone.utc)
    product_repo.update(db, product_id, patch)
    logger.info("Product %s updated: %s", product_id, sorted(patch))
    return to_out({**current, **patch})


def delete_product(db, product_id: str) -> None:
    fetch(db, product_id)
    product_repo.delete(db, product_id)
    logger.info("Product %s deleted", product_id)


def update_stock(db, product_id: str, quantity: int, mode: str = "set") -> ProductOut:
    """
    mode="set": stock becomes `quantity`.
    mode="adjust": `quantity` is added (may be negative).
    """
    if mode not in ("set", "adjust"):
        raise ValidationError(f"Unknown stock update mode: {mode}")
    current = fetch(db, product_id)
    stock = int(current.get("stock_quantity", 0) or 0)
    new_stock = quantity if mode == "set" else stock + quantity
    if new_stock < 0:
        raise ValidationError("Stock quantity cannot be negative")

    patch = {"stock_quantity": new_stock, "updated_at": datetime.now(timezone.utc)}
    product_repo.update(db, product_id, patch)
    logger.info("Product %s stock %s -> %s", product_id, stock, new_stock)
    return to_out({**current, **patch})
