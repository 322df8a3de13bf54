"""
shoestore/routers/carts.py
Cart endpoints (logged-in users, guests included): get, add, update quantity, remove one, clear.

Every mutation recomputes `total_amount` from the current catalog prices.
GET returns the cart as last saved and creates an empty one on first access.
"""
from fastapi import APIRouter, Depends

from shoestore.config import get_db
from shoestore.core.auth import get_principal
from shoestore.schemas.cart import AddItemBody, CartOut, UpdateItemBody
from shoestore.schemas.principal import Principal
from shoestore.services import cart as cart_service

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartOut)
def get_cart(principal: Principal = Depends(get_principal), db=Depends(get_db)):
    return cart_service.get_or_create_cart(db, principal.uid)


@router.post("/items", response_model=CartOut)
def add_to_cart(payload: AddItemBody, principal: Principal = Depends(get_principal), db=Depends(get_db)):
    return cart_service.add_item(
        db, principal.uid, payload.product_id, payload.quantity, payload.size, payload.color
    )


@router.put("/items/{item_id}", response_model=CartOut)
def update_cart_item(
    item_id: str,
    payload: UpdateItemBody,
    principal: Principal = Depends(get_principal),
    db=Depends(get_db),
):
    return cart_service.update_item(db, principal.uid, item_id, payload.quantity)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_cart_item(item_id: str, principal: Principal = Depends(get_principal), db=Depends(get_db)):
    """Remove one line by its item id. Unknown ids leave the cart unchanged."""
    return cart_service.remove_item(db, principal.uid, item_id)


@router.delete("", response_model=CartOut)
def clear_cart(principal: Principal = Depends(get_principal), db=Depends(get_db)):
    return cart_service.clear(db, principal.uid)
