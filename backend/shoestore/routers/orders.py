from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query, status

from shoestore.config import get_db
from shoestore.core.auth import get_principal, require_admin
from shoestore.schemas.order import CheckoutBody, OrderOut, OrderStatistics, StatusUpdate
from shoestore.schemas.principal import Principal
from shoestore.services import orders as order_service
from shoestore.services import reporting

router = APIRouter(prefix="/orders", tags=["Orders"])
admin_router = APIRouter(
    prefix="/orders",
    tags=["Admin Orders"],
    dependencies=[Depends(require_admin)],
)


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(payload: CheckoutBody, principal: Principal = Depends(get_principal), db=Depends(get_db)):
    """Checkout: turns the caller's cart into an order and empties the cart."""
    return order_service.checkout(db, principal, payload)


@router.get("/my", response_model=List[OrderOut])
def list_my_orders(principal: Principal = Depends(get_principal), db=Depends(get_db)):
    return order_service.list_for_user(db, principal.uid)


# Static paths are declared before /{order_id} so they are not captured by it.
@admin_router.get("", response_model=List[OrderOut])
def admin_list_orders(db=Depends(get_db)):
    return order_service.get_all(db)


@admin_router.get("/statistics", response_model=OrderStatistics)
def admin_order_statistics(db=Depends(get_db)):
    return reporting.get_statistics(db)


@admin_router.get("/date-range", response_model=List[OrderOut])
def admin_orders_by_date_range(
    start_date: datetime = Query(..., description="Inclusive lower bound (ISO 8601)"),
    end_date: datetime = Query(..., description="Inclusive upper bound (ISO 8601)"),
    db=Depends(get_db),
):
    return order_service.get_by_date_range(db, start_date, end_date)


@admin_router.get("/status/{order_status}", response_model=List[OrderOut])
def admin_orders_by_status(order_status: int, db=Depends(get_db)):
    return order_service.get_by_status(db, order_status)


@admin_router.get("/{order_id}", response_model=OrderOut)
def admin_get_order(order_id: str, db=Depends(get_db)):
    return order_service.get_by_id(db, order_id)


@admin_router.patch("/{order_id}/status", response_model=OrderOut)
def admin_update_order_status(order_id: str, payload: StatusUpdate, db=Depends(get_db)):
    return order_service.update_status(
        db, order_id, payload.status, payload.tracking_number, payload.delivery_date
    )
