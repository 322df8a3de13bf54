"""
shoestore/routers/products.py - Product catalog endpoints.

Public:  GET /products, /products/featured, /products/category/{category}, /products/{id}
Admin:   /admin/products CRUD and PATCH /admin/products/{id}/stock
"""
from typing import List

from fastapi import APIRouter, Depends, status

from shoestore.config import get_db
from shoestore.core.auth import require_admin
from shoestore.schemas.product import ProductCreate, ProductOut, ProductUpdate, StockUpdate
from shoestore.services import catalog

router = APIRouter(prefix="/products", tags=["Products"])
admin_router = APIRouter(
    prefix="/products",
    tags=["Admin: Products"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[ProductOut], summary="List Products")
def list_products(db=Depends(get_db)):
    return catalog.list_products(db)


@router.get("/featured", response_model=List[ProductOut], summary="Featured Products")
def list_featured(db=Depends(get_db)):
    return catalog.list_featured(db)


@router.get("/category/{category}", response_model=List[ProductOut], summary="Products by Category")
def list_by_category(category: str, db=Depends(get_db)):
    return catalog.list_by_category(db, category)


@router.get("/{product_id}", response_model=ProductOut, summary="Get Product")
def get_product(product_id: str, db=Depends(get_db)):
    return catalog.get_product(db, product_id)


# ---------- ADMIN ----------
@admin_router.get("", response_model=List[ProductOut])
def admin_list_products(db=Depends(get_db)):
    return catalog.list_products(db)


@admin_router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def admin_create_product(payload: ProductCreate, db=Depends(get_db)):
    return catalog.create_product(db, payload)


@admin_router.get("/featured", response_model=List[ProductOut])
def admin_list_featured(db=Depends(get_db)):
    return catalog.list_featured(db)


@admin_router.get("/{product_id}", response_model=ProductOut)
def admin_get_product(product_id: str, db=Depends(get_db)):
    return catalog.get_product(db, product_id)


@admin_router.put("/{product_id}", response_model=ProductOut)
def admin_update_product(product_id: str, payload: ProductUpdate, db=Depends(get_db)):
    return catalog.update_product(db, product_id, payload)


@admin_router.delete("/{product_id}")
def admin_delete_product(product_id: str, db=Depends(get_db)):
    catalog.delete_product(db, product_id)
    return {"message": "Product deleted"}


@admin_router.patch("/{product_id}/stock", response_model=ProductOut)
def admin_update_stock(product_id: str, payload: StockUpdate, db=Depends(get_db)):
    return catalog.update_stock(db, product_id, payload.quantity, payload.mode)
