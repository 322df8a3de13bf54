"""
shoestore/schemas/cart.py - Pydantic models for Cart.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from shoestore.schemas.product import ProductOut


class AddItemBody(BaseModel):
    product_id: str = Field(..., description="Product ID (the same 'id' you see in /products).")
    quantity: int = Field(1, ge=1, le=10000, description="Quantity (>=1).")
    size: Optional[float] = Field(None, description="Requested size")
    color: Optional[str] = Field(None, description="Requested color")

    @field_validator("product_id")
    @classmethod
    def _clean_pid(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("product_id cannot be empty")
        return v


class UpdateItemBody(BaseModel):
    quantity: int = Field(..., ge=1, le=10000, description="New quantity (>=1).")


class CartItemOut(BaseModel):
    id: str = Field(..., description="Line item ID")
    product_id: str
    quantity: int
    size: Optional[float] = None
    color: Optional[str] = None
    # None when the product was deleted after it was added
    product: Optional[ProductOut] = None


class CartOut(BaseModel):
    user_id: str = Field(..., description="ID of the user who owns this cart")
    items: List[CartItemOut] = Field(default_factory=list, description="List of cart items")
    total_amount: float = Field(0, description="Sum of live price x quantity")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
