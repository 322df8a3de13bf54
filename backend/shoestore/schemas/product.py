"""
shoestore/schemas/product.py - Pydantic models for the product catalog.

| Model          | Purpose |
|----------------|---------|
| ProductBase    | Fields shared by create/output |
| ProductCreate  | Admin create payload |
| ProductUpdate  | Admin partial update payload (every field optional) |
| StockUpdate    | `PATCH /admin/products/{id}/stock` payload (`set` or `adjust`) |
| ProductOut     | Catalog response, `in_stock` derived from `stock_quantity` |
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    """Common product fields."""
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field("", description="Detailed description of the product")
    price: float = Field(..., ge=0, description="Unit price")
    image_url: str = Field("", description="Main image URL")
    discount: float = Field(0, ge=0, le=100, description="Discount percentage (display only)")
    category: str = Field(..., min_length=1, description="Category name")
    sizes: List[float] = Field(default_factory=list, description="Available sizes")
    colors: List[str] = Field(default_factory=list, description="Available colors")
    featured: bool = Field(False, description="Shown on the storefront's featured list")
    stock_quantity: int = Field(0, ge=0, description="Units available for purchase")
    rating: float = Field(0, ge=0, le=5, description="Average rating")
    review_count: int = Field(0, ge=0, description="Number of reviews")


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Schema for updating product fields (admin). Omitted fields are left untouched."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None
    discount: Optional[float] = Field(None, ge=0, le=100)
    category: Optional[str] = Field(None, min_length=1)
    sizes: Optional[List[float]] = None
    colors: Optional[List[str]] = None
    featured: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)


class StockUpdate(BaseModel):
    quantity: int = Field(..., description="Absolute stock (mode=set) or delta (mode=adjust)")
    mode: Literal["set", "adjust"] = Field("set", description="set | adjust")


class ProductOut(ProductBase):
    id: str
    in_stock: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
