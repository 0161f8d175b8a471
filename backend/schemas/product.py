# backend/schemas/product.py
from datetime import datetime
from pydantic import Field, field_validator
from typing import Optional

from schemas.base import ORMBase, strip_optional, strip_required


# Schema for creating a new product (sellers only)
class ProductCreate(ORMBase):
    title: str
    price: float = Field(ge=0, allow_inf_nan=False)
    category: str
    description: Optional[str] = None
    image: Optional[str] = None
    stock: int = Field(default=0, ge=0)

    @field_validator("title", "category")
    @classmethod
    def not_blank(cls, value):
        return strip_required(value)

    @field_validator("description", "image")
    @classmethod
    def strip_text(cls, value):
        return strip_optional(value)


# Full product representation including ID
class ProductOut(ORMBase):
    id: int
    title: str
    price: float
    category: str
    description: str = ""
    image: Optional[str] = None
    # Absolute URL for ``image``, filled in by the route
    image_url: Optional[str] = None
    stock: int
    seller_id: int
    rating: float = 0
    created_at: Optional[datetime] = None
