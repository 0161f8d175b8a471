from datetime import datetime
from pydantic import Field
from typing import List, Optional

from schemas.base import ORMBase

# Request schema for adding an item to the cart
class CartAddItem(ORMBase):
    product_id: int
    quantity: int = Field(default=1, ge=1)

# Request schema for updating cart item quantity
class CartUpdateItem(ORMBase):
    quantity: int = Field(ge=1)

# Response schema for a single cart line item, priced from the live product
class CartItemOut(ORMBase):
    product_id: int
    quantity: int
    added_at: Optional[datetime] = None
    title: str
    price: float
    image: Optional[str] = None
    stock: int
    line_total: float

# Response schema for the entire cart summary
class CartOut(ORMBase):
    id: Optional[int] = None
    user_id: int
    items: List[CartItemOut] = []
    total_items: int = 0
    total_amount: float = 0.0
    updated_at: Optional[datetime] = None

class CartAddResponse(ORMBase):
    message: str
    cart: CartOut
