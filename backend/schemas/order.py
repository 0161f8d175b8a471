from datetime import datetime
from pydantic import Field
from typing import List, Optional

from schemas.base import ORMBase


# One requested order line. ``price`` is accepted for client compatibility,
# the stored price is always the product's price at order time.
class OrderItemIn(ORMBase):
    product_id: int
    quantity: int = Field(ge=1)
    price: Optional[float] = None


class ShippingAddress(ORMBase):
    full_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    phone: str = ""


# Input schema for placing an order
class OrderCreatePayload(ORMBase):
    items: List[OrderItemIn]
    total_amount: float = Field(ge=0, allow_inf_nan=False)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: Optional[str] = None


# Output schema for an individual order line item (order-time snapshot)
class OrderItemOut(ORMBase):
    product_id: int
    quantity: int
    price: float
    title: str
    line_total: float


# Output schema representing the full order details
class OrderResponse(ORMBase):
    id: int
    user_id: int
    status: str
    total_amount: float
    payment_method: str
    shipping_address: ShippingAddress
    items: List[OrderItemOut]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderCreateResponse(ORMBase):
    message: str
    order: OrderResponse
