import enum

from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


class OrderStatus(str, enum.Enum):
    # Only PENDING is assigned by the API, the others are display states
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


DEFAULT_PAYMENT_METHOD = "cash_on_delivery"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)
    total_amount = Column(Float, nullable=False)
    payment_method = Column(String, nullable=False, default=DEFAULT_PAYMENT_METHOD)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    # Shipping address details
    shipping_full_name = Column(String, nullable=False, default="")
    shipping_address = Column(String, nullable=False, default="")
    shipping_city = Column(String, nullable=False, default="")
    shipping_state = Column(String, nullable=False, default="")
    shipping_zip_code = Column(String, nullable=False, default="")
    shipping_phone = Column(String, nullable=False, default="")

    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )

class OrderItem(Base):
    __tablename__ = "order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    # Captured when the order is placed, later product edits do not touch them
    price = Column(Float, nullable=False)
    title = Column(String, nullable=False)

    order = relationship("Order", back_populates="items")
