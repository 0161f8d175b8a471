# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, CheckConstraint, func
from database import Base

DEFAULT_PRODUCT_IMAGE = "/images/default-product.png"

# Product listed by a seller.
# Only stock changes after creation: it is decremented when an order is placed.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    price = Column(Float, CheckConstraint("price >= 0", name="ck_products_price_non_negative"), nullable=False)
    category = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    image = Column(String, nullable=False, default=DEFAULT_PRODUCT_IMAGE)

    # Stock can never go below zero, reservations rely on this
    stock = Column(Integer, CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"), nullable=False, default=0)

    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
