# backend/models/users.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from database import Base


# Closed set of account roles, stored by value ("buyer" / "seller")
class UserRole(str, enum.Enum):
    BUYER = "buyer"
    SELLER = "seller"


# Represents a user account with authentication details and storefront role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    # Fixed at registration, no flow changes it afterwards
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    phone = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    avatar = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)
