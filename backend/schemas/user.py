from datetime import datetime
from pydantic import Field, field_validator
from typing import Optional

from models.users import UserRole
from schemas.base import Email, ORMBase, strip_optional, strip_required

# Schema for user authentication credentials
class UserLogin(ORMBase):
    email: Email
    password: str = Field(min_length=1)

# Schema for user registration requests
class UserCreate(ORMBase):
    email: Email
    password: str = Field(min_length=6, description="At least 6 characters")
    name: str
    role: UserRole
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value)

    @field_validator("phone", "address")
    @classmethod
    def strip_contact(cls, value):
        return strip_optional(value)

# Schema for partial profile updates, only fields that are sent change
class ProfileUpdate(ORMBase):
    name: Optional[str] = None
    email: Optional[Email] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value) if value is not None else value

    @field_validator("phone", "address")
    @classmethod
    def strip_contact(cls, value):
        return strip_optional(value)

# Output schema for user profile details, never carries the password hash
class UserResponse(ORMBase):
    id: int
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Register / login response with a bearer token
class AuthResponse(ORMBase):
    message: str
    user: UserResponse
    token: str

class MeResponse(ORMBase):
    user: UserResponse

class ProfileResponse(ORMBase):
    message: str
    user: UserResponse
