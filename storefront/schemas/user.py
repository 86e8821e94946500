# storefront/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from storefront.schemas.common import CamelModel

Role = Literal["user", "admin"]


class RegisterRequest(CamelModel):
    """
    Validation rules:
      - name cannot be empty or whitespace
      - password at least 6 characters, must equal confirm_password
        (checked in AuthService so the message matches the client form)
    """

    name: str = Field(max_length=50)
    email: EmailStr
    password: str
    confirm_password: str

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserRead(CamelModel):
    """Public profile returned to clients (never the password hash)."""

    id: uuid.UUID
    name: str
    email: str
    avatar: str
    role: Role
    is_verified: bool
    created_at: datetime


class AuthPayload(CamelModel):
    user: UserRead
    token: str
