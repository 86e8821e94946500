# storefront/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered shopper or administrator.

    Role:
      - "user" | "admin"
      - anonymous shoppers have no row; they are identified by cart session only.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=50)

    email: str = Field(
        unique=True,
        index=True,
        description="Stored lower-cased",
    )

    password_hash: str

    avatar: str = ""

    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    is_verified: bool = True

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
