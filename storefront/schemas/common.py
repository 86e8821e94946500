# storefront/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base for API payloads: snake_case in Python, camelCase on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Standard envelope: {success, data?, message?}."""

    success: bool = True
    data: T | None = None
    message: str | None = None


class ListResponse(CamelModel, Generic[T]):
    """Envelope for collections: {success, count, data}."""

    success: bool = True
    count: int
    data: list[T]


class MessageResponse(CamelModel):
    success: bool = True
    message: str
