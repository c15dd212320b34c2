"""
Pydantic Schemas for Commands and Responses

Commands are the typed form of each incoming request. They are validated
from the raw payload (JSON or form body, query string): a ``before`` model
hook checks the required fields, then ``before`` field hooks run the
validator, so a store never sees a missing, blank or malformed value.
The validator raises the domain ``ValidationError``, which is not a
``ValueError`` and therefore leaves ``model_validate`` unchanged; anything
pydantic itself rejects (a non-string name) surfaces as pydantic's own
``ValidationError``.

Responses mirror the domain records with the JSON field names clients use
(``userId``, ``dishId``).

Author: Khalil Bannouri
Version: 1.0.0
"""

from datetime import datetime
from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from restaurant_api.services.validator import (
    parse_id,
    parse_phone,
    parse_positive_number,
    require_fields,
)


# =============================================================================
# COMMAND SCHEMAS
# =============================================================================

class Command(BaseModel):
    """
    Base for request commands; immutable once validated.

    ``required_fields`` lists payload keys (aliases included) that must be
    present and non-blank, checked in order.
    """
    model_config = ConfigDict(frozen=True)

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            require_fields(data, cls.required_fields)
        return data


class DishCreate(Command):
    """Add a dish to the menu."""
    required_fields: ClassVar[tuple[str, ...]] = ("name", "price")

    name: str = Field(..., min_length=1, examples=["Pizza Margherita"])
    price: float = Field(..., gt=0, examples=[10])

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> float:
        return parse_positive_number(v, "price")


class DishPriceUpdate(Command):
    """Change the price of a dish."""
    required_fields: ClassVar[tuple[str, ...]] = ("price",)

    price: float = Field(..., gt=0, examples=[12.5])

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> float:
        return parse_positive_number(v, "price")


class DishSearch(Command):
    """Filter the menu by name substring and/or exact price."""
    name: Optional[str] = None
    price: Optional[float] = None

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Optional[float]:
        if v is None or str(v).strip() == "":
            return None
        return parse_positive_number(v, "price")

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.price is None

    @classmethod
    def from_query(
        cls,
        name: Optional[str] = None,
        price: Optional[str] = None,
    ) -> "DishSearch":
        return cls.model_validate({"name": name, "price": price})


class UserCreate(Command):
    """Register a customer."""
    required_fields: ClassVar[tuple[str, ...]] = ("name", "tel")

    name: str = Field(..., min_length=1, examples=["Ali"])
    phone: int = Field(..., alias="tel", examples=[24600900])

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Any) -> int:
        return parse_phone(v, "tel")


class PhoneLookup(Command):
    """Find a customer by phone number."""
    required_fields: ClassVar[tuple[str, ...]] = ("tel",)

    phone: int = Field(..., alias="tel")

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Any) -> int:
        return parse_phone(v, "tel")

    @classmethod
    def from_query(cls, tel: Optional[str]) -> "PhoneLookup":
        return cls.model_validate({"tel": tel})


class OrderCreate(Command):
    """Place an order for one dish."""
    required_fields: ClassVar[tuple[str, ...]] = ("userId", "dishId")

    user_id: int = Field(..., gt=0, alias="userId", examples=[1])
    dish_id: int = Field(..., gt=0, alias="dishId", examples=[2])

    @field_validator("user_id", mode="before")
    @classmethod
    def validate_user_id(cls, v: Any) -> int:
        return parse_id(v, "userId")

    @field_validator("dish_id", mode="before")
    @classmethod
    def validate_dish_id(cls, v: Any) -> int:
        return parse_id(v, "dishId")


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class DishResponse(BaseModel):
    """A dish as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float


class UserResponse(BaseModel):
    """A customer as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: int


class OrderResponse(BaseModel):
    """An order with its raw references."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int = Field(..., alias="userId")
    dish_id: int = Field(..., alias="dishId")


class EnrichedOrderResponse(OrderResponse):
    """An order joined with its user and dish (null when deleted)."""
    user: Optional[UserResponse] = None
    dish: Optional[DishResponse] = None


class DishTotalResponse(BaseModel):
    """Per-dish aggregation over all orders."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    dish_id: int = Field(..., alias="dishId")
    total: float


class MessageResponse(BaseModel):
    """Acknowledgement for deletions."""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    dishes: int
    users: int
    orders: int
    timestamp: datetime
