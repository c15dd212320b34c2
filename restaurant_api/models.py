"""
Domain Models

Plain records held by the in-memory stores:
- Dish: a menu entry with a mutable price
- User: a customer identified by a unique 8-digit phone number
- Order: links one user to one dish
- EnrichedOrder: an order joined with its user and dish at read time

Records are frozen; the stores replace them instead of mutating, so a
record handed to a caller can never change the store behind its back.

Author: Khalil Bannouri
Version: 1.0.0
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Dish:
    """
    A dish on the menu.

    Attributes:
        id: Store-assigned identifier
        name: Display name (non-empty)
        price: Unit price (positive)
    """
    id: int
    name: str
    price: float

    def with_price(self, price: float) -> "Dish":
        """Return a copy of this dish with a new price."""
        return replace(self, price=price)


@dataclass(frozen=True)
class User:
    """
    A customer.

    Attributes:
        id: Store-assigned identifier
        name: Display name, matched case-insensitively on delete
        phone: Exactly 8 decimal digits, unique across users
    """
    id: int
    name: str
    phone: int


@dataclass(frozen=True)
class Order:
    """
    An order placed by a user for a dish.

    The referenced ids were valid when the order was created; they are not
    kept in sync with later deletions.
    """
    id: int
    user_id: int
    dish_id: int


@dataclass(frozen=True)
class EnrichedOrder:
    """
    An order merged with its resolved user and dish.

    ``user`` / ``dish`` are None when the reference no longer resolves
    (the user or dish was deleted after the order was placed).
    """
    id: int
    user_id: int
    dish_id: int
    user: Optional[User] = None
    dish: Optional[Dish] = None

    @classmethod
    def from_order(
        cls,
        order: Order,
        user: Optional[User],
        dish: Optional[Dish],
    ) -> "EnrichedOrder":
        return cls(
            id=order.id,
            user_id=order.user_id,
            dish_id=order.dish_id,
            user=user,
            dish=dish,
        )


@dataclass(frozen=True)
class DishTotal:
    """Sum of the current dish price over every order for that dish."""
    dish_id: int
    total: float
