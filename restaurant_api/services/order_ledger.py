"""
Order Ledger

Owns the orders and answers the two relational queries of the system:

    - Enrichment: each order joined with its user and dish, resolved at
      read time. A reference that no longer resolves yields None.
    - Per-dish total: the dish's current price summed once per matching
      order.

Referential integrity is checked when an order is created only. Deleting
a user or a dish later does not cascade; the affected orders keep their
ids and simply enrich to None.

Author: Khalil Bannouri
Version: 1.0.0
"""

from restaurant_api.core.exceptions import NotFoundError
from restaurant_api.models import DishTotal, EnrichedOrder, Order
from restaurant_api.services.base import BaseStore
from restaurant_api.services.dish_catalog import DishCatalog
from restaurant_api.services.user_directory import UserDirectory


class OrderLedger(BaseStore[Order]):
    """
    Collection of orders with reference resolution.

    Args:
        users: Directory used to resolve ``user_id``
        dishes: Catalog used to resolve ``dish_id``
    """

    entity_name = "order"

    def __init__(self, users: UserDirectory, dishes: DishCatalog) -> None:
        super().__init__()
        self._users = users
        self._dishes = dishes

    def _enrich(self, order: Order) -> EnrichedOrder:
        return EnrichedOrder.from_order(
            order,
            user=self._users.lookup(order.user_id),
            dish=self._dishes.lookup(order.dish_id),
        )

    def list(self) -> list[EnrichedOrder]:
        """Return every order joined with its user and dish."""
        return [self._enrich(order) for order in self._records.values()]

    def get(self, order_id: int) -> EnrichedOrder:
        """
        Get one enriched order.

        Raises:
            NotFoundError: If no order has this id
        """
        order = self.lookup(order_id)
        if order is None:
            raise NotFoundError(self.entity_name, order_id)
        return self._enrich(order)

    def add(self, user_id: int, dish_id: int) -> Order:
        """
        Place an order.

        The user is checked before the dish.

        Raises:
            NotFoundError: With entity ``"user"`` or ``"dish"`` when the
                reference does not exist; no order is appended
        """
        if not self._users.exists(user_id):
            raise NotFoundError("user", user_id)
        if not self._dishes.exists(dish_id):
            raise NotFoundError("dish", dish_id)

        order_id = self._next_id()
        return self._insert(
            order_id,
            Order(id=order_id, user_id=user_id, dish_id=dish_id),
        )

    def total_for_dish(self, dish_id: int) -> DishTotal:
        """
        Sum the current price of a dish over every order for it.

        ``total = count(orders for dish_id) × price(dish_id)``; a deleted
        dish prices at 0, so its orders add nothing.
        """
        total = 0
        for order in self._records.values():
            if order.dish_id != dish_id:
                continue
            dish = self._dishes.lookup(order.dish_id)
            total += dish.price if dish is not None else 0
        return DishTotal(dish_id=dish_id, total=total)
