"""
Dish Catalog

Owns the menu: create, read, price update, delete and search.

Author: Khalil Bannouri
Version: 1.0.0
"""

from typing import Optional

from restaurant_api.core.exceptions import NotFoundError
from restaurant_api.models import Dish
from restaurant_api.services.base import BaseStore


class DishCatalog(BaseStore[Dish]):
    """
    Collection of dishes.

    Example:
        >>> catalog = DishCatalog()
        >>> pizza = catalog.add("Pizza Margherita", 10)
        >>> catalog.update_price(pizza.id, 12).price
        12
    """

    entity_name = "dish"

    def get(self, dish_id: int) -> Dish:
        """
        Get a dish by id.

        Raises:
            NotFoundError: If no dish has this id
        """
        dish = self.lookup(dish_id)
        if dish is None:
            raise NotFoundError(self.entity_name, dish_id)
        return dish

    def add(self, name: str, price: float) -> Dish:
        """Create a dish with the next free id and append it."""
        dish_id = self._next_id()
        return self._insert(dish_id, Dish(id=dish_id, name=name, price=price))

    def update_price(self, dish_id: int, price: float) -> Dish:
        """
        Change the price of an existing dish.

        Returns:
            The updated dish

        Raises:
            NotFoundError: If no dish has this id
        """
        dish = self.get(dish_id).with_price(price)
        self._records[dish_id] = dish
        return dish

    def remove(self, dish_id: int) -> Dish:
        """
        Delete a dish. Orders referencing it are left untouched.

        Raises:
            NotFoundError: If no dish has this id
        """
        if dish_id not in self._records:
            raise NotFoundError(self.entity_name, dish_id)
        return self._delete(dish_id)

    def clear(self) -> int:
        """Delete every dish and return how many were removed."""
        removed = len(self._records)
        self._records.clear()
        return removed

    def find_by_name_or_price(
        self,
        name: Optional[str] = None,
        price: Optional[float] = None,
    ) -> list[Dish]:
        """
        Search the menu.

        Both filters are optional and combine with AND:
            - name: case-insensitive substring of the dish name
            - price: exact price match

        Raises:
            NotFoundError: If no dish matches
        """
        results = self.list()

        if name:
            needle = name.casefold()
            results = [dish for dish in results if needle in dish.name.casefold()]

        if price is not None:
            results = [dish for dish in results if dish.price == price]

        if not results:
            raise NotFoundError(self.entity_name)
        return results
