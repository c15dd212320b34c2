"""
                        Services Module

Contains the in-memory data layer and its factory.

Services:
    - dish_catalog: the menu
    - user_directory: customers, unique by phone number
    - order_ledger: orders, enrichment and per-dish totals
    - validator: request payload checks

Usage:
    from restaurant_api.services import get_restaurant_data

    data = get_restaurant_data()
    order = data.orders.add(user_id=1, dish_id=2)
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache

from restaurant_api.core.config import get_settings
from restaurant_api.services.dish_catalog import DishCatalog
from restaurant_api.services.user_directory import UserDirectory
from restaurant_api.services.order_ledger import OrderLedger

logger = logging.getLogger(__name__)


# =============================================================================
# SAMPLE DATA
# =============================================================================

SAMPLE_DISHES = [
    ("Pizza Margherita", 10),
    ("Burger Maison", 8),
    ("Pâtes Carbonara", 12),
]

SAMPLE_USERS = [
    ("Ali", 24600900),
    ("Mohamed", 23129129),
    ("Karim", 25123123),
]

# (user_id, dish_id)
SAMPLE_ORDERS = [
    (2, 1),
    (3, 3),
    (1, 1),
]


@dataclass
class RestaurantData:
    """
    The three stores sharing one process lifetime.

    The ledger is wired to this instance's directory and catalog, so order
    enrichment always sees the current users and dishes.
    """
    dishes: DishCatalog = field(default_factory=DishCatalog)
    users: UserDirectory = field(default_factory=UserDirectory)
    orders: OrderLedger = field(init=False)

    def __post_init__(self) -> None:
        self.orders = OrderLedger(users=self.users, dishes=self.dishes)

    def seed(self) -> "RestaurantData":
        """Load the sample menu, customers and orders."""
        for name, price in SAMPLE_DISHES:
            self.dishes.add(name, price)
        for name, phone in SAMPLE_USERS:
            self.users.add(name, phone)
        for user_id, dish_id in SAMPLE_ORDERS:
            self.orders.add(user_id, dish_id)
        return self

    def counts(self) -> dict[str, int]:
        return {
            "dishes": len(self.dishes),
            "users": len(self.users),
            "orders": len(self.orders),
        }


@lru_cache()
def get_restaurant_data() -> RestaurantData:
    """
    Get the process-wide data stores.

    The instance is cached (singleton pattern) so every request works on the
    same collections. Sample data is loaded when ``SEED_SAMPLE_DATA`` is on.

    Returns:
        RestaurantData: The shared stores
    """
    settings = get_settings()
    data = RestaurantData()

    if settings.seed_sample_data:
        data.seed()
        logger.info(f"Loaded sample data: {data.counts()}")
    else:
        logger.info("Starting with empty stores")

    return data


def reset_restaurant_data() -> None:
    """
    Drop the cached stores.

    The next ``get_restaurant_data()`` call builds fresh ones. Useful for
    testing.
    """
    get_restaurant_data.cache_clear()
    logger.debug("Restaurant data cache cleared")


__all__ = [
    "get_restaurant_data",
    "reset_restaurant_data",
    "RestaurantData",
    "DishCatalog",
    "UserDirectory",
    "OrderLedger",
]
