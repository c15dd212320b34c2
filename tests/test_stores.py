"""
Store unit tests.

Dish catalog, user directory and order ledger: id assignment, lookups,
uniqueness, referential checks, enrichment and per-dish totals.
"""

import pytest

from restaurant_api.core.exceptions import ConflictError, NotFoundError
from restaurant_api.models import Dish, User
from restaurant_api.services import RestaurantData
from restaurant_api.services.dish_catalog import DishCatalog
from restaurant_api.services.user_directory import UserDirectory


# --- Dish Catalog ---


class TestDishCatalog:
    def test_first_id_is_one(self) -> None:
        catalog = DishCatalog()
        assert catalog.add("Pizza", 10).id == 1

    def test_new_id_greater_than_existing(self) -> None:
        catalog = DishCatalog()
        existing = [catalog.add(name, 5).id for name in ("a", "b", "c")]
        dish = catalog.add("d", 7)
        assert all(dish.id > other for other in existing)
        assert [d.id for d in catalog.list()].count(dish.id) == 1

    def test_delete_middle_then_add_uses_max_plus_one(self) -> None:
        catalog = DishCatalog()
        for name in ("a", "b", "c"):
            catalog.add(name, 5)
        catalog.remove(2)
        assert catalog.add("d", 5).id == 4

    def test_deleted_max_id_not_reused(self) -> None:
        catalog = DishCatalog()
        catalog.add("a", 5)
        last = catalog.add("b", 5)
        catalog.remove(last.id)
        assert catalog.add("c", 5).id == last.id + 1

    def test_id_after_clear_continues_from_highest_issued(self, data: RestaurantData) -> None:
        data.dishes.clear()
        assert data.dishes.add("Ojja", 9).id == 4

    def test_get(self, data: RestaurantData) -> None:
        assert data.dishes.get(1) == Dish(id=1, name="Pizza Margherita", price=10)

    def test_get_missing(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            data.dishes.get(99)
        assert exc_info.value.entity == "dish"
        assert exc_info.value.id == 99

    def test_update_price(self, data: RestaurantData) -> None:
        updated = data.dishes.update_price(2, 9.5)
        assert updated.price == 9.5
        assert data.dishes.get(2).price == 9.5
        assert updated.name == "Burger Maison"

    def test_update_price_missing(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError):
            data.dishes.update_price(42, 3)

    def test_remove_compacts(self, data: RestaurantData) -> None:
        data.dishes.remove(1)
        assert [d.id for d in data.dishes.list()] == [2, 3]

    def test_remove_missing(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError):
            data.dishes.remove(7)

    def test_clear(self, data: RestaurantData) -> None:
        assert data.dishes.clear() == 3
        assert data.dishes.list() == []

    def test_list_returns_copy(self, data: RestaurantData) -> None:
        listed = data.dishes.list()
        listed.clear()
        assert len(data.dishes) == 3

    def test_list_idempotent(self, data: RestaurantData) -> None:
        assert data.dishes.list() == data.dishes.list()


class TestDishSearch:
    def test_name_substring_case_insensitive(self, data: RestaurantData) -> None:
        results = data.dishes.find_by_name_or_price(name="PIZZA")
        assert [d.name for d in results] == ["Pizza Margherita"]

    def test_price_exact(self, data: RestaurantData) -> None:
        results = data.dishes.find_by_name_or_price(price=12)
        assert [d.id for d in results] == [3]

    def test_filters_compose(self, data: RestaurantData) -> None:
        data.dishes.add("Pizza Napoli", 12)
        results = data.dishes.find_by_name_or_price(name="pizza", price=12)
        assert [d.name for d in results] == ["Pizza Napoli"]

    def test_no_match(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError):
            data.dishes.find_by_name_or_price(name="sushi")

    def test_no_filters_returns_all(self, data: RestaurantData) -> None:
        assert len(data.dishes.find_by_name_or_price()) == 3


# --- User Directory ---


class TestUserDirectory:
    def test_add(self) -> None:
        users = UserDirectory()
        user = users.add("Ali", 24600900)
        assert user == User(id=1, name="Ali", phone=24600900)

    def test_duplicate_phone_conflict(self, data: RestaurantData) -> None:
        before = len(data.users)
        with pytest.raises(ConflictError) as exc_info:
            data.users.add("Someone", 24600900)
        assert exc_info.value.field == "phone"
        assert len(data.users) == before

    def test_find_by_phone(self, data: RestaurantData) -> None:
        assert data.users.find_by_phone(23129129).name == "Mohamed"

    def test_find_by_phone_missing(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError):
            data.users.find_by_phone(11111111)

    def test_remove_by_name_case_insensitive(self, data: RestaurantData) -> None:
        removed = data.users.remove_by_name("kArIm")
        assert removed.id == 3
        assert [u.name for u in data.users.list()] == ["Ali", "Mohamed"]

    def test_remove_by_name_missing(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError):
            data.users.remove_by_name("Nobody")

    def test_phone_free_after_delete(self, data: RestaurantData) -> None:
        data.users.remove_by_name("Ali")
        user = data.users.add("Ali Bis", 24600900)
        assert user.id == 4


# --- Order Ledger ---


class TestOrderLedger:
    def test_enrichment(self, data: RestaurantData) -> None:
        order = data.orders.get(1)
        assert order.user_id == 2
        assert order.dish_id == 1
        assert order.user == User(id=2, name="Mohamed", phone=23129129)
        assert order.dish == Dish(id=1, name="Pizza Margherita", price=10)

    def test_list_enriched(self, data: RestaurantData) -> None:
        orders = data.orders.list()
        assert [o.id for o in orders] == [1, 2, 3]
        assert all(o.user is not None and o.dish is not None for o in orders)

    def test_list_idempotent(self, data: RestaurantData) -> None:
        assert data.orders.list() == data.orders.list()

    def test_get_missing(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            data.orders.get(10)
        assert exc_info.value.entity == "order"

    def test_add(self, data: RestaurantData) -> None:
        order = data.orders.add(user_id=1, dish_id=2)
        assert order.id == 4
        assert [o.id for o in data.orders.list()].count(4) == 1

    def test_add_unknown_user(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            data.orders.add(user_id=99, dish_id=1)
        assert exc_info.value.entity == "user"
        assert len(data.orders) == 3

    def test_add_unknown_dish(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            data.orders.add(user_id=1, dish_id=99)
        assert exc_info.value.entity == "dish"
        assert len(data.orders) == 3

    def test_user_checked_before_dish(self, data: RestaurantData) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            data.orders.add(user_id=99, dish_id=99)
        assert exc_info.value.entity == "user"

    def test_dangling_references_enrich_to_none(self, data: RestaurantData) -> None:
        data.users.remove_by_name("Mohamed")
        data.dishes.remove(1)
        order = data.orders.get(1)
        assert order.user_id == 2
        assert order.user is None
        assert order.dish is None

    def test_total_for_dish(self, data: RestaurantData) -> None:
        # Sample orders reference dishes [1, 3, 1]; dish 1 costs 10
        total = data.orders.total_for_dish(1)
        assert total.dish_id == 1
        assert total.total == 20

    def test_total_uses_current_price(self, data: RestaurantData) -> None:
        data.dishes.update_price(1, 11)
        assert data.orders.total_for_dish(1).total == 22

    def test_total_for_deleted_dish_is_zero(self, data: RestaurantData) -> None:
        data.dishes.remove(1)
        assert data.orders.total_for_dish(1).total == 0

    def test_total_without_orders(self, data: RestaurantData) -> None:
        assert data.orders.total_for_dish(2).total == 0
        assert data.orders.total_for_dish(500).total == 0


def test_empty_stores(empty_data: RestaurantData) -> None:
    assert empty_data.counts() == {"dishes": 0, "users": 0, "orders": 0}
    assert empty_data.orders.list() == []
