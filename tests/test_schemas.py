"""
Command schema tests.

Required-field checks and validator hooks run inside ``model_validate``.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from restaurant_api.core.exceptions import ValidationError
from restaurant_api.schemas import (
    DishCreate,
    DishPriceUpdate,
    DishSearch,
    OrderCreate,
    PhoneLookup,
    UserCreate,
)


class TestDishCreate:
    def test_name_stripped_and_price_parsed(self) -> None:
        command = DishCreate.model_validate({"name": "  Brik ", "price": "4"})
        assert (command.name, command.price) == ("Brik", 4.0)

    def test_first_missing_field_reported(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            DishCreate.model_validate({})
        assert exc_info.value.field == "name"

    def test_bad_price_raises_domain_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            DishCreate.model_validate({"name": "Soup", "price": 10 ** 400})
        assert exc_info.value.field == "price"

    def test_non_string_name_left_to_pydantic(self) -> None:
        with pytest.raises(PydanticValidationError) as exc_info:
            DishCreate.model_validate({"name": 123, "price": 5})
        assert exc_info.value.errors()[0]["loc"] == ("name",)

    def test_frozen(self) -> None:
        command = DishPriceUpdate.model_validate({"price": 3})
        with pytest.raises(PydanticValidationError):
            command.price = 4


class TestDishSearch:
    def test_blank_filters_ignored(self) -> None:
        assert DishSearch.from_query(name="  ", price="").is_empty

    def test_price_parsed(self) -> None:
        search = DishSearch.from_query(name="pizza", price="10")
        assert (search.name, search.price) == ("pizza", 10.0)

    def test_bad_price(self) -> None:
        with pytest.raises(ValidationError):
            DishSearch.from_query(price="cheap")


class TestUserCommands:
    def test_tel_alias(self) -> None:
        command = UserCreate.model_validate({"name": "Sami", "tel": "24600901"})
        assert command.phone == 24600901

    def test_lookup_missing_tel(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PhoneLookup.from_query(None)
        assert exc_info.value.field == "tel"


class TestOrderCreate:
    def test_aliases_and_string_ids(self) -> None:
        command = OrderCreate.model_validate({"userId": "3", "dishId": 2.0})
        assert (command.user_id, command.dish_id) == (3, 2)

    def test_invalid_dish_id_named(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            OrderCreate.model_validate({"userId": 1, "dishId": "x"})
        assert exc_info.value.field == "dishId"
