import pytest
from fastapi.testclient import TestClient

from restaurant_api.main import app
from restaurant_api.services import (
    RestaurantData,
    get_restaurant_data,
    reset_restaurant_data,
)


@pytest.fixture
def data() -> RestaurantData:
    """Stores loaded with the sample menu, customers and orders."""
    return RestaurantData().seed()


@pytest.fixture
def empty_data() -> RestaurantData:
    return RestaurantData()


@pytest.fixture
def client(data: RestaurantData):
    """
    Test client bound to the seeded stores.

    The dependency override keeps every test on its own fresh data.
    """
    reset_restaurant_data()
    app.dependency_overrides[get_restaurant_data] = lambda: data
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    reset_restaurant_data()
