"""
Core module initialization.
Exports configuration, logging utilities and domain exceptions.
"""

from restaurant_api.core.config import get_settings, Settings, EnvironmentMode
from restaurant_api.core.exceptions import (
    RestaurantError,
    ValidationError,
    NotFoundError,
    ConflictError,
)

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "RestaurantError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
