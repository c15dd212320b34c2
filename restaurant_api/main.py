"""
FastAPI Application Entry Point

Restaurant Ordering API - in-memory dishes, users and orders.

Each route parses the request into a typed command, calls one store
operation and serializes the result. Domain errors are turned into
responses by the exception handlers at the bottom of this module.

Endpoints:
    - /dishes: menu CRUD and search
    - /users: customers, lookup by phone, delete by name
    - /orders: enriched orders and per-dish totals
    - GET /health: System health check

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Optional, TypeVar
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError as PydanticValidationError

from restaurant_api.core.config import get_settings, setup_logging
from restaurant_api.core.exceptions import RestaurantError, ValidationError
from restaurant_api.schemas import (
    Command,
    DishCreate,
    DishPriceUpdate,
    DishSearch,
    UserCreate,
    PhoneLookup,
    OrderCreate,
    DishResponse,
    UserResponse,
    OrderResponse,
    EnrichedOrderResponse,
    DishTotalResponse,
    MessageResponse,
    ErrorResponse,
    HealthResponse,
)
from restaurant_api.services import RestaurantData, get_restaurant_data
from restaurant_api.services.validator import parse_id

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

CommandT = TypeVar("CommandT", bound=Command)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    data = get_restaurant_data()
    logger.info(f"✅ Stores ready: {data.counts()}")

    yield

    logger.info("Shutting down...")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "In-memory restaurant ordering service: dishes, users and the "
        "orders linking them. State is reset on restart."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

async def read_payload(request: Request) -> dict[str, Any]:
    """
    Read the request body as a flat mapping.

    Accepts JSON objects and url-encoded forms. An empty body reads as an
    empty mapping so that field checks report the missing field by name.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body.strip():
        return {}

    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("body", "must be valid JSON")

    if not isinstance(payload, dict):
        raise ValidationError("body", "must be a JSON object")
    return payload


async def parse_command(request: Request, command: type[CommandT]) -> CommandT:
    """
    Read the body and validate it into ``command``.

    Pydantic's own errors are re-raised as ``RequestValidationError`` so
    they share the 400 handler with FastAPI's parameter errors.
    """
    payload = await read_payload(request)
    try:
        return command.model_validate(payload)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=payload)


def command_body(command: type[Command]) -> dict[str, Any]:
    """OpenAPI request body for a route that reads its body itself."""
    schema = command.model_json_schema()
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
        }
    }


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"🍕 Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    data: RestaurantData = Depends(get_restaurant_data),
) -> HealthResponse:
    """Report the size of each store."""
    counts = data.counts()
    return HealthResponse(
        status="operational",
        environment=settings.env_mode.value,
        timestamp=datetime.now(),
        **counts,
    )


# =============================================================================
# DISH ENDPOINTS
# =============================================================================

@app.get(
    "/dishes",
    response_model=list[DishResponse],
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
    summary="List or Search Dishes",
)
async def list_dishes(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    price: Optional[str] = Query(None, description="Exact price"),
    data: RestaurantData = Depends(get_restaurant_data),
) -> list[DishResponse]:
    """
    Return the whole menu, or the dishes matching ``name`` and/or ``price``.

    A search with no match answers 404.
    """
    search = DishSearch.from_query(name=name, price=price)

    if search.is_empty:
        dishes = data.dishes.list()
    else:
        dishes = data.dishes.find_by_name_or_price(name=search.name, price=search.price)

    return [DishResponse.model_validate(dish) for dish in dishes]


@app.get(
    "/dishes/{dish_id}",
    response_model=DishResponse,
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
)
async def get_dish(
    dish_id: str,
    data: RestaurantData = Depends(get_restaurant_data),
) -> DishResponse:
    """Get a specific dish by ID."""
    dish = data.dishes.get(parse_id(dish_id, "id"))
    return DishResponse.model_validate(dish)


@app.post(
    "/dishes",
    response_model=DishResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
    summary="Add Dish",
    openapi_extra=command_body(DishCreate),
)
async def create_dish(
    request: Request,
    data: RestaurantData = Depends(get_restaurant_data),
) -> DishResponse:
    """Add a dish; the id is assigned by the catalog."""
    command = await parse_command(request, DishCreate)
    dish = data.dishes.add(command.name, command.price)

    logger.info(f"Dish #{dish.id} created: {dish.name} ({dish.price})")
    return DishResponse.model_validate(dish)


@app.put(
    "/dishes/{dish_id}",
    response_model=DishResponse,
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
    summary="Update Dish Price",
    openapi_extra=command_body(DishPriceUpdate),
)
async def update_dish_price(
    dish_id: str,
    request: Request,
    data: RestaurantData = Depends(get_restaurant_data),
) -> DishResponse:
    """
    Change the price of a dish. Nothing else about a dish is mutable.

    The dish is looked up before the body is read, so a missing dish
    answers 404 whatever the body holds.
    """
    dish_key = parse_id(dish_id, "id")
    data.dishes.get(dish_key)
    command = await parse_command(request, DishPriceUpdate)
    dish = data.dishes.update_price(dish_key, command.price)

    logger.info(f"Dish #{dish.id} price updated to {dish.price}")
    return DishResponse.model_validate(dish)


@app.delete(
    "/dishes/{dish_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
)
async def delete_dish(
    dish_id: str,
    data: RestaurantData = Depends(get_restaurant_data),
) -> MessageResponse:
    """Delete a dish. Existing orders keep pointing at it."""
    dish = data.dishes.remove(parse_id(dish_id, "id"))

    logger.info(f"Dish #{dish.id} deleted")
    return MessageResponse(message=f"Dish #{dish.id} deleted")


@app.delete(
    "/dishes",
    response_model=MessageResponse,
    tags=["Dishes"],
    summary="Delete All Dishes",
)
async def delete_all_dishes(
    data: RestaurantData = Depends(get_restaurant_data),
) -> MessageResponse:
    """Empty the menu."""
    removed = data.dishes.clear()

    logger.info(f"Menu cleared ({removed} dishes)")
    return MessageResponse(message=f"{removed} dishes deleted")


# =============================================================================
# USER ENDPOINTS
# =============================================================================

@app.get(
    "/users",
    response_model=list[UserResponse],
    tags=["Users"],
)
async def list_users(
    data: RestaurantData = Depends(get_restaurant_data),
) -> list[UserResponse]:
    """Return every user."""
    return [UserResponse.model_validate(user) for user in data.users.list()]


@app.get(
    "/users/search",
    response_model=UserResponse,
    responses=ERROR_RESPONSES,
    tags=["Users"],
    summary="Find User by Phone",
)
async def find_user_by_phone(
    tel: Optional[str] = Query(None, description="8-digit phone number"),
    data: RestaurantData = Depends(get_restaurant_data),
) -> UserResponse:
    """Look up a user by phone number (``?tel=24600900``)."""
    lookup = PhoneLookup.from_query(tel)
    return UserResponse.model_validate(data.users.find_by_phone(lookup.phone))


@app.get(
    "/users/search/{tel}",
    response_model=UserResponse,
    responses=ERROR_RESPONSES,
    tags=["Users"],
)
async def find_user_by_phone_path(
    tel: str,
    data: RestaurantData = Depends(get_restaurant_data),
) -> UserResponse:
    """Path form of the phone lookup (``/users/search/24600900``)."""
    lookup = PhoneLookup.from_query(tel)
    return UserResponse.model_validate(data.users.find_by_phone(lookup.phone))


@app.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    tags=["Users"],
    summary="Add User",
    openapi_extra=command_body(UserCreate),
)
async def create_user(
    request: Request,
    data: RestaurantData = Depends(get_restaurant_data),
) -> UserResponse:
    """Register a user; the phone number must not be taken."""
    command = await parse_command(request, UserCreate)
    user = data.users.add(command.name, command.phone)

    logger.info(f"User #{user.id} created: {user.name}")
    return UserResponse.model_validate(user)


@app.delete(
    "/users/{name}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    tags=["Users"],
)
async def delete_user(
    name: str,
    data: RestaurantData = Depends(get_restaurant_data),
) -> MessageResponse:
    """Delete a user by name (case-insensitive)."""
    user = data.users.remove_by_name(name)

    logger.info(f"User #{user.id} deleted: {user.name}")
    return MessageResponse(message=f"User '{user.name}' deleted")


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@app.get(
    "/orders",
    response_model=list[EnrichedOrderResponse],
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    data: RestaurantData = Depends(get_restaurant_data),
) -> list[EnrichedOrderResponse]:
    """Every order with its user and dish resolved."""
    return [EnrichedOrderResponse.model_validate(order) for order in data.orders.list()]


@app.get(
    "/orders/total/{dish_id}",
    response_model=DishTotalResponse,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Total for Dish",
)
async def total_for_dish(
    dish_id: str,
    data: RestaurantData = Depends(get_restaurant_data),
) -> DishTotalResponse:
    """Sum of the dish's current price over all its orders."""
    total = data.orders.total_for_dish(parse_id(dish_id, "dishId"))
    return DishTotalResponse.model_validate(total)


@app.get(
    "/orders/{order_id}",
    response_model=EnrichedOrderResponse,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
)
async def get_order(
    order_id: str,
    data: RestaurantData = Depends(get_restaurant_data),
) -> EnrichedOrderResponse:
    """Get a specific order with its user and dish."""
    order = data.orders.get(parse_id(order_id, "id"))
    return EnrichedOrderResponse.model_validate(order)


@app.post(
    "/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Create Order",
    openapi_extra=command_body(OrderCreate),
)
async def create_order(
    request: Request,
    data: RestaurantData = Depends(get_restaurant_data),
) -> OrderResponse:
    """Place an order; both the user and the dish must exist."""
    command = await parse_command(request, OrderCreate)
    order = data.orders.add(command.user_id, command.dish_id)

    logger.info(f"Order #{order.id} created: user #{order.user_id} → dish #{order.dish_id}")
    return OrderResponse.model_validate(order)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(RestaurantError)
async def restaurant_error_handler(request: Request, exc: RestaurantError) -> JSONResponse:
    """Map domain errors to 400 / 404 / 409."""
    logger.warning(f"{request.method} {request.url.path} → {exc.status_code}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report input pydantic rejects as 400 instead of 422.

    Covers FastAPI's parameter errors and the command errors re-raised by
    ``parse_command``; the first error names the field (its alias).
    """
    errors = exc.errors()
    field = str(errors[0]["loc"][-1]) if errors and errors[0].get("loc") else "request"
    error = ValidationError(field, errors[0]["msg"] if errors else "is invalid")

    logger.warning(f"{request.method} {request.url.path} → 400: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )
