"""
Domain Exceptions

Errors raised by the in-memory stores and the input validator. Each one
carries structured context so the transport layer can map it to a status
code and a JSON body without parsing messages:

    - ValidationError  → 400 (missing, empty or malformed input)
    - NotFoundError    → 404 (a referenced entity does not exist)
    - ConflictError    → 409 (uniqueness violation, e.g. phone number)
"""

from typing import Any, Optional


class RestaurantError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500
    kind: str = "restaurant_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": False,
            "error": self.kind,
            "detail": self.message,
            **self.details,
        }


class ValidationError(RestaurantError):
    """Raised when a request field is missing, empty or malformed."""

    status_code = 400
    kind = "validation_error"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"Field '{field}' {reason}",
            {"field": field, "reason": reason},
        )


class NotFoundError(RestaurantError):
    """Raised when an id, phone or name does not resolve to a live entity."""

    status_code = 404
    kind = "not_found"

    def __init__(self, entity: str, id: Any = None):
        self.entity = entity
        self.id = id
        if id is None:
            message = f"No {entity} found"
        else:
            message = f"{entity.capitalize()} {id!r} not found"
        super().__init__(message, {"entity": entity, "id": id})


class ConflictError(RestaurantError):
    """Raised when a value that must be unique is already taken."""

    status_code = 409
    kind = "conflict"

    def __init__(self, field: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(
            f"A record with this {field} already exists",
            {"field": field, "value": value},
        )
