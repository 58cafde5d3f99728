"""Validation boundary for incoming product data."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .entity import FIELD_ERROR_MESSAGES, Product


class ProductValidationError(ValueError):
    """Raised when product input violates one or more field constraints.

    ``errors`` maps each failing field to the messages of the rules it broke.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Invalid product: {details}")


def _message_for(field: str, error: Mapping[str, Any]) -> str:
    return FIELD_ERROR_MESSAGES.get(field, {}).get(error["type"], error["msg"])


def validate_product(data: Mapping[str, Any] | Product) -> Product:
    """Validate raw input against the Product constraints.

    Args:
        data: Field values keyed by name, or an existing Product to re-check.

    Returns:
        The validated Product.

    Raises:
        ProductValidationError: If any field constraint is violated.
    """
    if isinstance(data, Product):
        data = data.model_dump()

    try:
        return Product.model_validate(dict(data))
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            message = _message_for(field, error)
            messages = errors.setdefault(field, [])
            if message not in messages:
                messages.append(message)
        raise ProductValidationError(errors) from e
