"""Entity: Product."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
PRICE_MIN = Decimal("0.01")
# Exact through SQLite, which stores NUMERIC values as doubles
PRICE_MAX_DIGITS = 15
PRICE_DECIMAL_PLACES = 2

# Messages reported by the validation boundary, keyed by field and pydantic error type
FIELD_ERROR_MESSAGES: dict[str, dict[str, str]] = {
    "name": {
        "missing": "Product name is required.",
        "string_type": "Product name is required.",
        "string_too_short": "Product name is required.",
        "value_error": "Product name is required.",
        "string_too_long": f"Name cannot exceed {NAME_MAX_LENGTH} characters.",
    },
    "price": {
        "missing": "Price must be greater than 0.",
        "decimal_type": "Price must be greater than 0.",
        "decimal_parsing": "Price must be greater than 0.",
        "finite_number": "Price must be greater than 0.",
        "greater_than_equal": "Price must be greater than 0.",
        "decimal_max_places": f"Price cannot have more than {PRICE_DECIMAL_PLACES} decimal places.",
        "decimal_max_digits": f"Price cannot exceed {PRICE_MAX_DIGITS} digits.",
        "decimal_whole_digits": f"Price cannot exceed {PRICE_MAX_DIGITS} digits.",
    },
    "description": {
        "string_too_long": f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.",
    },
}


class Product(BaseModel):
    """Product entity representing a catalog item.

    The constraints live on the field declarations; they are enforced when
    raw input is validated into a Product, never by the repository.
    """

    id: int | None = Field(
        default=None,
        description="Identifier assigned by the database on creation",
    )
    name: str = Field(
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Product name",
    )
    price: Decimal = Field(
        ge=PRICE_MIN,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Unit price",
    )
    description: str = Field(
        default="",
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Free-form product description",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    def __eq__(self, other: Any) -> bool:
        """Compare products by their stored attributes."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
            and self.description == other.description
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.name,
            self.price,
            self.description,
        ))
