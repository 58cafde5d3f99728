"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field, SQLModel

from .entity import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    Column metadata mirrors the constraints declared on the Product entity.
    Table models are not validated on construction.
    """

    __tablename__ = "product"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=NAME_MAX_LENGTH, nullable=False)
    price: Decimal = Field(
        default=Decimal("0"),
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH, nullable=False)
