"""Product repository."""

from decimal import Decimal

from sqlalchemy import func
from sqlmodel import Session, col, select

from .entity import Product
from .table import ProductTable

_MUTABLE_FIELDS = ("name", "price", "description")


class ProductRepository:
    """Data-access layer for products.

    Input is expected to be validated already. Flushes but never commits;
    committing belongs to the owning session scope.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def create(self, product: Product) -> Product:
        """Insert a product; the database assigns its id."""
        row = ProductTable(**product.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._to_entity(row)

    def update(self, product: Product) -> Product:
        """Replace every stored field of the product with the given values."""
        if product.id is None:
            raise ValueError("Product id is required for update")

        row = self._session.get(ProductTable, product.id)
        if row is None:
            raise ValueError(f"Product {product.id} not found")

        for field in _MUTABLE_FIELDS:
            setattr(row, field, getattr(product, field))

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, product_id: int) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(col(ProductTable.id))
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def find(
        self,
        name_contains: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Product]:
        """Return products matching every given filter, ordered by id."""
        statement = select(ProductTable)
        if name_contains:
            # Literal substring match; % and _ are not wildcards
            statement = statement.where(
                col(ProductTable.name).contains(name_contains, autoescape=True)
            )
        if min_price is not None:
            statement = statement.where(ProductTable.price >= min_price)
        if max_price is not None:
            statement = statement.where(ProductTable.price <= max_price)

        statement = statement.order_by(col(ProductTable.id)).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def count(self) -> int:
        statement = select(func.count()).select_from(ProductTable)
        return self._session.exec(statement).one()
