"""Catalog database context: the handle request handlers use to reach products."""

from types import TracebackType

from loguru import logger
from sqlmodel import Session

from src.catalog.entities.service.product import ProductRepository


class CatalogDbContext:
    """Unit of work exposing the product collection over one database session.

    Used as a context manager it commits when the block completes, rolls back
    when it raises, and always closes the session.
    """

    def __init__(self, session: Session) -> None:
        if session is None:
            raise ValueError("A database session is required")
        self._session = session
        self._products = ProductRepository(session)

    @property
    def products(self) -> ProductRepository:
        """The product collection."""
        return self._products

    @property
    def session(self) -> Session:
        return self._session

    def save_changes(self) -> None:
        self._session.commit()

    def discard_changes(self) -> None:
        self._session.rollback()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "CatalogDbContext":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                self.discard_changes()
                logger.error(
                    "Catalog unit of work failed: {}: {}", exc_type.__name__, exc
                )
                return

            try:
                self.save_changes()
            except Exception as e:
                self.discard_changes()
                logger.error(
                    "Catalog commit failed: {}: {}", type(e).__name__, e
                )
                raise
        finally:
            self.close()
