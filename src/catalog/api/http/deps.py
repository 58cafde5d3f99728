"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import CatalogDbContext, DbSessionService


def get_database_service(request: Request) -> DbSessionService:
    """Get the process-wide database service."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that is closed when the request ends."""
    session = get_database_service(request).get_session()
    try:
        yield session
    finally:
        session.close()


def get_catalog(request: Request) -> Iterator[CatalogDbContext]:
    """Yield a catalog context committed after the handler returns."""
    with get_database_service(request).catalog_scope() as catalog:
        yield catalog
