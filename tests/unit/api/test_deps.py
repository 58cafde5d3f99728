"""Unit tests for the FastAPI dependency providers."""

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from sqlmodel import Session
from starlette.requests import Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.deps import get_catalog, get_database_service, get_db_session
from src.catalog.api.utils.app_startup import attach_dependencies
from src.catalog.core.services import CatalogDbContext, DbSessionService


@pytest.fixture
def request_factory(db_service: DbSessionService) -> Callable[[], Request]:
    app = FastAPI()
    attach_dependencies(app, ApplicationDependencies(database_service=db_service))

    def _make_request() -> Request:
        scope = {
            "type": "http",
            "app": app,
            "headers": [],
            "method": "GET",
            "path": "/",
            "query_string": b"",
        }
        return Request(scope)

    return _make_request


class TestDependencies:
    """Test how request handlers obtain the data layer."""

    def test_get_database_service(self, request_factory, db_service: DbSessionService):
        assert get_database_service(request_factory()) is db_service

    def test_get_db_session_yields_session(self, request_factory):
        provider = get_db_session(request_factory())

        session = next(provider)
        assert isinstance(session, Session)

        with pytest.raises(StopIteration):
            next(provider)

    def test_get_catalog_commits_after_handler(self, request_factory, product_factory):
        """Work done through the dependency is committed once the handler finishes."""
        provider = get_catalog(request_factory())
        catalog = next(provider)
        assert isinstance(catalog, CatalogDbContext)

        created = catalog.products.create(product_factory())
        with pytest.raises(StopIteration):
            next(provider)

        reader = get_catalog(request_factory())
        assert next(reader).products.get(created.id) == created
        reader.close()

    def test_get_catalog_rolls_back_when_handler_fails(self, request_factory, product_factory):
        provider = get_catalog(request_factory())
        catalog = next(provider)
        catalog.products.create(product_factory())

        with pytest.raises(RuntimeError):
            provider.throw(RuntimeError("handler failed"))

        reader = get_catalog(request_factory())
        assert next(reader).products.count() == 0
        reader.close()
