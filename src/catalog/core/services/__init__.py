"""Core services exports."""

from .database import CatalogDbContext, DbManageService, DbSessionService

__all__ = [
    "CatalogDbContext",
    "DbManageService",
    "DbSessionService",
]
