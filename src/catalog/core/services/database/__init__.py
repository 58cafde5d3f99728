from .catalog_context import CatalogDbContext
from .db_manage import DbManageService
from .db_session import DbSessionService

__all__ = ["CatalogDbContext", "DbManageService", "DbSessionService"]
