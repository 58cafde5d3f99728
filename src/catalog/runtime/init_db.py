"""Database initialization script."""

from src.catalog.core.services.database import DbManageService, DbSessionService


def init_db() -> None:
    """Create all database tables for the configured database."""
    session_service = DbSessionService.from_app_config()
    try:
        DbManageService(session_service).create_all()
    finally:
        session_service.dispose()


if __name__ == "__main__":
    init_db()
