"""Database engine and session factory used across the application."""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import StaticPool, text
from sqlmodel import Session, create_engine

from src.catalog.core.services.database.catalog_context import CatalogDbContext
from src.catalog.runtime.config.config_data import DatabaseConfig
from src.catalog.runtime.context import get_config


class DbSessionService:
    """Owns the process-wide engine and hands out sessions and catalog contexts."""

    def __init__(self, db_config: DatabaseConfig | Mapping[str, Any] | None):
        """Build the shared database engine from connection configuration.

        Raises:
            ValueError: If the configuration is missing or malformed.
        """
        self._config = self._resolve_config(db_config)
        db_config = self._config

        logger.info(
            "Configuring database engine for environment: {}", db_config.environment_mode
        )
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "echo_pool": False,
            "connect_args": self._get_connect_args(db_config),
        }

        if db_config.is_in_memory:
            # One shared connection so every session sees the same database
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                    "pool_pre_ping": True,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)
        logger.info(
            "Database engine initialized for {}",
            db_config.parsed_url.render_as_string(hide_password=True),
        )

    @classmethod
    def from_app_config(cls) -> "DbSessionService":
        """Build the service from the database section of the active configuration."""
        return cls(get_config().database)

    @staticmethod
    def _resolve_config(db_config: DatabaseConfig | Mapping[str, Any] | None) -> DatabaseConfig:
        if db_config is None:
            raise ValueError("Database configuration is required")

        if isinstance(db_config, DatabaseConfig):
            return db_config

        if isinstance(db_config, Mapping):
            try:
                return DatabaseConfig.model_validate(dict(db_config))
            except ValidationError as e:
                raise ValueError(f"Invalid database configuration: {e}") from e

        raise ValueError(
            f"db_config must be DatabaseConfig or a mapping, got {type(db_config).__name__}"
        )

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict:
        """Get database-specific connection arguments."""
        connect_args: dict[str, Any] = {}
        backend = db_config.parsed_url.get_backend_name()

        if backend == "postgresql":
            connect_args.update(
                {
                    "application_name": f"{db_config.environment_mode}_catalog",
                    "connect_timeout": 30,
                }
            )

        elif backend == "sqlite":
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": 20,  # Lock timeout
                }
            )

            if db_config.environment_mode == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )

        return connect_args

    @property
    def engine(self):
        return self._engine

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Entities stay readable after commit
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}", type(e).__name__, e
            )
            raise
        finally:
            db.close()

    @contextmanager
    def catalog_scope(self) -> Iterator[CatalogDbContext]:
        """Yield a catalog context as a unit of work over a fresh session."""
        with CatalogDbContext(self.get_session()) as catalog:
            yield catalog

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed: {}: {}", type(e).__name__, e
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
