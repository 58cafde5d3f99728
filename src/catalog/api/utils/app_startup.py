import logging
import sys
from pathlib import Path

from fastapi import FastAPI
from loguru import logger

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.context import get_config

_PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging() -> None:
    main_config = get_config()
    cfg = main_config.logging
    env = main_config.app.environment

    diagnose_on = env != "production"

    logger.remove()
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=_PLAIN_FORMAT,
        colorize=True,
        backtrace=diagnose_on,
        diagnose=diagnose_on,
    )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        is_json_file = cfg.format == "json"
        logger.add(
            str(path),
            level=cfg.level,
            format="{message}" if is_json_file else _PLAIN_FORMAT,
            serialize=is_json_file,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=diagnose_on,
            diagnose=diagnose_on,
        )

    # Route stdlib logging (SQLAlchemy, uvicorn) through Loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger.info(
        "Logging configured (level={}, file={}, environment={})",
        cfg.level,
        cfg.file,
        env,
    )


def build_dependencies(create_schema: bool = False) -> ApplicationDependencies:
    """Create the process-wide services from the active configuration."""
    database_service = DbSessionService.from_app_config()
    if create_schema:
        DbManageService(database_service).create_all()
    return ApplicationDependencies(database_service=database_service)


def attach_dependencies(app: FastAPI, app_deps: ApplicationDependencies) -> None:
    """Expose the services to request handlers through ``app.state``."""
    app.state.app_dependencies = app_deps
