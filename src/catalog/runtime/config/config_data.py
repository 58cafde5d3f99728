"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

EnvironmentName = Literal["development", "production", "test"]


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log file format")
    file: str | None = Field(default=None, description="Log file path; console only when unset")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database connection configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    user: str | None = Field(
        default=None, description="Database username; overrides the one in the URL"
    )
    app_db: str | None = Field(
        default=None, description="Database name; overrides the one in the URL"
    )
    environment_mode: EnvironmentName = Field(
        default="development", description="Environment mode used for password resolution"
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo emitted SQL")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        try:
            make_url(value)
        except ArgumentError as e:
            raise ValueError(f"Malformed database URL: {value!r}") from e
        return value

    @property
    def parsed_url(self) -> URL:
        return make_url(self.url)

    @property
    def is_sqlite(self) -> bool:
        return self.parsed_url.get_backend_name() == "sqlite"

    @property
    def is_in_memory(self) -> bool:
        """True for SQLite databases that live only as long as the engine."""
        return self.is_sqlite and self.parsed_url.database in (None, "", ":memory:")

    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.
        1. In development or test mode, parse it from the URL
        2. In production mode, read it from the secrets file given by `password_file`
           or the environment variable named by `password_env_var`
        """
        if self.environment_mode in ("development", "test"):
            return self.parsed_url.password

        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if password:
                return password
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        if self.is_sqlite:
            return None

        raise ValueError(
            "In production mode, either password_file or password_env_var must be set"
        )

    @property
    def connection_string(self) -> str:
        """Render the URL with the resolved user, database and password applied."""
        base_url = self.parsed_url

        if not self.is_sqlite:
            if self.user and self.user != base_url.username:
                logger.warning(
                    "Database user '{}' does not match the one in the URL '{}'. Using '{}'.",
                    self.user,
                    base_url.username,
                    self.user,
                )
                base_url = base_url.set(username=self.user)

            if self.app_db and self.app_db != base_url.database:
                logger.warning(
                    "Database name '{}' does not match the one in the URL '{}'. Using '{}'.",
                    self.app_db,
                    base_url.database,
                    self.app_db,
                )
                base_url = base_url.set(database=self.app_db)

            if base_url.password and self.environment_mode == "production":
                logger.warning(
                    "Database URL contains a password in production mode; "
                    "consider using a secrets file or environment variable."
                )

            resolved_password = self.password
            if resolved_password and resolved_password != base_url.password:
                base_url = base_url.set(password=resolved_password)

        # SQLAlchemy masks passwords in str(); render explicitly
        return base_url.render_as_string(hide_password=False)


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="product-catalog", description="Application name")
    environment: EnvironmentName = Field(
        default="development", description="Application environment"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
