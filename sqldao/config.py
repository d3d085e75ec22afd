import logging
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConnectionConfig(BaseModel):
    """Plain-mapping connection configuration accepted by the service factory.

    ``host``, ``user`` and ``password`` are tolerated for compatibility with
    server-backed configuration bundles and ignored; SQLite only needs a path.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    database: str = Field(..., min_length=1, description="Path to the SQLite database file")
    connection_limit: int = Field(5, ge=1, alias="connectionLimit", description="Pool size")
    timeout: float = Field(30.0, gt=0, description="Seconds to wait for a pooled connection")
    cached_statements: int = Field(128, ge=0, alias="cachedStatements")


class DatabaseSettings(BaseSettings):
    """Configuration for the database."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="DATABASE_", extra="ignore"
    )

    path: str = Field("sqldao.db", description="Path to the SQLite database file")
    connection_limit: int = Field(5, ge=1, description="Number of pooled connections")
    timeout: float = Field(30.0, gt=0, description="Seconds to wait for a pooled connection")
    cached_statements: int = Field(128, ge=0, description="Per-connection statement cache size")

    def connection_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            database=self.path,
            connection_limit=self.connection_limit,
            timeout=self.timeout,
            cached_statements=self.cached_statements,
        )


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    debug: bool = Field(False, description="Enable debug mode for development")
    log_level: str = Field("INFO", description="Logging level")

    db: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @property
    def log_level_value(self) -> int:
        """Return the numeric value of the log level."""
        return logging.getLevelName(self.log_level.upper())


@lru_cache
def get_settings() -> AppSettings:
    """
    Get application settings.
    If the TEST_MODE environment variable is set, it returns an in-memory
    configuration suitable for testing, otherwise loads the configuration
    from the environment and the .env file.
    """
    if os.getenv("TEST_MODE"):
        return AppSettings(
            debug=True,
            log_level="DEBUG",
            db=DatabaseSettings(path=":memory:", connection_limit=1),
        )
    return AppSettings()
