"""Factories for building a :class:`SqliteService` from configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from sqldao.config import ConnectionConfig, DatabaseSettings, get_settings
from sqldao.db.connection import SqliteService


class SqliteServiceFactory:  # pylint: disable=too-few-public-methods
    """Builds query services; the pool itself opens lazily on first use."""

    @staticmethod
    def create_from_dict(config: Mapping[str, Any], logger: logging.Logger) -> SqliteService:
        """Create a single-pool service from a plain mapping.

        Accepts ``{"database": ..., "connectionLimit": ...}`` style bundles;
        server-only keys such as ``host`` or ``password`` are ignored.
        """
        try:
            connection_config = ConnectionConfig.model_validate(dict(config))
        except ValidationError as e:
            logger.error("Invalid database connection config: %s", e)
            raise
        logger.debug(
            "Creating query service database=%s connection_limit=%d",
            connection_config.database,
            connection_config.connection_limit,
        )
        return SqliteService(connection_config, logger)

    @staticmethod
    def create_from_settings(
        settings: Optional[DatabaseSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> SqliteService:
        """Create a service from database settings, defaulting to the application settings."""
        if settings is None:
            settings = get_settings().db
        return SqliteService(settings.connection_config(), logger)
