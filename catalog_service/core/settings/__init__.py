"""Modular Pydantic Settings v2 configuration.

One frozen settings class per concern, each with its own environment prefix:

- ``AppSettings`` (``APP_``)
- ``DatabaseSettings`` (``DB_``, URL from ``DATABASE_URL``)
- ``LoggingSettings`` (``LOG_``)
- ``PaginationSettings`` (``PAGINATION_``)

Import settings via the cached loaders:
    from catalog_service.core.settings import get_app_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables
    4. .env file
    5. secrets_dir
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
