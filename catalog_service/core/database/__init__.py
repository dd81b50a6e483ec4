"""Declarative base, mixins and repository exceptions."""

from catalog_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    IntegerPKMixin,
    TimestampMixin,
    utcnow,
)
from catalog_service.core.database.exceptions import NotFoundError, RepositoryError

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "IntegerPKMixin",
    "NotFoundError",
    "RepositoryError",
    "TimestampMixin",
    "utcnow",
]
