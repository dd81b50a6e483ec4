"""CLI command modules."""

from catalog_service.cli.commands import database, projects, seek, server

__all__ = ["database", "projects", "seek", "server"]
