"""Database management commands.

Example:
    catalog-service db init
    catalog-service db drop --yes
"""

import click
from sqlalchemy import text

from catalog_service.cli.utils import coro, error, info, success
from catalog_service.core.settings import get_db_settings


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify connectivity and create missing tables."""
    from catalog_service.infra.database import close_database, create_tables, engine

    settings = get_db_settings()
    info(f"Connecting to {settings.backend} database...")
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        await create_tables()
    except Exception as e:
        error(f"Database initialization failed: {e}")
        raise click.exceptions.Exit(1) from e
    finally:
        await close_database()
    success("Database ready")


@db.command()
@click.confirmation_option(prompt="Drop all catalog tables?")
@coro
async def drop() -> None:
    """Drop all catalog tables, including the search index."""
    from catalog_service.infra.database import close_database, drop_tables

    try:
        await drop_tables()
    except Exception as e:
        error(f"Dropping tables failed: {e}")
        raise click.exceptions.Exit(1) from e
    finally:
        await close_database()
    success("Tables dropped")
