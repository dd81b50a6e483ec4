"""Main CLI entry point for catalog-service management commands."""

import click

from catalog_service.cli.commands import database, projects, seek, server
from catalog_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="catalog-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Catalog Service CLI - manage the project catalog.

    \b
    Command Groups:
      db        Create and drop tables
      projects  Add, seed and list projects
      seek      Encode and decode listing seek tokens
      server    Run the HTTP API

    \b
    Quick Start:
      catalog-service db init
      catalog-service projects seed
      catalog-service projects list --sort t --limit 5
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(projects.projects)
cli.add_command(seek.seek)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
