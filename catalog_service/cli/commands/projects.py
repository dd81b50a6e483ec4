"""Project catalog commands.

Example:
    catalog-service projects seed
    catalog-service projects add afrika-korps --title "Afrika Korps" --publisher "Avalon Hill"
    catalog-service projects list --sort t --limit 5
    catalog-service projects list --seek cCxhLGEsZSwsNQ
"""

import click

from catalog_service.cli.utils import coro, error, header, info, success, warning
from catalog_service.core.exceptions import AppException, ConflictException
from catalog_service.core.pagination import normalize_listing_params
from catalog_service.core.settings import get_pagination_settings

SAMPLE_PROJECTS: list[dict[str, str]] = [
    {"name": "afrika-korps", "title": "Afrika Korps", "publisher": "Avalon Hill", "year": "1964"},
    {"name": "army-at-dawn", "title": "An Army at Dawn", "publisher": "GMT Games", "year": "2021"},
    {"name": "battle-for-moscow", "title": "Battle for Moscow", "publisher": "GDW", "year": "1986"},
    {"name": "combat-commander", "title": "Combat Commander: Europe", "publisher": "GMT Games", "year": "2006"},
    {"name": "empires-in-arms", "title": "Empires in Arms", "publisher": "Avalon Hill", "year": "1983"},
    {"name": "longest-day", "title": "The Longest Day", "publisher": "Avalon Hill", "year": "1980"},
    {"name": "paths-of-glory", "title": "Paths of Glory", "publisher": "GMT Games", "year": "1999"},
    {"name": "russian-campaign", "title": "The Russian Campaign", "publisher": "Avalon Hill", "year": "1976"},
    {"name": "victory-lost", "title": "A Victory Lost", "publisher": "MMP", "year": "2006"},
    {"name": "a-la-baionnette", "title": "A la Baionnette", "publisher": "Clash of Arms", "year": "1992"},
]


@click.group(name="projects")
def projects() -> None:
    """Project catalog commands."""


@projects.command()
@click.argument("name")
@click.option("--title", required=True, help="Game title")
@click.option("--sort-key", default=None, help="Title sort key (default: derived from title)")
@click.option("--publisher", default="", help="Game publisher")
@click.option("--year", default="", help="Publication year")
@click.option("--description", default="", help="Project description")
@coro
async def add(
    name: str,
    title: str,
    sort_key: str | None,
    publisher: str,
    year: str,
    description: str,
) -> None:
    """Add project NAME to the catalog."""
    from pydantic import ValidationError

    from catalog_service.features.projects.schemas import ProjectCreate
    from catalog_service.features.projects.service import ProjectService
    from catalog_service.infra.database import close_database, get_async_session

    try:
        payload = ProjectCreate(
            name=name,
            description=description,
            game={"title": title, "title_sort_key": sort_key, "publisher": publisher, "year": year},
        )
    except ValidationError as e:
        error(f"Invalid project: {e.errors()[0]['msg']}")
        raise click.exceptions.Exit(1) from e

    try:
        async with get_async_session() as session:
            project = await ProjectService(session).create_project(payload)
    except ConflictException as e:
        error(e.detail)
        raise click.exceptions.Exit(1) from e
    finally:
        await close_database()
    success(f"Added {project.name} ({project.game_title_sort})")


@projects.command()
@coro
async def seed() -> None:
    """Add a sample catalog, skipping projects that already exist."""
    from catalog_service.features.projects.schemas import ProjectCreate
    from catalog_service.features.projects.service import ProjectService
    from catalog_service.infra.database import close_database, get_async_session

    added = 0
    try:
        async with get_async_session() as session:
            service = ProjectService(session)
            for sample in SAMPLE_PROJECTS:
                payload = ProjectCreate(
                    name=sample["name"],
                    game={
                        "title": sample["title"],
                        "publisher": sample["publisher"],
                        "year": sample["year"],
                    },
                )
                try:
                    await service.create_project(payload)
                except ConflictException:
                    warning(f"{sample['name']} already exists")
                    continue
                added += 1
    finally:
        await close_database()
    success(f"Seeded {added} project(s)")


@projects.command(name="list")
@click.option("--sort", default=None, help="p, t, m or c")
@click.option("--order", default=None, help="a or d")
@click.option("--q", "query", default=None, help="Free-text query")
@click.option("--from", "from_", default=None, help="Start at this sort value")
@click.option("--limit", default=None, help="Page size (1-100)")
@click.option("--seek", default=None, help="Token from a previous page")
@coro
async def list_(
    sort: str | None,
    order: str | None,
    query: str | None,
    from_: str | None,
    limit: str | None,
    seek: str | None,
) -> None:
    """Print one page of the project listing."""
    from catalog_service.features.projects.service import ProjectService
    from catalog_service.infra.database import close_database, get_async_session

    try:
        params = normalize_listing_params(
            seek=seek,
            sort=sort,
            order=order,
            q=query,
            from_=from_,
            limit=limit,
            default_limit=get_pagination_settings().default_limit,
        )
        async with get_async_session() as session:
            page = await ProjectService(session).list_projects(params)
    except AppException as e:
        error(f"{e.title}: {e.detail}")
        raise click.exceptions.Exit(1) from e
    finally:
        await close_database()

    header(f"{len(page.projects)} of {page.meta.total} project(s)")
    for project in page.projects:
        click.echo(f"  {project.name:<24} {project.game.title_sort_key}")
    if page.meta.prev_page:
        info(f"prev: {page.meta.prev_page}")
    if page.meta.next_page:
        info(f"next: {page.meta.next_page}")
