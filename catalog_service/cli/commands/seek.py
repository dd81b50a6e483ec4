"""Seek token inspection commands.

Example:
    catalog-service seek encode p a a --key e --id 5
    catalog-service seek decode cCxhLGEsZSwsNQ
"""

import click

from catalog_service.cli.utils import error, header, key_values
from catalog_service.core.exceptions import MalformedQueryException
from catalog_service.core.pagination import AnchorRecord, Direction, Seek, SeekLink, SortBy


@click.group(name="seek")
def seek() -> None:
    """Encode and decode listing seek tokens."""


@seek.command()
@click.argument("sort")
@click.argument("direction")
@click.argument("anchor")
@click.option("--key", default=None, help="Sort value of the anchor row")
@click.option("--rank", default=None, type=float, help="Relevance rank of the anchor row")
@click.option("--id", "tiebreak_id", default=None, type=int, help="Id of the anchor row")
def encode(
    sort: str,
    direction: str,
    anchor: str,
    key: str | None,
    rank: float | None,
    tiebreak_id: int | None,
) -> None:
    """Print the token for SORT DIRECTION ANCHOR.

    \b
    SORT       p, t, m, c, or q<query>
    DIRECTION  a or d
    ANCHOR     s (start), e (end), a/b (after/before key),
               r/p (after/before rank)
    """
    try:
        record = AnchorRecord(anchor, field=key, rank=rank, id=tiebreak_id)
        target = Seek(SortBy.from_tag(sort), Direction.from_tag(direction), record.to_anchor())
    except MalformedQueryException as e:
        error(e.detail)
        raise click.exceptions.Exit(1) from e
    click.echo(target.to_opaque_link().token)


@seek.command()
@click.argument("token")
def decode(token: str) -> None:
    """Print the contents of a seek TOKEN."""
    try:
        link = SeekLink.parse(token)
    except MalformedQueryException as e:
        error(e.detail)
        raise click.exceptions.Exit(1) from e

    target = link.seek
    record = AnchorRecord.from_anchor(target.anchor)
    header(target.to_canonical_string())
    key_values(
        [
            ("sort", target.sort_by.field.name.lower()),
            ("query", target.sort_by.query),
            ("direction", target.direction.name.lower()),
            ("anchor", type(target.anchor).__name__),
            ("key", record.field),
            ("rank", record.rank),
            ("id", record.id),
        ]
    )
