"""Seek cursors and their encodings.

A :class:`Seek` fully describes a position in a listing: what it is sorted
by, in which direction, and where the page starts. It has two encodings:

- the canonical string, one CSV record
  ``sort_tag,dir_tag,anchor_tag,field,rank,id`` with blank positions left
  empty (``p,a,s,,,`` is the first page by name, ascending);
- the opaque link token, URL-safe base64 without padding over the canonical
  string, handed to clients as ``?seek=<token>``.

Clients pass tokens back unchanged; anything that fails to decode is a
malformed query.
"""

from __future__ import annotations

import base64
import binascii
import csv
import io
import math
import re
from dataclasses import dataclass, field
from datetime import datetime

from catalog_service.core.exceptions import MalformedQueryException
from catalog_service.core.pagination.anchor import (
    KEYED_ANCHORS,
    RANKED_ANCHORS,
    After,
    Anchor,
    AnchorRecord,
    Before,
    Start,
)
from catalog_service.core.pagination.sorting import Direction, SortBy

_FIELD_COUNT = 6
_LINE_TERMINATOR = "\r\n"
_TOKEN = re.compile(r"[A-Za-z0-9_-]+")
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class Seek:
    """Sort criterion, direction and anchor of one page request.

    Relevance sorts only accept ``Start``, ``AfterRanked`` and
    ``BeforeRanked``; every other sort only accepts ``Start``, ``End``,
    ``After`` and ``Before``. Time-ordered keys must be ISO-8601 timestamps.

    Example:
        >>> seek = Seek(SortBy(SortField.PROJECT_NAME), Direction.ASCENDING, After("e", 5))
        >>> seek.to_canonical_string()
        'p,a,a,e,,5'
        >>> Seek.parse("p,a,a,e,,5") == seek
        True
    """

    sort_by: SortBy
    direction: Direction
    anchor: Anchor = field(default_factory=Start)

    def __post_init__(self) -> None:
        allowed = RANKED_ANCHORS if self.sort_by.is_relevance else KEYED_ANCHORS
        if not isinstance(self.anchor, allowed):
            raise MalformedQueryException(
                detail=f"anchor {type(self.anchor).__name__} cannot be used "
                f"with sort {self.sort_by.field.name.lower()}",
            )
        if self.sort_by.is_temporal and isinstance(self.anchor, After | Before):
            try:
                datetime.fromisoformat(self.anchor.key)
            except ValueError:
                raise MalformedQueryException(
                    detail=f"anchor key {self.anchor.key!r} is not a timestamp",
                ) from None

    @classmethod
    def first_page(cls, sort_by: SortBy, direction: Direction | None = None) -> Seek:
        return cls(sort_by, direction or sort_by.default_direction(), Start())

    def with_anchor(self, anchor: Anchor) -> Seek:
        """Return a seek with the same criteria positioned at ``anchor``."""
        return Seek(self.sort_by, self.direction, anchor)

    def to_canonical_string(self) -> str:
        record = AnchorRecord.from_anchor(self.anchor)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator=_LINE_TERMINATOR)
        writer.writerow(
            [
                self.sort_by.tag,
                self.direction.tag,
                record.tag,
                record.field,
                None if record.rank is None else repr(record.rank),
                record.id,
            ]
        )
        return buffer.getvalue().removesuffix(_LINE_TERMINATOR)

    @classmethod
    def parse(cls, text: str) -> Seek:
        """Parse a canonical seek string.

        Raises:
            MalformedQueryException: On bad CSV, a wrong field count, an
                unknown tag, an anchor shape mismatch or a pairing violation.
        """
        try:
            rows = list(csv.reader(io.StringIO(text, newline=""), strict=True))
        except csv.Error as exc:
            raise MalformedQueryException(detail=f"unreadable seek: {exc}") from exc
        if len(rows) != 1 or len(rows[0]) != _FIELD_COUNT:
            raise MalformedQueryException(detail="seek must have exactly six fields")

        sort_tag, dir_tag, anchor_tag, key, rank, tiebreak_id = rows[0]
        record = AnchorRecord(
            tag=anchor_tag,
            field=key or None,
            rank=_parse_rank(rank),
            id=_parse_tiebreak_id(tiebreak_id),
        )
        return cls(SortBy.from_tag(sort_tag), Direction.from_tag(dir_tag), record.to_anchor())

    def to_opaque_link(self) -> SeekLink:
        return SeekLink.from_seek(self)

    @classmethod
    def from_opaque(cls, token: str) -> Seek:
        return SeekLink.parse(token).seek


def _parse_rank(text: str) -> float | None:
    if not text:
        return None
    try:
        rank = float(text)
    except ValueError:
        raise MalformedQueryException(detail=f"seek rank {text!r} is not a number") from None
    if not math.isfinite(rank):
        raise MalformedQueryException(detail=f"seek rank {text!r} is not finite")
    return rank


def _parse_tiebreak_id(text: str) -> int | None:
    if not text:
        return None
    if not _DIGITS.fullmatch(text):
        raise MalformedQueryException(detail=f"seek id {text!r} is not an unsigned integer")
    return int(text)


def _encode_token(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).rstrip(b"=").decode("ascii")


def _decode_token(token: str) -> str:
    if not _TOKEN.fullmatch(token):
        raise MalformedQueryException(
            detail="seek token is not unpadded URL-safe base64",
            extra={"parameter": "seek"},
        )
    padded = token + "=" * (-len(token) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise MalformedQueryException(
            detail=f"undecodable seek token: {exc}",
            extra={"parameter": "seek"},
        ) from exc


@dataclass(frozen=True, slots=True)
class SeekLink:
    """Opaque, URL-safe handle on a :class:`Seek`.

    Links compare equal when they decode to the same seek, whatever their
    token bytes. Links built by :meth:`from_seek` always carry the canonical
    token.
    """

    seek: Seek
    token: str = field(compare=False)

    @classmethod
    def from_seek(cls, seek: Seek) -> SeekLink:
        return cls(seek, _encode_token(seek.to_canonical_string()))

    @classmethod
    def parse(cls, token: str) -> SeekLink:
        """Decode a client supplied token.

        Raises:
            MalformedQueryException: If the token or the seek inside is invalid.
        """
        return cls(Seek.parse(_decode_token(token)), token)

    @property
    def href(self) -> str:
        """Query string resuming the listing at this link."""
        return f"?seek={self.token}"

    def __str__(self) -> str:
        return self.token
