"""Anchors mark where a page starts within an ordered listing.

An anchor is one of six closed shapes. Keyed anchors hold the sort value of
the boundary row, ranked anchors hold its relevance rank, and both carry the
row id as tie-breaker because sort values are not unique.

On the wire every anchor is flattened into an :class:`AnchorRecord`
``{tag, field, rank, id}``; decoding only accepts the exact combination each
tag requires.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from catalog_service.core.exceptions import MalformedQueryException

MAX_TIEBREAK_ID = 2**32 - 1


class AnchorTag(StrEnum):
    START = "s"
    END = "e"
    AFTER = "a"
    BEFORE = "b"
    AFTER_RANKED = "r"
    BEFORE_RANKED = "p"


def _check_tiebreak_id(tiebreak_id: int) -> None:
    if isinstance(tiebreak_id, bool) or not isinstance(tiebreak_id, int):
        raise MalformedQueryException(detail=f"anchor id must be an integer, got {tiebreak_id!r}")
    if not 0 <= tiebreak_id <= MAX_TIEBREAK_ID:
        raise MalformedQueryException(detail=f"anchor id {tiebreak_id} out of range")


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise MalformedQueryException(detail="anchor key must be a non-empty string")


def _check_rank(rank: float) -> None:
    if isinstance(rank, bool) or not isinstance(rank, int | float) or not math.isfinite(rank):
        raise MalformedQueryException(detail=f"anchor rank must be a finite number, got {rank!r}")


@dataclass(frozen=True, slots=True)
class Start:
    """Beginning of the listing in its direction."""

    tag: ClassVar[AnchorTag] = AnchorTag.START


@dataclass(frozen=True, slots=True)
class End:
    """Final page of the listing."""

    tag: ClassVar[AnchorTag] = AnchorTag.END


@dataclass(frozen=True, slots=True)
class After:
    """Rows strictly after ``(key, tiebreak_id)``."""

    key: str
    tiebreak_id: int
    tag: ClassVar[AnchorTag] = AnchorTag.AFTER

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_tiebreak_id(self.tiebreak_id)


@dataclass(frozen=True, slots=True)
class Before:
    """Rows strictly before ``(key, tiebreak_id)``."""

    key: str
    tiebreak_id: int
    tag: ClassVar[AnchorTag] = AnchorTag.BEFORE

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_tiebreak_id(self.tiebreak_id)


@dataclass(frozen=True, slots=True)
class AfterRanked:
    """Rows strictly after ``(rank, tiebreak_id)`` in a relevance listing."""

    rank: float
    tiebreak_id: int
    tag: ClassVar[AnchorTag] = AnchorTag.AFTER_RANKED

    def __post_init__(self) -> None:
        _check_rank(self.rank)
        _check_tiebreak_id(self.tiebreak_id)
        object.__setattr__(self, "rank", float(self.rank))


@dataclass(frozen=True, slots=True)
class BeforeRanked:
    """Rows strictly before ``(rank, tiebreak_id)`` in a relevance listing."""

    rank: float
    tiebreak_id: int
    tag: ClassVar[AnchorTag] = AnchorTag.BEFORE_RANKED

    def __post_init__(self) -> None:
        _check_rank(self.rank)
        _check_tiebreak_id(self.tiebreak_id)
        object.__setattr__(self, "rank", float(self.rank))


type Anchor = Start | End | After | Before | AfterRanked | BeforeRanked

# Anchors each kind of sort accepts.
KEYED_ANCHORS: tuple[type, ...] = (Start, End, After, Before)
RANKED_ANCHORS: tuple[type, ...] = (Start, AfterRanked, BeforeRanked)


@dataclass(frozen=True, slots=True)
class AnchorRecord:
    """Flat form of an anchor, as laid out in the canonical seek string."""

    tag: str
    field: str | None = None
    rank: float | None = None
    id: int | None = None

    @classmethod
    def from_anchor(cls, anchor: Anchor) -> AnchorRecord:
        match anchor:
            case Start() | End():
                return cls(anchor.tag)
            case After(key=key, tiebreak_id=tiebreak_id) | Before(key=key, tiebreak_id=tiebreak_id):
                return cls(anchor.tag, field=key, id=tiebreak_id)
            case AfterRanked(rank=rank, tiebreak_id=tiebreak_id) | BeforeRanked(
                rank=rank, tiebreak_id=tiebreak_id
            ):
                return cls(anchor.tag, rank=rank, id=tiebreak_id)
        raise TypeError(f"not an anchor: {anchor!r}")

    def to_anchor(self) -> Anchor:
        """Rebuild the anchor this record describes.

        Raises:
            MalformedQueryException: If the tag is unknown or the present
                fields are not exactly the ones the tag requires.
        """
        match self:
            case AnchorRecord(tag=AnchorTag.START, field=None, rank=None, id=None):
                return Start()
            case AnchorRecord(tag=AnchorTag.END, field=None, rank=None, id=None):
                return End()
            case AnchorRecord(tag=AnchorTag.AFTER, field=str() as key, rank=None, id=int() as id_):
                return After(key, id_)
            case AnchorRecord(tag=AnchorTag.BEFORE, field=str() as key, rank=None, id=int() as id_):
                return Before(key, id_)
            case AnchorRecord(
                tag=AnchorTag.AFTER_RANKED, field=None, rank=float() as rank, id=int() as id_
            ):
                return AfterRanked(rank, id_)
            case AnchorRecord(
                tag=AnchorTag.BEFORE_RANKED, field=None, rank=float() as rank, id=int() as id_
            ):
                return BeforeRanked(rank, id_)
            case _:
                raise MalformedQueryException(
                    detail=f"invalid anchor {self.tag!r} with "
                    f"field={self.field!r} rank={self.rank!r} id={self.id!r}",
                )
