"""Unit tests for anchors and their flat records."""

from __future__ import annotations

import math

import pytest

from catalog_service.core.exceptions import MalformedQueryException
from catalog_service.core.pagination import (
    After,
    AfterRanked,
    AnchorRecord,
    AnchorTag,
    Before,
    BeforeRanked,
    End,
    Start,
)
from catalog_service.core.pagination.anchor import MAX_TIEBREAK_ID

ANCHORS = [
    Start(),
    End(),
    After("e", 5),
    Before("f", 6),
    AfterRanked(1.5, 3),
    BeforeRanked(-0.25, 4),
]


class TestAnchorRecord:
    @pytest.mark.parametrize("anchor", ANCHORS, ids=lambda a: type(a).__name__)
    def test_record_round_trip(self, anchor):
        assert AnchorRecord.from_anchor(anchor).to_anchor() == anchor

    def test_keyed_record_layout(self):
        assert AnchorRecord.from_anchor(After("e", 5)) == AnchorRecord("a", "e", None, 5)

    @pytest.mark.parametrize(
        "record",
        [
            AnchorRecord("s", field="x"),
            AnchorRecord("e", id=1),
            AnchorRecord("a", field="e"),
            AnchorRecord("a", id=5),
            AnchorRecord("a", rank=1.0, id=5),
            AnchorRecord("b", rank=1.0, id=5),
            AnchorRecord("b", field="e", rank=1.0, id=5),
            AnchorRecord("r", field="e", id=5),
            AnchorRecord("p", rank=1.0),
            AnchorRecord("z"),
            AnchorRecord(""),
        ],
    )
    def test_rejects_mismatched_shapes(self, record: AnchorRecord):
        with pytest.raises(MalformedQueryException):
            record.to_anchor()


class TestAnchorValidation:
    def test_tags(self):
        assert [anchor.tag for anchor in ANCHORS] == [
            AnchorTag.START,
            AnchorTag.END,
            AnchorTag.AFTER,
            AnchorTag.BEFORE,
            AnchorTag.AFTER_RANKED,
            AnchorTag.BEFORE_RANKED,
        ]

    def test_rejects_empty_key(self):
        with pytest.raises(MalformedQueryException):
            After("", 1)

    @pytest.mark.parametrize("tiebreak_id", [-1, MAX_TIEBREAK_ID + 1])
    def test_rejects_id_out_of_range(self, tiebreak_id: int):
        with pytest.raises(MalformedQueryException):
            Before("a", tiebreak_id)

    @pytest.mark.parametrize("rank", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite_rank(self, rank: float):
        with pytest.raises(MalformedQueryException):
            AfterRanked(rank, 1)

    def test_integer_rank_is_stored_as_float(self):
        anchor = BeforeRanked(2, 1)
        assert isinstance(anchor.rank, float)
