"""Unit tests for sort criteria and directions."""

from __future__ import annotations

import pytest

from catalog_service.core.exceptions import MalformedQueryException
from catalog_service.core.pagination import Direction, SortBy, SortField


class TestDirection:
    def test_rev_is_an_involution(self):
        for direction in Direction:
            assert direction.rev() is not direction
            assert direction.rev().rev() is direction

    def test_tags(self):
        assert Direction.from_tag("a") is Direction.ASCENDING
        assert Direction.from_tag("d") is Direction.DESCENDING
        assert Direction.DESCENDING.tag == "d"

    @pytest.mark.parametrize("tag", ["", "asc", "A", "x"])
    def test_unknown_tag(self, tag: str):
        with pytest.raises(MalformedQueryException):
            Direction.from_tag(tag)


class TestSortBy:
    @pytest.mark.parametrize(
        ("field", "direction"),
        [
            (SortField.PROJECT_NAME, Direction.ASCENDING),
            (SortField.DISPLAY_TITLE, Direction.ASCENDING),
            (SortField.MODIFICATION_TIME, Direction.DESCENDING),
            (SortField.CREATION_TIME, Direction.DESCENDING),
        ],
    )
    def test_default_directions(self, field: SortField, direction: Direction):
        assert SortBy(field).default_direction() is direction

    def test_relevance_defaults_to_descending(self):
        assert SortBy.relevance("korps").default_direction() is Direction.DESCENDING

    def test_relevance_tag_carries_query(self):
        sort_by = SortBy.relevance("afrika korps")

        assert sort_by.tag == "qafrika korps"
        assert SortBy.from_tag(sort_by.tag) == sort_by
        assert sort_by.is_relevance

    @pytest.mark.parametrize("tag", ["p", "t", "m", "c"])
    def test_keyed_tags_round_trip(self, tag: str):
        sort_by = SortBy.from_tag(tag)
        assert sort_by.tag == tag
        assert not sort_by.is_relevance

    def test_temporal_fields(self):
        assert SortBy(SortField.MODIFICATION_TIME).is_temporal
        assert SortBy(SortField.CREATION_TIME).is_temporal
        assert not SortBy(SortField.PROJECT_NAME).is_temporal

    @pytest.mark.parametrize("tag", ["", "x", "pp", "q", "q   "])
    def test_rejects_unknown_or_empty(self, tag: str):
        with pytest.raises(MalformedQueryException):
            SortBy.from_tag(tag)

    def test_keyed_sort_rejects_query(self):
        with pytest.raises(MalformedQueryException):
            SortBy(SortField.PROJECT_NAME, "korps")
