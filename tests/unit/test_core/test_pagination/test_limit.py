"""Unit tests for the page size value object."""

from __future__ import annotations

import pytest

from catalog_service.core.exceptions import LimitOutOfRangeException, MalformedQueryException
from catalog_service.core.pagination import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT, Limit


class TestLimitParse:
    @pytest.mark.parametrize(("text", "expected"), [("1", 1), ("10", 10), ("100", 100), ("+7", 7)])
    def test_accepts_values_in_range(self, text: str, expected: int):
        assert Limit.parse(text).value == expected

    @pytest.mark.parametrize("text", ["0", "101", "-1", "99999999999999999999999"])
    def test_rejects_numbers_out_of_range(self, text: str):
        with pytest.raises(LimitOutOfRangeException) as exc_info:
            Limit.parse(text)

        assert exc_info.value.status_code == 400
        assert exc_info.value.type == "limit-out-of-range"
        assert exc_info.value.extra["minimum"] == MIN_LIMIT
        assert exc_info.value.extra["maximum"] == MAX_LIMIT

    @pytest.mark.parametrize("text", ["", "x", "1.5", " 5", "5 ", "1e2", "0x10"])
    def test_rejects_non_numeric_text(self, text: str):
        with pytest.raises(MalformedQueryException) as exc_info:
            Limit.parse(text)

        assert exc_info.value.type == "malformed-query"


class TestLimit:
    def test_default(self):
        assert Limit().value == DEFAULT_LIMIT == 10

    def test_constructor_validates_range(self):
        with pytest.raises(LimitOutOfRangeException):
            Limit(0)

    def test_rejects_bool(self):
        with pytest.raises(MalformedQueryException):
            Limit(True)

    def test_int_and_str(self):
        limit = Limit(25)
        assert int(limit) == 25
        assert str(limit) == "25"
