"""Page size value object."""

from __future__ import annotations

import re
from dataclasses import dataclass

from catalog_service.core.exceptions import LimitOutOfRangeException, MalformedQueryException

MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 10

_NUMERIC = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class Limit:
    """Number of rows per page, always within ``MIN_LIMIT..MAX_LIMIT``.

    Example:
        >>> Limit.parse("25").value
        25
        >>> Limit.parse("0")
        Traceback (most recent call last):
        ...
        LimitOutOfRangeException: limit must be between 1 and 100, got 0
    """

    value: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise MalformedQueryException(
                detail=f"limit must be an integer, got {self.value!r}",
                extra={"parameter": "limit"},
            )
        if not MIN_LIMIT <= self.value <= MAX_LIMIT:
            raise LimitOutOfRangeException(self.value, MIN_LIMIT, MAX_LIMIT)

    @classmethod
    def parse(cls, text: str) -> Limit:
        """Parse a ``limit`` query parameter.

        Args:
            text: Raw parameter text.

        Returns:
            Validated limit.

        Raises:
            MalformedQueryException: If the text is empty or not an integer.
            LimitOutOfRangeException: If the integer is outside the range.
        """
        if not _NUMERIC.fullmatch(text):
            raise MalformedQueryException(
                detail=f"limit must be an integer, got {text!r}",
                extra={"parameter": "limit"},
            )
        try:
            value = int(text)
        except ValueError:
            # more digits than int() accepts
            raise LimitOutOfRangeException(text, MIN_LIMIT, MAX_LIMIT) from None
        return cls(value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
