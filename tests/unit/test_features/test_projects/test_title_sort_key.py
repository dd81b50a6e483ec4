"""Unit tests for game title sort keys."""

from __future__ import annotations

import pytest

from catalog_service.features.projects.utils import split_title_article, title_sort_key


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("The Longest Day", "Longest Day, The"),
        ("A Victory Lost", "Victory Lost, A"),
        ("An Army at Dawn", "Army at Dawn, An"),
        ("A la Baionnette", "A la Baionnette"),
        ("A last stand", "A last stand"),
        ("Afrika Korps", "Afrika Korps"),
        ("Theatre of War", "Theatre of War"),
        ("the lowercase article", "the lowercase article"),
        ("The", "The"),
        ("", ""),
    ],
)
def test_title_sort_key(title: str, expected: str):
    assert title_sort_key(title) == expected


def test_split_title_article():
    assert split_title_article("The Russian Campaign") == ("Russian Campaign", "The")
    assert split_title_article("Paths of Glory") == ("Paths of Glory", None)
