"""Helpers for project data."""

from __future__ import annotations

_ARTICLES = ("A", "An", "The")


def split_title_article(title: str) -> tuple[str, str | None]:
    """Split a leading English article off a title.

    Returns:
        ``(rest, article)``, or ``(title, None)`` when there is no article.
    """
    article, sep, rest = title.partition(" ")
    if not sep or article not in _ARTICLES:
        return title, None
    # "A la ..." is Spanish or French, not an article
    if article == "A" and rest.startswith("la"):
        return title, None
    return rest, article


def title_sort_key(title: str) -> str:
    """Sort key for a game title.

    Example:
        >>> title_sort_key("The Longest Day")
        'Longest Day, The'
        >>> title_sort_key("A la Baionnette")
        'A la Baionnette'
    """
    rest, article = split_title_article(title)
    if article is None:
        return title
    return f"{rest}, {article}"
