"""Comparator helpers used to order published search results."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Iterable, TypeVar

from feedsearch.domain.models import FeedItem

T = TypeVar("T")
Comparator = Callable[[T, T], int]


def from_predicate(before: Callable[[T, T], bool]) -> Comparator[T]:
    """Adapt an "a sorts before b" predicate into a three-way comparator."""

    def compare(a: T, b: T) -> int:
        if before(a, b):
            return -1
        if before(b, a):
            return 1
        return 0

    return compare


def natural_order(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def newest_first(a: FeedItem, b: FeedItem) -> int:
    """Order feed items by descending publication time."""

    return natural_order(b.published, a.published)


def oldest_first(a: FeedItem, b: FeedItem) -> int:
    return natural_order(a.published, b.published)


def sort_items(items: Iterable[T], compare: Comparator[T] | None = None) -> list[T]:
    return sorted(items, key=cmp_to_key(compare or natural_order))


__all__ = [
    "Comparator",
    "from_predicate",
    "natural_order",
    "newest_first",
    "oldest_first",
    "sort_items",
]
