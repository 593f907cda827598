"""Sorting and pagination shared by the entity searches."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from app.domain.enums import SearchSortBy, SearchSortOrder

T = TypeVar("T")

SortKeys = Mapping[SearchSortBy, Callable[[Any], Any]]


def sort_hits(
    items: list[T],
    sort_by: SearchSortBy,
    sort_order: SearchSortOrder,
    keys: SortKeys,
) -> list[T]:
    """Return items sorted by the key registered for sort_by.

    Sort keys an entity does not support (e.g. downloads for comments) leave
    the order unchanged. Ties keep their fetch order (sorted() is stable in
    both directions).
    """
    key = keys.get(sort_by)
    if key is None:
        return list(items)
    return sorted(items, key=key, reverse=sort_order == SearchSortOrder.DESC)


def paginate(items: list[T], offset: int, limit: int) -> list[T]:
    """Slice one page after filtering, scoring and sorting. offset past the end gives []."""
    return items[offset : offset + limit]
