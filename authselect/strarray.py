"""Helpers for lists of strings used as ordered sets of values."""

from __future__ import annotations

from typing import Iterable

from authselect.textutil import levenshtein


def copy_values(items: Iterable[str] | None, unique: bool = False) -> list[str] | None:
    """Return a new list with the values of ``items``.

    If ``unique`` is true, later duplicates are dropped and the order of
    first occurrences is kept. ``None`` is returned for ``None``.
    """
    if items is None:
        return None
    result: list[str] = []
    for value in items:
        add_value(result, value, unique)
    return result


def has_value(items: Iterable[str], value: str | None) -> bool:
    """Return True if ``value`` is one of ``items``."""
    if value is None:
        return False
    return any(item == value for item in items)


def add_value(items: list[str], value: str, unique: bool = False) -> list[str]:
    """Append ``value`` to ``items`` in place and return ``items``.

    If ``unique`` is true and the value is already present, nothing is added.
    """
    if unique and has_value(items, value):
        return items
    items.append(value)
    return items


def del_value(items: list[str] | None, value: str) -> None:
    """Remove every occurrence of ``value`` from ``items`` in place."""
    if items is None:
        return
    items[:] = [item for item in items if item != value]


def concat(
    to: list[str], items: Iterable[str] | None, unique: bool = False
) -> list[str]:
    """Append all ``items`` to ``to`` in place and return ``to``."""
    if items is None:
        return to
    for value in items:
        add_value(to, value, unique)
    return to


def find_similar(
    value: str, items: Iterable[str], max_distance: int
) -> str | None:
    """Return the item closest to ``value`` by edit distance.

    The first of equally close items wins. ``None`` is returned if there are
    no items or the closest one is farther than ``max_distance``.
    """
    word: str | None = None
    best = 0
    for item in items:
        current = levenshtein(value, item)
        if word is None or current < best:
            best = current
            word = item

    if word is None or best > max_distance:
        return None
    return word