"""String helpers used when reading and generating configuration files."""

from __future__ import annotations

import enum
from typing import Iterable

# Characters that count as whitespace for trimming (the C locale set).
_SPACE = " \t\n\v\f\r"


class ExplodeFlags(enum.IntFlag):
    """Options that control how :func:`explode` treats each piece."""

    NONE = 0
    TRIM_LEFT = 0x0001
    TRIM_RIGHT = 0x0002
    SKIP_EMPTY = 0x0004
    SKIP_COMMENT = 0x0008
    ALL = TRIM_LEFT | TRIM_RIGHT | SKIP_EMPTY | SKIP_COMMENT


def is_empty(text: str | None) -> bool:
    """Return True if ``text`` is None or an empty string."""
    return text is None or text == ""


def trim_left(text: str | None) -> str | None:
    """Strip leading whitespace."""
    if text is None:
        return None
    return text.lstrip(_SPACE)


def trim_right(text: str | None) -> str | None:
    """Strip trailing whitespace.

    The first character is never removed, so a non-empty string made only
    of whitespace keeps its first character.
    """
    if text is None:
        return None
    stripped = text.rstrip(_SPACE)
    if not stripped and text:
        return text[0]
    return stripped


def trim(text: str | None) -> str | None:
    """Strip whitespace from both ends."""
    return trim_right(trim_left(text))


def trim_noempty(text: str | None) -> str | None:
    """Strip whitespace from both ends; return None if nothing is left."""
    trimmed = trim(text)
    if trimmed == "":
        return None
    return trimmed


def _process_piece(piece: str, flags: ExplodeFlags) -> str | None:
    left = bool(flags & ExplodeFlags.TRIM_LEFT)
    right = bool(flags & ExplodeFlags.TRIM_RIGHT)
    if left and right:
        piece = trim(piece)
    elif left:
        piece = trim_left(piece)
    elif right:
        piece = trim_right(piece)

    if flags & ExplodeFlags.SKIP_EMPTY and is_empty(piece):
        return None
    if flags & ExplodeFlags.SKIP_COMMENT and piece.startswith("#"):
        return None
    return piece


def explode(
    text: str, delimiter: str, flags: ExplodeFlags = ExplodeFlags.NONE
) -> list[str]:
    """Split ``text`` on ``delimiter`` and post-process the pieces.

    A trailing delimiter yields a final empty item unless empty items are
    skipped; that trailing item is added as is, without further processing.
    """
    flags = ExplodeFlags(flags)
    pieces = text.split(delimiter)
    last = pieces.pop()

    result = [
        processed
        for processed in (_process_piece(piece, flags) for piece in pieces)
        if processed is not None
    ]

    if last == "":
        if pieces and not flags & ExplodeFlags.SKIP_EMPTY:
            result.append("")
        return result

    processed = _process_piece(last, flags)
    if processed is not None:
        result.append(processed)
    return result


def implode(items: Iterable[str], delimiter: str) -> str:
    """Join ``items`` with ``delimiter``."""
    return delimiter.join(items)


def _min3(a: int, b: int, c: int) -> int:
    # Ties resolve to the last argument.
    if a < b and a < c:
        return a
    if b < a and b < c:
        return b
    return c


def levenshtein(a: str, b: str) -> int:
    """Compute the edit distance between two strings."""
    column = list(range(len(a) + 1))
    for x, char_b in enumerate(b, start=1):
        column[0] = x
        last_diag = x - 1
        for y, char_a in enumerate(a, start=1):
            old_diag = column[y]
            column[y] = _min3(
                column[y] + 1,
                column[y - 1] + 1,
                last_diag + (0 if char_a == char_b else 1),
            )
            last_diag = old_diag
    return column[len(a)]