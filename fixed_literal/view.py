"""
View Projection Algorithms

Search and comparison over the populated content of a string literal. A view
is a plain ``str`` holding exactly the elements before the terminator; it is
derived on demand and never stored.

Implemented operations:
- find() / rfind(): first / last occurrence of a substring
- find_first_of() / find_last_of(): first / last element from a set
- find_first_not_of() / find_last_not_of(): first / last element outside a set
- compare(): three-way lexicographic comparison, with sub-range forms
- substr(), starts_with(), ends_with(), contains()

Every search returns an index into the view or NPOS. Forward searches start
at ``pos`` (default 0); reverse searches consider matches starting at or
before ``pos`` (default: the end of the view).
"""
from __future__ import annotations

from typing import Optional

from fixed_literal.internals.errors import raise_out_of_range

NPOS = -1


def check_position(pos: int) -> int:
    """Return pos, rejecting negative values."""
    if pos < 0:
        raise_out_of_range("LE0043", pos=pos)
    return pos


def cstring(raw: str) -> str:
    """Content of a NUL-terminated array: everything before the first '\\0'."""
    end = raw.find("\0")
    return raw if end == -1 else raw[:end]


def substr(view: str, pos: int = 0, count: Optional[int] = None) -> str:
    """Region of a view.

    Raises:
        OutOfRangeError: pos is negative or past the end of the view.
    """
    check_position(pos)
    if pos > len(view):
        raise_out_of_range("LE0042", pos=pos, size=len(view))
    if count is None:
        return view[pos:]
    return view[pos:pos + count]


def find(view: str, needle: str, pos: int = 0) -> int:
    check_position(pos)
    return view.find(needle, pos)


def rfind(view: str, needle: str, pos: Optional[int] = None) -> int:
    if pos is None:
        return view.rfind(needle)
    check_position(pos)
    # A match may start at pos, so it may end at pos + len(needle)
    return view.rfind(needle, 0, pos + len(needle))


def find_first_of(view: str, chars: str, pos: int = 0) -> int:
    check_position(pos)
    for i in range(pos, len(view)):
        if view[i] in chars:
            return i
    return NPOS


def find_last_of(view: str, chars: str, pos: Optional[int] = None) -> int:
    start = len(view) - 1 if pos is None else min(check_position(pos), len(view) - 1)
    for i in range(start, -1, -1):
        if view[i] in chars:
            return i
    return NPOS


def find_first_not_of(view: str, chars: str, pos: int = 0) -> int:
    check_position(pos)
    for i in range(pos, len(view)):
        if view[i] not in chars:
            return i
    return NPOS


def find_last_not_of(view: str, chars: str, pos: Optional[int] = None) -> int:
    start = len(view) - 1 if pos is None else min(check_position(pos), len(view) - 1)
    for i in range(start, -1, -1):
        if view[i] not in chars:
            return i
    return NPOS


def compare(view: str, other: str) -> int:
    """Three-way lexicographic comparison by code point: -1, 0 or 1."""
    return (view > other) - (view < other)


def compare_range(view: str, pos1: int, count1: Optional[int], other: str,
                  pos2: int = 0, count2: Optional[int] = None) -> int:
    """Compare view[pos1:pos1+count1] with other[pos2:pos2+count2].

    Raises:
        OutOfRangeError: pos1 or pos2 is past the end of its view.
    """
    return compare(substr(view, pos1, count1), substr(other, pos2, count2))


def starts_with(view: str, prefix: str) -> bool:
    return view[:len(prefix)] == prefix


def ends_with(view: str, suffix: str) -> bool:
    return len(view) >= len(suffix) and view[len(view) - len(suffix):] == suffix


def contains(view: str, needle: str) -> bool:
    return find(view, needle) != NPOS
