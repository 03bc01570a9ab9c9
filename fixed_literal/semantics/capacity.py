"""Capacity bucketing.

Literal capacities are rounded up to the next power of two so that literals
of slightly different lengths share one container shape. A literal built
from a source of length M (terminator included) gets capacity resize(M).
"""
from __future__ import annotations

from fixed_literal.internals.errors import raise_type_error


def resize(length: int) -> int:
    """Bucketed capacity for a requested length.

    Examples:
        >>> [resize(n) for n in (0, 1, 2, 3, 5, 12)]
        [0, 1, 2, 4, 8, 16]
    """
    if length < 0:
        raise_type_error("LE0006", length=length)
    if length == 0:
        return 0
    return 1 << (length - 1).bit_length()


def is_valid_capacity(capacity: int) -> bool:
    """Zero or a power of two."""
    return capacity >= 0 and capacity & (capacity - 1) == 0


def require_capacity(capacity: int) -> int:
    if not isinstance(capacity, int) or isinstance(capacity, bool) or not is_valid_capacity(capacity):
        raise_type_error("LE0001", capacity=capacity)
    return capacity
