"""Truncating append and concatenation of string literals.

Appending never grows a literal: elements are copied from the receiver's
logical end until the source is exhausted or the last capacity slot has been
written, and everything beyond that is dropped without error. Concatenation
sizes a fresh literal with the capacity model and then appends, so callers
who need lossless growth pre-size through ``resize``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from fixed_literal.semantics.capacity import resize
from fixed_literal.semantics.classify import LiteralCategory
from fixed_literal.semantics.kinds import (
    ElementKind, character_kind_for, coerce_element, is_character_kind, wider_character_kind,
)

if TYPE_CHECKING:
    from fixed_literal.literal import Literal


def _string_operand(operand: Any) -> Optional[Tuple[List[Any], ElementKind, int]]:
    """(elements including a terminator, element kind, array length) of a string operand.

    A character value counts as one element. None when the operand cannot
    take part in string concatenation.
    """
    if isinstance(operand, str):
        return list(operand) + ["\0"], character_kind_for(operand), len(operand) + 1
    if isinstance(operand, (list, tuple)):
        if not all(isinstance(e, str) and len(e) == 1 for e in operand):
            return None
        text = "".join(operand)
        return list(text) + ["\0"], character_kind_for(text), len(text) + 1
    category = getattr(operand, "category", None)
    if category is LiteralCategory.STRING:
        size = operand.size()
        return list(operand.data()[:size + 1]), operand.kind, operand.capacity
    if category is LiteralCategory.VALUE and is_character_kind(operand.kind):
        # A single character takes one slot
        return [operand.scalar, "\0"], operand.kind, 1
    return None


def _is_character(operand: Any) -> bool:
    return getattr(operand, "category", None) is LiteralCategory.VALUE


def _write(target: Literal, elements: List[Any]) -> None:
    start = target.size()
    room = target.capacity - start
    copied = [coerce_element(target.kind, e) for e in elements[:room]]
    target._storage[start:start + len(copied)] = copied


def append_into(target: Literal, source: Any) -> bool:
    """Append `source` to `target` in place, truncating at capacity.

    Returns:
        False when `source` is not a string operand (nothing is written).

    Raises:
        LiteralTypeError: an element that would be copied does not fit the
            receiver's kind. The receiver is left untouched.
    """
    operand = _string_operand(source)
    if operand is None:
        return False
    _write(target, operand[0])
    return True


def concatenate(lhs: Any, rhs: Any) -> Optional[Literal]:
    """New string literal holding `lhs` followed by `rhs`.

    The result takes the wider of the two character kinds and capacity
    resize(left capacity + right capacity), where a raw operand counts its
    terminator. A character value counts one and pairs only with a string
    literal. Returns None for any other pair of operands.
    """
    from fixed_literal.literal import Literal

    left = _string_operand(lhs)
    right = _string_operand(rhs)
    if left is None or right is None:
        return None
    for single, other in ((lhs, rhs), (rhs, lhs)):
        if _is_character(single) and getattr(other, "category", None) is not LiteralCategory.STRING:
            return None

    kind = wider_character_kind(left[1], right[1])
    result = Literal(kind=kind, capacity=resize(left[2] + right[2]))
    _write(result, left[0])
    _write(result, right[0])
    return result
