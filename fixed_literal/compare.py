"""Cross-category equality and ordering.

Equality is decided by the pair of categories involved:

    string    / string     same size, element-wise equal
    string    / undefined  the string is empty
    string    / value      both empty, or a one-element string holding the value
                           (kinds must be comparable)
    value     / value      the single elements are equal (kinds must be comparable)
    undefined / undefined  always equal
    value     / undefined  never equal

Raw operands are a ``str`` read as a NUL-terminated array, or a list/tuple of
elements. Ordering exists only between strings (and raw character arrays);
everything else is unordered.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from fixed_literal.semantics.classify import LiteralCategory
from fixed_literal.semantics.kinds import are_comparable, is_character_kind
from fixed_literal import view as sv

if TYPE_CHECKING:
    from fixed_literal.literal import Literal

RAW_TYPES = (str, list, tuple)


def raw_view(raw: Any) -> Optional[str]:
    """View of a raw character array, None when `raw` is not one."""
    if isinstance(raw, str):
        return sv.cstring(raw)
    if isinstance(raw, (list, tuple)):
        if not all(isinstance(e, str) and len(e) == 1 for e in raw):
            return None
        return sv.cstring("".join(raw))
    return None


def _raw_first(raw: Any) -> Any:
    if isinstance(raw, str):
        return raw[0] if raw else "\0"
    return raw[0] if raw else None


def _string_vs_single(string: Literal, single: Literal) -> bool:
    if single.category is LiteralCategory.UNDEFINED:
        return string.empty()
    if not are_comparable(string.kind, single.kind):
        return False
    if string.empty() and single.empty():
        return True
    return string.size() == 1 and string.front() == single.front()


def literals_equal(lhs: Literal, rhs: Literal) -> bool:
    lc, rc = lhs.category, rhs.category
    if lc is LiteralCategory.STRING and rc is LiteralCategory.STRING:
        return lhs.view() == rhs.view()
    if lc is LiteralCategory.STRING:
        return _string_vs_single(lhs, rhs)
    if rc is LiteralCategory.STRING:
        return _string_vs_single(rhs, lhs)
    if are_comparable(lhs.kind, rhs.kind):
        return lhs.front() == rhs.front()
    # Uncomparable singles can only match when both carry nothing
    return lc is LiteralCategory.UNDEFINED and rc is LiteralCategory.UNDEFINED


def literal_equals_raw(lit: Literal, raw: Any) -> bool:
    category = lit.category
    if category is LiteralCategory.STRING:
        return lit.view() == raw_view(raw)
    if category is LiteralCategory.UNDEFINED:
        return raw_view(raw) == ""

    first = _raw_first(raw)
    if first is None:
        return False
    if is_character_kind(lit.kind) != isinstance(first, str):
        return False
    return lit.front() == first


def order(lhs: Any, rhs: Any) -> Optional[int]:
    """Three-way order of two string operands, None when they are unordered."""
    left = _orderable_view(lhs)
    right = _orderable_view(rhs)
    if left is None or right is None:
        return None
    return sv.compare(left, right)


def _orderable_view(operand: Any) -> Optional[str]:
    if isinstance(operand, RAW_TYPES):
        return raw_view(operand)
    if getattr(operand, "category", None) is LiteralCategory.STRING:
        return operand.view()
    return None
