"""Literal shapes and the category classifier.

A shape is the pair (element kind, capacity) that every literal instance is
built on. Its category (undefined, value or string) follows from the pair
alone, so it is computed once per distinct shape and shared by everything
that needs to branch on it: comparison, concatenation and the search
surface.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, ForwardRef

from fixed_literal.internals.errors import raise_type_error
from fixed_literal.semantics.capacity import require_capacity
from fixed_literal.semantics.kinds import ElementKind, is_character_kind


class LiteralCategory(Enum):
    UNDEFINED = "undefined"
    VALUE = "value"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Shape:
    kind: ElementKind
    capacity: int

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ElementKind):
            raise_type_error("LE0010", kind=self.kind)
        require_capacity(self.capacity)
        if self.kind is ElementKind.UNSUPPORTED:
            if self.capacity != 0:
                raise_type_error("LE0003", capacity=self.capacity)
        elif self.capacity > 0 and not is_character_kind(self.kind):
            raise_type_error("LE0002", kind=self.kind, capacity=self.capacity)

    def __str__(self) -> str:
        return f"literal<{self.kind}, {self.capacity}>"

    @property
    def category(self) -> LiteralCategory:
        return classify(self)

    @property
    def slots(self) -> int:
        return self.capacity + 1


UNDEFINED_SHAPE = Shape(ElementKind.UNSUPPORTED, 0)


@lru_cache(maxsize=None)
def classify(shape: Shape) -> LiteralCategory:
    if shape.capacity > 0:
        return LiteralCategory.STRING
    if shape.kind is ElementKind.UNSUPPORTED:
        return LiteralCategory.UNDEFINED
    return LiteralCategory.VALUE


def shape_of(operand: Any) -> Optional[Shape]:
    """Shape of a literal instance (or a bare shape), None for anything else."""
    if isinstance(operand, Shape):
        return operand
    shape = getattr(operand, "shape", None)
    return shape if isinstance(shape, Shape) else None


def _validate(predicate: str, operands: tuple) -> None:
    if not operands:
        raise_type_error("LE0004", predicate=predicate)
    for operand in operands:
        if isinstance(operand, ForwardRef):
            raise_type_error("LE0005", predicate=predicate, operand=operand)


def _all_in(predicate: str, operands: tuple, category: Optional[LiteralCategory]) -> bool:
    _validate(predicate, operands)
    for operand in operands:
        shape = shape_of(operand)
        if shape is None:
            return False
        if category is not None and classify(shape) is not category:
            return False
    return True


def is_literal(*operands: Any) -> bool:
    """All operands are literals (instances or shapes)."""
    return _all_in("is_literal", operands, None)


def is_literal_string(*operands: Any) -> bool:
    """All operands are string literals."""
    return _all_in("is_literal_string", operands, LiteralCategory.STRING)


def is_literal_value(*operands: Any) -> bool:
    """All operands are value literals."""
    return _all_in("is_literal_value", operands, LiteralCategory.VALUE)


def is_literal_undefined(*operands: Any) -> bool:
    """All operands are undefined literals."""
    return _all_in("is_literal_undefined", operands, LiteralCategory.UNDEFINED)


def is_literal_char(*kinds: Any) -> bool:
    """All operands are element kinds usable in string literals."""
    _validate("is_literal_char", kinds)
    return all(isinstance(k, ElementKind) and is_character_kind(k) for k in kinds)
