"""The fixed-capacity literal container.

A ``Literal`` stores N+1 elements of one element kind, where the capacity N
is 0 or a power of two and never changes after construction. The shape
(kind, capacity) decides what the literal is:

    Literal()                        undefined: carries nothing
    Literal.value(5.5)               value: a single scalar in slot 0
    Literal.string("Test String")    string: up to N characters, terminated

Strings find their size by scanning for the terminator, so the logical size
and the storage can never disagree. Appending truncates silently at capacity.
"""
from __future__ import annotations

import operator
from typing import Any, Iterator, List, Optional, Sequence, Union

from fixed_literal.internals import config
from fixed_literal.internals.errors import raise_out_of_range, raise_type_error
from fixed_literal.semantics.capacity import require_capacity, resize
from fixed_literal.semantics.classify import LiteralCategory, Shape, classify
from fixed_literal.semantics.kinds import (
    UNSUPPORTED, ElementKind, character_kind_for, coerce_element,
    default_element, infer_kind, is_character_kind,
)
from fixed_literal import compare as cmp
from fixed_literal import concat
from fixed_literal import view as sv
from fixed_literal.hashing import hash_literal
from fixed_literal.view import NPOS

StringSource = Union[str, Sequence[str], "Literal"]


class Literal:
    __slots__ = ("shape", "_storage")

    npos = NPOS

    def __init__(self, kind: ElementKind = ElementKind.UNSUPPORTED, capacity: int = 0) -> None:
        self.shape = Shape(kind, capacity)
        self._storage: List[Any] = [default_element(kind)] * (capacity + 1)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def value(cls, value: Any, kind: Optional[ElementKind] = None) -> Literal:
        """Wrap a scalar into slot 0. The sentinel gives an undefined literal."""
        if value is UNSUPPORTED and kind in (None, ElementKind.UNSUPPORTED):
            return cls()
        kind = kind or infer_kind(value)
        result = cls(kind, 0)
        result._storage[0] = coerce_element(kind, value)
        return result

    @classmethod
    def string(cls, source: StringSource, kind: Optional[ElementKind] = None,
               capacity: Optional[int] = None) -> Literal:
        """Build a string literal from a str, a sequence of characters or another string literal.

        A raw source of length M gets capacity resize(M + 1), the extra slot
        being its terminator. A literal source keeps its capacity unless a
        larger one is given (a widening copy). Content beyond an explicit
        capacity is truncated; the result is always terminated.
        """
        if isinstance(source, Literal):
            if source.category is not LiteralCategory.STRING:
                raise_type_error("LE0024", operation="string", category=source.category)
            if capacity is not None and capacity < source.capacity:
                raise_type_error("LE0007", capacity=source.capacity, target=capacity)
            elements = list(source._storage[:source.capacity])
            kind = kind or source.kind
            capacity = source.capacity if capacity is None else capacity
        else:
            elements = list(source)
            if kind is None:
                kind = character_kind_for("".join(e for e in elements if isinstance(e, str)))
            if capacity is None:
                capacity = resize(len(elements) + 1)

        require_capacity(capacity)
        if capacity == 0:
            raise_type_error("LE0009", capacity=capacity)
        result = cls(kind, capacity)
        copied = [coerce_element(kind, e) for e in elements[:capacity]]
        result._storage[:len(copied)] = copied
        return result

    @classmethod
    def of(cls, source: Any) -> Literal:
        """Pick the literal category from the source, the way a literal is spelled.

        Another literal is copied, text becomes a string, None or the
        sentinel give an undefined literal, and any other scalar a value.
        """
        if isinstance(source, Literal):
            return source.copy()
        if source is None or source is UNSUPPORTED:
            return cls()
        if isinstance(source, (str, list, tuple)):
            return cls.string(source)
        return cls.value(source)

    def copy(self) -> Literal:
        result = Literal.__new__(Literal)
        result.shape = self.shape
        result._storage = list(self._storage)
        return result

    __copy__ = copy

    def widened(self, capacity: int) -> Literal:
        """Copy into a string literal of equal or larger capacity."""
        return Literal.string(self, capacity=capacity)

    def resized(self, length: int) -> Literal:
        """Copy into capacity resize(length), truncating content that no longer fits.

        Prefer substr() when shrinking on purpose.
        """
        self._require(LiteralCategory.STRING, "resized")
        capacity = resize(length)
        if capacity == 0:
            raise_type_error("LE0009", capacity=capacity)
        result = Literal(self.kind, capacity)
        kept = self._storage[:min(self.size(), capacity)]
        result._storage[:len(kept)] = kept
        return result

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def kind(self) -> ElementKind:
        return self.shape.kind

    @property
    def capacity(self) -> int:
        return self.shape.capacity

    @property
    def category(self) -> LiteralCategory:
        return classify(self.shape)

    def _require(self, category: LiteralCategory, operation: str) -> None:
        if self.category is not category:
            raise_type_error("LE0024", operation=operation, category=self.category)

    # ------------------------------------------------------------------
    # Encapsulation
    # ------------------------------------------------------------------

    def size(self) -> int:
        if self.capacity == 0:
            return 0
        try:
            return self._storage.index("\0", 0, self.capacity)
        except ValueError:
            return self.capacity

    def __len__(self) -> int:
        return self.size()

    def empty(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        if self.category is LiteralCategory.UNDEFINED:
            return False
        return self._storage[0] != default_element(self.kind)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def _check_index(self, index: Any) -> int:
        index = operator.index(index)
        if config.SAFE_MODE:
            size = self.size()
            if not 0 <= index < size:
                raise_out_of_range("LE0040", index=index, size=size)
        return index

    def __getitem__(self, index: int) -> Any:
        if self.capacity == 0:
            return self._storage[0]
        return self._storage[self._check_index(index)]

    def __setitem__(self, index: int, element: Any) -> None:
        element = coerce_element(self.kind, element)
        if self.capacity == 0:
            self._storage[0] = element
        else:
            self._storage[self._check_index(index)] = element

    def at(self, index: int) -> Any:
        """Element at `index`, checked against the whole storage in every mode."""
        index = operator.index(index)
        if not 0 <= index <= self.capacity:
            raise_out_of_range("LE0041", index=index, slots=self.shape.slots)
        return self._storage[index]

    def front(self) -> Any:
        return self._storage[0]

    def back(self) -> Any:
        return self._storage[self.size() - 1]

    def data(self) -> tuple:
        return tuple(self._storage)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._storage[:self.size()])

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self._storage[:self.size()])

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @property
    def scalar(self) -> Any:
        """The stored element of a value or undefined literal."""
        if self.capacity != 0:
            raise_type_error("LE0024", operation="scalar", category=self.category)
        return self._storage[0]

    def view(self) -> str:
        """Populated content of a string literal."""
        self._require(LiteralCategory.STRING, "view")
        return "".join(self._storage[:self.size()])

    def __str__(self) -> str:
        category = self.category
        if category is LiteralCategory.STRING:
            return self.view()
        if category is LiteralCategory.VALUE:
            return str(self._storage[0])
        return ""

    def __repr__(self) -> str:
        category = self.category
        if category is LiteralCategory.STRING:
            content = repr(self.view())
        elif category is LiteralCategory.VALUE:
            content = repr(self._storage[0])
        else:
            content = ""
        return f"Literal<{self.kind}, {self.capacity}>({content})"

    def hash(self) -> int:
        """Content hash (64-bit FNV-1a), stable across processes."""
        return hash_literal(self)

    # Mutable, and equality is not transitive across categories
    __hash__ = None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def assign(self, source: StringSource) -> Literal:
        """Overwrite the content from an array, keeping the capacity."""
        self._require(LiteralCategory.STRING, "assign")
        if isinstance(source, Literal):
            source = source.view()
        elements = list(source) + ["\0"]
        copied = [coerce_element(self.kind, e) for e in elements[:self.capacity]]
        self._storage[:len(copied)] = copied
        return self

    def swap(self, other: Literal) -> None:
        if self.shape != other.shape:
            raise_type_error("LE0008", left=self.shape, right=other.shape)
        self._storage, other._storage = other._storage, self._storage

    def __iadd__(self, other: Any) -> Literal:
        if self.category is not LiteralCategory.STRING:
            return NotImplemented
        if not concat.append_into(self, other):
            return NotImplemented
        return self

    def __add__(self, other: Any) -> Literal:
        result = concat.concatenate(self, other)
        return NotImplemented if result is None else result

    def __radd__(self, other: Any) -> Literal:
        result = concat.concatenate(other, self)
        return NotImplemented if result is None else result

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Literal):
            return cmp.literals_equal(self, other)
        if isinstance(other, cmp.RAW_TYPES):
            return cmp.literal_equals_raw(self, other)
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        result = cmp.order(self, other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = cmp.order(self, other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = cmp.order(self, other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = cmp.order(self, other)
        return NotImplemented if result is None else result >= 0

    def compare(self, other: StringSource, pos1: int = 0, count1: Optional[int] = None,
                pos2: int = 0, count2: Optional[int] = None) -> int:
        """Three-way comparison of self[pos1:pos1+count1] with other[pos2:pos2+count2].

        Raises:
            OutOfRangeError: a start position is past the end of its view.
        """
        self._require(LiteralCategory.STRING, "compare")
        return sv.compare_range(self.view(), pos1, count1, self._operand_view(other), pos2, count2)

    def substr(self, pos: int = 0, count: Optional[int] = None) -> Literal:
        """Same-shape copy of a region; empty when pos is at or past the end.

        Raises:
            OutOfRangeError: pos is negative.
        """
        self._require(LiteralCategory.STRING, "substr")
        sv.check_position(pos)
        result = Literal(self.kind, self.capacity)
        size = self.size()
        if pos >= size:
            return result
        if count is None or count > size - pos:
            count = size - pos
        result._storage[:count] = self._storage[pos:pos + count]
        return result

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _operand_view(self, other: Any) -> str:
        if isinstance(other, Literal):
            if other.category is LiteralCategory.STRING:
                return other.view()
            if other.category is LiteralCategory.VALUE and is_character_kind(other.kind):
                return other.front()
            raise_type_error("LE0024", operation="search", category=other.category)
        if isinstance(other, str):
            return other
        if isinstance(other, (list, tuple)):
            return "".join(coerce_element(self.kind, e) for e in other)
        return coerce_element(self.kind, other)

    def _needle(self, needle: Any, count: Optional[int], operation: str,
                pos: Optional[int]) -> Optional[str]:
        """Search operand as a view, None when it can never match."""
        self._require(LiteralCategory.STRING, operation)
        if pos is not None:
            sv.check_position(pos)
        if isinstance(needle, Literal) and needle.category is LiteralCategory.STRING:
            if needle.kind is not self.kind:
                raise_type_error("LE0025", kind=self.kind, other=needle.kind)
            # A literal with more room than the receiver is never searched for
            if needle.capacity > self.capacity:
                return None
        text = self._operand_view(needle)
        return text if count is None else text[:count]

    def find(self, needle: Any, pos: int = 0, count: Optional[int] = None) -> int:
        text = self._needle(needle, count, "find", pos)
        return NPOS if text is None else sv.find(self.view(), text, pos)

    def rfind(self, needle: Any, pos: Optional[int] = None, count: Optional[int] = None) -> int:
        text = self._needle(needle, count, "rfind", pos)
        return NPOS if text is None else sv.rfind(self.view(), text, pos)

    def find_first_of(self, chars: Any, pos: int = 0, count: Optional[int] = None) -> int:
        text = self._needle(chars, count, "find_first_of", pos)
        return NPOS if text is None else sv.find_first_of(self.view(), text, pos)

    def find_last_of(self, chars: Any, pos: Optional[int] = None, count: Optional[int] = None) -> int:
        text = self._needle(chars, count, "find_last_of", pos)
        return NPOS if text is None else sv.find_last_of(self.view(), text, pos)

    def find_first_not_of(self, chars: Any, pos: int = 0, count: Optional[int] = None) -> int:
        text = self._needle(chars, count, "find_first_not_of", pos)
        return NPOS if text is None else sv.find_first_not_of(self.view(), text, pos)

    def find_last_not_of(self, chars: Any, pos: Optional[int] = None, count: Optional[int] = None) -> int:
        text = self._needle(chars, count, "find_last_not_of", pos)
        return NPOS if text is None else sv.find_last_not_of(self.view(), text, pos)

    def starts_with(self, prefix: Any) -> bool:
        if self.category is not LiteralCategory.STRING and self._is_element(prefix):
            # Single-slot literals are empty by convention
            return False
        return sv.starts_with(self.view(), self._operand_view(prefix))

    def ends_with(self, suffix: Any) -> bool:
        if self.category is not LiteralCategory.STRING and self._is_element(suffix):
            return False
        return sv.ends_with(self.view(), self._operand_view(suffix))

    def contains(self, needle: Any) -> bool:
        return self.find(needle) != NPOS

    def __contains__(self, needle: Any) -> bool:
        return self.contains(needle)

    @staticmethod
    def _is_element(operand: Any) -> bool:
        if isinstance(operand, str):
            return len(operand) == 1
        return not isinstance(operand, (Literal, list, tuple))


def swap(lhs: Literal, rhs: Literal) -> None:
    """Exchange the storage of two literals of the same shape."""
    lhs.swap(rhs)
