# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from fixed_literal.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL  = "general"
    SHAPE    = "shape"
    ELEMENT  = "element"
    RANGE    = "range"
    DECL     = "declaration"
    TABLE    = "table"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)


class LiteralError(Exception):
    """Base exception for literal errors.

    Every instance carries the catalog code it was raised with, so callers
    can branch on ``exc.code`` instead of parsing the message.
    """

    def __init__(self, code: str, **kwargs):
        self.code = code
        self.kwargs = kwargs
        self.message = _fmt(code, **kwargs)
        super().__init__(f"{code}: {self.message}")


class OutOfRangeError(LiteralError, IndexError):
    """Access outside the populated (or stored) region of a literal."""


class LiteralTypeError(LiteralError, TypeError):
    """A literal shape, element or operand was rejected before use."""


class TableError(LiteralError):
    """Malformed or unsupported literal table file."""


def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)


def raise_out_of_range(code: str, **kwargs) -> None:
    raise OutOfRangeError(code, **kwargs)


def raise_type_error(code: str, **kwargs) -> None:
    raise LiteralTypeError(code, **kwargs)


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Shape and classifier validation (LE0001-LE0019)
_add(ErrorMessage("LE0001", Severity.ERROR,
    "capacity {capacity} is not zero or a power of two",
    Category.SHAPE, "Literal capacities are bucketed; use resize() to pick one."))

_add(ErrorMessage("LE0002", Severity.ERROR,
    "element kind '{kind}' cannot hold a string of capacity {capacity}",
    Category.SHAPE, "Only character kinds may have a non-zero capacity."))

_add(ErrorMessage("LE0003", Severity.ERROR,
    "the undefined sentinel cannot have capacity {capacity}",
    Category.SHAPE, "Undefined literals always have capacity 0."))

_add(ErrorMessage("LE0004", Severity.ERROR,
    "'{predicate}' needs at least one operand",
    Category.SHAPE, "Classifier predicates reject an empty operand list."))

_add(ErrorMessage("LE0005", Severity.ERROR,
    "'{predicate}' got an incomplete operand: {operand}",
    Category.SHAPE, "Forward references must be resolved before classification."))

_add(ErrorMessage("LE0006", Severity.ERROR,
    "cannot size a literal for a negative length {length}",
    Category.SHAPE, "Capacity requests must be non-negative."))

_add(ErrorMessage("LE0007", Severity.ERROR,
    "cannot widen capacity {capacity} to {target}",
    Category.SHAPE, "A widening copy needs a target capacity at least as large as the source."))

_add(ErrorMessage("LE0008", Severity.ERROR,
    "cannot swap {left} with {right}",
    Category.SHAPE, "Only literals of the same shape exchange storage."))

_add(ErrorMessage("LE0009", Severity.ERROR,
    "a string literal needs a capacity of at least 1, got {capacity}",
    Category.SHAPE, "Capacity 0 is reserved for values and undefined literals."))

_add(ErrorMessage("LE0010", Severity.ERROR,
    "{kind!r} is not an element kind",
    Category.SHAPE, "Literal shapes are built from ElementKind members."))

# Element coercion (LE0020-LE0039)
_add(ErrorMessage("LE0020", Severity.ERROR,
    "code point U+{point:04X} does not fit element kind '{kind}'",
    Category.ELEMENT, "Character elements must fit the bit width of their kind."))

_add(ErrorMessage("LE0021", Severity.ERROR,
    "value {value} is out of range for element kind '{kind}'",
    Category.ELEMENT, "Integer elements must fit the range of their kind."))

_add(ErrorMessage("LE0022", Severity.ERROR,
    "cannot store {value!r} in element kind '{kind}'",
    Category.ELEMENT, "The element does not match the kind of the literal."))

_add(ErrorMessage("LE0023", Severity.ERROR,
    "cannot infer an element kind for {value!r}",
    Category.ELEMENT, "Pass an explicit kind for this element."))

_add(ErrorMessage("LE0024", Severity.ERROR,
    "'{operation}' is not defined for {category} literals",
    Category.ELEMENT, "The operation needs a literal of another category."))

_add(ErrorMessage("LE0025", Severity.ERROR,
    "cannot search a '{kind}' literal for a '{other}' literal",
    Category.ELEMENT, "Search operands must share the element kind of the receiver."))

# Range (LE0040-LE0049)
_add(ErrorMessage("LE0040", Severity.ERROR,
    "subscript index {index} outside literal limits (size {size})",
    Category.RANGE, "Raised in safe mode for access outside the logical size."))

_add(ErrorMessage("LE0041", Severity.ERROR,
    "index {index} outside literal storage ({slots} slots)",
    Category.RANGE, "at() is always checked against the full storage."))

_add(ErrorMessage("LE0042", Severity.ERROR,
    "position {pos} is past the end of a view of size {size}",
    Category.RANGE, "Sub-range operations need a start position inside the view."))

_add(ErrorMessage("LE0043", Severity.ERROR,
    "position {pos} is negative",
    Category.RANGE, "Positions count from the start of the view."))

# Declaration files (LE0100-LE0119)
_add(ErrorMessage("LE0100", Severity.ERROR,
    "syntax error: {message}",
    Category.DECL, "The declaration file could not be parsed."))

_add(ErrorMessage("LE0101", Severity.ERROR,
    "literal '{name}' is already declared",
    Category.DECL, "Each declaration name must be unique."))

_add(ErrorMessage("LE0102", Severity.ERROR,
    "unknown literal '{name}'",
    Category.DECL, "Names may only refer to earlier declarations."))

_add(ErrorMessage("LE0103", Severity.ERROR,
    "cannot concatenate {left} and {right} literals",
    Category.DECL, "Strings concatenate with strings or single characters."))

_add(ErrorMessage("LE0104", Severity.ERROR,
    "invalid capacity for '{name}': {reason}",
    Category.DECL, "Explicit capacities are bucketed and must hold a string."))

_add(ErrorMessage("LE0105", Severity.ERROR,
    "invalid literal '{text}': {reason}",
    Category.DECL, "The literal does not fit its element kind."))

_add(ErrorMessage("LE0106", Severity.WARNING,
    "'{name}' holds {wanted} elements but capacity {capacity} keeps only {kept}",
    Category.DECL, "Content beyond capacity is silently truncated."))

# Table files (LE0200-LE0219)
_add(ErrorMessage("LE0200", Severity.ERROR,
    "invalid literal table file '{path}': bad magic bytes",
    Category.TABLE, "The file is not a literal table."))

_add(ErrorMessage("LE0201", Severity.ERROR,
    "literal table '{path}' has version {version}, supported: {supported}",
    Category.TABLE, "The table was written by an incompatible version."))

_add(ErrorMessage("LE0202", Severity.ERROR,
    "literal table '{path}' is truncated in {section} (expected {expected} bytes, got {actual})",
    Category.TABLE, "The file ended before a section was complete."))

_add(ErrorMessage("LE0203", Severity.ERROR,
    "literal table '{path}' has corrupt metadata: {reason}",
    Category.TABLE, "The MessagePack metadata could not be decoded."))

_add(ErrorMessage("LE0204", Severity.ERROR,
    "literal table entry '{name}' is malformed: {reason}",
    Category.TABLE, "A declaration in the metadata does not describe a valid literal."))

_add(ErrorMessage("LE0205", Severity.ERROR,
    "literal table '{path}' has an IR section that is not UTF-8: {reason}",
    Category.TABLE, "The IR payload must be LLVM assembly text."))
