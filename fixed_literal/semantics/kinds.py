"""Element kinds a literal can hold, plus the predicates and coercions over them.

A literal's element kind plays the role of its element type: it decides the
default (terminator) element, which Python values may be stored, and which
other literals it can be compared with.
"""
from __future__ import annotations

import struct
from enum import Enum
from typing import Any, Dict, Set, Tuple

from fixed_literal.internals.errors import raise_type_error


class Unsupported:
    """Sentinel element marking a literal that carries no value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSUPPORTED"


UNSUPPORTED = Unsupported()


class ElementKind(Enum):
    CHAR = "char"
    WCHAR = "wchar_t"
    CHAR8 = "char8_t"
    CHAR16 = "char16_t"
    CHAR32 = "char32_t"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    UNSUPPORTED = "~"

    def __str__(self) -> str:
        return self.value


# === Kind Sets ===

CHARACTER_KINDS: Set[ElementKind] = {
    ElementKind.CHAR, ElementKind.WCHAR, ElementKind.CHAR8,
    ElementKind.CHAR16, ElementKind.CHAR32,
}

INTEGER_KINDS: Set[ElementKind] = {
    ElementKind.I8, ElementKind.I16, ElementKind.I32, ElementKind.I64,
    ElementKind.U8, ElementKind.U16, ElementKind.U32, ElementKind.U64,
}

FLOAT_KINDS: Set[ElementKind] = {ElementKind.F32, ElementKind.F64}

NUMERIC_KINDS: Set[ElementKind] = INTEGER_KINDS | FLOAT_KINDS | {ElementKind.BOOL}

BIT_WIDTH: Dict[ElementKind, int] = {
    ElementKind.CHAR: 8,
    ElementKind.WCHAR: 32,
    ElementKind.CHAR8: 8,
    ElementKind.CHAR16: 16,
    ElementKind.CHAR32: 32,
    ElementKind.I8: 8,
    ElementKind.I16: 16,
    ElementKind.I32: 32,
    ElementKind.I64: 64,
    ElementKind.U8: 8,
    ElementKind.U16: 16,
    ElementKind.U32: 32,
    ElementKind.U64: 64,
    ElementKind.F32: 32,
    ElementKind.F64: 64,
    ElementKind.BOOL: 1,
    ElementKind.UNSUPPORTED: 0,
}

# Declaration-file prefixes for character kinds (u8"..", u"..", U"..", L"..")
CHAR_PREFIXES: Dict[str, ElementKind] = {
    "": ElementKind.CHAR,
    "u8": ElementKind.CHAR8,
    "u": ElementKind.CHAR16,
    "U": ElementKind.CHAR32,
    "L": ElementKind.WCHAR,
}


def integer_range(kind: ElementKind) -> Tuple[int, int]:
    """Inclusive (min, max) for an integer kind."""
    width = BIT_WIDTH[kind]
    if kind.value.startswith("u"):
        return 0, (1 << width) - 1
    return -(1 << (width - 1)), (1 << (width - 1)) - 1


# === Kind Predicates ===

def is_character_kind(kind: ElementKind) -> bool:
    return kind in CHARACTER_KINDS


def is_numeric_kind(kind: ElementKind) -> bool:
    return kind in NUMERIC_KINDS


def are_comparable(a: ElementKind, b: ElementKind) -> bool:
    """Check if elements of two kinds can be compared for equality.

    Characters compare with characters (by code point) and numbers with
    numbers; the sentinel compares with nothing.

    Examples:
        >>> are_comparable(ElementKind.CHAR, ElementKind.CHAR32)
        True
        >>> are_comparable(ElementKind.F32, ElementKind.I64)
        True
        >>> are_comparable(ElementKind.F32, ElementKind.CHAR)
        False
    """
    if is_character_kind(a) and is_character_kind(b):
        return True
    return is_numeric_kind(a) and is_numeric_kind(b)


def wider_character_kind(a: ElementKind, b: ElementKind) -> ElementKind:
    """Pick the wider of two character kinds, preferring `a` on ties."""
    return b if BIT_WIDTH[b] > BIT_WIDTH[a] else a


# === Defaults, inference and coercion ===

def default_element(kind: ElementKind) -> Any:
    """The zero element of a kind, used as the string terminator."""
    if kind in CHARACTER_KINDS:
        return "\0"
    if kind in FLOAT_KINDS:
        return 0.0
    if kind is ElementKind.BOOL:
        return False
    if kind is ElementKind.UNSUPPORTED:
        return UNSUPPORTED
    return 0


def character_kind_for(text: str) -> ElementKind:
    """Narrowest default character kind able to hold every code point of `text`."""
    if all(ord(ch) <= 0xFF for ch in text):
        return ElementKind.CHAR
    return ElementKind.CHAR32


def infer_kind(value: Any) -> ElementKind:
    """Infer the element kind for a scalar.

    bool -> bool, int -> i64, float -> f64, a single character -> char
    (char32_t when it does not fit 8 bits), the sentinel -> ~.
    """
    if value is UNSUPPORTED:
        return ElementKind.UNSUPPORTED
    if isinstance(value, bool):
        return ElementKind.BOOL
    if isinstance(value, int):
        return ElementKind.I64
    if isinstance(value, float):
        return ElementKind.F64
    if isinstance(value, str) and len(value) == 1:
        return character_kind_for(value)
    raise_type_error("LE0023", value=value)


def coerce_element(kind: ElementKind, value: Any) -> Any:
    """Validate `value` against `kind` and return its stored form.

    Raises:
        LiteralTypeError: the value does not fit the kind.
    """
    if kind in CHARACTER_KINDS:
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise_type_error("LE0022", value=value, kind=kind)
            point = value
        elif isinstance(value, str) and len(value) == 1:
            point = ord(value)
        else:
            raise_type_error("LE0022", value=value, kind=kind)
        if point >= (1 << BIT_WIDTH[kind]):
            raise_type_error("LE0020", point=point, kind=kind)
        return chr(point)

    if kind in INTEGER_KINDS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise_type_error("LE0022", value=value, kind=kind)
        low, high = integer_range(kind)
        if not low <= value <= high:
            raise_type_error("LE0021", value=value, kind=kind)
        return value

    if kind in FLOAT_KINDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise_type_error("LE0022", value=value, kind=kind)
        if kind is ElementKind.F32:
            try:
                return struct.unpack("<f", struct.pack("<f", value))[0]
            except OverflowError:
                raise_type_error("LE0021", value=value, kind=kind)
        return float(value)

    if kind is ElementKind.BOOL:
        if not isinstance(value, (bool, int)) or value not in (0, 1):
            raise_type_error("LE0022", value=value, kind=kind)
        return bool(value)

    if value is not UNSUPPORTED:
        raise_type_error("LE0022", value=value, kind=kind)
    return UNSUPPORTED


def element_code(kind: ElementKind, element: Any) -> int:
    """Integer code unit of a stored element (code point for characters)."""
    if kind in CHARACTER_KINDS:
        return ord(element)
    if element is UNSUPPORTED:
        return 0
    return int(element)
