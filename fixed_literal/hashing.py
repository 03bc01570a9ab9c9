"""
Literal hashing.

Strings hash with 64-bit FNV-1a over the UTF-8 bytes of their view, so two
strings that compare equal hash equal whatever their character kinds.
Values and undefined literals hash as the empty view, i.e. the bare offset
basis.

The result only depends on the content, never on the process, so it can be
baked into generated constants and compared across runs.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from fixed_literal.semantics.classify import LiteralCategory

if TYPE_CHECKING:
    from fixed_literal.literal import Literal


# FNV-1a Hash Algorithm Constants (64-bit)
FNV1A_OFFSET_BASIS = 14695981039346656037  # 0xcbf29ce484222325
FNV1A_PRIME = 1099511628211                # 0x100000001b3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def fnv1a(data: Iterable[int], seed: int = FNV1A_OFFSET_BASIS) -> int:
    """FNV-1a over a sequence of bytes: hash = (hash XOR byte) * FNV_PRIME."""
    h = seed
    for byte in data:
        h = ((h ^ byte) * FNV1A_PRIME) & _MASK64
    return h


def hash_view(view: str) -> int:
    # char16_t content may hold lone surrogates
    return fnv1a(view.encode("utf-8", "surrogatepass"))


def hash_literal(lit: Literal) -> int:
    if lit.category is not LiteralCategory.STRING:
        return FNV1A_OFFSET_BASIS
    return hash_view(lit.view())
