"""Literal constant materialization and deduplication.

This module emits literals as LLVM IR globals so that generated code can
reference them by address. Each distinct literal (same shape, same content)
is defined once as a private constant; declarations from a LiteralTable get
a public global pointing at that shared constant.

    string  literal<char16_t, 8>  ->  [9 x i16]
    value   literal<f32, 0>       ->  float
    undefined                     ->  {}
"""
from __future__ import annotations

import logging
from typing import Dict, Tuple

from llvmlite import ir, binding as llvm

from fixed_literal.hashing import fnv1a
from fixed_literal.literal import Literal
from fixed_literal.semantics.classify import LiteralCategory, Shape
from fixed_literal.semantics.kinds import (
    BIT_WIDTH, ElementKind, element_code,
)
from fixed_literal.table import LiteralTable

logger = logging.getLogger(__name__)


def element_type(kind: ElementKind) -> ir.Type:
    """LLVM type of one element of `kind`."""
    if kind is ElementKind.F32:
        return ir.FloatType()
    if kind is ElementKind.F64:
        return ir.DoubleType()
    if kind is ElementKind.UNSUPPORTED:
        return ir.LiteralStructType([])
    return ir.IntType(BIT_WIDTH[kind])


def literal_type(shape: Shape) -> ir.Type:
    """LLVM type of a whole literal: an array of N+1 elements for strings."""
    if shape.category is LiteralCategory.STRING:
        return ir.ArrayType(element_type(shape.kind), shape.slots)
    return element_type(shape.kind)


def literal_constant(lit: Literal) -> ir.Constant:
    """Initializer holding the literal's full storage."""
    ty = literal_type(lit.shape)
    category = lit.category
    if category is LiteralCategory.STRING:
        return ir.Constant(ty, [element_code(lit.kind, e) for e in lit.data()])
    if category is LiteralCategory.UNDEFINED:
        return ir.Constant(ty, None)
    if lit.kind in (ElementKind.F32, ElementKind.F64, ElementKind.BOOL):
        return ir.Constant(ty, lit.scalar)
    return ir.Constant(ty, element_code(lit.kind, lit.scalar))


def content_hash(lit: Literal) -> int:
    """Hash used to name a constant. Strings reuse Literal.hash()."""
    if lit.category is LiteralCategory.STRING:
        return lit.hash()
    return fnv1a(repr(lit.data()).encode("utf-8"))


class LiteralConstantManager:
    """Manages literal constants with content-based deduplication.

    Each unique (shape, content) pair is emitted once as a private global
    constant. Lookups go through a Dict keyed by the shape and the full
    storage, so hash collisions never merge two different literals.
    """

    def __init__(self, module: ir.Module):
        self.module = module
        self._cache: Dict[Tuple[Shape, tuple], ir.GlobalVariable] = {}

    def _make_global_name(self, lit: Literal) -> str:
        """Content-based name: same literal, same name across modules."""
        kind = lit.kind.name.lower()
        base = f".lit.{kind}.{lit.capacity}_{content_hash(lit):016x}"
        name = base
        n = 1
        # Colliding hashes for different content get a numeric suffix
        while name in self.module.globals:
            name = f"{base}.{n}"
            n += 1
        return name

    def get_or_create(self, lit: Literal) -> ir.GlobalVariable:
        """Get existing or create new constant global for `lit`."""
        key = (lit.shape, lit.data())
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        global_var = ir.GlobalVariable(
            self.module,
            literal_type(lit.shape),
            name=self._make_global_name(lit),
        )
        global_var.initializer = literal_constant(lit)
        global_var.global_constant = True
        global_var.linkage = 'private'
        global_var.unnamed_addr = True

        logger.debug("emitted %s for %r", global_var.name, lit)
        self._cache[key] = global_var
        return global_var

    def declare(self, name: str, lit: Literal) -> ir.GlobalVariable:
        """Public global `name` pointing at the shared constant for `lit`."""
        target = self.get_or_create(lit)
        public = ir.GlobalVariable(self.module, target.type, name=name)
        public.initializer = target
        public.global_constant = True
        return public

    def clear(self):
        self._cache.clear()

    @property
    def stats(self) -> Dict[str, int]:
        return {'unique_literals': len(self._cache)}


def build_module(table: LiteralTable, name: str = "literals") -> ir.Module:
    """Emit one public global per declaration of `table`."""
    module = ir.Module(name=name)
    manager = LiteralConstantManager(module)
    for decl_name, lit in table.items():
        manager.declare(decl_name, lit)
    logger.debug("built module %s: %d declarations, %d unique constants",
                 name, len(table), manager.stats['unique_literals'])
    return module


def verify_module(module: ir.Module) -> None:
    """Round-trip the IR through LLVM's parser and verifier.

    Raises:
        RuntimeError: LLVM rejected the module.
    """
    llmod = llvm.parse_assembly(str(module))
    llmod.verify()

