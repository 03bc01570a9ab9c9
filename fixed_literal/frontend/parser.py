"""Lark parser setup and literal table construction for declaration files."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from lark import Lark, Token, Tree, UnexpectedInput

from fixed_literal.frontend.escapes import split_quoted
from fixed_literal.internals import errors as er
from fixed_literal.internals.errors import LiteralError
from fixed_literal.concat import concatenate
from fixed_literal.internals.report import Reporter, Span, span_of
from fixed_literal.literal import Literal
from fixed_literal.semantics.capacity import is_valid_capacity
from fixed_literal.semantics.classify import LiteralCategory
from fixed_literal.semantics.kinds import ElementKind, is_character_kind
from fixed_literal.table import LiteralTable

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    return Lark.open(
        str(GRAMMAR_PATH),
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
        lexer="basic",
    )


def _error_span(e: UnexpectedInput) -> Optional[Span]:
    line = getattr(e, "line", -1)
    col = getattr(e, "column", -1)
    if line is None or line < 1:
        return None
    return Span(line, col, line, col)


def _error_message(e: UnexpectedInput) -> str:
    text = str(e).strip()
    return text.splitlines()[0] if text else type(e).__name__


def _operand_name(lit: Literal) -> str:
    if lit.category is LiteralCategory.VALUE and is_character_kind(lit.kind):
        return "character"
    return str(lit.category)


class TableBuilder:
    """Walks a declaration parse tree and evaluates it into a LiteralTable.

    Every problem is reported through the reporter; a declaration that fails
    to evaluate is left out of the table and later references to it are
    reported as unknown names.
    """

    def __init__(self, reporter: Reporter) -> None:
        self.reporter = reporter
        self.table = LiteralTable()

    def build(self, tree: Tree) -> LiteralTable:
        for decl in tree.children:
            self._decl(decl)
        return self.table

    def _decl(self, node: Tree) -> None:
        name_tok = node.children[0]
        name = str(name_tok)
        span = span_of(node)
        capacity_node = next((c for c in node.children[1:-1]
                              if isinstance(c, Tree) and c.data == "capacity"), None)

        if name in self.table:
            er.emit(self.reporter, er.ERR.LE0101, span_of(name_tok), name=name)
            return

        value = self._expr(node.children[-1], span)
        if value is None:
            return
        if capacity_node is not None:
            value = self._apply_capacity(name, value, capacity_node)
            if value is None:
                return

        logger.debug("declared %s as %s", name, value.shape)
        self.table.add(name, value, span)

    def _apply_capacity(self, name: str, value: Literal, node: Tree) -> Optional[Literal]:
        tok = node.children[0]
        span = span_of(tok)
        text = str(tok)
        if text.endswith("u") or text.startswith("-"):
            er.emit(self.reporter, er.ERR.LE0104, span, name=name,
                    reason=f"'{text}' is not a plain capacity")
            return None
        capacity = int(text)
        if not is_valid_capacity(capacity):
            er.emit(self.reporter, er.ERR.LE0104, span, name=name,
                    reason=f"{capacity} is not a power of two")
            return None
        if capacity == 0:
            er.emit(self.reporter, er.ERR.LE0104, span, name=name,
                    reason="a string needs room for at least one element")
            return None
        if value.category is not LiteralCategory.STRING:
            er.emit(self.reporter, er.ERR.LE0104, span, name=name,
                    reason=f"{value.category} literals have no capacity to set")
            return None

        wanted = value.size()
        if wanted > capacity:
            er.emit(self.reporter, er.ERR.LE0106, span, name=name,
                    wanted=wanted, capacity=capacity, kept=capacity)
        return Literal.string(value.view(), kind=value.kind, capacity=capacity)

    # === Expressions ===

    def _expr(self, node, fallback: Optional[Span]) -> Optional[Literal]:
        span = span_of(node) or fallback
        kind = node.data

        if kind == "concat":
            return self._concat(node, span)
        if kind == "ref":
            return self._ref(node.children[0])
        if kind == "undefined":
            return Literal()
        if kind in ("true", "false"):
            return Literal.value(kind == "true")

        tok: Token = node.children[0]
        try:
            if kind == "string":
                char_kind, text = split_quoted(str(tok))
                return Literal.string(text, kind=char_kind)
            if kind == "char":
                return self._char(tok)
            if kind == "float":
                return self._float(tok)
            return self._int(tok)
        except LiteralError as exc:
            er.emit(self.reporter, er.ERR.LE0105, span, text=str(tok), reason=exc.message)
            return None

    def _concat(self, node: Tree, span: Optional[Span]) -> Optional[Literal]:
        left = self._expr(node.children[0], span)
        right = self._expr(node.children[1], span)
        if left is None or right is None:
            return None
        result = concatenate(left, right)
        if result is None:
            er.emit(self.reporter, er.ERR.LE0103, span,
                    left=_operand_name(left), right=_operand_name(right))
        return result

    def _ref(self, tok: Token) -> Optional[Literal]:
        found = self.table.get(str(tok))
        if found is None:
            er.emit(self.reporter, er.ERR.LE0102, span_of(tok), name=str(tok))
            return None
        return found.copy()

    def _char(self, tok: Token) -> Optional[Literal]:
        char_kind, text = split_quoted(str(tok))
        if len(text) != 1:
            er.emit(self.reporter, er.ERR.LE0105, span_of(tok), text=str(tok),
                    reason="a character literal holds exactly one character")
            return None
        return Literal.value(text, kind=char_kind)

    def _float(self, tok: Token) -> Literal:
        text = str(tok)
        if text.endswith("f"):
            return Literal.value(float(text[:-1]), kind=ElementKind.F32)
        return Literal.value(float(text), kind=ElementKind.F64)

    def _int(self, tok: Token) -> Literal:
        text = str(tok)
        if text.endswith("u"):
            return Literal.value(int(text[:-1]), kind=ElementKind.U64)
        return Literal.value(int(text), kind=ElementKind.I64)


def parse_tree(src: str) -> Tree:
    return get_parser().parse(src)


def parse_declarations(src: str, reporter: Reporter, dump_parse: bool = False) -> LiteralTable:
    """Parse declaration source into a LiteralTable.

    Syntax errors are reported as LE0100 and give an empty table.
    """
    try:
        tree = parse_tree(src)
    except UnexpectedInput as e:
        er.emit(reporter, er.ERR.LE0100, _error_span(e), message=_error_message(e))
        return LiteralTable()

    if dump_parse:
        print(tree.pretty())

    table = TableBuilder(reporter).build(tree)
    logger.debug("parsed %d declarations from %s", len(table), reporter.filename)
    return table


def parse_file(path: Path, reporter: Optional[Reporter] = None) -> LiteralTable:
    src = Path(path).read_text(encoding="utf-8")
    if reporter is None:
        reporter = Reporter(source=src, filename=str(path))
    return parse_declarations(src, reporter)
