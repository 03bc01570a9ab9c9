"""Diagnostics for declaration files.

A declaration file is small and line oriented, so every diagnostic is shown
against the single source line it points at, underlined from its start to
its end column:

    decls.lit:2:5: error[LE0103]: cannot concatenate string and value literals
       2 | a = "x" + 1;
         |     ^~~~~~~
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, TextIO

from lark import Token

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"

_KIND_COLOR = {"error": RED, "warning": YELLOW}


def _paint(text: str, use_color: bool, *codes: str) -> str:
    return "".join(codes) + text + RESET if use_color else text


def supports_color(stream: TextIO) -> bool:
    """TTY streams get ANSI styling unless NO_COLOR is set or TERM=dumb."""
    if os.getenv("NO_COLOR") is not None or os.getenv("TERM") == "dumb":
        return False
    return bool(getattr(stream, "isatty", lambda: False)())


@dataclass
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

    def width(self) -> int:
        """Columns covered on the first line (at least one)."""
        if self.end_line != self.line:
            return 1
        return max(1, self.end_col - self.col)


@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None


def span_of(t: Any) -> Optional[Span]:
    """Source span of a lark tree (via its meta) or token."""
    m = getattr(t, "meta", None)
    if m is not None and not getattr(m, "empty", True):
        return Span(m.line, m.column, m.end_line, m.end_column)
    if isinstance(t, Token) and t.line is not None and t.column is not None:
        return Span(t.line, t.column, t.end_line or t.line, t.end_column or t.column)
    return None


class Reporter:
    """Collects the diagnostics of one declaration file."""

    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span]) -> None:
        self.items.append(Diagnostic("error", code, msg, span))

    def warn(self, code: str, msg: str, span: Optional[Span]) -> None:
        self.items.append(Diagnostic("warning", code, msg, span))

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.items)

    @property
    def codes(self) -> List[str]:
        return [d.code for d in self.items]

    def summary(self) -> str:
        """Counts line such as '2 errors, 1 warning in decls.lit'."""
        errors = sum(1 for d in self.items if d.kind == "error")
        warnings = len(self.items) - errors
        parts = []
        if errors:
            parts.append(f"{errors} error{'s' if errors != 1 else ''}")
        if warnings:
            parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
        counts = ", ".join(parts) or "no problems"
        return f"{counts} in {Path(self.filename).name}"

    def _source_line(self, line: int) -> Optional[str]:
        if not self.source:
            return None
        lines = self.source.splitlines()
        return lines[line - 1] if 0 < line <= len(lines) else None

    def _render(self, d: Diagnostic, use_color: bool) -> List[str]:
        name = Path(self.filename).name
        loc = f"{name}:{d.span.line}:{d.span.col}" if d.span else name
        head = (f"{_paint(loc, use_color, CYAN)}: {_paint(d.kind, use_color, BOLD, _KIND_COLOR[d.kind])}"
                f"[{_paint(d.code, use_color, DIM)}]: {d.message}")
        if d.span is None:
            return [head]
        text = self._source_line(d.span.line)
        if text is None:
            return [head]

        gutter = f"{d.span.line:>4}"
        marker = "^" + "~" * (d.span.width() - 1)
        pad = " " * (max(1, d.span.col) - 1)
        return [
            head,
            f"{_paint(gutter, use_color, DIM)} | {text}",
            f"{' ' * len(gutter)} | {pad}{_paint(marker, use_color, _KIND_COLOR[d.kind])}",
        ]

    def format(self, use_color: bool = False) -> str:
        out: List[str] = []
        for d in self.items:
            out.extend(self._render(d, use_color))
        return "\n".join(out)

    def print(self, stream: Optional[TextIO] = None, use_color: Optional[bool] = None) -> None:
        """Print every diagnostic and the summary line (default: sys.stderr)."""
        stream = stream or sys.stderr
        if not self.items:
            return
        if use_color is None:
            use_color = supports_color(stream)
        print(self.format(use_color=use_color), file=stream)
        print(self.summary(), file=stream)
