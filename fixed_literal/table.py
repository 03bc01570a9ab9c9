"""Ordered collection of named literal declarations."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from fixed_literal.internals.report import Span
from fixed_literal.literal import Literal


@dataclass
class LiteralTable:
    """Name -> Literal, in declaration order.

    Spans are kept alongside when the table came from a declaration file so
    later passes can point diagnostics at the declaring line.
    """
    entries: Dict[str, Literal] = field(default_factory=dict)
    spans: Dict[str, Optional[Span]] = field(default_factory=dict)

    def add(self, name: str, literal: Literal, span: Optional[Span] = None) -> None:
        self.entries[name] = literal
        self.spans[name] = span

    def get(self, name: str) -> Optional[Literal]:
        return self.entries.get(name)

    def __getitem__(self, name: str) -> Literal:
        return self.entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def names(self) -> List[str]:
        return list(self.entries)

    def items(self) -> List[Tuple[str, Literal]]:
        return list(self.entries.items())

    def dump(self) -> str:
        """One line per declaration: name, shape, category and content."""
        lines = []
        width = max((len(n) for n in self.entries), default=0)
        for name, lit in self.entries.items():
            lines.append(f"{name:<{width}}  {lit.shape!s:<22} {lit.category!s:<9} {lit!r}")
        return "\n".join(lines)
