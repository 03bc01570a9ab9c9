"""Escape sequence handling for quoted literals in declaration files."""
from __future__ import annotations

from typing import Tuple

from fixed_literal.semantics.kinds import CHAR_PREFIXES, ElementKind

SIMPLE_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
    "'": "'",
    '0': '\0',
}

# Escape letter -> number of hex digits that follow it
HEX_ESCAPES = {'x': 2, 'u': 4}


def process_escapes(raw: str) -> str:
    r"""Turn C-style escapes into the characters they name.

    Handles \n \t \r \\ \" \' \0, \xNN and \uNNNN. A backslash that does not
    start a known escape is kept as written.

    Examples:
        >>> process_escapes(r"a\tb\x41é")
        'a\tbAé'
    """
    out = []
    i = 0
    n = len(raw)
    while i < n:
        ch = raw[i]
        if ch != '\\' or i + 1 == n:
            out.append(ch)
            i += 1
            continue

        letter = raw[i + 1]
        if letter in SIMPLE_ESCAPES:
            out.append(SIMPLE_ESCAPES[letter])
            i += 2
            continue

        width = HEX_ESCAPES.get(letter)
        digits = raw[i + 2:i + 2 + width] if width else ""
        if width and len(digits) == width:
            try:
                out.append(chr(int(digits, 16)))
                i += 2 + width
                continue
            except ValueError:
                pass
        out.append(ch)
        i += 1

    return ''.join(out)


def split_quoted(token: str) -> Tuple[ElementKind, str]:
    """Split a quoted token into its character kind and unescaped body.

    Examples:
        >>> split_quoted('u8"hi"')
        (<ElementKind.CHAR8: 'char8_t'>, 'hi')
    """
    quote = min(i for i in (token.find('"'), token.find("'")) if i >= 0)
    prefix = token[:quote]
    return CHAR_PREFIXES[prefix], process_escapes(token[quote + 1:-1])
