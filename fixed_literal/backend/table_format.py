"""Binary literal table format (.ltab).

A table file bundles the declarations of a LiteralTable (as MessagePack
metadata) with the LLVM IR emitted for them, so consumers can either
rebuild the literals or link the constants without re-parsing the source.

File format specification (version 1):

    ┌─────────────────────────────────────────────────────────────┐
    │ MAGIC (8 bytes): b"\\x89LTAB\\r\\n\\x1a"                      │
    ├─────────────────────────────────────────────────────────────┤
    │ VERSION (4 bytes): uint32 LE                                │
    ├─────────────────────────────────────────────────────────────┤
    │ METADATA_LENGTH (8 bytes): uint64 LE                        │
    ├─────────────────────────────────────────────────────────────┤
    │ METADATA_BLOB (N bytes): MessagePack-encoded dict           │
    ├─────────────────────────────────────────────────────────────┤
    │ IR_LENGTH (8 bytes): uint64 LE                              │
    ├─────────────────────────────────────────────────────────────┤
    │ IR_BLOB (M bytes): LLVM IR text (UTF-8)                     │
    └─────────────────────────────────────────────────────────────┘

Each declaration in the metadata is a dict with ``name``, ``kind`` (the
element kind spelling), ``capacity`` and ``content``: a list of code points
for strings, the scalar for values (a code point for character values) and
None for undefined literals.
"""
from __future__ import annotations

import datetime
import logging
import struct
from pathlib import Path
from typing import Any, BinaryIO, Dict, Tuple

import msgpack

from fixed_literal.internals.errors import LiteralError, TableError
from fixed_literal.internals.version import get_versions
from fixed_literal.literal import Literal
from fixed_literal.semantics.classify import LiteralCategory
from fixed_literal.semantics.kinds import ElementKind, is_character_kind
from fixed_literal.table import LiteralTable

logger = logging.getLogger(__name__)

FORMAT_NAME = "fixed-literal-table"


# === Declarations <-> metadata ===

def declaration_to_dict(name: str, lit: Literal) -> Dict[str, Any]:
    category = lit.category
    if category is LiteralCategory.STRING:
        content = [ord(e) for e in lit.data()[:lit.size()]]
    elif category is LiteralCategory.VALUE:
        content = ord(lit.scalar) if is_character_kind(lit.kind) else lit.scalar
    else:
        content = None
    return {
        "name": name,
        "kind": lit.kind.value,
        "capacity": lit.capacity,
        "category": category.value,
        "content": content,
        "hash": lit.hash(),
    }


def declaration_from_dict(entry: Dict[str, Any]) -> Tuple[str, Literal]:
    """Rebuild one declaration.

    Raises:
        TableError: LE0204 when the entry does not describe a valid literal.
    """
    name = entry.get("name", "?") if isinstance(entry, dict) else "?"
    try:
        kind = ElementKind(entry["kind"])
        capacity = entry["capacity"]
        content = entry["content"]
        if kind is ElementKind.UNSUPPORTED:
            lit = Literal()
        elif capacity == 0:
            if is_character_kind(kind):
                content = chr(content)
            lit = Literal.value(content, kind=kind)
        else:
            lit = Literal.string([chr(c) for c in content], kind=kind, capacity=capacity)
    except LiteralError as e:
        raise TableError("LE0204", name=name, reason=e.message) from e
    except (KeyError, TypeError, ValueError) as e:
        raise TableError("LE0204", name=name, reason=f"{type(e).__name__}: {e}") from e
    return name, lit


def table_metadata(table: LiteralTable) -> Dict[str, Any]:
    return {
        "format": FORMAT_NAME,
        "compiler_version": get_versions()["app"],
        "created_at": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "declarations": [declaration_to_dict(n, lit) for n, lit in table.items()],
    }


def table_from_metadata(metadata: Dict[str, Any]) -> LiteralTable:
    table = LiteralTable()
    for entry in metadata.get("declarations", []):
        name, lit = declaration_from_dict(entry)
        table.add(name, lit)
    return table


# === File format ===

class TableFormat:
    """Binary format reader/writer for .ltab files."""

    MAGIC = b'\x89LTAB\r\n\x1a'
    VERSION = 1
    FIXED_HEADER_SIZE = 20  # 8 (magic) + 4 (version) + 8 (meta_len)
    MAX_FILE_SIZE = 256 * 1024 * 1024  # 256MB sanity limit

    @staticmethod
    def write(output_path: Path, table: LiteralTable, ir_text: str) -> None:
        """Write .ltab file with the table's declarations and their IR."""
        metadata_blob = msgpack.packb(table_metadata(table), use_bin_type=True)
        ir_blob = ir_text.encode("utf-8")

        with open(output_path, 'wb') as f:
            f.write(TableFormat.MAGIC)
            f.write(struct.pack("<I", TableFormat.VERSION))

            f.write(struct.pack("<Q", len(metadata_blob)))
            f.write(metadata_blob)

            f.write(struct.pack("<Q", len(ir_blob)))
            f.write(ir_blob)

        logger.debug("wrote %s: %d declarations, %d bytes of IR",
                     output_path, len(table), len(ir_blob))

    @staticmethod
    def _read_exact(f: BinaryIO, path: Path, size: int, section: str) -> bytes:
        data = f.read(size)
        if len(data) != size:
            raise TableError("LE0202", path=str(path), section=section,
                             expected=size, actual=len(data))
        return data

    @staticmethod
    def _read_header(f: BinaryIO, path: Path) -> int:
        """Validate magic and version, return the metadata length."""
        magic = TableFormat._read_exact(f, path, len(TableFormat.MAGIC), "magic")
        if magic != TableFormat.MAGIC:
            raise TableError("LE0200", path=str(path))

        version = struct.unpack("<I", TableFormat._read_exact(f, path, 4, "version"))[0]
        if version != TableFormat.VERSION:
            raise TableError("LE0201", path=str(path),
                             version=version, supported=TableFormat.VERSION)

        meta_len = struct.unpack("<Q", TableFormat._read_exact(f, path, 8, "metadata length"))[0]
        if meta_len > TableFormat.MAX_FILE_SIZE:
            raise TableError("LE0203", path=str(path),
                             reason=f"metadata length {meta_len} exceeds {TableFormat.MAX_FILE_SIZE}")
        return meta_len

    @staticmethod
    def _decode_metadata(path: Path, blob: bytes) -> Dict[str, Any]:
        try:
            metadata = msgpack.unpackb(blob, raw=False)
        except (ValueError, msgpack.UnpackException) as e:
            raise TableError("LE0203", path=str(path), reason=str(e)) from e
        if not isinstance(metadata, dict) or metadata.get("format") != FORMAT_NAME:
            raise TableError("LE0203", path=str(path), reason="not a literal table description")
        return metadata

    @staticmethod
    def read(table_path: Path) -> Tuple[LiteralTable, Dict[str, Any], str]:
        """Read .ltab file and return (table, metadata, IR text).

        Raises:
            TableError: LE0200-LE0205 for format errors.
        """
        with open(table_path, 'rb') as f:
            meta_len = TableFormat._read_header(f, table_path)
            metadata_blob = TableFormat._read_exact(f, table_path, meta_len, "metadata")

            ir_len = struct.unpack("<Q", TableFormat._read_exact(f, table_path, 8, "IR length"))[0]
            if ir_len > TableFormat.MAX_FILE_SIZE:
                raise TableError("LE0202", path=str(table_path), section="IR",
                                 expected=ir_len, actual=0)
            ir_blob = TableFormat._read_exact(f, table_path, ir_len, "IR")

        metadata = TableFormat._decode_metadata(table_path, metadata_blob)
        try:
            ir_text = ir_blob.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TableError("LE0205", path=str(table_path), reason=str(e)) from e
        table = table_from_metadata(metadata)
        logger.debug("read %s: %d declarations", table_path, len(table))
        return table, metadata, ir_text

    @staticmethod
    def read_metadata_only(table_path: Path) -> Dict[str, Any]:
        """Read only the metadata (for introspection); the IR is skipped.

        Raises:
            TableError: LE0200-LE0203 for format errors.
        """
        with open(table_path, 'rb') as f:
            meta_len = TableFormat._read_header(f, table_path)
            metadata_blob = TableFormat._read_exact(f, table_path, meta_len, "metadata")
        return TableFormat._decode_metadata(table_path, metadata_blob)
