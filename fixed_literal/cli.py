"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from fixed_literal.internals.version import print_banner


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_table_info(table_path: Path) -> int:
    """Print formatted metadata from a .ltab table file.

    Returns:
        0 on success, 2 on error.
    """
    from fixed_literal.backend.table_format import TableFormat
    from fixed_literal.internals.errors import TableError

    if not table_path.exists():
        print(f"Error: file not found: {table_path}", file=sys.stderr)
        return 2

    if table_path.suffix != '.ltab':
        print(f"Error: expected .ltab file, got: {table_path}", file=sys.stderr)
        return 2

    try:
        table, metadata, ir_text = TableFormat.read(table_path)
    except TableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Table: {table_path.name}")
    print(f"Compiler: {metadata.get('compiler_version', 'unknown')}")
    print(f"Created: {metadata.get('created_at', 'unknown')}")
    print()

    if len(table):
        print(f"Declarations ({len(table)}):")
        for line in table.dump().splitlines():
            print(f"  {line}")
        print()

    print(f"IR: {len(ir_text.encode('utf-8')):,} bytes")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Literal declaration compiler entry point."""
    ap = argparse.ArgumentParser(prog="fixed-literal",
                                 description="Fixed-capacity literal declaration compiler")

    ap.add_argument("source", nargs='?', help="Path to a declaration file")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark tree")
    ap.add_argument("--dump-table", action="store_true", help="Print the evaluated literal table")
    ap.add_argument("--dump-ll", action="store_true",
                    help="Dump generated LLVM IR to terminal")
    ap.add_argument("--write-ll", metavar="OUT", help="Write LLVM IR to OUT")
    ap.add_argument("--write-table", metavar="OUT", help="Write a .ltab table file to OUT")
    ap.add_argument("--info", metavar="FILE", help="Display the contents of a .ltab table file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    configure_logging(args.verbose)
    print_banner()

    if args.version:
        return 0

    if args.info:
        return print_table_info(Path(args.info))

    if not args.source:
        print("error: source file required (unless using --info)", file=sys.stderr)
        return 2

    from fixed_literal.frontend.parser import parse_declarations
    from fixed_literal.internals.report import Reporter

    src_path = Path(args.source)
    try:
        src = src_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {src_path}: {e}", file=sys.stderr)
        return 2

    reporter = Reporter(source=src, filename=str(src_path))
    table = parse_declarations(src, reporter, dump_parse=args.dump_parse)

    if reporter.has_errors:
        reporter.print()
        return 2

    if args.dump_table:
        print(table.dump())
        print()

    if args.dump_ll or args.write_ll or args.write_table:
        from fixed_literal.backend.constants import build_module, verify_module
        module = build_module(table, name=src_path.stem)
        verify_module(module)
        ir_text = str(module)

        if args.dump_ll:
            print(ir_text)
        if args.write_ll:
            Path(args.write_ll).write_text(ir_text, encoding="utf-8")
        if args.write_table:
            from fixed_literal.backend.table_format import TableFormat
            TableFormat.write(Path(args.write_table), table, ir_text)

    if reporter.has_warnings:
        reporter.print()
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
