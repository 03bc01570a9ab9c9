"""Version information for the banner, ``--version`` and table metadata."""
from __future__ import annotations

import platform
import sys
from importlib import metadata
from typing import Dict, Optional, TextIO

from fixed_literal import __version__, __dev__
from fixed_literal.internals.report import BOLD, DIM, RESET, supports_color

# Distributions whose versions decide how declarations parse and how tables encode
STACK = ("lark", "llvmlite", "msgpack")


def _llvm_version() -> str:
    try:
        from llvmlite import binding as llvm
    except (ImportError, OSError):
        return "unknown"
    info = getattr(llvm, "llvm_version_info", None)
    return ".".join(map(str, info)) if info else "unknown"


def get_versions() -> Dict[str, str]:
    versions = {"app": __version__, "python": platform.python_version()}
    for dist in STACK:
        try:
            versions[dist] = metadata.version(dist)
        except metadata.PackageNotFoundError:
            versions[dist] = "missing"
    versions["llvm"] = _llvm_version()
    return versions


def version_line(versions: Optional[Dict[str, str]] = None) -> str:
    v = versions or get_versions()
    dev = " (dev)" if __dev__ else ""
    return f"fixed-literal {v['app']}{dev}"


def print_banner(stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    v = get_versions()
    color = supports_color(stream)
    bold, dim, reset = (BOLD, DIM, RESET) if color else ("", "", "")

    stack = ", ".join(f"{dist} {v[dist]}" for dist in STACK)
    print(f"{bold}{version_line(v)}{reset}", file=stream)
    print(f"{dim}Python {v['python']}; {stack}; LLVM {v['llvm']}{reset}\n", file=stream)
