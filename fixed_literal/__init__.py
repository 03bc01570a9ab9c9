"""Fixed-capacity literals with string, value and undefined categories."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("fixed-literal")
    __dev__ = False
except PackageNotFoundError:
    # Source checkout - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        with open(Path(__file__).parent.parent / "pyproject.toml", "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"
    __dev__ = True

from fixed_literal.internals.errors import (
    LiteralError, LiteralTypeError, OutOfRangeError, TableError,
)
from fixed_literal.literal import Literal, swap
from fixed_literal.semantics.capacity import is_valid_capacity, resize
from fixed_literal.semantics.classify import (
    LiteralCategory, Shape, classify, is_literal, is_literal_char,
    is_literal_string, is_literal_undefined, is_literal_value,
)
from fixed_literal.semantics.kinds import UNSUPPORTED, ElementKind
from fixed_literal.table import LiteralTable
from fixed_literal.view import NPOS

__all__ = [
    "ElementKind", "Literal", "LiteralCategory", "LiteralError", "LiteralTable",
    "LiteralTypeError", "NPOS", "OutOfRangeError", "Shape", "TableError",
    "UNSUPPORTED", "classify", "is_literal", "is_literal_char", "is_literal_string",
    "is_literal_undefined", "is_literal_value", "is_valid_capacity", "resize", "swap",
]
