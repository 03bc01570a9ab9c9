"""Process-level configuration.

Safe mode is decided once, when the package is first imported, from the
FIXED_LITERAL_SAFE_MODE environment variable. With safe mode on, indexed
access outside a literal's logical size raises OutOfRangeError; with it off
the check is skipped entirely and out-of-range reads return whatever the
storage slot holds.
"""
from __future__ import annotations

import os

SAFE_MODE_ENV = "FIXED_LITERAL_SAFE_MODE"

_TRUTHY = {"1", "true", "yes", "on"}


def _flag_from_env(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


SAFE_MODE: bool = _flag_from_env(SAFE_MODE_ENV)
