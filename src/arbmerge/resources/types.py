"""Type aliases for the resource domain.

Provides semantic type aliases used throughout arbmerge and by user code
when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from pathlib import Path
from typing import Any

__all__ = [
    "ArbDocument",
    "LocaleCode",
    "LocaleIndex",
]

type LocaleCode = str
"""POSIX locale code: language-only ('de') or region-qualified ('de_DE')."""

type ArbDocument = dict[str, Any]
"""Decoded ARB document. Insertion order is the file's key order."""

type LocaleIndex = dict[LocaleCode, Path]
"""Mapping from locale code to the resource file providing it."""
