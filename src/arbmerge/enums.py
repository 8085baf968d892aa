"""Enumerations for arbmerge type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class MergeMode(StrEnum):
    """How the merge step produces its outputs.

    Decided once per run, before any locale is processed.
    """

    COPY = "copy"
    """Recognized files of a single source are copied verbatim."""

    MERGE = "merge"
    """Base and extension documents are merged per locale."""

    SKIPPED = "skipped"
    """No supported locales were found; nothing is written."""


class MergeStatus(StrEnum):
    """Outcome of processing a single locale.

    StrEnum provides automatic string conversion: str(MergeStatus.MERGED) == "merged"
    """

    MERGED = "merged"
    """A merged document was written."""

    COPIED = "copied"
    """A source file was copied unchanged."""

    UNRESOLVED = "unresolved"
    """Neither side had a file for the locale (warning)."""

    EMPTY = "empty"
    """The merge produced no translatable keys (warning)."""

    ERROR = "error"
    """A source failed to parse or an I/O operation failed."""


__all__ = [
    "MergeMode",
    "MergeStatus",
]
