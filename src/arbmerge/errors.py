"""arbmerge exception hierarchy.

Hierarchy:
    ArbMergeError (base)
    ├─ ConfigurationError (missing or invalid builder options)
    ├─ ResourceParseError (malformed ARB document)
    └─ ManifestError (malformed package_config.json)

Expected non-fatal outcomes (missing sources, empty merges) are not
exceptions; they are reported through result objects and the log.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ArbMergeError",
    "ConfigurationError",
    "ManifestError",
    "ResourceParseError",
]


class ArbMergeError(Exception):
    """Base exception for all arbmerge errors."""


class ConfigurationError(ArbMergeError):
    """Builder options are missing or have the wrong type.

    Skips the whole merge step; the surrounding build continues.

    Attributes:
        option: Name of the offending option (if known)
        hint: Suggested fix shown to the user (if any)
    """

    def __init__(self, message: str, *, option: str | None = None, hint: str | None = None) -> None:
        super().__init__(message)
        self.option = option
        self.hint = hint


class ResourceParseError(ArbMergeError):
    """ARB document could not be decoded.

    Fatal for the locale being merged, never silently skipped: dropping a
    corrupt translation file would produce a stale or empty merge.

    Attributes:
        path: File that failed to parse
    """

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class ManifestError(ArbMergeError):
    """package_config.json does not have the expected structure.

    Attributes:
        path: Manifest file that was rejected
    """

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)
