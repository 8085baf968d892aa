"""Directory scanning and locale indexing for ARB resources.

Components:
    ResourceFile - Immutable reference to a recognized file on disk
    scan_directory - Non-recursive scan yielding ResourceFile records
    index_by_locale - Mapping locale -> path for one directory
    find_matching_file - Exact lookup with region-to-language fallback

Filenames are sorted before recognition, so duplicate locales and fallback
lookups resolve the same way on every platform.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from arbmerge.constants import ARB_SUFFIX
from arbmerge.locale_utils import extract_locale, is_language_only
from arbmerge.resources.types import LocaleCode, LocaleIndex

__all__ = [
    "ResourceFile",
    "find_matching_file",
    "index_by_locale",
    "scan_directory",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceFile:
    """A recognized resource file.

    Attributes:
        path: Location on disk
        locale: Locale code parsed from the filename
    """

    path: Path
    locale: LocaleCode

    @property
    def filename(self) -> str:
        """Bare filename, e.g. 'app_de.arb'."""
        return self.path.name


def scan_directory(directory: Path | str, suffix: str = ARB_SUFFIX) -> tuple[ResourceFile, ...]:
    """Find all recognized resource files directly inside a directory.

    Subdirectories are not entered. Files whose names do not follow the
    ``<prefix>_<locale><suffix>`` convention are skipped silently.

    Args:
        directory: Directory to scan
        suffix: Resource file extension

    Returns:
        ResourceFile records in lexicographic filename order.
        Empty if the directory does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        return ()

    found: list[ResourceFile] = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        locale = extract_locale(entry.name, suffix)
        if locale is None:
            logger.debug("Ignoring unrecognized file: %s", entry)
            continue
        found.append(ResourceFile(path=entry, locale=locale))
    return tuple(found)


def index_by_locale(directory: Path | str, suffix: str = ARB_SUFFIX) -> LocaleIndex:
    """Map each locale found in a directory to its resource file.

    When two files carry the same locale (``app_de.arb`` and ``other_de.arb``)
    the lexicographically greater filename wins.

    Args:
        directory: Directory to scan (missing directory -> empty mapping)
        suffix: Resource file extension

    Returns:
        Dict from locale code to path, keys in ascending order
    """
    index: LocaleIndex = {}
    for resource in scan_directory(directory, suffix):
        previous = index.get(resource.locale)
        if previous is not None:
            logger.warning(
                "Duplicate resource for locale '%s': %s replaces %s",
                resource.locale,
                resource.filename,
                previous.name,
            )
        index[resource.locale] = resource.path
    return dict(sorted(index.items()))


def find_matching_file(index: Mapping[LocaleCode, Path] | None, target: LocaleCode) -> Path | None:
    """Resolve the file for a locale with fallback.

    Tries an exact match first. If the target is language-only (``de``),
    falls back to the first region-specific locale of that language in
    ascending order (``de_AT`` before ``de_DE``).

    Args:
        index: Locale index of one source directory (None -> no match)
        target: Required locale

    Returns:
        Matching path or None
    """
    if not index:
        return None
    if target in index:
        return index[target]
    if is_language_only(target):
        prefix = f"{target}_"
        for locale in sorted(index):
            if locale.startswith(prefix):
                return index[locale]
    return None
