"""Source scanning and per-locale merge planning.

Components:
    SourceScan - Immutable snapshot of both source directories
    LocalePlan - The (base, extension) file pair chosen for one locale
    scan_sources - Index both directories and derive the supported locales
    select_mode - Decide once between copy and merge
    plan - Resolve the file pair of every supported locale

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from arbmerge.enums import MergeMode
from arbmerge.resources.indexing import find_matching_file, index_by_locale
from arbmerge.resources.types import LocaleCode, LocaleIndex

__all__ = [
    "LocalePlan",
    "SourceScan",
    "plan",
    "scan_sources",
    "select_mode",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceScan:
    """Snapshot of the extension and base translation directories.

    Attributes:
        extension_dir: The project's own translations directory
        base_dir: Base app translations directory, None if not configured
                  or not present on disk
        extension_index: Locale index of extension_dir
        base_index: Locale index of base_dir (empty when base_dir is None)
        supported_locales: Sorted union of the locales of both indexes
    """

    extension_dir: Path
    base_dir: Path | None
    extension_index: LocaleIndex = field(default_factory=dict)
    base_index: LocaleIndex = field(default_factory=dict)
    supported_locales: tuple[LocaleCode, ...] = ()

    @property
    def has_extensions(self) -> bool:
        """Extension directory holds at least one recognized resource file."""
        return bool(self.extension_index)


@dataclass(frozen=True, slots=True)
class LocalePlan:
    """Files selected for one supported locale.

    Attributes:
        locale: Supported locale being produced
        base_file: Base resource satisfying the locale (None if absent)
        extension_file: Extension resource satisfying the locale (None if absent)
    """

    locale: LocaleCode
    base_file: Path | None = None
    extension_file: Path | None = None

    @property
    def is_resolvable(self) -> bool:
        """At least one side provides a file."""
        return self.base_file is not None or self.extension_file is not None


def scan_sources(extension_dir: Path, base_dir: Path | None) -> SourceScan:
    """Index both source directories.

    Args:
        extension_dir: Project translations directory (may not exist)
        base_dir: Base app translations directory, or None

    Returns:
        SourceScan with the supported locale set
    """
    extension_index = index_by_locale(extension_dir)
    base_index = index_by_locale(base_dir) if base_dir is not None else {}

    locales = sorted(set(extension_index) | set(base_index))

    logger.info(
        "📋 Found %d local ARB files: %s",
        len(extension_index),
        ", ".join(p.name for p in extension_index.values()),
    )
    if base_index:
        logger.info(
            "📋 Found %d base ARB files: %s",
            len(base_index),
            ", ".join(p.name for p in base_index.values()),
        )

    return SourceScan(
        extension_dir=extension_dir,
        base_dir=base_dir,
        extension_index=extension_index,
        base_index=base_index,
        supported_locales=tuple(locales),
    )


def select_mode(scan: SourceScan, *, base_configured: bool) -> tuple[MergeMode, Path | None]:
    """Decide how the merge step produces its outputs.

    A merge always stamps '@@context' on its outputs, so when there is only
    one layer the files are copied instead.

    Args:
        scan: Result of scan_sources
        base_configured: Whether a base app is configured

    Returns:
        (mode, copy_source). copy_source is the directory to copy from in
        COPY mode and None otherwise.
    """
    if not scan.supported_locales:
        return MergeMode.SKIPPED, None
    if not base_configured:
        return MergeMode.COPY, scan.extension_dir
    if not scan.has_extensions:
        return MergeMode.COPY, scan.base_dir
    return MergeMode.MERGE, None


def plan(
    supported_locales: Iterable[LocaleCode],
    base_index: Mapping[LocaleCode, Path] | None,
    extension_index: Mapping[LocaleCode, Path] | None,
) -> tuple[LocalePlan, ...]:
    """Resolve the base and extension file of every supported locale.

    Each side is resolved independently with exact-then-language fallback.

    Args:
        supported_locales: Locales to produce, in processing order
        base_index: Base locale index (None -> no base files)
        extension_index: Extension locale index (None -> no extension files)

    Returns:
        One LocalePlan per locale, in input order
    """
    return tuple(
        LocalePlan(
            locale=locale,
            base_file=find_matching_file(base_index, locale),
            extension_file=find_matching_file(extension_index, locale),
        )
        for locale in supported_locales
    )
