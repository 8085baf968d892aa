"""Base + extension document merging.

The merge is right-biased: for every key present on both sides the
extension's value wins. Metadata keys ('@greet') follow the same rule, so an
extension that re-describes a key replaces the base description together
with the value. Key order is the base order followed by keys that only the
extension defines.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from arbmerge.constants import CONTEXT_KEY, MERGED_CONTEXT
from arbmerge.resources.documents import data_keys, load_document
from arbmerge.resources.types import ArbDocument

__all__ = [
    "MergeResult",
    "merge_documents",
    "merge_files",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of merging one locale's documents.

    Attributes:
        document: Merged document, or None when there was nothing to merge
                  or no translatable key survived
        new_keys: Extension data keys absent from the base
        overridden_keys: Extension data keys that were also in the base
        had_sources: False when both inputs were missing
    """

    document: ArbDocument | None
    new_keys: tuple[str, ...] = ()
    overridden_keys: tuple[str, ...] = ()
    had_sources: bool = True

    @property
    def is_empty(self) -> bool:
        """Sources existed but yielded no translatable keys."""
        return self.had_sources and self.document is None

    @property
    def total_keys(self) -> int:
        """Number of translatable keys in the merged document."""
        return len(data_keys(self.document)) if self.document is not None else 0


def merge_documents(
    base: Mapping[str, Any] | None,
    extension: Mapping[str, Any] | None,
) -> MergeResult:
    """Merge an extension document over a base document.

    Args:
        base: Base layer document (None if the locale has no base file)
        extension: Extension layer document (None if absent)

    Returns:
        MergeResult whose document carries '@@context' set to the merged
        sentinel, or None when both inputs are None or the result has no
        translatable keys.

    Example:
        >>> merge_documents({"hello": "Hi"}, {"hello": "Hey"}).document
        {'hello': 'Hey', '@@context': 'Merged translations: Base App + Extensions'}
    """
    if base is None and extension is None:
        return MergeResult(document=None, had_sources=False)

    merged: ArbDocument = dict(base) if base is not None else {}

    new_keys: list[str] = []
    overridden_keys: list[str] = []
    if extension is not None:
        for key in data_keys(extension):
            (overridden_keys if key in merged else new_keys).append(key)
        merged.update(extension)

    if not data_keys(merged):
        return MergeResult(
            document=None,
            new_keys=tuple(new_keys),
            overridden_keys=tuple(overridden_keys),
        )

    merged[CONTEXT_KEY] = MERGED_CONTEXT
    return MergeResult(
        document=merged,
        new_keys=tuple(new_keys),
        overridden_keys=tuple(overridden_keys),
    )


def merge_files(base_path: Path | None, extension_path: Path | None) -> MergeResult:
    """Load the given files and merge them.

    Raises:
        ResourceParseError: If either file is malformed
        OSError: If either file cannot be read
    """
    base = load_document(base_path) if base_path is not None else None
    if base is not None:
        logger.info("   - Loaded base ARB: %d keys", len(data_keys(base)))

    extension = load_document(extension_path) if extension_path is not None else None
    if extension is not None:
        logger.info("   - Loaded extension ARB: %d keys", len(data_keys(extension)))

    result = merge_documents(base, extension)
    if result.overridden_keys:
        logger.info("   - Overridden keys: %d", len(result.overridden_keys))
    if result.new_keys:
        logger.info("   - New keys: %d", len(result.new_keys))
    return result
