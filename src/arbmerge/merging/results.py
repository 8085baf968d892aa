"""Result data structures for the merge step.

Components:
    LocaleMergeResult - Immutable outcome of one locale (or one copied file)
    MergeSummary - Immutable aggregate of a whole merge run

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from arbmerge.enums import MergeMode, MergeStatus
from arbmerge.resources.types import LocaleCode

__all__ = [
    "LocaleMergeResult",
    "MergeSummary",
]


@dataclass(frozen=True, slots=True)
class LocaleMergeResult:
    """Outcome of producing one locale's output.

    Attributes:
        locale: Supported locale (or the file locale in copy mode)
        status: What happened (merged, copied, unresolved, empty, error)
        base_path: Base source used, if any
        extension_path: Extension source used, if any
        output_path: Written file, if any
        error: Exception if status is ERROR, None otherwise
        new_keys: Number of keys only the extension defines
        overridden_keys: Number of base keys replaced by the extension
        total_keys: Number of translatable keys written
        replaced_locale: Earlier locale of the same run whose output file
                         this result overwrote, if any
    """

    locale: LocaleCode
    status: MergeStatus
    base_path: Path | None = None
    extension_path: Path | None = None
    output_path: Path | None = None
    error: Exception | None = None
    new_keys: int = 0
    overridden_keys: int = 0
    total_keys: int = 0
    replaced_locale: LocaleCode | None = None

    @property
    def is_written(self) -> bool:
        """An output file was produced."""
        return self.status in (MergeStatus.MERGED, MergeStatus.COPIED)

    @property
    def is_warning(self) -> bool:
        """Non-fatal condition: nothing written, nothing broken."""
        return self.status in (MergeStatus.UNRESOLVED, MergeStatus.EMPTY)

    @property
    def is_error(self) -> bool:
        """Processing this locale failed."""
        return self.status == MergeStatus.ERROR


@dataclass(frozen=True, slots=True)
class MergeSummary:
    """Immutable aggregate of a merge run.

    All statistics are computed from the ``results`` tuple.

    Attributes:
        mode: Copy, merge, or skipped
        supported_locales: Locales discovered across both sources
        output_dir: Directory receiving the outputs
        results: Per-locale results in processing order

    Example:
        >>> summary = ArbMerger(config, project_root).run()
        >>> for result in summary.get_errors():
        ...     print(f"{result.locale}: {result.error}")
    """

    mode: MergeMode
    supported_locales: tuple[LocaleCode, ...]
    output_dir: Path
    results: tuple[LocaleMergeResult, ...] = ()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"MergeSummary(mode={self.mode}, "
            f"locales={len(self.supported_locales)}, "
            f"written={self.written}, "
            f"warnings={self.warnings}, "
            f"errors={self.errors})"
        )

    @property
    def written(self) -> int:
        """Number of output files produced."""
        return sum(1 for r in self.results if r.is_written)

    @property
    def warnings(self) -> int:
        """Number of locales with a non-fatal problem."""
        return sum(1 for r in self.results if r.is_warning)

    @property
    def errors(self) -> int:
        """Number of locales that failed."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any locale failed."""
        return self.errors > 0

    @property
    def is_skipped(self) -> bool:
        """No supported locales; the step did nothing."""
        return self.mode == MergeMode.SKIPPED

    @property
    def output_paths(self) -> tuple[Path, ...]:
        """Paths of all written files."""
        return tuple(r.output_path for r in self.results if r.output_path is not None)

    def get_errors(self) -> tuple[LocaleMergeResult, ...]:
        """Get all failed results."""
        return tuple(r for r in self.results if r.is_error)

    def get_warnings(self) -> tuple[LocaleMergeResult, ...]:
        """Get all unresolved or empty results."""
        return tuple(r for r in self.results if r.is_warning)

    def get_by_locale(self, locale: LocaleCode) -> tuple[LocaleMergeResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)
