"""Merge step orchestration.

Runs the whole merge step for one project:

    scan sources -> supported locales -> mode (copy / merge / skipped)
    -> per locale: resolve files, merge, write -> MergeSummary

Failure containment is per locale: a malformed ARB file or an I/O error is
recorded as an ERROR result for that locale and the loop continues. Only
configuration errors (raised by BuilderConfig before a merger exists) stop
the step as a whole.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from arbmerge.config import BuilderConfig
from arbmerge.constants import MERGED_TRANSLATIONS_DIR
from arbmerge.enums import MergeMode, MergeStatus
from arbmerge.errors import ResourceParseError
from arbmerge.locale_utils import describe_locale, locale_matches
from arbmerge.merging.engine import merge_files
from arbmerge.merging.planner import LocalePlan, SourceScan, plan, scan_sources, select_mode
from arbmerge.merging.results import LocaleMergeResult, MergeSummary
from arbmerge.merging.writer import copy_resource, output_filename, write_document
from arbmerge.resources.indexing import scan_directory
from arbmerge.toolchain.generator import (
    CommandRunner,
    SubprocessRunner,
    ensure_base_app_dependencies,
)

__all__ = ["ArbMerger", "merge_translations"]

logger = logging.getLogger(__name__)


class ArbMerger:
    """Produces one ARB file per supported locale from base and extension layers.

    Example:
        >>> config = BuilderConfig(translations_path="l10n", base_app="app")
        >>> summary = ArbMerger(config, Path("apps/app2")).run()
        >>> summary.written
        2

    Attributes:
        config: Builder configuration
        project_root: Root of the app being built
        output_dir: Directory receiving the merged files
    """

    __slots__ = ("_check_dependencies", "_runner", "config", "output_dir", "project_root")

    def __init__(
        self,
        config: BuilderConfig,
        project_root: Path | str,
        output_dir: Path | str | None = None,
        *,
        runner: CommandRunner | None = None,
        check_dependencies: bool = True,
    ) -> None:
        """Initialize the merger.

        Args:
            config: Validated builder configuration
            project_root: Root of the app being built
            output_dir: Output directory (default .dart_tool/merged_translations
                        under the project root)
            runner: Command runner for ``flutter pub get`` in the base app
            check_dependencies: Ensure the base app has resolved its packages
                                before merging
        """
        self.config = config
        self.project_root = Path(project_root)
        self.output_dir = (
            Path(output_dir) if output_dir is not None else self.project_root / MERGED_TRANSLATIONS_DIR
        )
        self._runner: CommandRunner = runner if runner is not None else SubprocessRunner()
        self._check_dependencies = check_dependencies

    def run(self) -> MergeSummary:
        """Execute the merge step.

        Returns:
            MergeSummary describing every locale processed
        """
        scan = self._scan()
        mode, copy_source = select_mode(scan, base_configured=self.config.base_app is not None)

        if mode == MergeMode.SKIPPED:
            logger.warning("No supported locales found")
            return MergeSummary(mode=mode, supported_locales=(), output_dir=self.output_dir)

        logger.info("📋 Detected locales: %s", ", ".join(scan.supported_locales))
        self._prepare_base_app(scan)

        if mode == MergeMode.COPY:
            assert copy_source is not None
            results = self._copy(copy_source, scan.supported_locales)
        else:
            logger.info("🔄 Found extension ARB files, merging with base app translations...")
            results = self._merge(scan)

        summary = MergeSummary(
            mode=mode,
            supported_locales=scan.supported_locales,
            output_dir=self.output_dir,
            results=results,
        )
        if summary.has_errors:
            logger.error("❌ ARB merge finished with %d failed locale(s)", summary.errors)
        else:
            logger.info("✅ ARB files merged successfully")
        return summary

    def _scan(self) -> SourceScan:
        base_dir = self.config.base_translations_dir(self.project_root)
        if base_dir is not None and not base_dir.is_dir():
            logger.warning("Base app translations not found: %s", base_dir)
            base_dir = None
        return scan_sources(self.config.translations_dir(self.project_root), base_dir)

    def _prepare_base_app(self, scan: SourceScan) -> None:
        base_app_dir = self.config.base_app_dir(self.project_root)
        if base_app_dir is None or scan.base_dir is None:
            return
        logger.info("📋 Using base app: %s", self.config.base_app)
        if self._check_dependencies:
            ensure_base_app_dependencies(self._runner, base_app_dir)

    def _copy(self, source_dir: Path, supported_locales: tuple[str, ...]) -> tuple[LocaleMergeResult, ...]:
        """Copy every recognized file whose locale is supported."""
        logger.info("📋 Copying translations from %s...", source_dir)
        results: list[LocaleMergeResult] = []
        for resource in scan_directory(source_dir):
            if not any(locale_matches(resource.locale, s) for s in supported_locales):
                continue
            try:
                target = copy_resource(resource.path, self.output_dir)
            except OSError as e:
                logger.error("❌ Error copying %s: %s", resource.filename, e)
                results.append(
                    LocaleMergeResult(
                        locale=resource.locale,
                        status=MergeStatus.ERROR,
                        base_path=resource.path,
                        error=e,
                    )
                )
                continue
            logger.info("📋 Copied %s to output directory", resource.filename)
            results.append(
                LocaleMergeResult(
                    locale=resource.locale,
                    status=MergeStatus.COPIED,
                    base_path=resource.path,
                    output_path=target,
                )
            )
        return tuple(results)

    def _merge(self, scan: SourceScan) -> tuple[LocaleMergeResult, ...]:
        """Merge each supported locale independently."""
        logger.info("🔄 Starting automatic ARB file merging...")
        results: list[LocaleMergeResult] = []
        # Output path -> locale that last wrote it in this run.
        written: dict[Path, str] = {}
        for locale_plan in plan(scan.supported_locales, scan.base_index, scan.extension_index):
            try:
                result = self._merge_locale(locale_plan)
            except (ResourceParseError, OSError) as e:
                logger.error("❌ Error merging locale %s: %s", locale_plan.locale, e)
                results.append(
                    LocaleMergeResult(
                        locale=locale_plan.locale,
                        status=MergeStatus.ERROR,
                        base_path=locale_plan.base_file,
                        extension_path=locale_plan.extension_file,
                        error=e,
                    )
                )
                continue

            if result.output_path is not None:
                previous = written.get(result.output_path)
                if previous is not None:
                    logger.warning(
                        "⚠️ Locale %s overwrote %s, already written for locale %s",
                        result.locale,
                        result.output_path.name,
                        previous,
                    )
                    result = replace(result, replaced_locale=previous)
                written[result.output_path] = result.locale
            results.append(result)
        logger.info("✅ Automatic ARB file merging completed!")
        return tuple(results)

    def _merge_locale(self, locale_plan: LocalePlan) -> LocaleMergeResult:
        locale = locale_plan.locale
        base_file, extension_file = locale_plan.base_file, locale_plan.extension_file

        logger.info("🔄 Processing locale: %s", describe_locale(locale))
        if base_file is not None:
            logger.info("   - Base file: %s", base_file.name)
        else:
            logger.info("   - No base file for %s", locale)
        if extension_file is not None:
            logger.info("   - Extension file: %s", extension_file.name)

        if not locale_plan.is_resolvable:
            logger.warning("⚠️ No ARB source found for locale %s", locale)
            return LocaleMergeResult(locale=locale, status=MergeStatus.UNRESOLVED)

        merged = merge_files(base_file, extension_file)
        if merged.document is None:
            logger.warning("⚠️ No ARB data found for locale %s", locale)
            return LocaleMergeResult(
                locale=locale,
                status=MergeStatus.EMPTY,
                base_path=base_file,
                extension_path=extension_file,
            )

        filename = output_filename(locale, base_file, extension_file)
        target = write_document(merged.document, self.output_dir, filename)
        logger.info("📝 Merged ARB for %s: %d total keys", locale, merged.total_keys)
        logger.info("   - Output: %s", target)
        return LocaleMergeResult(
            locale=locale,
            status=MergeStatus.MERGED,
            base_path=base_file,
            extension_path=extension_file,
            output_path=target,
            new_keys=len(merged.new_keys),
            overridden_keys=len(merged.overridden_keys),
            total_keys=merged.total_keys,
        )


def merge_translations(
    config: BuilderConfig,
    project_root: Path | str,
    output_dir: Path | str | None = None,
    *,
    runner: CommandRunner | None = None,
    check_dependencies: bool = True,
) -> MergeSummary:
    """Run the merge step once. Shorthand for ``ArbMerger(...).run()``."""
    return ArbMerger(
        config,
        project_root,
        output_dir,
        runner=runner,
        check_dependencies=check_dependencies,
    ).run()
