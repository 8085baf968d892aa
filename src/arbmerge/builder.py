"""flutter_gen package builder.

Turns the generated localization code of a Flutter app into an importable
``package:flutter_gen/...`` package:

    1. merge ARB files (base app + extensions) into .dart_tool/merged_translations
    2. run flutter gen-l10n, with l10n.yaml's arb-dir temporarily overridden
    3. locate the generated output directory, regenerating once if missing
    4. remove the stale synthetic package directory
    5. write .dart_tool/flutter_gen/pubspec.yaml
    6. register the package in the package_config.json of the app, its
       modules and its sibling apps
    7. remove the temporary merged translations directory

Every step is best-effort: problems are logged and later steps still run,
so a localization hiccup never breaks the surrounding build.

Python 3.13+.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from arbmerge.config import BuilderConfig
from arbmerge.constants import (
    FLUTTER_GEN_DIR,
    L10N_CONFIG_FILE,
    MERGED_TRANSLATIONS_DIR,
    SYNTHETIC_PACKAGE_DIR,
)
from arbmerge.errors import ArbMergeError, ConfigurationError
from arbmerge.merging.orchestrator import ArbMerger
from arbmerge.merging.results import MergeSummary
from arbmerge.toolchain.generator import (
    CommandRunner,
    SubprocessRunner,
    generate_localizations,
    read_output_dir,
    run_gen_l10n,
)
from arbmerge.toolchain.package_config import update_package_targets, write_pubspec

__all__ = ["BuildReport", "FlutterGenBuilder"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildReport:
    """What a builder run achieved.

    Attributes:
        merge: Summary of the merge step (None if it did not run)
        generated: The generator exited successfully at least once
        output_dir: Generated localization directory (None if not found)
        pubspec_path: Written pubspec.yaml (None if not written)
        updated_projects: Projects whose package_config.json was rewritten
        error: Unexpected exception that aborted the run, if any
    """

    merge: MergeSummary | None = None
    generated: bool = False
    output_dir: Path | None = None
    pubspec_path: Path | None = None
    updated_projects: tuple[Path, ...] = ()
    error: Exception | None = None

    @property
    def completed(self) -> bool:
        """The package was written and registered."""
        return self.pubspec_path is not None and self.error is None


def _remove_tree(directory: Path, description: str) -> None:
    if not directory.exists():
        return
    try:
        shutil.rmtree(directory)
    except OSError as e:
        logger.warning("Failed to clean up %s: %s", description, e)
        return
    logger.info("🧹 Cleaned up %s", description)


class FlutterGenBuilder:
    """Runs the full localization build for one project.

    Example:
        >>> config = load_builder_config("build.yaml")
        >>> report = FlutterGenBuilder(config, Path.cwd()).build()
        >>> report.completed
        True
    """

    __slots__ = ("_runner", "config", "project_root")

    def __init__(
        self,
        config: BuilderConfig | None,
        project_root: Path | str,
        *,
        runner: CommandRunner | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Builder configuration. None skips the merge step and uses
                    default generator and package-update behavior.
            project_root: Root of the app being built
            runner: Command runner for the Flutter tool
        """
        self.config = config
        self.project_root = Path(project_root).resolve()
        self._runner: CommandRunner = runner if runner is not None else SubprocessRunner()

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any] | None,
        project_root: Path | str,
        *,
        runner: CommandRunner | None = None,
    ) -> FlutterGenBuilder:
        """Create a builder from a raw options map.

        Invalid options are reported and only disable the merge step; the
        rest of the build still runs.
        """
        try:
            config: BuilderConfig | None = BuilderConfig.from_mapping(options)
        except ConfigurationError as e:
            logger.error("❌ %s", e)
            if e.hint:
                logger.info("💡 %s", e.hint)
            config = None
        return cls(config, project_root, runner=runner)

    def merge(self) -> MergeSummary | None:
        """Step 1: merge ARB files. Returns None if the step did not run."""
        if self.config is None:
            logger.info("No valid builder configuration, skipping ARB merge")
            return None
        translations_dir = self.config.translations_dir(self.project_root)
        if not translations_dir.is_dir() and self.config.base_app is None:
            logger.info("No translations directory at %s, skipping ARB merge", translations_dir)
            return None
        try:
            return ArbMerger(self.config, self.project_root, runner=self._runner).run()
        except OSError as e:
            logger.warning("Failed to merge ARB files: %s", e)
            return None

    def build(self) -> BuildReport:
        """Run all steps.

        Returns:
            BuildReport; never raises for filesystem or tool failures
        """
        logger.info("🚀 FlutterGenBuilder: Starting automatic flutter_gen package creation...")
        merge_summary: MergeSummary | None = None
        generated = False
        try:
            merge_summary = self.merge()
            override_arb_dir = self.config.override_arb_dir if self.config is not None else None
            update_packages = self.config.update_packages if self.config is not None else None
            generated = generate_localizations(self._runner, self.project_root, override_arb_dir)

            output_setting = read_output_dir(self.project_root / L10N_CONFIG_FILE)
            if output_setting is None:
                logger.info("%s not found, skipping FlutterGenBuilder", L10N_CONFIG_FILE)
                return BuildReport(merge=merge_summary, generated=generated)

            output_dir = self.project_root / output_setting
            if not output_dir.is_dir():
                logger.info("Generated files not found, running flutter gen-l10n...")
                generated = run_gen_l10n(self._runner, self.project_root) or generated
                if not output_dir.is_dir():
                    logger.warning("Failed to generate localization files")
                    return BuildReport(merge=merge_summary, generated=generated)

            _remove_tree(self.project_root / SYNTHETIC_PACKAGE_DIR, "old synthetic package directory")
            pubspec_path = self._write_package(output_dir)

            package_root = self.project_root / FLUTTER_GEN_DIR
            updated = update_package_targets(self.project_root, package_root, update_packages)

            _remove_tree(
                self.project_root / MERGED_TRANSLATIONS_DIR,
                "temporary merged translations directory",
            )
        except (ArbMergeError, OSError, yaml.YAMLError) as e:
            logger.error("FlutterGenBuilder failed: %s", e)
            return BuildReport(merge=merge_summary, generated=generated, error=e)

        logger.info("✅ FlutterGenBuilder: Enhanced flutter_gen package successfully!")
        logger.info("💡 You can now use: import 'package:flutter_gen/gen_l10n.dart';")
        return BuildReport(
            merge=merge_summary,
            generated=generated,
            output_dir=output_dir,
            pubspec_path=pubspec_path,
            updated_projects=updated,
        )

    def _write_package(self, output_dir: Path) -> Path:
        pubspec_path = write_pubspec(self.project_root / FLUTTER_GEN_DIR)
        logger.info("✅ Enhanced flutter_gen directory with pubspec.yaml")

        dart_files = sorted(p.name for p in output_dir.iterdir() if p.is_file() and p.suffix == ".dart")
        if dart_files:
            logger.info("📦 Found %d existing localization files:", len(dart_files))
            for name in dart_files:
                logger.info("  - %s", name)
        else:
            logger.warning("⚠️ No .dart files found in %s", output_dir)
        return pubspec_path
