"""Tests for the full FlutterGenBuilder pipeline with a recording runner.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from arbmerge.builder import FlutterGenBuilder
from arbmerge.constants import CONTEXT_KEY, MERGED_CONTEXT
from tests.helpers.arb_files import TRANSLATIONS_PATH, ProjectLayout, RecordingRunner, read_arb

OVERRIDE_DIR = ".dart_tool/merged_translations"


def _fake_generator(runner: RecordingRunner, seen: list[dict[str, object]]) -> None:
    """Make gen-l10n write one Dart file and record the ARB input it saw."""

    def on_run(args: tuple[str, ...], cwd: Path) -> None:
        if args != ("flutter", "gen-l10n"):
            return
        merged = cwd / OVERRIDE_DIR / "app_en.arb"
        if merged.exists():
            seen.append(read_arb(merged))
        output = cwd / ".dart_tool" / "flutter_gen" / "gen_l10n"
        output.mkdir(parents=True, exist_ok=True)
        (output / "app_localizations.dart").write_text("// generated\n", encoding="utf-8")

    runner.on_run = on_run


@pytest.fixture
def project(layout: ProjectLayout) -> ProjectLayout:
    """Base and derived app with translations, l10n.yaml and resolved packages."""
    layout.write_base("app_en.arb", {"greet": "Hi", "title": "App"})
    layout.write_extension("app2_en.arb", {"greet": "Hey"})
    (layout.project_root / "l10n.yaml").write_text(
        f"arb-dir: {TRANSLATIONS_PATH}\ntemplate-arb-file: app_en.arb\n", encoding="utf-8"
    )
    layout.add_package_config(layout.project_root)
    layout.add_package_config(layout.base_root)
    (layout.base_root / "pubspec.yaml").write_text("name: app\n", encoding="utf-8")
    return layout


class TestFullBuild:
    """Test the complete pipeline."""

    def test_builds_and_registers_package(self, project: ProjectLayout, runner: RecordingRunner) -> None:
        seen: list[dict[str, object]] = []
        _fake_generator(runner, seen)
        config = project.config(override_arb_dir=OVERRIDE_DIR)
        root = project.project_root.resolve()

        report = FlutterGenBuilder(config, project.project_root, runner=runner).build()

        assert report.completed
        assert report.generated
        assert report.merge is not None and report.merge.written == 1
        assert seen == [{"greet": "Hey", "title": "App", CONTEXT_KEY: MERGED_CONTEXT}]
        assert report.pubspec_path == root / ".dart_tool" / "flutter_gen" / "pubspec.yaml"
        assert report.output_dir == root / ".dart_tool" / "flutter_gen" / "gen_l10n"
        assert root in report.updated_projects
        assert project.base_root.resolve() in report.updated_projects

    def test_l10n_yaml_restored_and_temp_dir_removed(
        self, project: ProjectLayout, runner: RecordingRunner
    ) -> None:
        _fake_generator(runner, [])
        l10n = project.project_root / "l10n.yaml"
        original = l10n.read_text(encoding="utf-8")

        FlutterGenBuilder(
            project.config(override_arb_dir=OVERRIDE_DIR), project.project_root, runner=runner
        ).build()

        assert l10n.read_text(encoding="utf-8") == original
        assert not project.merged_dir.exists()

    def test_stale_synthetic_package_removed(
        self, project: ProjectLayout, runner: RecordingRunner
    ) -> None:
        _fake_generator(runner, [])
        synthetic = project.project_root / ".dart_tool" / "flutter_gen_synthetic"
        synthetic.mkdir(parents=True)
        (synthetic / "old.dart").write_text("", encoding="utf-8")

        FlutterGenBuilder(project.config(), project.project_root, runner=runner).build()

        assert not synthetic.exists()

    def test_generator_rerun_when_output_missing(
        self, project: ProjectLayout, runner: RecordingRunner
    ) -> None:
        """A first run that produces nothing triggers one plain retry."""
        calls = 0

        def on_run(args: tuple[str, ...], cwd: Path) -> None:
            nonlocal calls
            calls += 1
            if calls == 2:
                output = cwd / ".dart_tool" / "flutter_gen" / "gen_l10n"
                output.mkdir(parents=True)

        runner.on_run = on_run

        report = FlutterGenBuilder(project.config(), project.project_root, runner=runner).build()

        assert runner.commands() == [("flutter", "gen-l10n"), ("flutter", "gen-l10n")]
        assert report.completed


class TestDegradedBuild:
    """Test that problems are reported without raising."""

    def test_missing_l10n_yaml_stops_after_generation(
        self, layout: ProjectLayout, runner: RecordingRunner, caplog: pytest.LogCaptureFixture
    ) -> None:
        layout.write_extension("app2_en.arb", {"greet": "Hey"})

        with caplog.at_level(logging.INFO):
            report = FlutterGenBuilder(
                layout.config(base_app=None), layout.project_root, runner=runner
            ).build()

        assert "l10n.yaml not found" in caplog.text
        assert report.pubspec_path is None
        assert report.error is None
        assert not report.completed

    def test_generation_never_produces_output(
        self, project: ProjectLayout, runner: RecordingRunner
    ) -> None:
        runner.returncode = 1

        report = FlutterGenBuilder(project.config(), project.project_root, runner=runner).build()

        assert report.generated is False
        assert report.pubspec_path is None
        assert len(runner.calls) == 2

    def test_invalid_options_skip_only_the_merge(
        self, project: ProjectLayout, runner: RecordingRunner, caplog: pytest.LogCaptureFixture
    ) -> None:
        _fake_generator(runner, [])

        with caplog.at_level(logging.INFO):
            builder = FlutterGenBuilder.from_options(
                {"base_app": "app"}, project.project_root, runner=runner
            )
            report = builder.build()

        assert builder.config is None
        assert "translations_path is required" in caplog.text
        assert report.merge is None
        assert report.completed

    def test_no_translations_and_no_base_skips_merge(
        self, layout: ProjectLayout, runner: RecordingRunner
    ) -> None:
        builder = FlutterGenBuilder(layout.config(base_app=None), layout.project_root, runner=runner)

        assert builder.merge() is None
