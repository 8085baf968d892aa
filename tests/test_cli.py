"""Tests for the arbmerge command line interface.

Python 3.13+.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from arbmerge import builder
from arbmerge.cli import main, parse_args
from tests.helpers.arb_files import TRANSLATIONS_PATH, ProjectLayout, RecordingRunner, read_arb

BUILD_YAML = f"""\
targets:
  $default:
    builders:
      tools|flutter_gen_builder:
        options:
          translations_path: {TRANSLATIONS_PATH}
          base_app: app
"""


@pytest.fixture
def configured(layout: ProjectLayout) -> ProjectLayout:
    (layout.project_root / "build.yaml").write_text(BUILD_YAML, encoding="utf-8")
    return layout


class TestParseArgs:
    """Test argument parsing."""

    def test_merge_defaults(self) -> None:
        parsed = parse_args(["merge"])

        assert parsed.command == "merge"
        assert parsed.config == Path("build.yaml")
        assert parsed.builder == "flutter_gen_builder"
        assert parsed.output is None
        assert parsed.skip_dependencies is False

    def test_build_options(self) -> None:
        parsed = parse_args(["-v", "build", "--config", "opts.yaml", "--project-root", "/p"])

        assert parsed.verbose
        assert parsed.command == "build"
        assert parsed.config == Path("opts.yaml")
        assert parsed.project_root == Path("/p")

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args([])


class TestMergeCommand:
    """Test `arbmerge merge` exit codes and output."""

    def test_success(self, configured: ProjectLayout) -> None:
        configured.write_base("app_en.arb", {"greet": "Hi"})
        configured.write_extension("app2_en.arb", {"farewell": "Bye"})

        code = main(
            ["merge", "--project-root", str(configured.project_root), "--skip-dependencies"]
        )

        assert code == 0
        assert read_arb(configured.merged_dir / "app_en.arb")["farewell"] == "Bye"

    def test_custom_output(self, configured: ProjectLayout, tmp_path: Path) -> None:
        configured.write_extension("app2_en.arb", {"greet": "Hey"})
        out = tmp_path / "out"

        code = main(
            [
                "merge",
                "--project-root",
                str(configured.project_root),
                "--output",
                str(out),
                "--skip-dependencies",
            ]
        )

        assert code == 0
        assert (out / "base_en.arb").exists()

    def test_failed_locale_exits_one(
        self, configured: ProjectLayout, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configured.write_base("app_en.arb", {"greet": "Hi"})
        configured.extension_translations.joinpath("app2_en.arb").write_text("[", encoding="utf-8")

        code = main(
            ["merge", "--project-root", str(configured.project_root), "--skip-dependencies"]
        )

        assert code == 1
        assert "[ERROR] en:" in capsys.readouterr().err

    def test_configuration_error_exits_two(self, layout: ProjectLayout) -> None:
        (layout.project_root / "build.yaml").write_text("base_app: app\n", encoding="utf-8")

        assert main(["merge", "--project-root", str(layout.project_root)]) == 2

    def test_missing_config_exits_two(self, layout: ProjectLayout) -> None:
        assert main(["merge", "--project-root", str(layout.project_root)]) == 2


class TestBuildCommand:
    """Test `arbmerge build`."""

    @pytest.fixture(autouse=True)
    def fake_flutter(self, monkeypatch: pytest.MonkeyPatch) -> RecordingRunner:
        runner = RecordingRunner()
        monkeypatch.setattr(builder, "SubprocessRunner", lambda: runner)
        return runner

    def test_build_without_l10n_yaml_succeeds(
        self, configured: ProjectLayout, fake_flutter: RecordingRunner
    ) -> None:
        configured.write_extension("app2_en.arb", {"greet": "Hey"})
        configured.add_package_config(configured.base_root)

        code = main(["build", "--project-root", str(configured.project_root)])

        assert code == 0
        assert ("flutter", "gen-l10n") in fake_flutter.commands()

    def test_build_with_invalid_config_still_runs(
        self, layout: ProjectLayout, fake_flutter: RecordingRunner
    ) -> None:
        code = main(["build", "--project-root", str(layout.project_root)])

        assert code == 0
        assert fake_flutter.commands() == [("flutter", "gen-l10n")]
