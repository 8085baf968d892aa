"""External localization generator invocation.

Components:
    CommandRunner - Protocol for running external commands (structural typing)
    SubprocessRunner - subprocess-based implementation
    CommandResult - Immutable outcome of one command
    run_gen_l10n - Run ``flutter gen-l10n`` (failure is non-fatal)
    ensure_base_app_dependencies - ``flutter pub get`` in the base app if needed
    l10n_arb_dir_override - Scoped rewrite of l10n.yaml's arb-dir
    generate_localizations - gen-l10n with the optional override applied
    read_output_dir - output-dir setting of l10n.yaml

Python 3.13+.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import yaml

from arbmerge.constants import (
    DEFAULT_GEN_OUTPUT_DIR,
    FLUTTER_EXECUTABLE,
    L10N_CONFIG_FILE,
    PACKAGE_CONFIG_PATH,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "ensure_base_app_dependencies",
    "generate_localizations",
    "l10n_arb_dir_override",
    "read_output_dir",
    "run_gen_l10n",
]

logger = logging.getLogger(__name__)

_ARB_DIR_KEY = "arb-dir:"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        returncode: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Command exited with status 0."""
        return self.returncode == 0


class CommandRunner(Protocol):
    """Protocol for running external commands.

    Lets the build pipeline be exercised without a Flutter SDK: tests pass
    a recording runner instead of SubprocessRunner.
    """

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        """Run a command to completion.

        Raises:
            OSError: If the executable cannot be started
        """


class SubprocessRunner:
    """CommandRunner backed by subprocess.run."""

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        completed = subprocess.run(  # noqa: S603 - arguments are fixed tool invocations
            list(args),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return CommandResult(completed.returncode, completed.stdout, completed.stderr)


def run_gen_l10n(runner: CommandRunner, project_root: Path) -> bool:
    """Run ``flutter gen-l10n`` in the project root.

    A failing generator degrades the build but does not stop it: the
    pipeline continues with whatever generated output already exists.

    Returns:
        True if the generator exited successfully
    """
    logger.info("📝 Generating Flutter localization files...")
    try:
        result = runner.run([FLUTTER_EXECUTABLE, "gen-l10n"], project_root)
    except OSError as e:
        logger.warning("Failed to run flutter gen-l10n: %s", e)
        return False

    if result.ok:
        logger.info("✅ Flutter localization files generated successfully")
        return True
    logger.warning("⚠️ Flutter gen-l10n completed with warnings: %s", result.stderr.strip())
    return False


def ensure_base_app_dependencies(runner: CommandRunner, base_app_dir: Path) -> bool:
    """Make sure the base app has resolved its packages.

    Runs ``flutter pub get`` in the base app when its package_config.json is
    missing.

    Returns:
        True if the base app has (or now has) its package configuration
    """
    if not base_app_dir.is_dir():
        logger.warning("Base app directory not found: %s", base_app_dir)
        return False

    if (base_app_dir / PACKAGE_CONFIG_PATH).exists():
        logger.info("✅ Base app %s already has package_config.json", base_app_dir.name)
        return True

    logger.info("📦 Base app missing package_config.json, running flutter pub get...")
    try:
        result = runner.run([FLUTTER_EXECUTABLE, "pub", "get"], base_app_dir)
    except OSError as e:
        logger.warning("Failed to ensure base app dependencies: %s", e)
        return False

    if result.ok:
        logger.info("✅ Successfully ran flutter pub get in base app: %s", base_app_dir.name)
        return True
    logger.warning("⚠️ Failed to run flutter pub get in base app: %s", result.stderr.strip())
    return False


def _replace_arb_dir(text: str, arb_dir: str) -> str:
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.startswith(_ARB_DIR_KEY):
            lines[i] = f"{_ARB_DIR_KEY} {arb_dir}"
            return "\n".join(lines)

    # No arb-dir line: add one so the override still takes effect.
    separator = "" if text.endswith("\n") or not text else "\n"
    return f"{text}{separator}{_ARB_DIR_KEY} {arb_dir}\n"


@contextmanager
def l10n_arb_dir_override(l10n_file: Path, arb_dir: str) -> Generator[None]:
    """Temporarily point l10n.yaml's arb-dir at another directory.

    The override directory is created if needed. The original file content
    is restored when the block exits, including when it raises. Without an
    l10n.yaml the block runs unchanged.

    Args:
        l10n_file: Path of l10n.yaml
        arb_dir: Replacement arb-dir value (relative to the l10n.yaml directory)
    """
    override_dir = l10n_file.parent / arb_dir
    if not override_dir.exists():
        override_dir.mkdir(parents=True)
        logger.info("📁 Created override directory: %s", arb_dir)

    if not l10n_file.exists():
        yield
        return

    original = l10n_file.read_text(encoding="utf-8")
    l10n_file.write_text(_replace_arb_dir(original, arb_dir), encoding="utf-8")
    logger.info("📝 Temporarily updated %s arb-dir", l10n_file.name)
    try:
        yield
    finally:
        l10n_file.write_text(original, encoding="utf-8")
        logger.info("📝 Restored original %s", l10n_file.name)


def generate_localizations(
    runner: CommandRunner,
    project_root: Path,
    override_arb_dir: str | None = None,
) -> bool:
    """Run the generator, redirecting arb-dir for the run if requested.

    Returns:
        True if the generator exited successfully
    """
    if override_arb_dir is None:
        return run_gen_l10n(runner, project_root)

    logger.info("📝 Generating Flutter localization files with override...")
    logger.info("📋 Override arb-dir: %s", override_arb_dir)
    with l10n_arb_dir_override(project_root / L10N_CONFIG_FILE, override_arb_dir):
        return run_gen_l10n(runner, project_root)


def read_output_dir(l10n_file: Path) -> str | None:
    """Read the generator output directory from l10n.yaml.

    Returns:
        The configured ``output-dir`` (default .dart_tool/flutter_gen/gen_l10n),
        or None when l10n.yaml does not exist
    """
    if not l10n_file.exists():
        return None
    settings = yaml.safe_load(l10n_file.read_text(encoding="utf-8")) or {}
    output_dir = settings.get("output-dir") if isinstance(settings, dict) else None
    return output_dir if isinstance(output_dir, str) and output_dir else DEFAULT_GEN_OUTPUT_DIR
