"""Boundaries to the Flutter toolchain.

Submodules:
    generator      - CommandRunner protocol, gen-l10n and pub get invocation,
                     scoped l10n.yaml arb-dir override
    package_config - package_config.json updates and the generated pubspec.yaml

Python 3.13+.
"""

from arbmerge.toolchain.generator import (
    CommandResult,
    CommandRunner,
    SubprocessRunner,
    ensure_base_app_dependencies,
    generate_localizations,
    l10n_arb_dir_override,
    read_output_dir,
    run_gen_l10n,
)
from arbmerge.toolchain.package_config import (
    render_pubspec,
    update_package_config,
    update_package_targets,
    write_pubspec,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "ensure_base_app_dependencies",
    "generate_localizations",
    "l10n_arb_dir_override",
    "read_output_dir",
    "render_pubspec",
    "run_gen_l10n",
    "update_package_config",
    "update_package_targets",
    "write_pubspec",
]
