"""Builder configuration.

Parses the builder options map (the ``options:`` block of a build.yaml
builder entry) into frozen dataclasses. The ``update_packages.modules``
option is modelled as a tagged union:

    UpdateAllModules        - {update_all: true}
    UpdateSpecificModules   - {specific: [auth, billing]}
    UpdateConfiguredModules - {auth: {path: ../packages/auth}, billing: null}

Example build.yaml:

    targets:
      $default:
        builders:
          my_tools|flutter_gen_builder:
            options:
              translations_path: .resources/translations
              base_app: app
              override_arb_dir: .dart_tool/merged_translations
              update_packages:
                modules:
                  specific: [auth]
                apps: [app, app3]

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from arbmerge.constants import MODULES_DIR
from arbmerge.errors import ConfigurationError

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Module update variants
    "UpdateAllModules",
    "UpdateSpecificModules",
    "UpdateConfiguredModules",
    "ModuleTarget",
    "ModuleUpdate",
    # Containers
    "UpdatePackages",
    "BuilderConfig",
    # Loading
    "DEFAULT_BUILDER_NAME",
    "load_builder_config",
    "load_builder_options",
]

logger = logging.getLogger(__name__)

DEFAULT_BUILDER_NAME: str = "flutter_gen_builder"

_TRANSLATIONS_HINT = 'Add translations_path: ".resources/translations" to your build.yaml'


@dataclass(frozen=True, slots=True)
class UpdateAllModules:
    """Update every module directory under ../modules."""


@dataclass(frozen=True, slots=True)
class UpdateSpecificModules:
    """Update the named modules under ../modules.

    Attributes:
        names: Module directory names
    """

    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ModuleTarget:
    """A module with an optional custom location.

    Attributes:
        name: Module name (used in log output and for the default path)
        path: Directory relative to the project root; None means ../modules/<name>
    """

    name: str
    path: str | None = None

    def resolve(self, project_root: Path) -> Path:
        """Directory of the module for a given project root."""
        if self.path is not None:
            return project_root / self.path
        return project_root.parent / MODULES_DIR / self.name


@dataclass(frozen=True, slots=True)
class UpdateConfiguredModules:
    """Update modules listed by name, each with an optional custom path.

    Attributes:
        modules: Targets in configuration order
    """

    modules: tuple[ModuleTarget, ...]


type ModuleUpdate = UpdateAllModules | UpdateSpecificModules | UpdateConfiguredModules


@dataclass(frozen=True, slots=True)
class UpdatePackages:
    """Which package manifests besides the app's own receive the generated package.

    Attributes:
        modules: Module update variant (None -> no module is updated)
        apps: Sibling app names (None -> no sibling app is updated)
    """

    modules: ModuleUpdate | None = None
    apps: tuple[str, ...] | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> UpdatePackages:
        """Parse the ``update_packages`` option.

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        modules = options.get("modules")
        if modules is not None and not isinstance(modules, Mapping):
            msg = f"update_packages.modules must be a mapping, got {type(modules).__name__}"
            raise ConfigurationError(msg, option="update_packages.modules")

        apps = options.get("apps")
        return cls(
            modules=_parse_module_update(modules) if modules is not None else None,
            apps=_string_tuple(apps, "update_packages.apps") if apps is not None else None,
        )


@dataclass(frozen=True, slots=True)
class BuilderConfig:
    """Typed builder options.

    Attributes:
        translations_path: Project translations directory, relative to the
                           project root. Acts as the extension layer when a
                           base app is configured.
        base_app: Sibling project whose translations form the base layer
        override_arb_dir: arb-dir used for the generator run instead of the
                          one in l10n.yaml
        update_packages: Manifest update targets; None -> default discovery
                         (all modules and all sibling apps)
    """

    translations_path: str
    base_app: str | None = None
    override_arb_dir: str | None = None
    update_packages: UpdatePackages | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> BuilderConfig:
        """Parse and validate a builder options map.

        Args:
            options: Raw options (None is treated as empty)

        Returns:
            Validated BuilderConfig

        Raises:
            ConfigurationError: If translations_path is missing or any option
                                has the wrong type
        """
        options = options or {}
        if not isinstance(options, Mapping):
            msg = f"Builder options must be a mapping, got {type(options).__name__}"
            raise ConfigurationError(msg)
        translations_path = options.get("translations_path")
        if translations_path is None:
            msg = "translations_path is required in build.yaml"
            raise ConfigurationError(msg, option="translations_path", hint=_TRANSLATIONS_HINT)

        update_packages = options.get("update_packages")
        if update_packages is not None and not isinstance(update_packages, Mapping):
            msg = f"update_packages must be a mapping, got {type(update_packages).__name__}"
            raise ConfigurationError(msg, option="update_packages")

        return cls(
            translations_path=_string(translations_path, "translations_path"),
            base_app=_optional_string(options.get("base_app"), "base_app"),
            override_arb_dir=_optional_string(options.get("override_arb_dir"), "override_arb_dir"),
            update_packages=(
                UpdatePackages.from_mapping(update_packages) if update_packages is not None else None
            ),
        )

    def translations_dir(self, project_root: Path) -> Path:
        """The project's own translations directory."""
        return project_root / self.translations_path

    def base_app_dir(self, project_root: Path) -> Path | None:
        """Root of the base app (a sibling of the project root)."""
        if self.base_app is None:
            return None
        return project_root.parent / self.base_app

    def base_translations_dir(self, project_root: Path) -> Path | None:
        """Base layer directory: ../<base_app>/<translations_path>."""
        base_root = self.base_app_dir(project_root)
        if base_root is None:
            return None
        return base_root / self.translations_path


def _string(value: object, option: str) -> str:
    if not isinstance(value, str) or not value:
        msg = f"{option} must be a non-empty string, got {value!r}"
        raise ConfigurationError(msg, option=option)
    return value


def _optional_string(value: object, option: str) -> str | None:
    return None if value is None else _string(value, option)


def _string_tuple(value: object, option: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"{option} must be a list of strings, got {value!r}"
        raise ConfigurationError(msg, option=option)
    return tuple(value)


def _parse_module_update(modules: Mapping[str, Any]) -> ModuleUpdate | None:
    if modules.get("update_all", False) is True:
        return UpdateAllModules()

    specific = modules.get("specific")
    if specific:
        return UpdateSpecificModules(_string_tuple(specific, "update_packages.modules.specific"))

    targets: list[ModuleTarget] = []
    for name, entry in modules.items():
        if name in ("update_all", "specific"):
            continue
        match entry:
            case {"path": str(path)}:
                targets.append(ModuleTarget(name=str(name), path=path))
            case {"path": _}:
                msg = f"update_packages.modules.{name}.path must be a string"
                raise ConfigurationError(msg, option=f"update_packages.modules.{name}.path")
            case None | Mapping():
                targets.append(ModuleTarget(name=str(name)))
            case _:
                msg = f"update_packages.modules.{name} must be a mapping with a 'path' string"
                raise ConfigurationError(msg, option=f"update_packages.modules.{name}")

    if not targets:
        logger.info("📋 No modules configured for update")
        return None
    return UpdateConfiguredModules(tuple(targets))


def _find_builder_options(document: Mapping[str, Any], builder_name: str) -> Mapping[str, Any]:
    targets = document.get("targets")
    if not isinstance(targets, Mapping):
        return document

    for target in targets.values():
        builders = target.get("builders") if isinstance(target, Mapping) else None
        if not isinstance(builders, Mapping):
            continue
        for key, entry in builders.items():
            if str(key).rsplit("|", 1)[-1].rsplit(":", 1)[-1] != builder_name:
                continue
            options = entry.get("options") if isinstance(entry, Mapping) else None
            if options is not None and not isinstance(options, Mapping):
                msg = f"Options of builder '{key}' must be a mapping"
                raise ConfigurationError(msg, option="options")
            return options or {}

    msg = f"No '{builder_name}' builder entry found in build.yaml targets"
    raise ConfigurationError(msg, option="targets")


def load_builder_config(path: Path | str, builder_name: str = DEFAULT_BUILDER_NAME) -> BuilderConfig:
    """Load and validate builder options from a YAML file.

    Raises:
        ConfigurationError: If the file cannot be loaded or the options are invalid
    """
    return BuilderConfig.from_mapping(load_builder_options(path, builder_name))


def load_builder_options(path: Path | str, builder_name: str = DEFAULT_BUILDER_NAME) -> Mapping[str, Any]:
    """Read the raw builder options map from a YAML file.

    Accepts either a flat options mapping or a build.yaml with
    ``targets -> <target> -> builders -> <package>|<builder_name> -> options``.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
                            has no entry for the builder
    """
    config_path = Path(path)
    try:
        document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        msg = f"Configuration file not found: {config_path}"
        raise ConfigurationError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {config_path}: {e}"
        raise ConfigurationError(msg) from e

    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        msg = f"{config_path} must contain a mapping at the top level"
        raise ConfigurationError(msg)

    return _find_builder_options(document, builder_name)
