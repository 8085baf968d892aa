"""Registration of the generated package in package-resolution manifests.

Dart resolves ``package:`` imports through ``.dart_tool/package_config.json``.
The generated localization code is exposed as a package by writing a static
pubspec.yaml next to it and inserting an entry into the manifest of the app,
its modules and its sibling apps.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from arbmerge.config import (
    UpdateAllModules,
    UpdateConfiguredModules,
    UpdatePackages,
    UpdateSpecificModules,
)
from arbmerge.constants import (
    GENERATED_LANGUAGE_VERSION,
    GENERATED_PACKAGE_NAME,
    GENERATED_PACKAGE_URI,
    JSON_INDENT,
    MODULES_DIR,
    NON_APP_DIRS,
    PACKAGE_CONFIG_PATH,
)
from arbmerge.errors import ManifestError

__all__ = [
    "render_pubspec",
    "update_package_config",
    "update_package_targets",
    "write_pubspec",
]

logger = logging.getLogger(__name__)

_PUBSPEC: dict[str, Any] = {
    "name": GENERATED_PACKAGE_NAME,
    "description": "Enhanced flutter_gen package for automatic localization",
    "version": "1.0.0",
    "publish_to": "none",
}


def render_pubspec() -> str:
    """Static pubspec.yaml content of the generated package."""
    return yaml.safe_dump(_PUBSPEC, sort_keys=False)


def write_pubspec(directory: Path) -> Path:
    """Write pubspec.yaml into directory (created if missing)."""
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / "pubspec.yaml"
    target.write_text(render_pubspec(), encoding="utf-8")
    return target


def update_package_config(
    config_path: Path,
    package_root: Path,
    *,
    name: str = GENERATED_PACKAGE_NAME,
    package_uri: str = GENERATED_PACKAGE_URI,
    language_version: str = GENERATED_LANGUAGE_VERSION,
) -> bool:
    """Insert or replace a package entry in a package_config.json.

    Existing entries with the same name are removed, the new entry is added
    and the package list is re-sorted by name.

    Args:
        config_path: Manifest to rewrite
        package_root: Absolute root directory of the package
        name: Package name
        package_uri: Library directory relative to the root
        language_version: Dart language version of the package

    Returns:
        True if the manifest was rewritten, False if it does not exist

    Raises:
        ManifestError: If the manifest is not JSON or has no package list
    """
    if not config_path.exists():
        logger.warning("package_config.json not found: %s", config_path)
        return False

    try:
        manifest = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Malformed package config {config_path}: {e.msg}"
        raise ManifestError(msg, path=config_path) from e

    packages = manifest.get("packages") if isinstance(manifest, dict) else None
    if not isinstance(packages, list):
        msg = f"Package config {config_path} has no 'packages' list"
        raise ManifestError(msg, path=config_path)

    packages = [pkg for pkg in packages if not (isinstance(pkg, dict) and pkg.get("name") == name)]
    packages.append(
        {
            "name": name,
            "rootUri": f"file://{package_root}",
            "packageUri": package_uri,
            "languageVersion": language_version,
        }
    )
    packages.sort(key=lambda pkg: str(pkg.get("name", "")) if isinstance(pkg, dict) else "")
    manifest["packages"] = packages

    config_path.write_text(json.dumps(manifest, indent=JSON_INDENT), encoding="utf-8")
    return True


def _update_target(directory: Path, package_root: Path, label: str, *, quiet_missing: bool = False) -> bool:
    if not directory.is_dir():
        logger.warning("⚠️  %s directory not found: %s", label, directory)
        return False

    manifest = directory / PACKAGE_CONFIG_PATH
    if not manifest.exists():
        if not quiet_missing:
            logger.warning("⚠️  package_config.json not found for %s", label)
        return False

    try:
        updated = update_package_config(manifest, package_root)
    except (OSError, ManifestError) as e:
        logger.warning("Failed to update package config %s: %s", manifest, e)
        return False
    if updated:
        logger.info("📦 Updated package_config.json for %s", label)
    return updated


def _all_modules(project_root: Path) -> list[Path]:
    modules_dir = project_root.parent / MODULES_DIR
    if not modules_dir.is_dir():
        return []
    return sorted(p for p in modules_dir.iterdir() if p.is_dir())


def _sibling_apps(project_root: Path) -> list[Path]:
    current = project_root.name
    return sorted(
        p
        for p in project_root.parent.iterdir()
        if p.is_dir()
        and p.name != current
        and p.name not in NON_APP_DIRS
        and (p / "pubspec.yaml").exists()
    )


def update_package_targets(
    project_root: Path,
    package_root: Path,
    update_packages: UpdatePackages | None,
) -> tuple[Path, ...]:
    """Register the generated package in every configured manifest.

    The app's own manifest is always updated. With ``update_packages`` None,
    every module under ../modules and every sibling app (a directory with a
    pubspec.yaml, except modules/ and tools/) is updated. A failure for one
    target is logged and does not affect the others.

    Args:
        project_root: Root of the app being built
        package_root: Absolute directory of the generated package
        update_packages: Configured targets, or None for default discovery

    Returns:
        Project directories whose manifests were rewritten
    """
    project_root = project_root.resolve()
    updated: list[Path] = []

    def visit(directory: Path, label: str, *, quiet_missing: bool = False) -> None:
        if _update_target(directory, package_root, label, quiet_missing=quiet_missing):
            updated.append(directory)

    visit(project_root, "app")

    if update_packages is None:
        logger.info("📋 No update_packages configuration found, using default behavior")
        for module in _all_modules(project_root):
            visit(module, f"module: {module.name}", quiet_missing=True)
        for app in _sibling_apps(project_root):
            visit(app, f"sibling app: {app.name}", quiet_missing=True)
        return tuple(updated)

    match update_packages.modules:
        case UpdateAllModules():
            logger.info("📋 Updating ALL modules (update_all: true)")
            for module in _all_modules(project_root):
                visit(module, f"module: {module.name}", quiet_missing=True)
        case UpdateSpecificModules(names=names):
            logger.info("📋 Updating specific modules: %s", ", ".join(names))
            for name in names:
                visit(project_root.parent / MODULES_DIR / name, f"module: {name}")
        case UpdateConfiguredModules(modules=targets):
            logger.info("📋 Updating configured modules: %s", ", ".join(t.name for t in targets))
            for target in targets:
                directory = target.resolve(project_root)
                visit(directory, f"module: {target.name} (path: {directory})")
        case None:
            pass

    if update_packages.apps is not None:
        logger.info("📋 Updating configured apps: %s", ", ".join(update_packages.apps))
        for app in update_packages.apps:
            if app == project_root.name:
                logger.info("⏩ Skipping current app: %s", app)
                continue
            visit(project_root.parent / app, f"sibling app: {app}")

    return tuple(updated)
