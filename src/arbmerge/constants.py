"""Shared constants for arbmerge.

Centralizes file-format markers, naming conventions and default locations
used by the merge engine and the build pipeline. Placing constants here
avoids circular imports between the merging and toolchain packages.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # ARB format
    "ARB_SUFFIX",
    "METADATA_PREFIX",
    "CONTEXT_KEY",
    "MERGED_CONTEXT",
    "JSON_INDENT",
    # Output naming
    "GENERIC_PREFIX",
    # Project layout
    "MERGED_TRANSLATIONS_DIR",
    "FLUTTER_GEN_DIR",
    "DEFAULT_GEN_OUTPUT_DIR",
    "SYNTHETIC_PACKAGE_DIR",
    "PACKAGE_CONFIG_PATH",
    "L10N_CONFIG_FILE",
    "MODULES_DIR",
    "NON_APP_DIRS",
    # Generated package
    "GENERATED_PACKAGE_NAME",
    "GENERATED_PACKAGE_URI",
    "GENERATED_LANGUAGE_VERSION",
    # External tools
    "FLUTTER_EXECUTABLE",
]

# ============================================================================
# ARB FORMAT
# ============================================================================

ARB_SUFFIX: str = ".arb"

# Keys starting with this prefix describe a data key instead of being one.
# A doubled prefix ("@@locale", "@@context") is document-level metadata.
METADATA_PREFIX: str = "@"

CONTEXT_KEY: str = "@@context"

# Marks a document as synthesized by the merge engine.
MERGED_CONTEXT: str = "Merged translations: Base App + Extensions"

JSON_INDENT: int = 2

# ============================================================================
# OUTPUT NAMING
# ============================================================================

# Replaces the "<prefix>_" segment of extension-only outputs (app2_en.arb -> base_en.arb).
GENERIC_PREFIX: str = "base"

# ============================================================================
# PROJECT LAYOUT
# ============================================================================
#
# All paths are relative to the project root of the app being built.

MERGED_TRANSLATIONS_DIR: str = ".dart_tool/merged_translations"
FLUTTER_GEN_DIR: str = ".dart_tool/flutter_gen"
DEFAULT_GEN_OUTPUT_DIR: str = ".dart_tool/flutter_gen/gen_l10n"
SYNTHETIC_PACKAGE_DIR: str = ".dart_tool/flutter_gen_synthetic"
PACKAGE_CONFIG_PATH: str = ".dart_tool/package_config.json"
L10N_CONFIG_FILE: str = "l10n.yaml"

# Relative to the parent of the project root.
MODULES_DIR: str = "modules"

# Sibling directories never treated as apps during default discovery.
NON_APP_DIRS: frozenset[str] = frozenset({"modules", "tools"})

# ============================================================================
# GENERATED PACKAGE
# ============================================================================

GENERATED_PACKAGE_NAME: str = "flutter_gen"
GENERATED_PACKAGE_URI: str = "gen_l10n/"
GENERATED_LANGUAGE_VERSION: str = "3.0"

# ============================================================================
# EXTERNAL TOOLS
# ============================================================================

FLUTTER_EXECUTABLE: str = "flutter"
