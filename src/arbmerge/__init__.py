"""arbmerge - ARB translation merging for Flutter app variants.

Merges a base app's ARB translation files with the overriding/additive files
of a derived app into one deterministic file per locale, and wraps the
result into an importable flutter_gen package.

Public API:
    ArbMerger - Merge step for one project
    merge_translations - Shorthand for ArbMerger(...).run()
    merge_documents - Pure base + extension merge of two documents
    FlutterGenBuilder - Full build pipeline (merge, gen-l10n, package registration)
    BuilderConfig - Typed builder options
    load_builder_config - Read BuilderConfig from build.yaml
    extract_locale / locale_matches - Filename locale codec

Exceptions:
    ArbMergeError - Base exception class
    ConfigurationError - Missing or invalid builder options
    ResourceParseError - Malformed ARB document
    ManifestError - Malformed package_config.json

Submodules:
    arbmerge.resources - Directory indexing and document loading
    arbmerge.merging - Planner, engine, writer, orchestrator
    arbmerge.toolchain - Flutter tool invocation and package manifests
"""

from .builder import BuildReport, FlutterGenBuilder
from .config import BuilderConfig, load_builder_config
from .enums import MergeMode, MergeStatus
from .errors import ArbMergeError, ConfigurationError, ManifestError, ResourceParseError
from .locale_utils import extract_locale, locale_matches
from .merging import ArbMerger, MergeSummary, merge_documents, merge_translations

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("arbmerge")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArbMergeError",
    "ArbMerger",
    "BuildReport",
    "BuilderConfig",
    "ConfigurationError",
    "FlutterGenBuilder",
    "ManifestError",
    "MergeMode",
    "MergeStatus",
    "MergeSummary",
    "ResourceParseError",
    "__version__",
    "extract_locale",
    "load_builder_config",
    "locale_matches",
    "merge_documents",
    "merge_translations",
]
