"""The merge step: planning, merging, writing and orchestration.

Submodules:
    planner      - SourceScan, LocalePlan, scan_sources, select_mode, plan
    engine       - MergeResult, merge_documents, merge_files
    writer       - output_filename, serialize_document, write_document, copy_resource
    results      - LocaleMergeResult, MergeSummary
    orchestrator - ArbMerger, merge_translations

Python 3.13+.
"""

from arbmerge.merging.engine import MergeResult, merge_documents, merge_files
from arbmerge.merging.orchestrator import ArbMerger, merge_translations
from arbmerge.merging.planner import LocalePlan, SourceScan, plan, scan_sources, select_mode
from arbmerge.merging.results import LocaleMergeResult, MergeSummary
from arbmerge.merging.writer import (
    copy_resource,
    output_filename,
    serialize_document,
    write_document,
)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Orchestration
    "ArbMerger",
    "merge_translations",
    # Results
    "LocaleMergeResult",
    "MergeSummary",
    # Planning
    "LocalePlan",
    "SourceScan",
    "plan",
    "scan_sources",
    "select_mode",
    # Engine
    "MergeResult",
    "merge_documents",
    "merge_files",
    # Output
    "copy_resource",
    "output_filename",
    "serialize_document",
    "write_document",
]
