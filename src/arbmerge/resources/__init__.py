"""ARB resource discovery and loading.

Submodules:
    types     - PEP 695 type aliases (LocaleCode, ArbDocument, LocaleIndex)
    indexing  - ResourceFile, scan_directory, index_by_locale, find_matching_file
    documents - load_document and metadata-key helpers

Python 3.13+.
"""

from arbmerge.resources.documents import data_keys, is_metadata_key, load_document
from arbmerge.resources.indexing import (
    ResourceFile,
    find_matching_file,
    index_by_locale,
    scan_directory,
)
from arbmerge.resources.types import ArbDocument, LocaleCode, LocaleIndex

__all__ = [
    "ArbDocument",
    "LocaleCode",
    "LocaleIndex",
    "ResourceFile",
    "data_keys",
    "find_matching_file",
    "index_by_locale",
    "is_metadata_key",
    "load_document",
    "scan_directory",
]
