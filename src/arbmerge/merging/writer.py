"""Deterministic output of merged documents.

Python 3.13+.
"""

from __future__ import annotations

import json
import re
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from arbmerge.constants import ARB_SUFFIX, GENERIC_PREFIX, JSON_INDENT
from arbmerge.locale_utils import locale_filename
from arbmerge.resources.types import LocaleCode

__all__ = [
    "copy_resource",
    "output_filename",
    "serialize_document",
    "write_document",
]

_LEADING_PREFIX = re.compile(r"^[^_]+_")


def output_filename(
    locale: LocaleCode,
    base_path: Path | None,
    extension_path: Path | None,
) -> str:
    """Choose the filename of a merged locale.

    Order of preference:
        1. the base filename, verbatim
        2. the extension filename with its "<prefix>_" replaced by "base_"
           (app2_en.arb -> base_en.arb)
        3. base_<locale>.arb
    """
    if base_path is not None:
        return base_path.name
    if extension_path is not None:
        return _LEADING_PREFIX.sub(f"{GENERIC_PREFIX}_", extension_path.name, count=1)
    return locale_filename(GENERIC_PREFIX, locale, ARB_SUFFIX)


def serialize_document(document: Mapping[str, Any]) -> str:
    """Serialize a document as indented JSON.

    Insertion order is kept and non-ASCII text is written literally, so the
    same document always produces the same bytes.
    """
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False) + "\n"


def write_document(document: Mapping[str, Any], output_dir: Path, filename: str) -> Path:
    """Write a document to output_dir/filename, replacing any existing file.

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / filename
    target.write_text(serialize_document(document), encoding="utf-8")
    return target


def copy_resource(source: Path, output_dir: Path) -> Path:
    """Copy a resource file unchanged, keeping its filename."""
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / source.name
    shutil.copyfile(source, target)
    return target
