"""Loading ARB documents from disk.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from arbmerge.constants import METADATA_PREFIX
from arbmerge.errors import ResourceParseError
from arbmerge.resources.types import ArbDocument

__all__ = [
    "data_keys",
    "is_metadata_key",
    "load_document",
]

logger = logging.getLogger(__name__)


def is_metadata_key(key: str) -> bool:
    """Check whether a key describes other data ('@greet', '@@locale')."""
    return key.startswith(METADATA_PREFIX)


def data_keys(document: Mapping[str, Any]) -> list[str]:
    """Translatable keys of a document, in document order."""
    return [key for key in document if not is_metadata_key(key)]


def load_document(path: Path | str) -> ArbDocument:
    """Read and decode one ARB file.

    Args:
        path: ARB file to read (UTF-8 JSON object)

    Returns:
        Decoded document with the file's key order preserved

    Raises:
        ResourceParseError: If the content is not UTF-8, not valid JSON, nested
                            too deeply to decode, or not an object
        OSError: If the file cannot be read
    """
    file_path = Path(path)
    raw = file_path.read_bytes()
    try:
        document = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        msg = f"Malformed ARB file {file_path}: not valid UTF-8 at byte {e.start}"
        raise ResourceParseError(msg, path=file_path) from e
    except json.JSONDecodeError as e:
        msg = f"Malformed ARB file {file_path}: {e.msg} (line {e.lineno}, column {e.colno})"
        raise ResourceParseError(msg, path=file_path) from e
    except RecursionError as e:
        msg = f"Malformed ARB file {file_path}: nesting too deep"
        raise ResourceParseError(msg, path=file_path) from e

    if not isinstance(document, dict):
        msg = f"ARB file {file_path} must contain a JSON object, got {type(document).__name__}"
        raise ResourceParseError(msg, path=file_path)

    logger.debug("Loaded %s: %d keys", file_path, len(data_keys(document)))
    return document
