"""Locale codec for ARB resource filenames.

Parses locale identifiers out of filenames of the shape
``<prefix>_<lang>.arb`` / ``<prefix>_<lang>_<REGION>.arb`` and implements the
asymmetric region-to-language fallback used when pairing base and extension
files.

Locale codes use the POSIX underscore form understood by Babel
(``de``, ``de_DE``).

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import re

from babel import Locale
from babel.core import UnknownLocaleError, parse_locale

from arbmerge.constants import ARB_SUFFIX

__all__ = [
    "describe_locale",
    "extract_locale",
    "get_babel_locale",
    "is_language_only",
    "language_of",
    "locale_filename",
    "locale_matches",
]

logger = logging.getLogger(__name__)

# Locale group: two lowercase letters, optionally "_" and two uppercase letters.
_LOCALE_PATTERN = r"(?P<locale>[a-z]{2}(?:_[A-Z]{2})?)"


@functools.lru_cache(maxsize=8)
def _filename_regex(suffix: str) -> re.Pattern[str]:
    return re.compile(rf"^[^_]+_{_LOCALE_PATTERN}{re.escape(suffix)}$")


def extract_locale(filename: str, suffix: str = ARB_SUFFIX) -> str | None:
    """Extract the locale code from a resource filename.

    The prefix may not contain an underscore, so ``my_app_en.arb`` is not
    recognized. Unrecognized names are not an error: source directories may
    hold unrelated files.

    Args:
        filename: Bare filename (no directory component)
        suffix: File extension including the dot

    Returns:
        Locale code, or None if the filename does not follow the convention

    Example:
        >>> extract_locale("app_de.arb")
        'de'
        >>> extract_locale("app_de_DE.arb")
        'de_DE'
        >>> extract_locale("README.md") is None
        True
    """
    match = _filename_regex(suffix).match(filename)
    return match.group("locale") if match else None


def locale_filename(prefix: str, locale: str, suffix: str = ARB_SUFFIX) -> str:
    """Build the canonical resource filename for a locale.

    Inverse of extract_locale for prefixes without underscores.
    """
    return f"{prefix}_{locale}{suffix}"


def is_language_only(locale: str) -> bool:
    """Check whether a locale code carries no region (``de`` vs ``de_DE``)."""
    return "_" not in locale


def language_of(locale: str) -> str:
    """Return the language subtag of a locale code.

    Raises:
        ValueError: If the code is not a syntactically valid locale identifier
    """
    language, _territory, _script, _variant = parse_locale(locale)
    return language


def locale_matches(candidate: str, target: str) -> bool:
    """Check if a file locale satisfies a required locale.

    A region-specific file satisfies a language-only requirement, but a
    language-only file never satisfies a region-specific one.

    Args:
        candidate: Locale of an available file
        target: Locale that is required

    Returns:
        True on exact match or region-to-language fallback

    Example:
        >>> locale_matches("de_DE", "de")
        True
        >>> locale_matches("de", "de_DE")
        False
    """
    if candidate == target:
        return True
    if is_language_only(target) and not is_language_only(candidate):
        return language_of(candidate) == target
    return False


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a cached Babel Locale object.

    Raises:
        babel.core.UnknownLocaleError: If the locale has no CLDR data
        ValueError: If the locale format is invalid
    """
    return Locale.parse(locale_code)


def describe_locale(locale_code: str) -> str:
    """Human-readable label for log output, e.g. ``de_DE (German (Germany))``.

    Locales without CLDR data degrade to the bare code.
    """
    try:
        name = get_babel_locale(locale_code).english_name
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("No display name for locale '%s': %s", locale_code, e)
        return locale_code
    return f"{locale_code} ({name})" if name else locale_code
