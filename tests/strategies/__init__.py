"""Hypothesis strategies for arbmerge property-based testing.

Usage:
    from tests.strategies import arb_documents, locale_codes
"""

from .arb import arb_documents, data_keys, filename_prefixes, locale_codes, translations

__all__ = [
    "arb_documents",
    "data_keys",
    "filename_prefixes",
    "locale_codes",
    "translations",
]
