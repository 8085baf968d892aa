"""Hypothesis strategies for ARB merge property-based testing.

Provides reusable strategies for generating merge test data:
- Locale codes (language-only and region-qualified)
- Filename prefixes following the <prefix>_<locale>.arb convention
- ARB documents with optional metadata entries

Event-Emitting Strategies (HypoFuzz-Optimized):
- locale_codes: Emits arb_locale_kind=language|region
- arb_documents: Emits arb_doc_size=empty|small|large

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING, Any

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_LOWER = string.ascii_lowercase
_UPPER = string.ascii_uppercase


@st.composite
def locale_codes(draw: DrawFn) -> str:
    """Generate locale codes: 'xx' or 'xx_YY'.

    Events emitted:
    - arb_locale_kind=language|region
    """
    language = draw(st.text(alphabet=_LOWER, min_size=2, max_size=2))
    region = draw(st.one_of(st.none(), st.text(alphabet=_UPPER, min_size=2, max_size=2)))
    event(f"arb_locale_kind={'region' if region else 'language'}")
    return f"{language}_{region}" if region else language


def filename_prefixes() -> st.SearchStrategy[str]:
    """Prefixes without underscores or dots, e.g. 'app', 'app2', 'intl'."""
    return st.text(alphabet=_LOWER + string.digits + "-", min_size=1, max_size=12)


def data_keys() -> st.SearchStrategy[str]:
    """Translatable ARB keys (camelCase style identifiers)."""
    return st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=16).filter(
        lambda key: key[0].isalpha()
    )


def translations() -> st.SearchStrategy[str]:
    """Translated values, including non-ASCII text."""
    return st.text(min_size=0, max_size=40)


@st.composite
def arb_documents(draw: DrawFn, max_keys: int = 8) -> dict[str, Any]:
    """Generate ARB documents with an optional '@key' entry per data key.

    Events emitted:
    - arb_doc_size=empty|small|large
    """
    keys = draw(st.lists(data_keys(), max_size=max_keys, unique=True))
    document: dict[str, Any] = {}
    for key in keys:
        document[key] = draw(translations())
        if draw(st.booleans()):
            document[f"@{key}"] = {"description": draw(translations())}
    size = "empty" if not keys else "small" if len(keys) <= 3 else "large"
    event(f"arb_doc_size={size}")
    return document
