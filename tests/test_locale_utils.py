"""Tests for the filename locale codec in locale_utils.py.

Covers extract_locale, locale_filename, language_of, locale_matches and
describe_locale. Includes property-based tests with Hypothesis for the
filename round trip and the fallback relation.

Python 3.13+.
"""

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from arbmerge.locale_utils import (
    describe_locale,
    extract_locale,
    get_babel_locale,
    is_language_only,
    language_of,
    locale_filename,
    locale_matches,
)
from tests.strategies import filename_prefixes, locale_codes


class TestExtractLocale:
    """Test extract_locale filename recognition."""

    def test_language_only(self) -> None:
        """Language-only filename yields the language code."""
        assert extract_locale("app_de.arb") == "de"

    def test_region_qualified(self) -> None:
        """Region-qualified filename yields language_REGION."""
        assert extract_locale("app_de_DE.arb") == "de_DE"

    def test_prefix_with_digits(self) -> None:
        """Prefix may contain digits (derived app names)."""
        assert extract_locale("app2_en.arb") == "en"

    @pytest.mark.parametrize(
        "filename",
        [
            "my_app_en.arb",  # prefix contains underscore
            "app_EN.arb",  # uppercase language
            "app_eng.arb",  # three-letter language
            "app_en_us.arb",  # lowercase region
            "app_en_USA.arb",  # three-letter region
            "app_en.json",  # wrong extension
            "app_en.arb.bak",  # trailing suffix
            "_en.arb",  # empty prefix
            "en.arb",  # no prefix
            "README.md",
        ],
    )
    def test_unrecognized_names_yield_none(self, filename: str) -> None:
        """Names outside the convention are ignored, not rejected."""
        assert extract_locale(filename) is None

    def test_custom_suffix(self) -> None:
        """Suffix parameter switches the expected extension."""
        assert extract_locale("app_fr.json", suffix=".json") == "fr"
        assert extract_locale("app_fr.arb", suffix=".json") is None

    @given(prefix=filename_prefixes(), locale=locale_codes())
    def test_extract_inverts_locale_filename(self, prefix: str, locale: str) -> None:
        """extract_locale is a left inverse of locale_filename (round-trip property)."""
        event(f"region={'_' in locale}")
        assert extract_locale(locale_filename(prefix, locale)) == locale


class TestLocaleFilename:
    """Test canonical filename construction."""

    def test_builds_arb_name(self) -> None:
        assert locale_filename("prefix", "de_DE") == "prefix_de_DE.arb"


class TestLanguageHelpers:
    """Test is_language_only and language_of."""

    def test_is_language_only(self) -> None:
        assert is_language_only("de")
        assert not is_language_only("de_DE")

    def test_language_of_region_code(self) -> None:
        assert language_of("pt_BR") == "pt"

    def test_language_of_language_code(self) -> None:
        assert language_of("en") == "en"


class TestLocaleMatches:
    """Test the asymmetric region-to-language fallback."""

    def test_region_satisfies_language(self) -> None:
        """de_DE file satisfies a de requirement."""
        assert locale_matches("de_DE", "de") is True

    def test_language_does_not_satisfy_region(self) -> None:
        """de file does not satisfy a de_DE requirement."""
        assert locale_matches("de", "de_DE") is False

    def test_exact_match(self) -> None:
        assert locale_matches("en", "en") is True
        assert locale_matches("en_US", "en_US") is True

    def test_different_region_does_not_match(self) -> None:
        """Sibling regions are not interchangeable."""
        assert locale_matches("de_AT", "de_DE") is False

    def test_different_language_does_not_match(self) -> None:
        assert locale_matches("fr_FR", "de") is False

    @given(locale=locale_codes())
    def test_reflexive(self, locale: str) -> None:
        """Every locale matches itself (reflexivity property)."""
        assert locale_matches(locale, locale)

    @given(candidate=locale_codes(), target=locale_codes())
    def test_region_target_requires_exact_match(self, candidate: str, target: str) -> None:
        """A region-qualified target only accepts itself."""
        if is_language_only(target):
            event("target=language")
            return
        event("target=region")
        assert locale_matches(candidate, target) == (candidate == target)

    @given(language=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=2, max_size=2),
           region=st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=2, max_size=2))
    def test_fallback_is_asymmetric(self, language: str, region: str) -> None:
        """language_REGION -> language holds, the reverse never does."""
        qualified = f"{language}_{region}"
        assert locale_matches(qualified, language)
        assert not locale_matches(language, qualified)


class TestDescribeLocale:
    """Test log labels built from Babel locale data."""

    def test_known_locale_includes_english_name(self) -> None:
        assert describe_locale("de") == "de (German)"

    def test_region_locale(self) -> None:
        label = describe_locale("de_DE")
        assert label.startswith("de_DE (German")

    def test_unknown_locale_degrades_to_code(self) -> None:
        """Locales without CLDR data still produce a label."""
        assert describe_locale("qq") == "qq"

    def test_babel_locale_is_cached(self) -> None:
        assert get_babel_locale("fr") is get_babel_locale("fr")
