from __future__ import annotations

from decimal import Decimal

import pytest
from babel import Locale

from suite_money.domain.monetary.errors import ValidationError
from suite_money.formatting.locale_provider import (
    BabelLocaleProvider,
    get_locale_provider,
    is_invariant_locale,
    set_locale_provider,
    symbol_position_from_affixes,
)


def test_current_locale_is_configured_default():
    provider = BabelLocaleProvider("ja_JP")

    assert str(provider.current_locale()) == "ja_JP"
    assert provider.resolve(None) is provider.current_locale()


def test_resolve_accepts_strings_and_locales():
    provider = BabelLocaleProvider("en_US")

    assert str(provider.resolve("de-DE")) == "de_DE"
    locale = Locale.parse("fr_FR")
    assert provider.resolve(locale) is locale


def test_resolve_unknown_locale_raises_validation_error():
    with pytest.raises(ValidationError):
        BabelLocaleProvider("en_US").resolve("xx_QQ")
    with pytest.raises(ValidationError):
        BabelLocaleProvider("en_US").resolve(42)


def test_region_for():
    provider = BabelLocaleProvider("en_US")

    assert provider.region_for("en_GB") == "GB"
    assert provider.region_for("en") is None
    assert provider.region_for(None) == "US"


def test_currency_code_for_region():
    provider = BabelLocaleProvider("en_US")

    assert provider.currency_code_for_region("us") == "USD"
    assert provider.currency_code_for_region("JP") == "JPY"
    assert provider.currency_code_for_region("ZZ") is None
    assert provider.currency_code_for_region("") is None


def test_number_format_rules_en_us():
    rules = BabelLocaleProvider("en_US").number_format_rules("en_US")

    assert rules.group_symbol == ","
    assert rules.decimal_symbol == "."
    assert rules.symbol_position == 0
    assert rules.decimal_digits == 2
    assert rules.grouping == (3, 3)
    assert rules.positive_prefix == "¤"


def test_number_format_rules_de_de_places_symbol_after_number():
    rules = BabelLocaleProvider("en_US").number_format_rules("de_DE")

    assert rules.group_symbol == "."
    assert rules.decimal_symbol == ","
    assert rules.symbol_position == 3


@pytest.mark.parametrize(
    "prefix, suffix, expected",
    [
        ("¤", "", 0),
        ("", "¤", 1),
        ("¤ ", "", 2),
        ("", " ¤", 3),
        ("", "", 0),
    ],
)
def test_symbol_position_from_affixes(prefix, suffix, expected):
    assert symbol_position_from_affixes(prefix, suffix) == expected


def test_format_and_parse_decimal():
    provider = BabelLocaleProvider("en_US")

    assert provider.format_decimal(Decimal("1234.5"), "#,##0.00", "de_DE") == "1.234,50"
    assert provider.parse_decimal("1.234,50", "de_DE") == Decimal("1234.50")
    with pytest.raises(ValueError):
        provider.parse_decimal("abc", "en_US")


@pytest.mark.parametrize("locale, expected", [("", True), ("root", True), ("UND", True), ("en", False), (None, False), (5, False)])
def test_is_invariant_locale(locale, expected):
    assert is_invariant_locale(locale) == expected


def test_invariant_locale_resolves_to_root():
    assert is_invariant_locale(BabelLocaleProvider("en_US").resolve("root"))


def test_set_locale_provider_returns_previous(en_us_locale_provider):
    replacement = BabelLocaleProvider("ja_JP")

    previous = set_locale_provider(replacement)
    try:
        assert previous is en_us_locale_provider
        assert get_locale_provider() is replacement
    finally:
        set_locale_provider(previous)
