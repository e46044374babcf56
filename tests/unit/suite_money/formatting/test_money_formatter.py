from __future__ import annotations

from decimal import Decimal

import pytest

from suite_money.domain.monetary.currency import NONE
from suite_money.domain.monetary.errors import FormatError
from suite_money.formatting.money_formatter import append_symbol, format_amount, number_pattern, round_half_even
from tests.helpers.test_assistant import TEST_ASSISTANT as TA

AMOUNT = Decimal("1234.567")


# region Standard specifiers


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("C", "$1,234.57"),
        ("C0", "$1,235"),
        ("C4", "$1,234.5670"),
        ("G", "$1,234.57"),
        ("N", "1,234.57"),
        ("N1", "1,234.6"),
        ("F", "1234.57"),
        ("F3", "1234.567"),
        ("L", "1,234.57 USD"),
        ("L0", "1,235 USD"),
        ("I", "1234.57 USD"),
        ("I1", "1234.6 USD"),
    ],
)
def test_format_usd_en_us(spec, expected):
    assert format_amount(AMOUNT, TA.currency.create_usd(), spec, "en_US") == expected


def test_standard_default_precision_is_minor_units():
    jpy = TA.currency.create_jpy()

    assert format_amount(AMOUNT, jpy, "C", "en_US") == "¥1,235"
    assert format_amount(AMOUNT, jpy, "N", "en_US") == "1,235"
    assert format_amount(AMOUNT, jpy, "F", "en_US") == "1235"


def test_iso_default_precision_is_two_digits():
    jpy = TA.currency.create_jpy()

    assert format_amount(AMOUNT, jpy, "L", "en_US") == "1,234.57 JPY"
    assert format_amount(AMOUNT, jpy, "I", "en_US") == "1234.57 JPY"


def test_negative_currency_amount():
    assert format_amount(Decimal("-5"), TA.currency.create_usd(), "C", "en_US") == "-$5.00"


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("C", "$0.00"),
        ("N", "0.00"),
        ("F", "0.00"),
        ("L", "0.00 USD"),
        ("I", "0.00 USD"),
        ("#,##0.00", "$0.00"),
    ],
)
def test_rounding_to_zero_drops_sign(spec, expected):
    assert format_amount(Decimal("-0.001"), TA.currency.create_usd(), spec, "en_US") == expected


def test_fixed_formats_ignore_grouping_but_use_locale_decimal_symbol():
    eur = TA.currency.create_eur()

    assert format_amount(AMOUNT, eur, "F", "de_DE") == "1234,57"
    assert format_amount(AMOUNT, eur, "I", "de_DE") == "1234,57 EUR"
    assert format_amount(AMOUNT, eur, "L", "de_DE") == "1.234,57 EUR"


def test_indian_grouping():
    usd = TA.currency.create_usd()

    assert format_amount(Decimal("1234567"), usd, "N0", "en_IN") == "12,34,567"


def test_none_currency_uses_generic_symbol():
    assert format_amount(Decimal("1"), NONE, "C", "en_US") == "¤1"


# endregion

# region Custom patterns


def test_custom_pattern_uses_locale_symbol_position():
    assert format_amount(AMOUNT, TA.currency.create_usd(), "#,##0.00", "en_US") == "$1,234.57"
    assert format_amount(AMOUNT, TA.currency.create_eur(), "#,##0.00", "de_DE") == "1.234,57 €"


@pytest.mark.parametrize(
    "position, expected",
    [
        (0, "$1234.6"),
        (1, "1234.6$"),
        (2, "$ 1234.6"),
        (3, "1234.6 $"),
    ],
)
def test_custom_pattern_symbol_positions(position, expected):
    provider = TA.locale.FixedSymbolPositionProvider(position)

    assert format_amount(AMOUNT, TA.currency.create_usd(), "0.0", "en_US", provider=provider) == expected


def test_unknown_symbol_position_is_invariant_violation():
    provider = TA.locale.FixedSymbolPositionProvider(4)

    with pytest.raises(ValueError, match="position"):
        format_amount(AMOUNT, TA.currency.create_usd(), "0.00", "en_US", provider=provider)


def test_append_symbol():
    assert append_symbol("1.00", "€", 3) == "1.00 €"
    with pytest.raises(ValueError):
        append_symbol("1.00", "€", -1)


# endregion


def test_unrecognized_specifier_raises_format_error():
    with pytest.raises(FormatError, match="Unrecognized"):
        format_amount(AMOUNT, TA.currency.create_usd(), "Q", "en_US")


@pytest.mark.parametrize(
    "digits, grouping, expected",
    [
        (2, (3, 3), "#,##0.00"),
        (0, (3, 3), "#,##0"),
        (0, (3, 2), "#,##,##0"),
        (3, None, "0.000"),
        (1, (1000, 1000), "0.0"),
    ],
)
def test_number_pattern(digits, grouping, expected):
    assert number_pattern(digits, grouping) == expected


def test_round_half_even():
    assert round_half_even(Decimal("2.5"), 0) == Decimal("2")
    assert round_half_even(Decimal("0.125"), 2) == Decimal("0.12")
