from __future__ import annotations

from decimal import Decimal

import pytest

from suite_money.domain.monetary.currency import NONE, Currency
from suite_money.domain.monetary.money import Money
from tests.helpers.test_assistant import TEST_ASSISTANT as TA


def test_currency_properties():
    usd = Currency("usd", 840, "US Dollar", "$", 2)

    assert usd.iso_code == "USD"
    assert usd.iso_number == 840
    assert usd.name == "US Dollar"
    assert usd.symbol == "$"
    assert usd.minor_units == 2


def test_currency_equality_ignores_code_case():
    assert Currency("usd", 840) == Currency("USD", 840, "US Dollar", "$", 2)
    assert hash(Currency("usd", 840)) == hash(Currency("USD", 840))


def test_currency_equality_requires_same_number():
    assert Currency("USD", 840) != Currency("USD", 841)
    assert Currency("USD", 840) != Currency("USN", 840)
    assert Currency("USD", 840) != "USD"


def test_currency_display_string():
    assert str(TA.currency.create_usd()) == "US Dollar (USD)"
    assert str(NONE) == "No Currency (XXX)"


def test_currency_defaults_for_blank_name_and_symbol():
    currency = Currency("ABC", 1, name="  ", symbol="")

    assert currency.name == "ABC"
    assert currency.symbol == "¤"
    assert currency.minor_units == 0


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"iso_code": "", "iso_number": 1}, "iso_code"),
        ({"iso_code": None, "iso_number": 1}, "iso_code"),
        ({"iso_code": "ABC", "iso_number": -1}, "iso_number"),
        ({"iso_code": "ABC", "iso_number": "1"}, "iso_number"),
        ({"iso_code": "ABC", "iso_number": 1, "minor_units": -1}, "minor_units"),
    ],
)
def test_invalid_currency_raises(kwargs, message):
    with pytest.raises(ValueError, match=message):
        Currency(**kwargs)


def test_currency_is_immutable():
    usd = TA.currency.create_usd()

    with pytest.raises(AttributeError):
        usd.iso_code = "EUR"
    with pytest.raises(AttributeError):
        usd.extra = 1


def test_currency_none_class_attribute_is_sentinel():
    assert Currency.NONE is NONE


def test_currency_format_uses_own_symbol_and_precision():
    usd = TA.currency.create_usd()
    jpy = TA.currency.create_jpy()

    assert usd.format("C", Money(Decimal("19.99"), usd)) == "$19.99"
    assert jpy.format("C", Money(1000, jpy)) == "¥1,000"


def test_currency_number_format_uses_minor_units():
    rules = TA.currency.create_jpy().number_format("en_US")

    assert rules.decimal_digits == 0
    assert rules.decimal_symbol == "."
    assert rules.group_symbol == ","
    assert rules.symbol_position == 0
