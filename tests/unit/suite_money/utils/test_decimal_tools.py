from __future__ import annotations

from decimal import Decimal

import pytest

from suite_money.utils.decimal_tools import as_decimal, is_decimal_like, to_float, truncate_to_int


def test_as_decimal_converts_scalars():
    assert as_decimal(Decimal("1.5")) == Decimal("1.5")
    assert as_decimal(3) == Decimal(3)
    assert as_decimal(" 2.50 ") == Decimal("2.50")
    # Floats go through str, so no binary noise
    assert as_decimal(0.1) == Decimal("0.1")


def test_as_decimal_rejects_bad_input():
    with pytest.raises(TypeError):
        as_decimal(None)
    with pytest.raises(TypeError):
        as_decimal(False)
    with pytest.raises(ValueError):
        as_decimal("1,5")


def test_is_decimal_like():
    assert is_decimal_like(1)
    assert is_decimal_like("1")
    assert not is_decimal_like(True)
    assert not is_decimal_like([1])


@pytest.mark.parametrize(
    "value, bits, signed, expected",
    [
        ("1.9", 8, True, (True, 1)),
        ("-1.9", 8, True, (True, -1)),
        ("-129", 8, True, (False, None)),
        ("65535", 16, False, (True, 65535)),
        ("65536", 16, False, (False, None)),
        ("Infinity", 64, True, (False, None)),
    ],
)
def test_truncate_to_int(value, bits, signed, expected):
    assert truncate_to_int(Decimal(value), bits, signed) == expected


def test_truncate_to_int_rejects_unknown_width():
    with pytest.raises(ValueError, match="bits"):
        truncate_to_int(Decimal(1), 12)


def test_to_float():
    assert to_float(Decimal("2.25")) == (True, 2.25)
    assert to_float(Decimal("NaN")) == (False, None)
