"""Render money amounts as text.

The format specifier is parsed once into a `FormatRequest` and dispatched here. Locale data
(separators, grouping, currency pattern, symbol position) always comes from a `LocaleProvider`.
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from typing import TYPE_CHECKING

from babel.numbers import parse_pattern

from suite_money.domain.monetary.errors import FormatError
from suite_money.formatting.format_request import (
    CustomPattern,
    IsoFixedFormat,
    IsoGroupedFormat,
    StandardFormat,
    StandardSpecifier,
    parse_format_spec,
)
from suite_money.formatting.locale_provider import (
    CURRENCY_SIGN,
    LocaleLike,
    LocaleProvider,
    NumberFormatRules,
    get_locale_provider,
)

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency import Currency

# Default fractional digits for the ISO display specifiers "L" and "I"
ISO_DEFAULT_PRECISION = 2

# Babel reports a pattern without grouping as group size 1000
_NO_GROUPING = 1000


def format_amount(
    amount: Decimal,
    currency: Currency,
    spec: str | None,
    locale: LocaleLike | None = None,
    provider: LocaleProvider | None = None,
) -> str:
    """Render $amount of $currency according to $spec.

    Args:
        amount: Exact amount to render.
        currency: Supplies the symbol, ISO code and default precision.
        spec: Format specifier; see `parse_format_spec`.
        locale: Locale whose rules apply; the active locale when None.
        provider: Locale data source; the active provider when None.

    Raises:
        FormatError: If $spec is not recognized.
    """
    provider = provider or get_locale_provider()
    request = parse_format_spec(spec)

    if isinstance(request, CustomPattern):
        rules = provider.number_format_rules(locale)
        try:
            pattern = parse_pattern(request.pattern)
            amount = _drop_sign_of_zero(round_half_even(amount, pattern.frac_prec[1]), amount)
            formatted = provider.format_decimal(amount, request.pattern, locale)
        except ValueError as e:
            raise FormatError(f"Cannot apply custom format pattern '{request.pattern}'") from e
        return append_symbol(formatted, currency.symbol, rules.symbol_position)

    if isinstance(request, StandardFormat):
        digits = currency.minor_units if request.precision is None else request.precision
        rules = provider.number_format_rules(locale)
        if request.specifier is StandardSpecifier.CURRENCY:
            return _format_currency(amount, currency, digits, rules, locale, provider)
        if request.specifier is StandardSpecifier.NUMBER:
            return provider.format_decimal(_round_for_display(amount, digits), number_pattern(digits, rules.grouping), locale)
        return provider.format_decimal(_round_for_display(amount, digits), number_pattern(digits), locale)

    if isinstance(request, IsoGroupedFormat):
        digits = ISO_DEFAULT_PRECISION if request.precision is None else request.precision
        rules = provider.number_format_rules(locale)
        number = provider.format_decimal(_round_for_display(amount, digits), number_pattern(digits, rules.grouping), locale)
        return f"{number} {currency.iso_code}"

    if isinstance(request, IsoFixedFormat):
        digits = ISO_DEFAULT_PRECISION if request.precision is None else request.precision
        number = provider.format_decimal(_round_for_display(amount, digits), number_pattern(digits), locale)
        return f"{number} {currency.iso_code}"

    raise FormatError(f"Unsupported format request {request!r}")


def currency_number_format(
    currency: Currency,
    locale: LocaleLike | None = None,
    provider: LocaleProvider | None = None,
) -> NumberFormatRules:
    """Return the rules of $locale with `decimal_digits` taken from $currency."""
    provider = provider or get_locale_provider()
    rules = provider.number_format_rules(locale)
    return dataclasses.replace(rules, decimal_digits=currency.minor_units)


def append_symbol(formatted: str, symbol: str, position: int) -> str:
    """Attach $symbol to $formatted according to the symbol-position code.

    Codes: 0 "$1.00", 1 "1.00$", 2 "$ 1.00", 3 "1.00 $".

    Raises:
        ValueError: If $position is not one of the four codes.
    """
    if position == 0:
        return f"{symbol}{formatted}"
    if position == 1:
        return f"{formatted}{symbol}"
    if position == 2:
        return f"{symbol} {formatted}"
    if position == 3:
        return f"{formatted} {symbol}"
    raise ValueError(f"$position must be one of 0, 1, 2, 3, but provided value is: {position}")


def number_pattern(digits: int, grouping: tuple[int, int] | None = None) -> str:
    """Build a CLDR number pattern with $digits fractional digits.

    Examples:
        >>> number_pattern(2, (3, 3))
        '#,##0.00'
        >>> number_pattern(0, (3, 2))
        '#,##,##0'
        >>> number_pattern(3)
        '0.000'
    """
    if grouping is None or grouping[0] >= _NO_GROUPING:
        integer_part = "0"
    else:
        primary, secondary = grouping
        if secondary == primary or secondary >= _NO_GROUPING:
            integer_part = "#," + "#" * (primary - 1) + "0"
        else:
            integer_part = "#," + "#" * secondary + "," + "#" * (primary - 1) + "0"

    if digits > 0:
        return f"{integer_part}.{'0' * digits}"
    return integer_part


def round_half_even(amount: Decimal, digits: int) -> Decimal:
    """Round $amount to $digits fractional digits, widening context precision for large amounts."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + digits + 2)
        return amount.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)


def _format_currency(
    amount: Decimal,
    currency: Currency,
    digits: int,
    rules: NumberFormatRules,
    locale: LocaleLike | None,
    provider: LocaleProvider,
) -> str:
    rounded = _round_for_display(amount, digits)
    is_negative = rounded < 0
    number = provider.format_decimal(abs(rounded), number_pattern(digits, rules.grouping), locale)

    prefix = rules.negative_prefix if is_negative else rules.positive_prefix
    suffix = rules.negative_suffix if is_negative else rules.positive_suffix
    if is_negative:
        # Pattern affixes use "-" as a placeholder for the locale's minus sign
        prefix = prefix.replace("-", rules.minus_sign)
        suffix = suffix.replace("-", rules.minus_sign)

    text = f"{prefix}{number}{suffix}"
    return text.replace(CURRENCY_SIGN, currency.symbol)


def _round_for_display(amount: Decimal, digits: int) -> Decimal:
    rounded = round_half_even(amount, digits)
    return _drop_sign_of_zero(rounded, rounded)


def _drop_sign_of_zero(rounded: Decimal, value: Decimal) -> Decimal:
    # An amount that rounds to zero is shown as "0.00", never "-0.00"
    if rounded == 0:
        return value.copy_abs()
    return value
