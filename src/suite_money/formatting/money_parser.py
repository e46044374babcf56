from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from suite_money.domain.monetary.errors import FormatError
from suite_money.formatting.locale_provider import CURRENCY_SIGN, LocaleLike, LocaleProvider, get_locale_provider

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency import Currency

logger = logging.getLogger(__name__)

_MINUS_SIGNS = ("-", "\u2212")
_PLUS_SIGN = "+"
_WHITESPACE = " \t\n\r\u00a0\u202f"

# Directional marks (LRM, RLM, ALM) carried by CLDR patterns and minus signs of RTL locales
_BIDI_MARKS = str.maketrans("", "", "\u200e\u200f\u061c")


def parse_amount(
    text: str,
    currency: Currency,
    locale: LocaleLike | None = None,
    provider: LocaleProvider | None = None,
) -> Decimal:
    """Parse $text formatted as a $currency amount in $locale.

    Accepts the output of the "C", "N", "F", "L" and "I" specifiers. At most one currency token
    (the ISO code, the currency's symbol or the locale's own glyph for it) may lead or trail the
    number. One sign ("+" or a minus sign) may sit on either side of the number, and a pair of
    enclosing parentheses marks a negative amount.

    Args:
        text: Text to parse, e.g. "$1,234.50" or "-1.234,50 €".
        currency: Currency whose code and symbols may appear in $text.
        locale: Locale whose separators apply; the active locale when None.
        provider: Locale data source; the active provider when None.

    Returns:
        The parsed amount.

    Raises:
        FormatError: If $text is not a number in the given locale.
    """
    if not isinstance(text, str):
        raise FormatError(f"$text must be a string, but provided value is: {text!r}")

    provider = provider or get_locale_provider()
    remaining = text.translate(_BIDI_MARKS).strip(_WHITESPACE)
    if not remaining:
        raise FormatError("Cannot parse money from empty text")

    is_negative = False
    if remaining.startswith("(") and remaining.endswith(")"):
        is_negative = True
        remaining = remaining[1:-1].strip(_WHITESPACE)

    tokens = _currency_tokens(currency, locale, provider)
    minus_signs = _minus_signs(locale, provider)

    # Sign and currency token may come in either order: "-$5", "$-5", "5$-", "5-$"
    sign, remaining = _take_leading_sign(remaining, minus_signs)
    remaining, has_prefix_token = _take_prefix_token(remaining, tokens)
    if sign is None:
        sign, remaining = _take_leading_sign(remaining, minus_signs)
    has_suffix_token = False
    if not has_prefix_token:
        remaining, has_suffix_token = _take_suffix_token(remaining, tokens)
    if sign is None:
        sign, remaining = _take_trailing_sign(remaining, minus_signs)
    if not has_prefix_token and not has_suffix_token:
        remaining, _ = _take_suffix_token(remaining, tokens)

    if sign in minus_signs:
        is_negative = not is_negative

    if not remaining or remaining[0] in (_PLUS_SIGN, *minus_signs) or remaining[-1] in (_PLUS_SIGN, *minus_signs):
        raise FormatError(f"Cannot parse money from text '{text}'")
    if any(token in remaining for token in tokens):
        raise FormatError(f"Cannot parse money from text '{text}' because a currency token is misplaced")

    try:
        value = provider.parse_decimal(remaining, locale)
    except ValueError as e:
        raise FormatError(f"Cannot parse money from text '{text}'") from e

    if not value.is_finite():
        raise FormatError(f"Cannot parse money from text '{text}' because the value is not finite")

    return -value if is_negative else value


def _currency_tokens(currency: Currency, locale: LocaleLike | None, provider: LocaleProvider) -> list[str]:
    tokens = {currency.iso_code, currency.symbol, CURRENCY_SIGN}
    try:
        tokens.add(provider.currency_symbol(currency.iso_code, locale))
    except (KeyError, ValueError) as e:
        logger.debug(f"No locale symbol for currency {currency.iso_code}: {e}")

    # Longest first so that "R$" is matched before "R"
    tokens = {t.translate(_BIDI_MARKS).strip(_WHITESPACE) for t in tokens}
    return sorted((t for t in tokens if t), key=len, reverse=True)


def _minus_signs(locale: LocaleLike | None, provider: LocaleProvider) -> tuple[str, ...]:
    locale_minus = provider.number_format_rules(locale).minus_sign.translate(_BIDI_MARKS)
    if locale_minus and locale_minus not in _MINUS_SIGNS:
        return (*_MINUS_SIGNS, locale_minus)
    return _MINUS_SIGNS


def _take_leading_sign(text: str, minus_signs: tuple[str, ...]) -> tuple[str | None, str]:
    for sign in (_PLUS_SIGN, *minus_signs):
        if text.startswith(sign):
            return sign, text[len(sign) :].lstrip(_WHITESPACE)
    return None, text


def _take_trailing_sign(text: str, minus_signs: tuple[str, ...]) -> tuple[str | None, str]:
    for sign in (_PLUS_SIGN, *minus_signs):
        if text.endswith(sign):
            return sign, text[: -len(sign)].rstrip(_WHITESPACE)
    return None, text


def _take_prefix_token(text: str, tokens: list[str]) -> tuple[str, bool]:
    for token in tokens:
        if text.startswith(token):
            return text.removeprefix(token).lstrip(_WHITESPACE), True
    return text, False


def _take_suffix_token(text: str, tokens: list[str]) -> tuple[str, bool]:
    for token in tokens:
        if text.endswith(token):
            return text.removesuffix(token).rstrip(_WHITESPACE), True
    return text, False
