"""Locale provider protocol and its Babel (Unicode CLDR) implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from threading import Lock
from typing import Protocol, TypeAlias

from babel import Locale, UnknownLocaleError
from babel.numbers import (
    format_decimal as babel_format_decimal,
    get_currency_symbol,
    get_decimal_symbol,
    get_group_symbol,
    get_minus_sign_symbol,
    get_territory_currencies,
    parse_decimal as babel_parse_decimal,
)

from suite_money.config import load_settings
from suite_money.domain.monetary.errors import ValidationError

logger = logging.getLogger(__name__)

LocaleLike: TypeAlias = str | Locale

# Identifiers treated as the invariant (root) locale, which has no region
INVARIANT_LOCALE_IDS = frozenset({"", "root", "und"})

# Characters that count as the space between a currency symbol and the number
_SPACES = (" ", "\u00a0", "\u202f")

CURRENCY_SIGN = "¤"


@dataclass(frozen=True)
class NumberFormatRules:
    """Numeric formatting rules of one locale.

    Attributes:
        group_symbol (str): Thousands separator (e.g. "," for en_US).
        decimal_symbol (str): Decimal separator (e.g. "." for en_US).
        minus_sign (str): Sign used for negative numbers.
        symbol_position (int): Where the currency symbol goes: 0 before, 1 after,
            2 before with a space, 3 after with a space.
        decimal_digits (int): Default number of fractional digits for currency amounts.
        grouping (tuple[int, int]): Primary and secondary group sizes.
        positive_prefix (str): Currency pattern prefix for non-negative amounts ("¤" marks the symbol).
        positive_suffix (str): Currency pattern suffix for non-negative amounts.
        negative_prefix (str): Currency pattern prefix for negative amounts.
        negative_suffix (str): Currency pattern suffix for negative amounts.
    """

    group_symbol: str = ","
    decimal_symbol: str = "."
    minus_sign: str = "-"
    symbol_position: int = 0
    decimal_digits: int = 2
    grouping: tuple[int, int] = (3, 3)
    positive_prefix: str = CURRENCY_SIGN
    positive_suffix: str = ""
    negative_prefix: str = "-" + CURRENCY_SIGN
    negative_suffix: str = ""


class LocaleProvider(Protocol):
    """Protocol for locale/culture data sources.

    The formatting engine never computes locale data itself; it asks a provider.
    """

    def current_locale(self) -> Locale:
        """Return the active locale."""
        ...

    def resolve(self, locale: LocaleLike | None) -> Locale:
        """Turn $locale (or the active locale when None) into a `Locale`."""
        ...

    def region_for(self, locale: LocaleLike | None) -> str | None:
        """Return the region (territory) code of $locale, or None for a neutral locale."""
        ...

    def currency_code_for_region(self, region: str) -> str | None:
        """Return the ISO code of the currency currently used in $region."""
        ...

    def number_format_rules(self, locale: LocaleLike | None) -> NumberFormatRules:
        """Return numeric formatting rules for $locale."""
        ...

    def format_decimal(self, value: Decimal, pattern: str, locale: LocaleLike | None) -> str:
        """Render $value using a CLDR number $pattern and the separators of $locale."""
        ...

    def parse_decimal(self, text: str, locale: LocaleLike | None) -> Decimal:
        """Parse a locale-formatted number; raises ValueError when $text is not a number."""
        ...

    def currency_symbol(self, iso_code: str, locale: LocaleLike | None) -> str:
        """Return the locale's own glyph for the currency $iso_code."""
        ...


def is_invariant_locale(locale: LocaleLike | None) -> bool:
    """Check whether $locale is the invariant (root) locale."""
    if isinstance(locale, Locale):
        return str(locale) in INVARIANT_LOCALE_IDS
    if not isinstance(locale, str):
        return False
    return locale.strip().lower() in INVARIANT_LOCALE_IDS


def symbol_position_from_affixes(prefix: str, suffix: str) -> int:
    """Derive the symbol-position code from a currency pattern's positive prefix and suffix."""
    if CURRENCY_SIGN in prefix:
        return 2 if prefix.endswith(_SPACES) else 0
    if CURRENCY_SIGN in suffix:
        return 3 if suffix.startswith(_SPACES) else 1
    return 0


class BabelLocaleProvider:
    """`LocaleProvider` backed by Babel's CLDR data.

    Args:
        default_locale: Locale returned by `current_locale`. When None, the configured
            default from `suite_money.config` is used.
    """

    def __init__(self, default_locale: LocaleLike | None = None):
        if default_locale is None:
            default_locale = load_settings().default_locale
        self._default_locale = self._parse(default_locale)

    def current_locale(self) -> Locale:
        return self._default_locale

    def resolve(self, locale: LocaleLike | None) -> Locale:
        if locale is None:
            return self._default_locale
        if isinstance(locale, Locale):
            return locale
        return self._parse(locale)

    def region_for(self, locale: LocaleLike | None) -> str | None:
        return self.resolve(locale).territory

    def currency_code_for_region(self, region: str) -> str | None:
        if not region or not region.strip():
            return None
        codes = get_territory_currencies(region.strip().upper(), tender=True)
        return codes[0] if codes else None

    def number_format_rules(self, locale: LocaleLike | None) -> NumberFormatRules:
        resolved = self.resolve(locale)
        pattern = resolved.currency_formats["standard"]
        return NumberFormatRules(
            group_symbol=get_group_symbol(resolved),
            decimal_symbol=get_decimal_symbol(resolved),
            minus_sign=get_minus_sign_symbol(resolved),
            symbol_position=symbol_position_from_affixes(pattern.prefix[0], pattern.suffix[0]),
            decimal_digits=pattern.frac_prec[0],
            grouping=tuple(pattern.grouping),
            positive_prefix=pattern.prefix[0],
            positive_suffix=pattern.suffix[0],
            negative_prefix=pattern.prefix[1],
            negative_suffix=pattern.suffix[1],
        )

    def format_decimal(self, value: Decimal, pattern: str, locale: LocaleLike | None) -> str:
        return babel_format_decimal(value, format=pattern, locale=self.resolve(locale))

    def parse_decimal(self, text: str, locale: LocaleLike | None) -> Decimal:
        return babel_parse_decimal(text, locale=self.resolve(locale))

    def currency_symbol(self, iso_code: str, locale: LocaleLike | None) -> str:
        return get_currency_symbol(iso_code, locale=self.resolve(locale))

    @staticmethod
    def _parse(identifier: LocaleLike) -> Locale:
        if isinstance(identifier, Locale):
            return identifier
        if not isinstance(identifier, str):
            raise ValidationError(f"$locale must be a string or babel Locale, but provided value is: {identifier!r}")

        normalized = identifier.strip().replace("-", "_")
        if normalized.lower() in INVARIANT_LOCALE_IDS:
            return Locale("root")

        try:
            return Locale.parse(normalized)
        except (UnknownLocaleError, ValueError) as e:
            raise ValidationError(f"Unknown locale '{identifier}'") from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(default_locale='{self._default_locale}')"


# region Active provider

_active_provider: LocaleProvider | None = None
_provider_lock = Lock()


def get_locale_provider() -> LocaleProvider:
    """Return the active `LocaleProvider`, creating a `BabelLocaleProvider` on first use."""
    global _active_provider
    if _active_provider is None:
        with _provider_lock:
            if _active_provider is None:
                _active_provider = BabelLocaleProvider()
                logger.debug(f"Created default locale provider {_active_provider!r}")
    return _active_provider


def set_locale_provider(provider: LocaleProvider | None) -> LocaleProvider | None:
    """Replace the active provider and return the previous one.

    Passing None resets to a lazily created default provider.
    """
    global _active_provider
    with _provider_lock:
        previous = _active_provider
        _active_provider = provider
    logger.debug(f"Active locale provider set to {provider!r}")
    return previous


# endregion
