from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from suite_money.formatting import money_formatter

if TYPE_CHECKING:
    from babel import Locale

    from suite_money.domain.monetary.money import Money
    from suite_money.formatting.locale_provider import NumberFormatRules

UNKNOWN_CURRENCY_SYMBOL = "¤"


class Currency:
    """Represents an ISO 4217 currency.

    Instances are immutable. Two currencies are equal when their ISO codes match
    case-insensitively and their ISO numbers match.

    Attributes:
        iso_code (str): Three-letter ISO code (e.g., "USD"), stored upper-cased.
        iso_number (int): ISO numeric code (e.g., 840).
        name (str): Display name (e.g., "US Dollar").
        symbol (str): Currency glyph (e.g., "$").
        minor_units (int): Number of fractional digits native to the currency.
    """

    __slots__ = ("_iso_code", "_iso_number", "_name", "_symbol", "_minor_units")

    # Sentinel returned by every failed lookup; assigned below the class body
    NONE: ClassVar[Currency]

    def __init__(self, iso_code: str, iso_number: int, name: str = "", symbol: str = "", minor_units: int = 0):
        """Initialize a Currency instance.

        Args:
            iso_code (str): Three-letter ISO code; must be non-empty.
            iso_number (int): ISO numeric code; must be >= 0.
            name (str): Display name; falls back to $iso_code when empty.
            symbol (str): Currency glyph; falls back to "¤" when empty.
            minor_units (int): Fractional digits; must be >= 0.

        Raises:
            ValueError: If parameters are invalid.
        """
        if not isinstance(iso_code, str) or not iso_code.strip():
            raise ValueError(f"$iso_code must be a non-empty string, but provided value is: '{iso_code}'")

        if not isinstance(iso_number, int) or isinstance(iso_number, bool) or iso_number < 0:
            raise ValueError(f"$iso_number must be a non-negative integer, but provided value is: {iso_number}")

        if not isinstance(minor_units, int) or isinstance(minor_units, bool) or minor_units < 0:
            raise ValueError(f"$minor_units must be a non-negative integer, but provided value is: {minor_units}")

        self._iso_code = iso_code.strip().upper()
        self._iso_number = iso_number
        self._name = name.strip() if name and name.strip() else self._iso_code
        self._symbol = symbol.strip() if symbol and symbol.strip() else UNKNOWN_CURRENCY_SYMBOL
        self._minor_units = minor_units

    @property
    def iso_code(self) -> str:
        return self._iso_code

    @property
    def iso_number(self) -> int:
        return self._iso_number

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def minor_units(self) -> int:
        return self._minor_units

    # region Formatting

    def format(self, spec: str | None, money: Money, locale: str | Locale | None = None) -> str:
        """Render $money as text using this currency's symbol and precision.

        Args:
            spec: Format specifier, e.g. "C", "N2", "L", "I4" or a custom pattern like "#,##0.00".
            money: Amount to render.
            locale: Locale whose numeric rules apply; the active locale when None.

        Returns:
            Formatted text.

        Raises:
            FormatError: If $spec is not recognized.
        """
        return money_formatter.format_amount(money.amount, self, spec, locale)

    def number_format(self, locale: str | Locale | None = None) -> NumberFormatRules:
        """Return the numeric rules of $locale with decimal digits set to `minor_units`."""
        return money_formatter.currency_number_format(self, locale)

    # endregion

    def __eq__(self, other) -> bool:
        if not isinstance(other, Currency):
            return False
        if other is self:
            return True
        return self.iso_code.upper() == other.iso_code.upper() and self.iso_number == other.iso_number

    def __hash__(self) -> int:
        return hash((self.iso_code.upper(), self.iso_number))

    def __str__(self) -> str:
        """Return string like 'US Dollar (USD)'."""
        return f"{self.name} ({self.iso_code})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.iso_code}', {self.iso_number}, '{self.name}', '{self.symbol}', {self.minor_units})"


NONE = Currency("XXX", 999, "No Currency", UNKNOWN_CURRENCY_SYMBOL, 0)
Currency.NONE = NONE
