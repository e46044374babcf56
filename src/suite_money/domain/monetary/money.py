from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_EVEN

from suite_money.domain.monetary import currency_registry
from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.errors import ArgumentError, CurrencyMismatchError, FormatError
from suite_money.formatting import money_parser
from suite_money.formatting.locale_provider import LocaleLike
from suite_money.utils.decimal_tools import (
    ConversionResult,
    DecimalLike,
    as_decimal,
    is_decimal_like,
    to_float,
    truncate_to_int,
)

CurrencyLike = Currency | str | int | None


class Money:
    """Represents an exact monetary amount tagged with a currency.

    The amount is an arbitrary-precision `Decimal`; the currency is kept as its ISO number and
    resolved through the currency registry on access. Instances are immutable: every operation
    returns a new `Money`.

    Binary arithmetic between two `Money` values requires the same currency. Arithmetic with a
    scalar (Decimal, int, str or float) always keeps the currency.

    Ordering compares the currency ISO number first, then the amount, so a list of mixed
    currencies sorts into per-currency runs.
    """

    __slots__ = ("_amount", "_currency_number")

    def __init__(self, amount: DecimalLike, currency: CurrencyLike = None):
        """Initialize Money with amount and currency.

        Args:
            amount: Numeric amount (Decimal-like scalar).
            currency: A `Currency`, an ISO code ("USD"), an ISO number (840), or None for the
                currency of the active locale.

        Raises:
            ArgumentError: If $amount or $currency has an unsupported type.
            ValueError: If $amount cannot be converted to a finite Decimal.
        """
        self._amount = _to_amount(amount, "__init__")
        self._currency_number = _resolve_currency_number(currency)

    @classmethod
    def zero(cls, currency: CurrencyLike = None) -> Money:
        return cls(Decimal(0), currency)

    @classmethod
    def _with_number(cls, amount: Decimal, currency_number: int) -> Money:
        result = cls.__new__(cls)
        result._amount = amount
        result._currency_number = currency_number
        return result

    # region Properties

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def currency_number(self) -> int:
        return self._currency_number

    @property
    def currency(self) -> Currency:
        """Get the currency; unknown ISO numbers resolve to `Currency.NONE`."""
        return currency_registry.by_number(self._currency_number)

    # endregion

    # region Arithmetic

    def add(self, other: Money | DecimalLike) -> Money:
        """Add another Money (same currency) or a scalar."""
        return self._with_number(self._amount + self._operand(other, "add"), self._currency_number)

    def subtract(self, other: Money | DecimalLike) -> Money:
        """Subtract another Money (same currency) or a scalar."""
        return self._with_number(self._amount - self._operand(other, "subtract"), self._currency_number)

    def multiply(self, other: Money | DecimalLike) -> Money:
        """Multiply by another Money (same currency) or a scalar."""
        return self._with_number(self._amount * self._operand(other, "multiply"), self._currency_number)

    def divide(self, other: Money | DecimalLike) -> Money:
        """Divide by another Money (same currency) or a scalar.

        Raises:
            ZeroDivisionError: If the divisor is zero.
        """
        divisor = self._operand(other, "divide")
        if divisor == 0:
            raise ZeroDivisionError("Cannot call `divide` because $other is zero")
        return self._with_number(self._amount / divisor, self._currency_number)

    def remainder(self, other: Money | DecimalLike) -> Money:
        """Remainder of dividing by another Money (same currency) or a scalar.

        The result has the sign of this amount (truncated division).

        Raises:
            ZeroDivisionError: If the divisor is zero.
        """
        divisor = self._operand(other, "remainder")
        if divisor == 0:
            raise ZeroDivisionError("Cannot call `remainder` because $other is zero")
        return self._with_number(self._amount % divisor, self._currency_number)

    def round(self, places: int = 0, rounding: str = ROUND_HALF_EVEN) -> Money:
        """Round to $places fractional digits using a `decimal` rounding mode (banker's rounding by default)."""
        if not isinstance(places, int) or isinstance(places, bool):
            raise ArgumentError(f"Cannot call `round` because $places must be int, but provided value is: {places!r}")
        try:
            rounded = self._amount.quantize(Decimal(1).scaleb(-places), rounding=rounding)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Cannot call `round` with $places={places} and $rounding={rounding!r} on {self!r}") from e
        return self._with_number(rounded, self._currency_number)

    def floor(self) -> Money:
        return self._with_number(self._amount.to_integral_value(rounding=ROUND_FLOOR), self._currency_number)

    def ceiling(self) -> Money:
        return self._with_number(self._amount.to_integral_value(rounding=ROUND_CEILING), self._currency_number)

    def negate(self) -> Money:
        return self._with_number(-self._amount, self._currency_number)

    def abs(self) -> Money:
        return self._with_number(abs(self._amount), self._currency_number)

    def increment(self) -> Money:
        """Return a new Money with the amount increased by one major unit."""
        return self._with_number(self._amount + 1, self._currency_number)

    def decrement(self) -> Money:
        """Return a new Money with the amount decreased by one major unit."""
        return self._with_number(self._amount - 1, self._currency_number)

    def change_currency(self, currency: CurrencyLike, rate: DecimalLike) -> Money:
        """Return `amount * rate` tagged with $currency.

        No exchange-rate lookup happens here; $rate is trusted as given.
        """
        return Money(self._amount * _to_amount(rate, "change_currency"), currency)

    def _operand(self, other: Money | DecimalLike, operation: str) -> Decimal:
        if isinstance(other, Money):
            if other._currency_number != self._currency_number:
                raise CurrencyMismatchError(operation, self.currency, other.currency)
            return other._amount
        return _to_amount(other, operation)

    # endregion

    # region Operators

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return self._with_number(_to_amount(other, "subtract") - self._amount, self._currency_number)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return self.multiply(other)

    def __truediv__(self, other):
        return self.divide(other)

    def __mod__(self, other):
        return self.remainder(other)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    # endregion

    # region Comparison

    def compare_to(self, other: Money | DecimalLike) -> int:
        """Compare with another Money or a scalar.

        Money is ordered by currency ISO number first, then amount. A scalar is compared with
        the amount only.

        Returns:
            int: -1, 0 or 1.

        Raises:
            ArgumentError: If $other is neither Money nor a Decimal-like scalar.
        """
        if isinstance(other, Money):
            mine, theirs = (self._currency_number, self._amount), (other._currency_number, other._amount)
        elif is_decimal_like(other):
            mine, theirs = self._amount, _to_amount(other, "compare_to")
        else:
            raise ArgumentError(f"Cannot call `compare_to` because $other must be Money or a number, but provided value is: {other!r}")
        return (mine > theirs) - (mine < theirs)

    def _sort_key(self) -> tuple[int, Decimal]:
        return self._currency_number, self._amount

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._currency_number == other._currency_number and self._amount == other._amount

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __hash__(self) -> int:
        return hash((self._amount, self._currency_number))

    # endregion

    # region Conversions

    def to_decimal(self) -> Decimal:
        return self._amount

    def to_int8(self) -> ConversionResult:
        return truncate_to_int(self._amount, 8)

    def to_int16(self) -> ConversionResult:
        return truncate_to_int(self._amount, 16)

    def to_int32(self) -> ConversionResult:
        return truncate_to_int(self._amount, 32)

    def to_int64(self) -> ConversionResult:
        return truncate_to_int(self._amount, 64)

    def to_uint8(self) -> ConversionResult:
        return truncate_to_int(self._amount, 8, signed=False)

    def to_uint16(self) -> ConversionResult:
        return truncate_to_int(self._amount, 16, signed=False)

    def to_uint32(self) -> ConversionResult:
        return truncate_to_int(self._amount, 32, signed=False)

    def to_uint64(self) -> ConversionResult:
        return truncate_to_int(self._amount, 64, signed=False)

    def to_float(self) -> ConversionResult:
        return to_float(self._amount)

    # endregion

    # region Text

    def format(self, spec: str | None = "C", locale: LocaleLike | None = None) -> str:
        """Render this amount; see `parse_format_spec` for the accepted specifiers.

        Raises:
            FormatError: If $spec is not recognized.
        """
        return self.currency.format(spec, self, locale)

    def __format__(self, spec: str) -> str:
        return self.format(spec or "C")

    def __str__(self) -> str:
        """Return string like '$1,000.50' (the "C" format in the active locale)."""
        return self.format("C")

    def __repr__(self) -> str:
        """Return string like 'Money(1000.50, USD)'."""
        return f"{self.__class__.__name__}({self._amount}, {self.currency.iso_code})"

    @classmethod
    def parse(cls, text: str, locale: LocaleLike | None = None) -> Money:
        """Parse Money from locale-formatted currency text like '$1,000.50'.

        The currency is the currency of the region of $locale (the active locale when None).

        Raises:
            FormatError: If $text is not a valid amount.
            ValidationError: If $locale is neutral or unknown.
        """
        currency = currency_registry.for_locale(locale) if locale is not None else currency_registry.current_currency()
        amount = money_parser.parse_amount(text, currency, locale)
        return cls(amount, currency)

    @classmethod
    def try_parse(cls, text: str, locale: LocaleLike | None = None) -> tuple[bool, Money | None]:
        """Like `parse`, but return `(False, None)` instead of raising `FormatError`."""
        try:
            return True, cls.parse(text, locale)
        except FormatError:
            return False, None

    # endregion


def _to_amount(value: DecimalLike, operation: str) -> Decimal:
    if not is_decimal_like(value):
        raise ArgumentError(f"Cannot call `{operation}` because operand must be Money or a number, but provided value is: {value!r}")
    try:
        amount = as_decimal(value)
    except ValueError as e:
        raise ValueError(f"Cannot call `{operation}` because operand ({value!r}) cannot be converted to Decimal") from e
    if not amount.is_finite():
        raise ValueError(f"Cannot call `{operation}` because operand ({value!r}) is not finite")
    return amount


def _resolve_currency_number(currency: CurrencyLike) -> int:
    if currency is None:
        return currency_registry.current_currency().iso_number
    if isinstance(currency, Currency):
        return currency.iso_number
    if isinstance(currency, str):
        return currency_registry.by_code(currency).iso_number
    if isinstance(currency, int) and not isinstance(currency, bool):
        if currency < 0:
            raise ValueError(f"$currency number must be >= 0, but provided value is: {currency}")
        return currency
    raise ArgumentError(f"$currency must be Currency, ISO code, ISO number or None, but provided value is: {currency!r}")
