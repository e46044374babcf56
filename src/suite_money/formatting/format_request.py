from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from suite_money.domain.monetary.errors import FormatError

# Characters allowed in a custom numeric pattern such as "#,##0.00"
CUSTOM_PATTERN_CHARS = frozenset("0#.,")

DEFAULT_SPEC = "C"


class StandardSpecifier(Enum):
    """Standard specifiers delegated to locale numeric formatting."""

    CURRENCY = "C"
    FIXED = "F"
    NUMBER = "N"


@dataclass(frozen=True)
class CustomPattern:
    """Apply $pattern to the amount, then attach the currency symbol by the locale's position code."""

    pattern: str


@dataclass(frozen=True)
class StandardFormat:
    """Locale formatting with $precision fractional digits (None means the currency's minor units)."""

    specifier: StandardSpecifier
    precision: int | None = None


@dataclass(frozen=True)
class IsoGroupedFormat:
    """Render "{grouped number} {iso_code}"."""

    precision: int | None = None


@dataclass(frozen=True)
class IsoFixedFormat:
    """Render "{fixed-point number} {iso_code}", independent of locale grouping."""

    precision: int | None = None


FormatRequest: TypeAlias = CustomPattern | StandardFormat | IsoGroupedFormat | IsoFixedFormat


def parse_format_spec(spec: str | None) -> FormatRequest:
    """Resolve a format specifier string into a `FormatRequest`.

    Recognized forms:
    - custom numeric pattern made only of "0", "#", "." and ",";
    - "C", "F", "G", "N" with optional precision digits ("G" is an alias for "C");
    - "L" (ISO grouped) and "I" (ISO fixed) with optional precision digits.

    Letters are case-insensitive. An empty or None $spec means "C".

    Raises:
        FormatError: If $spec is not one of the forms above.
    """
    if spec is None:
        spec = DEFAULT_SPEC
    if not isinstance(spec, str):
        raise FormatError(f"$spec must be a string, but provided value is: {spec!r}")

    spec = spec.strip()
    if not spec:
        spec = DEFAULT_SPEC

    if all(c in CUSTOM_PATTERN_CHARS for c in spec):
        if "0" not in spec and "#" not in spec:
            raise FormatError(f"Custom format pattern '{spec}' contains no digit placeholder")
        return CustomPattern(spec)

    letter = spec[0].upper()
    precision = _parse_precision(spec)

    if letter in ("C", "G"):
        return StandardFormat(StandardSpecifier.CURRENCY, precision)
    if letter == "F":
        return StandardFormat(StandardSpecifier.FIXED, precision)
    if letter == "N":
        return StandardFormat(StandardSpecifier.NUMBER, precision)
    if letter == "L":
        return IsoGroupedFormat(precision)
    if letter == "I":
        return IsoFixedFormat(precision)

    raise FormatError(f"Unrecognized money format specifier '{spec}'")


def _parse_precision(spec: str) -> int | None:
    digits = spec[1:]
    if not digits:
        return None
    if not digits.isascii() or not digits.isdigit():
        raise FormatError(f"Precision in format specifier '{spec}' must be a non-negative integer")
    return int(digits)
