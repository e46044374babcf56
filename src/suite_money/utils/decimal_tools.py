from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import NamedTuple, TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def is_decimal_like(value: object) -> bool:
    """Check whether $value is a scalar accepted by `as_decimal`.

    `bool` is rejected even though it is an `int` subclass.
    """
    return isinstance(value, (Decimal, int, str, float)) and not isinstance(value, bool)


def as_decimal(value: DecimalLike) -> Decimal:
    """Convert supported scalar types into Decimal.

    Floats are converted via string to avoid precision noise.

    Args:
        value: Input value as Decimal, string, int or float.

    Returns:
        Value converted to Decimal.

    Raises:
        TypeError: If $value is not a supported scalar.
        ValueError: If $value is a string that does not hold a number.
    """
    if isinstance(value, Decimal):
        return value

    if not is_decimal_like(value):
        raise TypeError(f"$value must be Decimal, int, str or float, but provided value is: {value!r}")

    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"$value ({value!r}) cannot be converted to Decimal") from e


class ConversionResult(NamedTuple):
    """Outcome of a checked numeric conversion.

    Attributes:
        ok (bool): True when the value fits into the target type.
        value (int | float | None): Converted value, or None when $ok is False.
    """

    ok: bool
    value: int | float | None


_FAILED = ConversionResult(False, None)


def truncate_to_int(value: Decimal, bits: int, signed: bool = True) -> ConversionResult:
    """Truncate $value toward zero and check it fits into an integer of $bits width.

    Args:
        value: Decimal to convert.
        bits: Width of the target integer type (8, 16, 32 or 64).
        signed: Whether the target type is signed.

    Returns:
        ConversionResult with the truncated integer, or a failed result on overflow
        or for non-finite input.
    """
    if bits not in (8, 16, 32, 64):
        raise ValueError(f"$bits must be one of 8, 16, 32, 64, but provided value is: {bits}")

    if not value.is_finite():
        return _FAILED

    truncated = int(value.to_integral_value(rounding=ROUND_DOWN))
    if signed:
        lower, upper = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    else:
        lower, upper = 0, 2**bits - 1

    if truncated < lower or truncated > upper:
        return _FAILED
    return ConversionResult(True, truncated)


def to_float(value: Decimal) -> ConversionResult:
    """Convert $value to float; overflow to infinity is reported as a failure."""
    if not value.is_finite():
        return _FAILED

    result = float(value)
    if math.isinf(result):
        return _FAILED
    return ConversionResult(True, result)
