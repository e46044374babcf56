"""Exceptions raised by the monetary domain.

Lookup misses are not errors: registry lookups resolve to the `NONE` currency instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency import Currency


class MoneyError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(MoneyError, ValueError):
    """Raised when currency definitions or locale inputs are malformed or missing."""


class CurrencyMismatchError(MoneyError, ValueError):
    """Raised when a binary operation combines `Money` values of different currencies."""

    def __init__(self, operation: str, left: Currency, right: Currency):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(f"Cannot call `{operation}` because currencies differ: {left.iso_code} and {right.iso_code}")


class FormatError(MoneyError, ValueError):
    """Raised for unparseable money text or an unrecognized format specifier."""


class ArgumentError(MoneyError, TypeError):
    """Raised when an operation receives an operand of an incompatible type."""
