__version__ = "0.1.0"

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, get_default_registry
from suite_money.domain.monetary.errors import ArgumentError, CurrencyMismatchError, FormatError, MoneyError, ValidationError
from suite_money.domain.monetary.money import Money

__all__ = [
    "ArgumentError",
    "Currency",
    "CurrencyMismatchError",
    "CurrencyRegistry",
    "FormatError",
    "Money",
    "MoneyError",
    "ValidationError",
    "get_default_registry",
]
