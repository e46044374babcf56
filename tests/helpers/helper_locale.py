from __future__ import annotations

import dataclasses

from suite_money.formatting.locale_provider import BabelLocaleProvider, LocaleLike, NumberFormatRules


class FixedSymbolPositionProvider(BabelLocaleProvider):
    """Babel provider that reports a fixed symbol-position code for every locale."""

    def __init__(self, symbol_position: int, default_locale: LocaleLike = "en_US"):
        super().__init__(default_locale)
        self._symbol_position = symbol_position

    def number_format_rules(self, locale: LocaleLike | None) -> NumberFormatRules:
        rules = super().number_format_rules(locale)
        return dataclasses.replace(rules, symbol_position=self._symbol_position)


def create_provider(default_locale: LocaleLike = "en_US") -> BabelLocaleProvider:
    return BabelLocaleProvider(default_locale)
