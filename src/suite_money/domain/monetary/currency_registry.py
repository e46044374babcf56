from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Iterable, Iterator

from bidict import DuplicationError, bidict

from suite_money.config import load_settings
from suite_money.domain.monetary.currency import NONE, Currency
from suite_money.domain.monetary.currency_definitions import CurrencyDefinition, load_definitions_csv
from suite_money.domain.monetary.errors import ValidationError
from suite_money.formatting.locale_provider import LocaleLike, LocaleProvider, get_locale_provider, is_invariant_locale

logger = logging.getLogger(__name__)

DefinitionsSource = Callable[[], Iterable[CurrencyDefinition]]


class CurrencyRegistry:
    """Immutable set of currencies, built once and looked up by code, number, region or locale.

    Lookups never raise for a missing currency; they return the sentinel `NONE` instead.
    The set is built on first access. Concurrent first accesses trigger exactly one build;
    afterwards the cached set is shared by reference and never mutated.

    Args:
        source: Zero-argument callable returning the currency definition records.
        locale_provider: Provider used to map locales and regions to currency codes. When None,
            the active provider is used at lookup time.
    """

    def __init__(self, source: DefinitionsSource, locale_provider: LocaleProvider | None = None):
        if not callable(source):
            raise TypeError(f"$source must be callable, but provided value is: {source!r}")

        self._source = source
        self._locale_provider = locale_provider
        self._build_lock = Lock()

        # Populated once by `build`; `_currencies` is assigned last and doubles as the "built" flag
        self._currencies: frozenset[Currency] | None = None
        self._by_code: dict[str, Currency] = {}
        self._numbers_by_code: bidict[str, int] = bidict()

    # region Build

    def build(self) -> frozenset[Currency]:
        """Build the currency set from the definitions source, at most once.

        Returns:
            frozenset[Currency]: All currencies, always including `NONE`.

        Raises:
            ValidationError: If a definition is malformed, or an ISO code / number is reused
                for a different currency.
        """
        if self._currencies is not None:
            return self._currencies

        with self._build_lock:
            if self._currencies is None:
                self._build_locked()
        return self._currencies

    @property
    def is_built(self) -> bool:
        return self._currencies is not None

    def _build_locked(self) -> None:
        by_code: dict[str, Currency] = {NONE.iso_code: NONE}
        numbers_by_code: bidict[str, int] = bidict({NONE.iso_code: NONE.iso_number})

        for index, definition in enumerate(self._source()):
            currency = currency_from_definition(definition, index)

            # Exact duplicates collapse into the first record
            if numbers_by_code.get(currency.iso_code) == currency.iso_number:
                logger.debug(f"Skipped duplicate currency definition #{index} for {currency.iso_code} ({currency.iso_number})")
                continue

            try:
                numbers_by_code.put(currency.iso_code, currency.iso_number)
            except DuplicationError as e:
                raise ValidationError(
                    f"Currency definition #{index} ({currency.iso_code}, {currency.iso_number}) reuses an ISO code or number already registered for a different currency"
                ) from e
            by_code[currency.iso_code] = currency

        self._by_code = by_code
        self._numbers_by_code = numbers_by_code
        self._currencies = frozenset(by_code.values())
        logger.info(f"Built currency registry with {len(self._currencies)} currency(ies)")

    # endregion

    # region Lookups

    @property
    def currencies(self) -> frozenset[Currency]:
        return self.build()

    def by_code(self, iso_code: str) -> Currency:
        """Return the currency with $iso_code (case-insensitive), or `NONE`."""
        self.build()
        if not isinstance(iso_code, str):
            return NONE
        return self._by_code.get(iso_code.strip().upper(), NONE)

    def by_number(self, iso_number: int) -> Currency:
        """Return the currency with $iso_number, or `NONE`."""
        self.build()
        if not isinstance(iso_number, int) or isinstance(iso_number, bool):
            return NONE
        iso_code = self._numbers_by_code.inverse.get(iso_number)
        if iso_code is None:
            return NONE
        return self._by_code[iso_code]

    def for_region(self, region: str) -> Currency:
        """Return the currency used in $region (e.g. "US"), or `NONE`."""
        if not isinstance(region, str) or not region.strip():
            return NONE
        iso_code = self._provider().currency_code_for_region(region)
        if iso_code is None:
            logger.debug(f"Region '{region}' has no currency; using {NONE.iso_code}")
            return NONE
        return self.by_code(iso_code)

    def for_locale(self, locale: LocaleLike) -> Currency:
        """Return the currency of the region of $locale.

        The invariant (root) locale maps to `NONE`.

        Raises:
            ValidationError: If $locale is neutral (has no region) or unknown.
        """
        if is_invariant_locale(locale):
            return NONE

        provider = self._provider()
        resolved = provider.resolve(locale)
        if is_invariant_locale(resolved):
            return NONE

        region = provider.region_for(resolved)
        if not region:
            raise ValidationError(f"Cannot get currency from neutral locale '{resolved}'")
        return self.for_region(region)

    def current(self) -> Currency:
        """Return the currency of the active locale."""
        return self.for_locale(self._provider().current_locale())

    # endregion

    def _provider(self) -> LocaleProvider:
        return self._locale_provider or get_locale_provider()

    def __len__(self) -> int:
        return len(self.build())

    def __iter__(self) -> Iterator[Currency]:
        return iter(self.build())

    def __contains__(self, currency: object) -> bool:
        return currency in self.build()

    def __repr__(self) -> str:
        state = f"{len(self._currencies)} currency(ies)" if self._currencies is not None else "not built"
        return f"{self.__class__.__name__}({state})"


def currency_from_definition(definition: CurrencyDefinition, index: int = 0) -> Currency:
    """Validate one definition record and turn it into a `Currency`.

    Missing name falls back to the ISO code, missing symbol to "¤", missing minor units to 0.

    Raises:
        ValidationError: If the ISO code is blank, the ISO number is missing or not a
            non-negative integer, or minor units is not a non-negative integer.
    """
    iso_code = definition.iso_code
    if not isinstance(iso_code, str) or not iso_code.strip():
        raise ValidationError(f"Currency definition #{index} has no $iso_code")

    iso_number = _parse_int(definition.iso_number, "iso_number", index)
    if iso_number is None:
        raise ValidationError(f"Currency definition #{index} ({iso_code}) has no $iso_number")

    minor_units = _parse_int(definition.minor_units, "minor_units", index)

    try:
        return Currency(
            iso_code=iso_code,
            iso_number=iso_number,
            name=definition.name or "",
            symbol=definition.symbol or "",
            minor_units=minor_units if minor_units is not None else 0,
        )
    except ValueError as e:
        raise ValidationError(f"Currency definition #{index} ({iso_code}) is invalid: {e}") from e


def _parse_int(value: int | str | None, field: str, index: int) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Currency definition #{index} has invalid ${field}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return int(value.strip())
        except ValueError as e:
            raise ValidationError(f"Currency definition #{index} has invalid ${field}: {value!r}") from e
    raise ValidationError(f"Currency definition #{index} has invalid ${field}: {value!r}")


# region Default registry


def _load_default_definitions() -> list[CurrencyDefinition]:
    return load_definitions_csv(load_settings().currencies_file)


_default_registry = CurrencyRegistry(_load_default_definitions)


def get_default_registry() -> CurrencyRegistry:
    """Return the process-wide registry backed by the configured definitions file."""
    return _default_registry


def build() -> frozenset[Currency]:
    return _default_registry.build()


def by_code(iso_code: str) -> Currency:
    return _default_registry.by_code(iso_code)


def by_number(iso_number: int) -> Currency:
    return _default_registry.by_number(iso_number)


def for_region(region: str) -> Currency:
    return _default_registry.for_region(region)


def for_locale(locale: LocaleLike) -> Currency:
    return _default_registry.for_locale(locale)


def current_currency() -> Currency:
    return _default_registry.current()


# endregion
