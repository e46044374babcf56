from __future__ import annotations

import pytest

from suite_money.formatting.locale_provider import BabelLocaleProvider, set_locale_provider


@pytest.fixture(autouse=True)
def en_us_locale_provider():
    """Pin the active locale to en_US so formatting results don't depend on the machine."""
    provider = BabelLocaleProvider("en_US")
    previous = set_locale_provider(provider)
    yield provider
    set_locale_provider(previous)
