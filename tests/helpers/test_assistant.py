from __future__ import annotations

from tests.helpers import helper_currency, helper_locale


class TestAssistant:
    """Central access point for ready-made domain objects in tests.

    Attributes:
        currency: Module with helper functions for Currency, definition and registry fixtures.
        locale: Module with helper functions for locale providers.

    All objects are created fresh by calling helper functions, so there is no shared mutable
    state between tests.
    """

    __test__ = False

    def __init__(self) -> None:
        self.currency = helper_currency
        self.locale = helper_locale


# Singleton entry point for tests. It only exposes factory namespaces, so it is safe to share.
TEST_ASSISTANT = TestAssistant()
