"""Runtime settings read from the environment (and a `.env` file found from the working directory up, if present)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

LOCALE_ENV_VAR = "SUITE_MONEY_LOCALE"
CURRENCIES_FILE_ENV_VAR = "SUITE_MONEY_CURRENCIES_FILE"

DEFAULT_LOCALE = "en_US"
DEFAULT_CURRENCIES_FILE = Path(__file__).parent / "data" / "currencies.csv"


@dataclass(frozen=True)
class Settings:
    """Package settings.

    Attributes:
        default_locale (str): Locale used when callers don't pass one (e.g. "en_US").
        currencies_file (Path): CSV file holding the currency definitions.
    """

    default_locale: str = DEFAULT_LOCALE
    currencies_file: Path = DEFAULT_CURRENCIES_FILE


def load_settings() -> Settings:
    """Build `Settings` from environment variables.

    Variables:
    - $SUITE_MONEY_LOCALE: default locale identifier.
    - $SUITE_MONEY_CURRENCIES_FILE: path to a currency definitions CSV file.
    """
    # Search for `.env` from the working directory upward
    load_dotenv(find_dotenv(usecwd=True))

    default_locale = os.environ.get(LOCALE_ENV_VAR, "").strip() or DEFAULT_LOCALE
    currencies_file_str = os.environ.get(CURRENCIES_FILE_ENV_VAR, "").strip()
    currencies_file = Path(currencies_file_str) if currencies_file_str else DEFAULT_CURRENCIES_FILE

    logger.debug(f"Loaded settings: default_locale='{default_locale}', currencies_file='{currencies_file}'")
    return Settings(default_locale=default_locale, currencies_file=currencies_file)
