from __future__ import annotations

# Currency definitions source: turns a pandas DataFrame (usually read from CSV) into
# plain `CurrencyDefinition` records consumed by `CurrencyRegistry.build`.

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import pandas as pd

from suite_money.domain.monetary.errors import ValidationError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("iso_code", "iso_number", "name")
OPTIONAL_COLUMNS = ("symbol", "minor_units")


@dataclass(frozen=True)
class CurrencyDefinition:
    """One raw currency record as supplied by a definitions source.

    Fields hold raw values; validation happens when the registry builds `Currency` objects.
    """

    iso_code: str | None
    iso_number: int | str | None
    name: str | None = None
    symbol: str | None = None
    minor_units: int | str | None = None


def definitions_from_dataframe(df: pd.DataFrame) -> Iterator[CurrencyDefinition]:
    """Yield one `CurrencyDefinition` per row of $df.

    Input DataFrame has to meet these requirements:
    - Columns: iso_code, iso_number, name. Optional: symbol, minor_units.
    - Empty cells are allowed; they are passed on as None.

    Raises:
        ValidationError: If $df is not a DataFrame or required columns are missing.
    """
    # Check: $df must be a pandas DataFrame
    if not isinstance(df, pd.DataFrame):
        raise ValidationError(f"Expected a pandas DataFrame, but received {type(df).__name__}")

    # Check: required columns present
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        missing_cols = ", ".join(sorted(missing))
        raise ValidationError(f"Currency definitions are missing required columns: {missing_cols}")

    columns = [c for c in (*REQUIRED_COLUMNS, *OPTIONAL_COLUMNS) if c in df.columns]
    for row in df[columns].itertuples(index=False):
        values = {column: _cell(value) for column, value in zip(columns, row)}
        yield CurrencyDefinition(**values)


def load_definitions_csv(path: str | Path) -> list[CurrencyDefinition]:
    """Read currency definitions from the CSV file at $path.

    All cells are read as strings so that codes like "008" keep their leading zeros until
    the registry parses them.
    """
    csv_path = Path(path)
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, encoding="utf-8")
    definitions = list(definitions_from_dataframe(df))
    logger.debug(f"Read {len(definitions)} currency definition(s) from '{csv_path}'")
    return definitions


def _cell(value):
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value
