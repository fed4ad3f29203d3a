"""
Cash assets series loading

Cash balance series are stored as CSV with date, currency and amount
columns, one row per currency per date.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from ..currency import Cash, CurrencyError, MultiCurrencyCashAccount

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['date', 'currency', 'amount']


def cash_assets_from_frame(df: pd.DataFrame) -> Dict[date, MultiCurrencyCashAccount]:
    """
    Build a date-ordered cash assets series from a DataFrame

    Args:
        df: DataFrame with date, currency and amount columns. Amounts should
            be strings or Decimals to stay exact.

    Returns:
        Dict of date -> MultiCurrencyCashAccount in ascending date order

    Raises:
        ValueError: On missing columns, invalid values or duplicate entries
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Cash assets data missing columns: {missing}")

    if df.empty:
        return {}

    df = df.copy()
    df['currency'] = df['currency'].astype(str).str.strip().str.upper()
    if (df['currency'] == '').any():
        raise ValueError("Cash assets data has rows without a currency")

    dates = pd.to_datetime(df['date'], format='%Y-%m-%d', errors='raise')
    if dates.isna().any():
        raise ValueError("Cash assets data has rows without a date")
    df['date'] = dates.dt.date

    duplicated = df[df.duplicated(subset=['date', 'currency'], keep=False)]
    if not duplicated.empty:
        first = duplicated.iloc[0]
        raise ValueError(f"Duplicate cash assets for {first['date']} / {first['currency']}")

    series: Dict[date, MultiCurrencyCashAccount] = {}

    for row in df.sort_values(['date', 'currency']).itertuples(index=False):
        try:
            cash = Cash.from_string(row.currency, str(row.amount))
        except CurrencyError:
            raise ValueError(f"Invalid cash amount for {row.date} / {row.currency}: {row.amount!r}") from None

        series.setdefault(row.date, MultiCurrencyCashAccount()).deposit(cash)

    return series


def load_cash_assets(file_path: Union[str, Path]) -> Dict[date, MultiCurrencyCashAccount]:
    """Load a cash assets series from CSV file"""
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Cash assets file not found: {file_path}")

    df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    series = cash_assets_from_frame(df)

    logger.info(f"Loaded cash assets for {len(series)} dates from {file_path.name}")
    return series
