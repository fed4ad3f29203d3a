"""
Tests for cash assets series loading
"""

import pytest
import pandas as pd
from datetime import date

from conftest import cash_account

from broker_ledger.reconciliation.cash_comparator import CashAssetsComparator
from broker_ledger.reconciliation.historical import cash_assets_from_frame, load_cash_assets


class TestCashAssetsLoading:
    """Test cases for historical cash assets loading"""

    def test_load_fixture(self, fixtures_dir):
        series = load_cash_assets(fixtures_dir / "historical_cash_assets.csv")

        assert list(series) == [date(2018, 5, 22), date(2018, 7, 2), date(2018, 9, 28)]
        assert series[date(2018, 5, 22)] == cash_account(USD='5000')
        assert series[date(2018, 7, 2)] == cash_account(USD='9000.50', EUR='0')
        assert series[date(2018, 9, 28)] == cash_account(USD='1500.25')

    def test_amounts_stay_exact(self):
        df = pd.DataFrame({'date': ['2018-01-01'], 'currency': ['usd'], 'amount': ['0.10']})

        series = cash_assets_from_frame(df)

        assert str(series[date(2018, 1, 1)].get('USD').amount) == '0.10'

    def test_series_is_date_ordered(self):
        df = pd.DataFrame({
            'date': ['2018-03-01', '2018-01-01', '2018-02-01'],
            'currency': ['USD', 'USD', 'USD'],
            'amount': ['3', '1', '2'],
        })

        assert list(cash_assets_from_frame(df)) == [date(2018, 1, 1), date(2018, 2, 1), date(2018, 3, 1)]

    def test_empty_frame(self):
        assert cash_assets_from_frame(pd.DataFrame(columns=['date', 'currency', 'amount'])) == {}

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="missing columns"):
            cash_assets_from_frame(pd.DataFrame({'date': ['2018-01-01'], 'amount': ['1']}))

    def test_duplicate_entries(self):
        df = pd.DataFrame({
            'date': ['2018-01-01', '2018-01-01'],
            'currency': ['USD', 'USD'],
            'amount': ['1', '2'],
        })

        with pytest.raises(ValueError, match="Duplicate"):
            cash_assets_from_frame(df)

    def test_invalid_amount(self):
        df = pd.DataFrame({'date': ['2018-01-01'], 'currency': ['USD'], 'amount': ['lots']})

        with pytest.raises(ValueError, match="Invalid cash amount"):
            cash_assets_from_frame(df)

    def test_invalid_date(self):
        df = pd.DataFrame({'date': ['01/02/2018'], 'currency': ['USD'], 'amount': ['1']})

        with pytest.raises(ValueError):
            cash_assets_from_frame(df)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_cash_assets(tmp_path / "missing.csv")

    def test_blank_date(self):
        df = pd.DataFrame({'date': ['', '2018-01-01'], 'currency': ['USD', 'USD'], 'amount': ['1', '2']})

        with pytest.raises(ValueError):
            cash_assets_from_frame(df)

    def test_blank_currency(self):
        df = pd.DataFrame({'date': ['2018-01-01'], 'currency': [' '], 'amount': ['1']})

        with pytest.raises(ValueError, match="without a currency"):
            cash_assets_from_frame(df)

    @pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity", "1e3", ""])
    def test_non_numeric_amount(self, amount):
        df = pd.DataFrame({'date': ['2018-01-01', '2018-01-02'], 'currency': ['USD', 'USD'], 'amount': [amount, '1']})

        with pytest.raises(ValueError, match="Invalid cash amount"):
            cash_assets_from_frame(df)

    def test_loaded_series_feeds_comparator(self, tmp_path):
        path = tmp_path / "history.csv"
        path.write_text("date,currency,amount\n2018-01-01,USD,1\n2018-01-05,USD,2\n")

        comparator = CashAssetsComparator(load_cash_assets(path))

        assert comparator.compare(date(2018, 1, 2), cash_account(USD='1')) is False
        assert comparator.discrepancies == 0
