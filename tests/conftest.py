"""
Pytest configuration and shared fixtures for Broker Ledger tests
"""

import csv
import io
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from broker_ledger.currency import MultiCurrencyCashAccount

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def rows_from_text(text: str):
    """Split statement CSV text into rows the way the statement reader does"""
    return [row for row in csv.reader(io.StringIO(text.strip())) if row]


def cash_account(**amounts) -> MultiCurrencyCashAccount:
    """Build a cash account from currency keyword arguments, e.g. USD='10.5'"""
    return MultiCurrencyCashAccount({currency: Decimal(amount) for currency, amount in amounts.items()})


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def sample_statement_path():
    """Sample IB activity statement with all recognized tables"""
    return FIXTURES_DIR / "sample_ib_statement.csv"


@pytest.fixture
def historical_cash_assets():
    """Historical cash assets for three reporting dates"""
    return {
        date(2018, 1, 10): cash_account(USD='100'),
        date(2018, 2, 10): cash_account(USD='150', EUR='20'),
        date(2018, 3, 10): cash_account(USD='175.50', EUR='20'),
    }


class RecordingLogger:
    """Leveled logger keeping messages in memory"""

    def __init__(self):
        self.messages = []

    def info(self, msg, *args, **kwargs):
        self.messages.append(('info', msg % args if args else msg))

    def warning(self, msg, *args, **kwargs):
        self.messages.append(('warning', msg % args if args else msg))

    def levels(self):
        return [level for level, _ in self.messages]


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create temporary config directory for testing"""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir
