"""
Broker statement data model
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ..currency import Cash, CashAssets
from .base import StatementValidationError
from .taxes import TaxId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrokerStatement:
    """Parsed broker statement"""
    period: Tuple[date, date]
    total_value: Optional[Cash]
    deposits: Tuple[CashAssets, ...]
    tickers: Dict[str, str]
    withholding_taxes: Dict[TaxId, Cash] = field(default_factory=dict)

    def deposits_frame(self) -> pd.DataFrame:
        """Deposits as a DataFrame with date, currency and amount columns"""
        return pd.DataFrame(
            [{'date': deposit.date, 'currency': deposit.cash.currency, 'amount': deposit.cash.amount}
             for deposit in self.deposits],
            columns=['date', 'currency', 'amount'])

    def withholding_taxes_frame(self) -> pd.DataFrame:
        """Withheld taxes as a DataFrame sorted by date and description"""
        rows = [
            {'date': tax_date, 'description': description,
             'currency': tax.currency, 'amount': tax.amount}
            for (tax_date, description), tax in sorted(self.withholding_taxes.items())
        ]
        return pd.DataFrame(rows, columns=['date', 'description', 'currency', 'amount'])

    def summary(self) -> Dict[str, Any]:
        start, end = self.period

        deposited: Dict[str, Cash] = {}
        for deposit in self.deposits:
            current = deposited.get(deposit.cash.currency)
            deposited[deposit.cash.currency] = deposit.cash if current is None else current + deposit.cash

        return {
            'period_start': start.isoformat(),
            'period_end': end.isoformat(),
            'total_value': str(self.total_value) if self.total_value is not None else None,
            'deposits': len(self.deposits),
            'deposits_by_currency': {currency: str(cash.amount) for currency, cash in sorted(deposited.items())},
            'withholding_taxes': len(self.withholding_taxes),
            'tickers': len(self.tickers),
        }


class BrokerStatementBuilder:
    """Collects statement data while the statement file is being parsed"""

    def __init__(self):
        self.period: Optional[Tuple[date, date]] = None
        self.total_value: Optional[Cash] = None
        self.deposits: List[CashAssets] = []
        self.tickers: Dict[str, str] = {}

    def set_period(self, period: Tuple[date, date]):
        if self.period is not None:
            raise StatementValidationError("Duplicate statement period")
        self.period = period

    def add_total_value(self, amount: Cash):
        self.total_value = amount if self.total_value is None else self.total_value + amount

    def build(self, withholding_taxes: Optional[Dict[TaxId, Cash]] = None) -> BrokerStatement:
        if self.period is None:
            raise StatementValidationError("Invalid statement: statement period is missing")

        if self.total_value is None:
            logger.warning("Statement has no total value")

        return BrokerStatement(
            period=self.period,
            total_value=self.total_value,
            deposits=tuple(self.deposits),
            tickers=dict(self.tickers),
            withholding_taxes=dict(withholding_taxes or {}),
        )
