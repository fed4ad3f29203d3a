"""
Currency value types

Exact decimal money amounts tagged with a currency code, plus the
multi-currency balance used by cash reconciliation.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterator, List, Optional

# Plain decimal notation only, e.g. "-1234.56"
AMOUNT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


class CurrencyError(ValueError):
    """Raised on invalid amounts or mixed-currency arithmetic"""
    pass


@dataclass(frozen=True)
class Cash:
    """An exact amount of a single currency"""
    currency: str
    amount: Decimal

    @classmethod
    def from_string(cls, currency: str, amount: str) -> 'Cash':
        text = amount.strip()
        if not AMOUNT_RE.fullmatch(text):
            raise CurrencyError(f"Invalid cash amount: {amount!r}")

        return cls(currency, Decimal(text))

    @classmethod
    def from_string_positive(cls, currency: str, amount: str) -> 'Cash':
        cash = cls.from_string(currency, amount)
        if not cash.is_positive():
            raise CurrencyError(f"Invalid positive cash amount: {amount!r}")
        return cash

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount > 0

    def _check_currency(self, other: 'Cash'):
        if self.currency != other.currency:
            raise CurrencyError(f"Currency mismatch: {self.currency} vs {other.currency}")

    def __add__(self, other: 'Cash') -> 'Cash':
        self._check_currency(other)
        return Cash(self.currency, self.amount + other.amount)

    def __sub__(self, other: 'Cash') -> 'Cash':
        self._check_currency(other)
        return Cash(self.currency, self.amount - other.amount)

    def __neg__(self) -> 'Cash':
        return Cash(self.currency, -self.amount)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


@dataclass(frozen=True)
class CashAssets:
    """Cash dated to the day it was moved"""
    date: date
    cash: Cash


class MultiCurrencyCashAccount:
    """
    Balance held in several currencies

    Keeps at most one Cash entry per currency code.
    """

    def __init__(self, assets: Optional[Dict[str, Decimal]] = None):
        self._assets: Dict[str, Cash] = {}
        for currency, amount in (assets or {}).items():
            self.deposit(Cash(currency, Decimal(amount)))

    def deposit(self, cash: Cash):
        current = self._assets.get(cash.currency)
        self._assets[cash.currency] = cash if current is None else current + cash

    def get(self, currency: str) -> Optional[Cash]:
        return self._assets.get(currency)

    def currencies(self) -> List[str]:
        return sorted(self._assets)

    def __iter__(self) -> Iterator[Cash]:
        return iter(self._assets.values())

    def __len__(self) -> int:
        return len(self._assets)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MultiCurrencyCashAccount):
            return NotImplemented
        return self._assets == other._assets

    def __repr__(self) -> str:
        assets = ', '.join(str(cash) for cash in self)
        return f"MultiCurrencyCashAccount({assets})"
