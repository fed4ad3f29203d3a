"""
Cash Assets Comparator

Reconciles an independently computed multi-currency cash balance series
against the historical cash balances reported by the broker. Discrepancies
are only logged, the comparison never fails.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Mapping, Optional, Protocol, Set, Tuple

from ..currency import Cash, MultiCurrencyCashAccount

logger = logging.getLogger(__name__)

HistoricalEntry = Tuple[date, MultiCurrencyCashAccount]


class LeveledLogger(Protocol):
    """Logging interface used for discrepancy reports"""

    def info(self, msg: str, *args, **kwargs): ...

    def warning(self, msg: str, *args, **kwargs): ...


class HistoricalCursor:
    """Forward-only cursor over a date-ordered historical cash series"""

    def __init__(self, historical: Mapping[date, MultiCurrencyCashAccount]):
        self._entries: List[HistoricalEntry] = sorted(historical.items(), key=lambda item: item[0])
        self._position = 0

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._entries)

    @property
    def remaining(self) -> int:
        return len(self._entries) - self._position

    def peek(self) -> Optional[HistoricalEntry]:
        return None if self.exhausted else self._entries[self._position]

    def advance_before(self, query_date: date) -> Optional[HistoricalEntry]:
        """
        Consume all entries dated strictly before the query date

        Returns:
            The last consumed entry or None if no entry was consumed
        """
        reached = None

        while not self.exhausted and self._entries[self._position][0] < query_date:
            if reached is not None:
                logger.debug(f"Skipping historical cash assets for {reached[0]}")
            reached = self._entries[self._position]
            self._position += 1

        return reached


class CashAssetsComparator:
    """
    Online ascending merge of computed checkpoints against historical data

    compare() must be called with non-decreasing dates, the historical
    cursor is never rewound.
    """

    def __init__(self, historical: Mapping[date, MultiCurrencyCashAccount],
                 logger: Optional[LeveledLogger] = None):
        self.cursor = HistoricalCursor(historical)
        self.logger = logger or logging.getLogger(__name__)
        self.currencies: Set[str] = set()
        self.discrepancies = 0

    def compare(self, query_date: date, computed: MultiCurrencyCashAccount) -> bool:
        """
        Compare computed cash assets against the latest historical entry before the date

        Returns:
            True if the historical series is exhausted
        """
        reached = self.cursor.advance_before(query_date)
        if reached is None:
            return self.cursor.exhausted

        actual_date, actual = reached

        self.currencies.update(actual.currencies())
        self.currencies.update(computed.currencies())

        # No further corrections are expected after the last historical entry
        log = self.logger.info if not self.cursor.exhausted else self.logger.warning
        reported = False

        for currency in sorted(self.currencies):
            zero = Cash(currency, Decimal(0))
            computed_amount = computed.get(currency) or zero
            actual_amount = actual.get(currency) or zero

            if computed_amount == actual_amount:
                continue

            if not reported:
                log(f"Calculation error for {actual_date.isoformat()}:")
                reported = True

            self.discrepancies += 1
            log(f"* {computed_amount} vs {actual_amount} ({computed_amount - actual_amount})")

        return self.cursor.exhausted


def reconcile_cash_assets(computed: Mapping[date, MultiCurrencyCashAccount],
                          historical: Mapping[date, MultiCurrencyCashAccount],
                          logger: Optional[LeveledLogger] = None) -> CashAssetsComparator:
    """
    Convenience function to run computed checkpoints through the comparator

    Checkpoints are issued in ascending date order until the historical
    series is exhausted.

    Returns:
        The comparator with its final state
    """
    comparator = CashAssetsComparator(historical, logger=logger)

    for checkpoint_date in sorted(computed):
        if comparator.compare(checkpoint_date, computed[checkpoint_date]):
            break

    return comparator
