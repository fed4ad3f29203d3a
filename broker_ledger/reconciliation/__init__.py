"""
Reconciliation Module

Compares computed cash balances against historical broker cash reports.
"""

from .cash_comparator import CashAssetsComparator, HistoricalCursor, reconcile_cash_assets
from .historical import cash_assets_from_frame, load_cash_assets

__all__ = [
    'CashAssetsComparator',
    'HistoricalCursor',
    'reconcile_cash_assets',
    'cash_assets_from_frame',
    'load_cash_assets',
]
