"""
Broker Ledger - Brokerage Statement Parsing and Cash Reconciliation

Parses Interactive Brokers activity statements and reconciles computed
cash balances against the broker's historical cash reports.
"""

__version__ = "0.1.0"
__author__ = "Broker Ledger Team"
