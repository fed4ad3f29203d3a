"""
Broker Statement Module

Parses Interactive Brokers activity statements into a BrokerStatement:
statement period, total value, deposits, withheld taxes and tickers.
"""

from .base import (
    StatementParseError,
    MalformedRecordError,
    SchemaError,
    MissingFieldError,
    WithholdingTaxError,
    DateFormatError,
    PeriodFormatError,
    StatementValidationError,
    RecordParseError,
    Record,
)
from .dates import parse_date, parse_period
from .ib_statement_parser import IBStatementParser, parse_ib_statement, read_statement_rows
from .models import BrokerStatement, BrokerStatementBuilder
from .taxes import WithholdingTaxTracker

__all__ = [
    'StatementParseError',
    'MalformedRecordError',
    'SchemaError',
    'MissingFieldError',
    'WithholdingTaxError',
    'DateFormatError',
    'PeriodFormatError',
    'StatementValidationError',
    'RecordParseError',
    'Record',
    'parse_date',
    'parse_period',
    'IBStatementParser',
    'parse_ib_statement',
    'read_statement_rows',
    'BrokerStatement',
    'BrokerStatementBuilder',
    'WithholdingTaxTracker',
]
