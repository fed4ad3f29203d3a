"""
Interactive Brokers Activity Statement Parser

Activity statements are exported as a single CSV file holding many tables.
Every row starts with the table name and a row kind, and each table region
is led by a header row declaring its own field names:

    Statement,Header,Field Name,Field Value
    Statement,Data,Period,"May 21, 2018 - September 28, 2018"

Rows are walked once in file order and dispatched to per-table parsers
which fill the shared parser state.
"""

import csv
import logging
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..currency import Cash, CashAssets
from .base import (
    MalformedRecordError,
    MissingFieldError,
    Record,
    RecordParseError,
    RecordParser,
    SchemaError,
    StatementParseError,
    format_record,
)
from .dates import parse_date, parse_period
from .models import BrokerStatement, BrokerStatementBuilder
from .taxes import WithholdingTaxTracker

logger = logging.getLogger(__name__)

HEADER = "Header"

# Net Asset Value rows don't carry a currency, so totals are assumed to be
# reported in a single fixed currency
DEFAULT_REPORTING_CURRENCY = "USD"


@dataclass
class ParserState:
    """Mutable state owned by a single parse"""
    statement: BrokerStatementBuilder = field(default_factory=BrokerStatementBuilder)
    taxes: WithholdingTaxTracker = field(default_factory=WithholdingTaxTracker)
    reporting_currency: str = DEFAULT_REPORTING_CURRENCY

    @property
    def tickers(self) -> Dict[str, str]:
        return self.statement.tickers


class StatementInfoParser(RecordParser):
    def parse(self, state: ParserState, record: Record):
        if record.get_value("Field Name") == "Period":
            period = parse_period(record.get_value("Field Value"))
            state.statement.set_period(period)


class NetAssetValueParser(RecordParser):
    ASSET_CLASSES = ("Cash", "Stock")

    def parse(self, state: ParserState, record: Record):
        # Some statement versions have a different table layout without asset classes
        try:
            asset_class = record.get_value("Asset Class")
        except MissingFieldError:
            return

        if asset_class in self.ASSET_CLASSES:
            amount = Cash.from_string(state.reporting_currency, record.get_value("Current Total"))
            state.statement.add_total_value(amount)


class WithholdingTaxParser(RecordParser):
    def parse(self, state: ParserState, record: Record):
        currency = record.get_value("Currency")
        if currency == "Total":
            return

        tax_date = parse_date(record.get_value("Date"))
        description = record.get_value("Description")
        tax = Cash.from_string(currency, record.get_value("Amount"))

        state.taxes.add(tax_date, description, tax)


class DepositsParser(RecordParser):
    def parse(self, state: ParserState, record: Record):
        currency = record.get_value("Currency")
        if currency.startswith("Total"):
            return

        # TODO: Distinguish withdrawals from deposits once a sample statement with withdrawals is available
        deposit_date = parse_date(record.get_value("Settle Date"))
        amount = Cash.from_string_positive(currency, record.get_value("Amount"))

        state.statement.deposits.append(CashAssets(deposit_date, amount))


class FinancialInstrumentInformationParser(RecordParser):
    def parse(self, state: ParserState, record: Record):
        state.tickers[record.get_value("Symbol")] = record.get_value("Description")


class UnknownRecordParser(RecordParser):
    data_types = None

    def parse(self, state: ParserState, record: Record):
        pass


RECORD_PARSERS: Dict[str, RecordParser] = {
    "Statement": StatementInfoParser(),
    "Net Asset Value": NetAssetValueParser(),
    "Withholding Tax": WithholdingTaxParser(),
    "Deposits & Withdrawals": DepositsParser(),
    "Financial Instrument Information": FinancialInstrumentInformationParser(),
}

UNKNOWN_RECORD_PARSER = UnknownRecordParser()


def get_record_parser(name: str) -> RecordParser:
    return RECORD_PARSERS.get(name, UNKNOWN_RECORD_PARSER)


def parse_header(record: Sequence[str]) -> Tuple[str, Tuple[str, ...]]:
    """Extract table name and declared field names from a header row"""
    name = record[0]
    fields = tuple(record[2:])
    logger.debug(f"Header: {name}: {format_record(fields)}.")
    return name, fields


def _check_record(record: Sequence[str]):
    if len(record) < 2:
        raise MalformedRecordError(f"Invalid record: {format_record(record)}")


# Dispatch loop states

@dataclass(frozen=True)
class _Scanning:
    """Outside of any table"""


@dataclass(frozen=True)
class _RecordSeen:
    """A row has been read but not classified yet"""
    record: List[str]


@dataclass(frozen=True)
class _InsideTable:
    """Inside a table region led by the header row"""
    header: List[str]


_State = Union[_Scanning, _RecordSeen, _InsideTable]


class IBStatementParser:
    """
    Parser for Interactive Brokers activity statements

    Recognizes the statement info, net asset value, withholding tax,
    deposits and financial instrument tables. Any other table is accepted
    and ignored.
    """

    def __init__(self, reporting_currency: str = DEFAULT_REPORTING_CURRENCY, encoding: str = "utf-8-sig"):
        self.reporting_currency = reporting_currency
        self.encoding = encoding

    def parse(self, file_path: Union[str, Path]) -> BrokerStatement:
        """
        Parse statement file

        Raises:
            FileNotFoundError: If statement file doesn't exist
            StatementParseError: On the first error found in the statement
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Statement file not found: {file_path}")

        logger.info(f"Parsing IB statement: {file_path.name}")
        with closing(read_statement_rows(file_path, self.encoding)) as rows:
            return self.parse_rows(rows)

    def parse_rows(self, rows: Iterable[List[str]]) -> BrokerStatement:
        """Parse already decoded statement rows"""
        state = ParserState(reporting_currency=self.reporting_currency)
        records = iter(rows)

        step: Optional[_State] = _Scanning()
        while step is not None:
            step = self._next_state(step, records, state)

        statement = state.statement.build(withholding_taxes=state.taxes.pending)

        logger.info(f"Parsed statement for {statement.period[0]} - {statement.period[1]}: "
                    f"{len(statement.deposits)} deposits, {len(statement.withholding_taxes)} withholding taxes, "
                    f"{len(statement.tickers)} tickers")
        return statement

    def _next_state(self, step: _State, records: Iterator[List[str]], state: ParserState) -> Optional[_State]:
        if isinstance(step, _Scanning):
            record = next(records, None)
            return None if record is None else _RecordSeen(record)

        if isinstance(step, _RecordSeen):
            return self._classify(step.record)

        return self._parse_table(step.header, records, state)

    def _classify(self, record: List[str]) -> _State:
        _check_record(record)

        if record[1] == HEADER:
            return _InsideTable(record)
        elif record[1] == "":
            logger.debug(f"Headerless record: {format_record(record)}.")
            return _Scanning()

        raise MalformedRecordError(f"Invalid record: {format_record(record)}")

    def _parse_table(self, header: List[str], records: Iterator[List[str]],
                     state: ParserState) -> Optional[_State]:
        name, fields = parse_header(header)
        parser = get_record_parser(name)

        for record in records:
            _check_record(record)

            if record[0] != name:
                return _RecordSeen(record)
            elif record[1] == HEADER:
                return _InsideTable(record)

            if not parser.accepts(record[1]):
                raise SchemaError(f"Invalid data record type: {format_record(record)}")

            try:
                parser.parse(state, Record(name, fields, record))
            except ValueError as e:
                raise RecordParseError(name, record, e) from e

        return None


def read_statement_rows(file_path: Union[str, Path], encoding: str = "utf-8-sig") -> Iterator[List[str]]:
    """Read statement rows, each row may have its own number of fields. Blank lines are skipped."""
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        reader = csv.reader(f)
        try:
            for row in reader:
                if row:
                    yield row
        except csv.Error as e:
            raise StatementParseError(f"Invalid CSV at line {reader.line_num}: {e}") from e


# Convenience functions
def parse_ib_statement(file_path: Union[str, Path],
                       reporting_currency: str = DEFAULT_REPORTING_CURRENCY) -> BrokerStatement:
    """
    Convenience function to parse IB activity statement

    Args:
        file_path: Path to statement file
        reporting_currency: Currency of the net asset value table

    Returns:
        Parsed BrokerStatement
    """
    parser = IBStatementParser(reporting_currency=reporting_currency)
    return parser.parse(file_path)
