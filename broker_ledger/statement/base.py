"""
Base classes for broker statement parsing
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple


class StatementParseError(ValueError):
    """Base class for all statement parsing failures"""
    pass


class MalformedRecordError(StatementParseError):
    """Raised on a row that can't be classified"""
    pass


class SchemaError(StatementParseError):
    """Raised when a row doesn't fit the layout of its table"""
    pass


class MissingFieldError(SchemaError):
    """Raised when a table doesn't declare a requested field"""

    def __init__(self, table: str, field: str):
        super().__init__(f"{table!r} record doesn't have {field!r} field")
        self.table = table
        self.field = field


class WithholdingTaxError(StatementParseError):
    """Raised when withholding tax entries don't reconcile"""
    pass


class DateFormatError(StatementParseError):
    """Raised on unparseable date text"""
    pass


class PeriodFormatError(DateFormatError):
    """Raised on an invalid statement period"""
    pass


class StatementValidationError(StatementParseError):
    """Raised when a statement is missing required data"""
    pass


class RecordParseError(StatementParseError):
    """Raised when a table handler fails on a data row"""

    def __init__(self, table: str, record: Sequence[str], error: Exception):
        super().__init__(f"Failed to parse ({format_record(record)}) record: {error}")
        self.table = table
        self.record = list(record)


def format_record(values: Iterable[str]) -> str:
    return ', '.join(repr(value) for value in values)


@dataclass(frozen=True)
class Record:
    """
    Data row bound to the field names declared by its table header

    Values are offset by two columns (table name and row kind) relative
    to the declared field names.
    """
    name: str
    fields: Tuple[str, ...]
    values: Sequence[str]

    def get_value(self, field: str) -> str:
        try:
            index = self.fields.index(field) + 2
        except ValueError:
            raise MissingFieldError(self.name, field) from None

        if index >= len(self.values):
            raise MissingFieldError(self.name, field)

        return self.values[index]


class RecordParser(ABC):
    """Base class for per-table extraction logic"""

    # Accepted row kinds for data rows, None accepts any
    data_types: Optional[Tuple[str, ...]] = ("Data",)

    def accepts(self, data_type: str) -> bool:
        return self.data_types is None or data_type in self.data_types

    @abstractmethod
    def parse(self, state, record: Record):
        """Extract data from the record into the shared parser state"""
        pass
