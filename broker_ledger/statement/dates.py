"""
Date and statement period parsing

Activity statements use ISO dates in their tables, but the statement
period is written out as "October 1, 2018" or
"May 21, 2018 - September 28, 2018".
"""

from datetime import date, datetime, timedelta
from typing import Tuple

from .base import DateFormatError, PeriodFormatError

DATE_FORMAT = "%Y-%m-%d"
PERIOD_DATE_FORMAT = "%B %d, %Y"
PERIOD_SEPARATOR = " - "


def _parse(text: str, fmt: str) -> date:
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError:
        raise DateFormatError(f"Invalid date: {text!r}") from None


def parse_date(text: str) -> date:
    """Parse a table date field, e.g. 2018-06-22"""
    return _parse(text, DATE_FORMAT)


def parse_period_date(text: str) -> date:
    """Parse a date from the statement period, e.g. September 30, 2018"""
    return _parse(text, PERIOD_DATE_FORMAT)


def parse_period(period: str) -> Tuple[date, date]:
    """
    Parse statement period into a half-open [start, end) interval

    Args:
        period: Single date or two dates separated by " - "

    Returns:
        Tuple of (start, end) where end is the day after the last covered day

    Raises:
        PeriodFormatError: On wrong number of dates or inverted period
        DateFormatError: On unparseable date text
    """
    dates = period.split(PERIOD_SEPARATOR)

    if len(dates) == 1:
        start = parse_period_date(dates[0])
        return start, start + timedelta(days=1)
    elif len(dates) == 2:
        start = parse_period_date(dates[0])
        end = parse_period_date(dates[1])

        if start > end:
            raise PeriodFormatError(f"Invalid period: {start} - {end}")

        return start, end + timedelta(days=1)

    raise PeriodFormatError(f"Invalid period: {period!r}")
