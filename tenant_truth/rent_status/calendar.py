"""
Calendar arithmetic for rent status.

All comparisons happen on calendar days: datetimes are truncated to their
date (midnight) before use.

months_between() subtracts calendar fields only (year and month) and ignores
the day of month, so 2024-01-31 -> 2024-02-01 is one month and
2024-01-01 -> 2024-01-31 is zero. Near month boundaries this can differ by one
from elapsed-day reasoning; that is the intended billing behavior.
"""

import logging
from datetime import date, datetime

from .models import PaymentRecord

logger = logging.getLogger(__name__)


def to_day(value: date | datetime) -> date:
    """Normalize a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def months_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar months from start to end. Negative if end is earlier."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def is_malformed(record: PaymentRecord) -> bool:
    """A record whose interval ends before it starts."""
    return to_day(record.start_date) > to_day(record.end_date)


def covers(record: PaymentRecord, day: date) -> bool:
    """
    True if day falls within the record's [start_date, end_date] interval.

    Malformed intervals cover nothing.
    """
    if is_malformed(record):
        logger.debug(
            f"Ignoring malformed interval {record.start_date} > {record.end_date} for coverage"
        )
        return False
    return to_day(record.start_date) <= day <= to_day(record.end_date)
