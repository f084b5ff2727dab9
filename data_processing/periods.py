# clinic_reporting_root/data_processing/periods.py
# REPORTING CORE - PERIOD RESOLUTION & RANGE MEMBERSHIP

"""
Date-range primitives shared by every range-aware report.

A ``DateRange`` is inclusive on both ends at day granularity. Membership
compares calendar dates only, so a record stamped 23:59 on the last day of
the range is still in range.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Mapping, Optional, Union

import pandas as pd

from config import settings
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

Instant = Union[datetime, date, str, pd.Timestamp]

# Calendar periods resolved through pandas Period arithmetic. 'week' is
# anchored at runtime from the configured week start day.
PERIOD_FREQUENCIES = {
    'month': 'M',
    'quarter': 'Q-DEC',
    'year': 'Y-DEC',
}
SUPPORTED_PERIODS = ('week',) + tuple(PERIOD_FREQUENCIES)

_WEEKDAY_ANCHORS = ('MON', 'TUE', 'WED', 'THU', 'FRI', 'SAT', 'SUN')


def _as_datetime(value: Instant) -> datetime:
    """Coerces a date, datetime, Timestamp or ISO string to a datetime."""
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            raise InvalidArgumentError("Range bound cannot be NaT.")
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return pd.Timestamp(value).to_pydatetime()
        except ValueError as e:
            raise InvalidArgumentError(f"Unparseable range bound {value!r}: {e}") from e
    raise InvalidArgumentError(f"Unsupported range bound type: {type(value).__name__}")


@dataclass(frozen=True)
class DateRange:
    """An inclusive [start, end] range of instants."""

    start: datetime
    end: datetime

    def __post_init__(self):
        start, end = _as_datetime(self.start), _as_datetime(self.end)
        try:
            is_inverted = start > end
        except TypeError as e:
            raise InvalidArgumentError(f"Cannot mix naive and timezone-aware range bounds: {e}") from e
        if is_inverted:
            logger.error(f"Rejected malformed date range: start {start} is after end {end}.")
            raise InvalidArgumentError(f"Range start {start.isoformat()} is after end {end.isoformat()}.")
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    @property
    def days(self) -> int:
        """Inclusive number of calendar days covered by the range."""
        return (self.end_date - self.start_date).days + 1

    def contains(self, value: Instant) -> bool:
        """Applies the range membership rule to a single instant."""
        return self.start_date <= _as_datetime(value).date() <= self.end_date

    @classmethod
    def coerce(cls, value: Any) -> 'DateRange':
        """Accepts a DateRange, a (start, end) pair or a {'start', 'end'} mapping."""
        if isinstance(value, cls):
            return value
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(value[0], value[1])
        if isinstance(value, Mapping) and 'start' in value and 'end' in value:
            return cls(value['start'], value['end'])
        logger.error(f"Rejected date range argument of type {type(value).__name__}.")
        raise InvalidArgumentError(f"Expected a DateRange, (start, end) pair or mapping, got {value!r}.")


def filter_by_range(df: pd.DataFrame, date_range: DateRange, date_col: str = 'date') -> pd.DataFrame:
    """
    Restricts a DataFrame to rows whose calendar date falls inside the range.

    Args:
        df (pd.DataFrame): Frame with a datetime64 column `date_col`.
        date_range (DateRange): The inclusive range to keep.
        date_col (str): Name of the date column.

    Returns:
        A new DataFrame holding only the in-range rows, in input order.
    """
    if df.empty:
        return df.copy()
    mask = df[date_col].dt.date.between(date_range.start_date, date_range.end_date)
    return df.loc[mask].copy()


def _week_frequency(week_start: int) -> str:
    if not isinstance(week_start, int) or not 0 <= week_start <= 6:
        raise InvalidArgumentError(f"week_start must be an integer 0-6, got {week_start!r}.")
    # A pandas weekly period is named after the weekday it ends on.
    return f"W-{_WEEKDAY_ANCHORS[(week_start - 1) % 7]}"


def calculate_date_range(period: str, reference: Instant, week_start: Optional[int] = None) -> DateRange:
    """
    Resolves a named period to the concrete range containing `reference`.

    Args:
        period (str): One of 'week', 'month', 'quarter' or 'year'.
        reference (Instant): Any instant inside the wanted period. Callers that
            want the current period pass the current instant explicitly.
        week_start (int, optional): First weekday of a week (0=Monday ... 6=Sunday).
            Defaults to settings.ANALYTICS.week_start_day.

    Returns:
        A DateRange from 00:00 of the first day to 23:59:59.999999 of the last
        day, in the reference's timezone when it carries one.
    """
    if period == 'week':
        freq = _week_frequency(settings.ANALYTICS.week_start_day if week_start is None else week_start)
    elif period in PERIOD_FREQUENCIES:
        freq = PERIOD_FREQUENCIES[period]
    else:
        logger.error(f"Rejected unsupported period literal {period!r}.")
        raise InvalidArgumentError(f"Unsupported period: {period!r}. Expected one of {SUPPORTED_PERIODS}.")

    ref = _as_datetime(reference)
    bounds = pd.Period(pd.Timestamp(ref.date()), freq=freq)
    start = datetime.combine(bounds.start_time.date(), time.min, tzinfo=ref.tzinfo)
    end = datetime.combine(bounds.end_time.date(), time.max, tzinfo=ref.tzinfo)
    logger.debug(f"Resolved '{period}' for {ref.date()} to {start.date()}..{end.date()}.")
    return DateRange(start, end)


def previous_range(date_range: DateRange) -> DateRange:
    """Returns the same-length window ending the day before `date_range` starts."""
    date_range = DateRange.coerce(date_range)
    prev_end_date = date_range.start_date - timedelta(days=1)
    prev_start_date = prev_end_date - timedelta(days=date_range.days - 1)
    tz = date_range.start.tzinfo
    return DateRange(
        datetime.combine(prev_start_date, time.min, tzinfo=tz),
        datetime.combine(prev_end_date, time.max, tzinfo=tz)
    )


def previous_period_range(period: str, reference: Instant, week_start: Optional[int] = None) -> DateRange:
    """Resolves the calendar period immediately preceding the one containing `reference`."""
    current = calculate_date_range(period, reference, week_start)
    day_before = current.start - timedelta(days=1)
    return calculate_date_range(period, day_before, week_start)
