"""
Period calculations for admin analytics.

Resolves a named range ('7days', '30days', '90days', '12months') into the
current window and the immediately preceding window of identical length,
plus the calendar helpers used by the monthly series and the stats report.

All windows are half-open: ``start <= ts < end``.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..utils.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)

RANGE_DAYS = {
    '7days': 7,
    '30days': 30,
    '90days': 90,
}
YEAR_RANGE = '12months'
DEFAULT_RANGE = YEAR_RANGE
VALID_RANGES = ('7days', '30days', '90days', '12months')


@dataclass(frozen=True)
class Window:
    """Half-open time interval ``[start, end)``."""
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts < self.end

    def to_dict(self) -> dict:
        return {'start': self.start.isoformat(), 'end': self.end.isoformat()}


@dataclass(frozen=True)
class Period:
    """A resolved range: current window and the equal-length window before it."""
    range_key: str
    current: Window
    previous: Window


def normalize_range(token: Optional[str], strict: bool = False) -> str:
    """
    Map a user-supplied range token onto a known range.

    A missing token always means DEFAULT_RANGE. Unknown tokens fall back to
    DEFAULT_RANGE unless ``strict`` is set, in which case InvalidRangeError
    is raised.
    """
    if not token:
        return DEFAULT_RANGE
    if token in VALID_RANGES:
        return token
    if strict:
        raise InvalidRangeError(token, VALID_RANGES)
    logger.debug(f"Unknown analytics range '{token}', using {DEFAULT_RANGE}")
    return DEFAULT_RANGE


def subtract_year(dt: datetime) -> datetime:
    """Same instant one calendar year earlier (Feb 29 maps to Feb 28)."""
    try:
        return dt.replace(year=dt.year - 1)
    except ValueError:
        return dt.replace(year=dt.year - 1, day=28)


def resolve_period(token: Optional[str], now: datetime = None, strict: bool = False) -> Period:
    """
    Resolve a range token into current and previous windows.

    Args:
        token: Range token; unknown values follow normalize_range()
        now: Reference instant (default: utcnow)
        strict: Reject unknown tokens instead of defaulting

    Returns:
        Period whose previous window ends where the current one starts
    """
    now = now or datetime.utcnow()
    range_key = normalize_range(token, strict=strict)

    if range_key == YEAR_RANGE:
        current_start = subtract_year(now)
    else:
        current_start = now - timedelta(days=RANGE_DAYS[range_key])

    current = Window(current_start, now)
    previous = Window(current_start - current.duration, current_start)
    return Period(range_key, current, previous)


def trailing_days(now: datetime, days: int) -> Window:
    """``[now - days, now)``."""
    return Window(now - timedelta(days=days), now)


# ==================== CALENDAR HELPERS ====================

def month_start(dt: datetime) -> datetime:
    """Midnight on the first day of dt's month."""
    return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def shift_months(dt: datetime, months: int) -> datetime:
    """First day of the month ``months`` away from dt's month."""
    index = dt.year * 12 + (dt.month - 1) + months
    return month_start(dt).replace(year=index // 12, month=index % 12 + 1)


def calendar_month_windows(now: datetime = None) -> Tuple[Window, Window]:
    """
    This month so far and the whole previous calendar month.

    Returns:
        (this_month, last_month)
    """
    now = now or datetime.utcnow()
    this_start = month_start(now)
    last_start = shift_months(now, -1)
    return Window(this_start, now), Window(last_start, this_start)


def trailing_month_windows(now: datetime = None, count: int = 12) -> List[Window]:
    """
    Calendar-month windows for the trailing ``count`` months, oldest first.

    The last window is the current month and ends at the next month boundary.
    """
    now = now or datetime.utcnow()
    windows = []
    for offset in range(count - 1, -1, -1):
        start = shift_months(now, -offset)
        windows.append(Window(start, shift_months(start, 1)))
    return windows


def year_to_date(now: datetime = None) -> Window:
    """``[Jan 1 00:00, now)``."""
    now = now or datetime.utcnow()
    return Window(now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0), now)
