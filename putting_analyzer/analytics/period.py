"""Trailing-window filtering of rounds (last week / month / year)."""

from __future__ import annotations

import calendar
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Union

from putting_analyzer.models import Period, Round

logger = logging.getLogger(__name__)

WEEK_DAYS = 7


def _months_before(moment: datetime, months: int) -> datetime:
    """Same day-of-month ``months`` earlier, clamped to the end of shorter months."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month0 = divmod(month_index, 12)
    month = month0 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def period_cutoff(period: Period, now: datetime) -> Optional[datetime]:
    """Earliest round date kept for ``period``; None means no lower bound."""
    if period is Period.WEEK:
        return now - timedelta(days=WEEK_DAYS)
    if period is Period.MONTH:
        return _months_before(_start_of_day(now), 1)
    if period is Period.YEAR:
        return _months_before(_start_of_day(now), 12)
    return None


def _comparable(value: datetime, reference: datetime) -> datetime:
    """Align naive/aware datetimes so they can be compared with ``reference``."""
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    if value.tzinfo is not None and reference.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    return value


def filter_rounds_by_period(
    rounds: Iterable[Round],
    period: Union[Period, str],
    now: Optional[datetime] = None,
) -> List[Round]:
    """
    Keep the rounds played inside the trailing window ending at ``now``

    Args:
        rounds: Rounds to filter (not modified)
        period: 'week' (last 7 days), 'month' (since the same calendar day last
            month), 'year' (since the same calendar day last year) or 'all'
        now: Reference time; the wall clock is read on each call when omitted

    Returns:
        New list of the matching rounds, in input order

    Raises:
        ValueError: If period is not a known Period value
    """
    if not isinstance(period, Period):
        period = Period(str(period).strip().lower())

    if period is Period.ALL:
        return list(rounds)

    if now is None:
        now = datetime.now().astimezone()

    cutoff = period_cutoff(period, now)
    kept = [r for r in rounds if _comparable(r.date, cutoff) >= cutoff]
    logger.debug(f"Period {period.value}: cutoff {cutoff.isoformat()}, kept {len(kept)} rounds")
    return kept
