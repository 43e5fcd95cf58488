"""
Calendar-date convention.

Completion instants are recorded in UTC. Every aggregate works on calendar
dates, so each instant is converted exactly once, in one declared timezone,
and same-day completions collapse to a single date. Naive datetimes are
treated as UTC.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Iterator

from habitcore.domain.habit import CompletionEvent


UTC = timezone.utc


def completion_date(instant: date | datetime, tz: tzinfo = UTC) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return instant.astimezone(tz).date()
    return instant


def as_dates(values: Iterable[date | datetime], tz: tzinfo = UTC) -> set[date]:
    """Deduplicated date-only set from dates, datetimes or a mix of both."""
    return {completion_date(v, tz) for v in values}


def completion_dates(events: Iterable[CompletionEvent], tz: tzinfo = UTC) -> set[date]:
    return {completion_date(e.completed_at, tz) for e in events}


def date_range(start: date, end: date) -> Iterator[date]:
    """Inclusive day-by-day iteration. Empty when start > end."""
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def today_in(tz: tzinfo, now: datetime | None = None) -> date:
    if now is None:
        now = datetime.now(UTC)
    return completion_date(now, tz)
