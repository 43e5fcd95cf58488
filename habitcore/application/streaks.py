"""Current and longest streak over calendar dates.

Works the same for one habit's completions or for the union across all of a
user's habits; only the input set differs.
"""
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from habitcore.domain.dates import UTC, as_dates


def current_streak(dates: Iterable[date | datetime], reference_date: date, tz: tzinfo = UTC) -> int:
    """Consecutive completed days ending at reference_date.

    An unfinished reference day does not break the run: if reference_date
    itself is missing, counting starts from the day before.
    """
    done = as_dates(dates, tz)
    if not done:
        return 0
    d = reference_date
    if d not in done:
        d -= timedelta(days=1)
    streak = 0
    while d in done:
        streak += 1
        d -= timedelta(days=1)
    return streak


def longest_streak(dates: Iterable[date | datetime], tz: tzinfo = UTC) -> int:
    best = 0
    run = 0
    prev: date | None = None
    for d in sorted(as_dates(dates, tz)):
        if prev is not None and (d - prev).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
        prev = d
    return best
