"""Per-day completed/not-completed series for the calendar heatmap"""
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable

from habitcore.domain.dates import UTC, as_dates, date_range
from habitcore.domain.habit import Habit


@dataclass(frozen=True)
class HeatmapEntry:
    date: date
    completed: bool

    @property
    def intensity(self) -> int:
        return 1 if self.completed else 0


def heatmap(
    habit: Habit,
    completions: Iterable[date | datetime],
    range_start: date,
    range_end: date,
    tz: tzinfo = UTC,
) -> list[HeatmapEntry]:
    """One entry per day of [range_start, range_end] that falls inside the habit lifetime.

    Days before the start date or after the end date are left out, not marked
    as missed.
    """
    window = habit.clip(range_start, range_end)
    if window is None:
        return []
    done = as_dates(completions, tz)
    return [HeatmapEntry(d, d in done) for d in date_range(*window)]
