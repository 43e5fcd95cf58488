"""Expected-vs-actual completion rate over a period"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Mapping

from habitcore.domain.dates import UTC, as_dates
from habitcore.domain.habit import Habit
from habitcore.domain.recurrence import RuleLookup, due_dates, rule_lookup, schedule_for

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30


@dataclass(frozen=True)
class HabitRate:
    habit_id: int
    expected: int
    actual: int


def habit_rate_breakdown(
    habits: Iterable[Habit],
    completions_by_habit: Mapping[int, Iterable[date | datetime]],
    period_start: date,
    period_end: date,
    rule_of: RuleLookup | None = None,
    tz: tzinfo = UTC,
) -> list[HabitRate]:
    """Per-habit (expected, actual) inside [habit lifetime] ∩ [period]."""
    get_rule = rule_lookup(rule_of)
    out: list[HabitRate] = []
    for habit in habits:
        window = habit.clip(period_start, period_end)
        if window is None:
            out.append(HabitRate(habit.habit_id, 0, 0))
            continue
        start, end = window
        schedule = schedule_for(habit, get_rule(habit.habit_id))
        expected = len(due_dates(schedule, start, end, habit.start_date, habit.end_date))
        done = as_dates(completions_by_habit.get(habit.habit_id, ()), tz)
        actual = sum(1 for d in done if start <= d <= end)
        out.append(HabitRate(habit.habit_id, expected, actual))
    return out


def completion_rate(
    habits: Iterable[Habit],
    completions_by_habit: Mapping[int, Iterable[date | datetime]],
    period_start: date,
    period_end: date,
    rule_of: RuleLookup | None = None,
    tz: tzinfo = UTC,
) -> float:
    """100 * Σactual / Σexpected, clamped to [0, 100]. 0.0 when nothing was expected."""
    rows = habit_rate_breakdown(habits, completions_by_habit, period_start, period_end, rule_of, tz)
    expected = sum(r.expected for r in rows)
    actual = sum(r.actual for r in rows)
    if expected <= 0:
        return 0.0
    return max(0.0, min(100.0, actual / expected * 100))


def recent_completion_count(
    dates: Iterable[date | datetime], reference_date: date, days: int, tz: tzinfo = UTC,
) -> int:
    """Distinct completion dates in the last `days` days, reference_date included."""
    if days <= 0:
        return 0
    start = reference_date - timedelta(days=days - 1)
    return sum(1 for d in as_dates(dates, tz) if start <= d <= reference_date)
