"""Statistics queries: overview, per-habit details and heatmaps.

Everything is recomputed from the snapshot on every call. `today` is always
passed in by the caller, already resolved in the calendar timezone.
"""
import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo

from habitcore.application.completion_rate import (
    MONTHLY_WINDOW_DAYS, WEEKLY_WINDOW_DAYS, completion_rate, recent_completion_count,
)
from habitcore.application.due_today import habit_due_on, select_due_habits
from habitcore.application.heatmap import HeatmapEntry, heatmap
from habitcore.application.streaks import current_streak, longest_streak
from habitcore.domain.dates import UTC
from habitcore.domain.habit import Habit
from habitcore.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_HEATMAP_DAYS = 365


class HabitNotFoundError(LookupError):
    pass


class StatisticsRangeError(ValueError):
    pass


@dataclass(frozen=True)
class OverviewStatistics:
    completion_rate: float
    current_streak: int
    longest_streak: int
    total_habits: int
    active_days_in_month: int
    days_in_month: int


@dataclass(frozen=True)
class HabitDetails:
    habit_id: int
    name: str
    description: str | None
    category_id: int | None
    current_streak: int
    longest_streak: int
    total_completions: int
    weekly_completions: int
    monthly_completions: int
    completion_data: list[HeatmapEntry] = field(default_factory=list)


@dataclass(frozen=True)
class HabitHeatmap:
    habit_id: int
    name: str
    description: str | None
    category_id: int | None
    completion_data: list[HeatmapEntry] = field(default_factory=list)


@dataclass(frozen=True)
class DueHabit:
    habit: Habit
    weekly_completions: int
    monthly_completions: int
    completion_dates: list[date] = field(default_factory=list)


def _range_start(today: date, days: int) -> date:
    if days < 1:
        raise StatisticsRangeError("days must be >= 1")
    return today - timedelta(days=days - 1)


def overview(snapshot: Snapshot, today: date, tz: tzinfo = UTC) -> OverviewStatistics:
    """Month-to-date overview across all active habits."""
    habits = snapshot.active_habits()
    month_start = today.replace(day=1)
    days_in_month = calendar.monthrange(today.year, today.month)[1]

    by_habit = snapshot.dates_by_habit(habits, tz)
    all_dates: set[date] = set().union(*by_habit.values()) if by_habit else set()

    rate = completion_rate(habits, by_habit, month_start, today, snapshot.rule_of, tz)
    active_days = sum(1 for d in all_dates if month_start <= d <= today)

    return OverviewStatistics(
        completion_rate=round(rate, 1),
        current_streak=current_streak(all_dates, today, tz),
        longest_streak=longest_streak(all_dates, tz),
        total_habits=len(habits),
        active_days_in_month=active_days,
        days_in_month=days_in_month,
    )


def habit_details(
    snapshot: Snapshot,
    habit_id: int,
    today: date,
    days: int = DEFAULT_HEATMAP_DAYS,
    tz: tzinfo = UTC,
) -> HabitDetails:
    start = _range_start(today, days)
    habit = snapshot.habit(habit_id)
    if habit is None:
        raise HabitNotFoundError(f"Habit #{habit_id} not found")

    done = snapshot.dates_of(habit_id, tz)
    return HabitDetails(
        habit_id=habit.habit_id,
        name=habit.name,
        description=habit.description,
        category_id=habit.category_id,
        current_streak=current_streak(done, today, tz),
        longest_streak=longest_streak(done, tz),
        total_completions=len(snapshot.completions.get(habit_id, [])),
        weekly_completions=recent_completion_count(done, today, WEEKLY_WINDOW_DAYS, tz),
        monthly_completions=recent_completion_count(done, today, MONTHLY_WINDOW_DAYS, tz),
        completion_data=heatmap(habit, done, start, today, tz),
    )


def heatmaps(
    snapshot: Snapshot,
    today: date,
    days: int = DEFAULT_HEATMAP_DAYS,
    tz: tzinfo = UTC,
) -> list[HabitHeatmap]:
    """Heatmap for every active habit over the last `days` days."""
    start = _range_start(today, days)
    return [
        HabitHeatmap(
            habit_id=h.habit_id,
            name=h.name,
            description=h.description,
            category_id=h.category_id,
            completion_data=heatmap(h, snapshot.dates_of(h.habit_id, tz), start, today, tz),
        )
        for h in snapshot.active_habits()
    ]


def due_habits(snapshot: Snapshot, on: date) -> list[Habit]:
    result = select_due_habits(snapshot.habits, snapshot.rule_of, on)
    logger.info("%d of %d habit(s) due on %s", len(result), len(snapshot.habits), on.isoformat())
    return result


def check_habit(snapshot: Snapshot, habit_id: int, on: date) -> bool:
    habit = snapshot.habit(habit_id)
    if habit is None:
        raise HabitNotFoundError(f"Habit #{habit_id} not found")
    return habit_due_on(habit, snapshot.rule_of(habit_id), on)


def due_habits_with_progress(snapshot: Snapshot, on: date, tz: tzinfo = UTC) -> list[DueHabit]:
    """Due habits together with their recent completion counts, counted back from `on`."""
    result = []
    for habit in due_habits(snapshot, on):
        done = snapshot.dates_of(habit.habit_id, tz)
        result.append(DueHabit(
            habit=habit,
            weekly_completions=recent_completion_count(done, on, WEEKLY_WINDOW_DAYS, tz),
            monthly_completions=recent_completion_count(done, on, MONTHLY_WINDOW_DAYS, tz),
            completion_dates=sorted(done),
        ))
    return result
