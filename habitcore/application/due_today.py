"""Which habits are due on a given date"""
import logging
from datetime import date
from typing import Iterable

from habitcore.domain.habit import Habit
from habitcore.domain.recurrence import (
    LegacyFrequency, RecurrenceRule, RuleLookup, is_due_on, rule_lookup, schedule_for,
)

logger = logging.getLogger(__name__)


def habit_due_on(habit: Habit, rule: RecurrenceRule | None, on: date) -> bool:
    """Single-habit check. Inactive habits are never due."""
    if not habit.is_active:
        return False
    schedule = schedule_for(habit, rule)
    return is_due_on(schedule, on, habit.start_date, habit.end_date)


def select_due_habits(habits: Iterable[Habit], rule_of: RuleLookup | None, on: date) -> list[Habit]:
    """Return active habits due on `on`, in input order, without duplicate ids.

    Habits with a rule are evaluated by the rule only; habits without one
    fall back to their base frequency.
    """
    get_rule = rule_lookup(rule_of)
    seen: set[int] = set()
    result: list[Habit] = []
    for habit in habits:
        if habit.habit_id in seen or not habit.is_active:
            continue
        schedule = schedule_for(habit, get_rule(habit.habit_id))
        if isinstance(schedule, LegacyFrequency):
            logger.debug("Habit %d has no recurrence rule, using base frequency %r",
                         habit.habit_id, schedule.frequency)
        if is_due_on(schedule, on, habit.start_date, habit.end_date):
            seen.add(habit.habit_id)
            result.append(habit)
    return result
