"""
Recurrence rules and the due-date evaluator.

Uses date only (no timezone). Frequencies:
- DAILY: every N days counted from the habit start date
- WEEKLY: a set of weekdays (the interval is stored but not enforced)
- MONTHLY: a set of days of month; a day past the end of a month does not roll over

A habit without a rule is evaluated through its legacy base frequency
(see LegacyFrequency). Malformed rules never raise, they are simply never due.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Mapping

from habitcore.domain.dates import date_range
from habitcore.domain.habit import (
    FREQ_DAILY, FREQ_MONTHLY, FREQ_WEEKLY, Habit, within_lifetime,
)

logger = logging.getLogger(__name__)


DAILY = "DAILY"
WEEKLY = "WEEKLY"
MONTHLY = "MONTHLY"

# Monday=0 .. Sunday=6, same as date.weekday()
WEEKDAY_MAP = {
    "MO": 0, "MON": 0, "MONDAY": 0,
    "TU": 1, "TUE": 1, "TUESDAY": 1,
    "WE": 2, "WED": 2, "WEDNESDAY": 2,
    "TH": 3, "THU": 3, "THURSDAY": 3,
    "FR": 4, "FRI": 4, "FRIDAY": 4,
    "SA": 5, "SAT": 5, "SATURDAY": 5,
    "SU": 6, "SUN": 6, "SUNDAY": 6,
}


@dataclass(frozen=True)
class RecurrenceRule:
    habit_id: int
    frequency_type: str
    frequency_value: int = 1
    weekdays: frozenset[int] = field(default_factory=frozenset)  # WEEKLY only
    days_of_month: frozenset[int] = field(default_factory=frozenset)  # MONTHLY only, 1..31
    is_active: bool = True

    @property
    def freq(self) -> str:
        return normalize_freq(self.frequency_type)


def normalize_freq(value: str | None) -> str:
    if not value:
        return ""
    return value.strip().upper()


# --- Parsing of stored rule fields ---

def parse_weekdays(s: str | Iterable | None) -> frozenset[int]:
    """Parse 'Mon,Wed,Fri' (also 'MO,WE', 'Monday', '0,2,4') into weekday ints.

    Unknown tokens are dropped.
    """
    if s is None:
        return frozenset()
    parts = s.split(",") if isinstance(s, str) else list(s)
    out: set[int] = set()
    for part in parts:
        token = str(part).strip().upper()
        if not token:
            continue
        if token in WEEKDAY_MAP:
            out.add(WEEKDAY_MAP[token])
        elif token.isdigit() and 0 <= int(token) <= 6:
            out.add(int(token))
        else:
            logger.debug("Ignoring malformed weekday token %r", part)
    return frozenset(out)


def parse_days_of_month(s: str | Iterable | None, legacy_day: int | None = None) -> frozenset[int]:
    """Parse '1,15,31' into day-of-month ints. Values outside 1..31 are dropped.

    legacy_day is the old single-day column (0 means unset) and is merged in.
    """
    out: set[int] = set()
    if s is not None:
        parts = s.split(",") if isinstance(s, str) else list(s)
        for part in parts:
            token = str(part).strip()
            if not token:
                continue
            try:
                day = int(token)
            except ValueError:
                logger.debug("Ignoring malformed day-of-month token %r", part)
                continue
            if 1 <= day <= 31:
                out.add(day)
            else:
                logger.debug("Ignoring out-of-range day-of-month %d", day)
    if legacy_day is not None and 1 <= legacy_day <= 31:
        out.add(legacy_day)
    return frozenset(out)


# --- Evaluation ---

def is_due(rule: RecurrenceRule, on: date, habit_start: date, habit_end: date | None = None) -> bool:
    """Whether a habit governed by `rule` is due on `on`."""
    if not within_lifetime(on, habit_start, habit_end):
        return False
    if not rule.is_active:
        return False

    freq = rule.freq
    if freq == DAILY:
        interval = rule.frequency_value
        if not isinstance(interval, int) or interval <= 0:
            return False
        return (on - habit_start).days % interval == 0
    if freq == WEEKLY:
        return on.weekday() in rule.weekdays
    if freq == MONTHLY:
        return on.day in rule.days_of_month
    return False


def legacy_is_due(frequency: str | None, on: date, habit_start: date, habit_end: date | None = None) -> bool:
    """Fallback for habits that were created before recurrence rules existed.

    Weekly repeats on the start date's weekday, monthly on its day of month.
    Anything else, including 'custom', behaves as daily.
    """
    if not within_lifetime(on, habit_start, habit_end):
        return False
    base = (frequency or "").strip().lower()
    if base == FREQ_WEEKLY:
        return on.weekday() == habit_start.weekday()
    if base == FREQ_MONTHLY:
        return on.day == habit_start.day
    return True


# --- Schedule: rule-based or legacy, decided once per habit ---

@dataclass(frozen=True)
class RuleBased:
    rule: RecurrenceRule


@dataclass(frozen=True)
class LegacyFrequency:
    frequency: str = FREQ_DAILY


Schedule = RuleBased | LegacyFrequency

RuleLookup = Mapping[int, RecurrenceRule] | Callable[[int], RecurrenceRule | None]


def schedule_for(habit: Habit, rule: RecurrenceRule | None) -> Schedule:
    if rule is not None:
        return RuleBased(rule)
    return LegacyFrequency(habit.frequency)


def rule_lookup(rule_of: RuleLookup | None) -> Callable[[int], RecurrenceRule | None]:
    """Accept either a habit_id -> rule mapping or a callable and return a callable."""
    if rule_of is None:
        return lambda habit_id: None
    if callable(rule_of):
        return rule_of
    return rule_of.get


def is_due_on(schedule: Schedule, on: date, habit_start: date, habit_end: date | None = None) -> bool:
    if isinstance(schedule, RuleBased):
        return is_due(schedule.rule, on, habit_start, habit_end)
    return legacy_is_due(schedule.frequency, on, habit_start, habit_end)


def due_dates(
    schedule: Schedule,
    window_start: date,
    window_end: date,
    habit_start: date,
    habit_end: date | None = None,
) -> list[date]:
    """Due dates in [window_start, window_end] (inclusive), sorted ascending."""
    start = max(window_start, habit_start)
    end = window_end if habit_end is None else min(window_end, habit_end)
    return [d for d in date_range(start, end) if is_due_on(schedule, d, habit_start, habit_end)]


# --- Helpers for converting DB rows ---

def rule_from_db(row) -> RecurrenceRule:
    """Build RecurrenceRule from a schedule row (any object with matching attributes)."""
    interval = row.frequency_value
    return RecurrenceRule(
        habit_id=row.habit_id,
        frequency_type=row.frequency_type or "",
        frequency_value=1 if interval is None else interval,
        weekdays=parse_weekdays(row.days_of_week),
        days_of_month=parse_days_of_month(row.days_of_month, getattr(row, "day_of_month", None)),
        is_active=bool(row.is_active),
    )
