"""One consistent, in-memory view of a user's habits, rules and completions."""
from dataclasses import dataclass, field
from datetime import date, tzinfo

from habitcore.domain.dates import UTC, completion_dates
from habitcore.domain.habit import CompletionEvent, Habit
from habitcore.domain.recurrence import RecurrenceRule


@dataclass(frozen=True)
class Snapshot:
    habits: list[Habit] = field(default_factory=list)
    rules: dict[int, RecurrenceRule] = field(default_factory=dict)  # habit_id -> rule
    completions: dict[int, list[CompletionEvent]] = field(default_factory=dict)  # habit_id -> events

    def habit(self, habit_id: int) -> Habit | None:
        for h in self.habits:
            if h.habit_id == habit_id:
                return h
        return None

    def active_habits(self) -> list[Habit]:
        return [h for h in self.habits if h.is_active]

    def rule_of(self, habit_id: int) -> RecurrenceRule | None:
        return self.rules.get(habit_id)

    def dates_of(self, habit_id: int, tz: tzinfo = UTC) -> set[date]:
        return completion_dates(self.completions.get(habit_id, []), tz)

    def dates_by_habit(self, habits: list[Habit], tz: tzinfo = UTC) -> dict[int, set[date]]:
        return {h.habit_id: self.dates_of(h.habit_id, tz) for h in habits}
