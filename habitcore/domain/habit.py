"""Habit and completion records, as loaded from the habit and completion stores."""
from dataclasses import dataclass
from datetime import date, datetime


FREQ_DAILY = "daily"
FREQ_WEEKLY = "weekly"
FREQ_MONTHLY = "monthly"


@dataclass(frozen=True)
class Habit:
    habit_id: int
    user_id: str
    name: str
    start_date: date
    end_date: date | None = None
    frequency: str = FREQ_DAILY  # base frequency, only consulted when no recurrence rule exists
    is_active: bool = True
    category_id: int | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def clip(self, window_start: date, window_end: date) -> tuple[date, date] | None:
        """Intersect [window_start, window_end] with the habit lifetime. None when empty."""
        start = max(window_start, self.start_date)
        end = window_end if self.end_date is None else min(window_end, self.end_date)
        if start > end:
            return None
        return start, end


@dataclass(frozen=True)
class CompletionEvent:
    completion_id: int
    habit_id: int
    completed_at: datetime
    notes: str | None = None


def within_lifetime(d: date, start: date, end: date | None) -> bool:
    if d < start:
        return False
    if end is not None and d > end:
        return False
    return True
