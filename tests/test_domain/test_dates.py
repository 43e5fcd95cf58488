"""Tests for the calendar-date convention"""
from datetime import date, datetime, timezone, timedelta
from zoneinfo import ZoneInfo

from habitcore.domain.dates import (
    completion_date, as_dates, completion_dates, date_range, today_in,
)
from habitcore.domain.habit import CompletionEvent

HCM = ZoneInfo("Asia/Ho_Chi_Minh")  # UTC+7
NY = ZoneInfo("America/New_York")


class TestCompletionDate:
    def test_naive_is_utc(self):
        assert completion_date(datetime(2024, 5, 1, 23, 30)) == date(2024, 5, 1)

    def test_late_utc_evening_is_next_local_day_east(self):
        assert completion_date(datetime(2024, 5, 1, 18, 0, tzinfo=timezone.utc), HCM) == date(2024, 5, 2)

    def test_early_utc_morning_is_previous_local_day_west(self):
        assert completion_date(datetime(2024, 5, 2, 2, 0, tzinfo=timezone.utc), NY) == date(2024, 5, 1)

    def test_plain_date_passes_through(self):
        assert completion_date(date(2024, 5, 1), HCM) == date(2024, 5, 1)


class TestDedup:
    def test_same_day_completions_collapse(self):
        values = [datetime(2024, 5, 1, 8), datetime(2024, 5, 1, 20), date(2024, 5, 1)]
        assert as_dates(values) == {date(2024, 5, 1)}

    def test_events_collapse_to_dates(self):
        events = [
            CompletionEvent(1, habit_id=1, completed_at=datetime(2024, 5, 1, 8)),
            CompletionEvent(2, habit_id=1, completed_at=datetime(2024, 5, 1, 9)),
            CompletionEvent(3, habit_id=2, completed_at=datetime(2024, 5, 3, 9)),
        ]
        assert completion_dates(events) == {date(2024, 5, 1), date(2024, 5, 3)}


class TestDateRange:
    def test_inclusive(self):
        assert list(date_range(date(2024, 2, 27), date(2024, 3, 1))) == [
            date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1),
        ]

    def test_reversed_is_empty(self):
        assert list(date_range(date(2024, 3, 2), date(2024, 3, 1))) == []


def test_today_in_uses_given_zone():
    now = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)
    assert today_in(HCM, now) == date(2024, 5, 2)
    assert today_in(timezone(timedelta(hours=-5)), now) == date(2024, 5, 1)
