"""Tests for snapshot loading from the habit and completion stores"""
import pytest
from datetime import date, datetime

from habitcore.infrastructure.db.models import HabitModel, HabitScheduleModel, HabitCompletionModel
from habitcore.infrastructure.db.repository import load_user_snapshot, load_habit_snapshot


@pytest.fixture
def stored_habits(db_session, sample_user_id):
    db_session.add_all([
        HabitModel(id=1, user_id=sample_user_id, name="Gym", start_date=date(2024, 1, 1),
                   frequency="weekly", is_active=True),
        HabitModel(id=2, user_id=sample_user_id, name="Journal", start_date=date(2024, 1, 1),
                   end_date=date(2024, 12, 31), frequency="daily", is_active=False),
        HabitModel(id=3, user_id="someone-else", name="Other", start_date=date(2024, 1, 1),
                   frequency="daily", is_active=True),
    ])
    db_session.flush()
    db_session.add_all([
        HabitScheduleModel(id=10, habit_id=1, frequency_type="Weekly", frequency_value=1,
                           days_of_week="Mon,Wed,Fri", is_active=True),
        HabitScheduleModel(id=11, habit_id=1, frequency_type="Daily", frequency_value=1,
                           is_active=True),
        HabitScheduleModel(id=12, habit_id=2, frequency_type="Monthly", frequency_value=1,
                           days_of_month="1,15", day_of_month=0, is_active=True),
        HabitCompletionModel(id=100, habit_id=1, completed_at=datetime(2024, 3, 4, 7, 30), notes="legs"),
        HabitCompletionModel(id=101, habit_id=1, completed_at=datetime(2024, 3, 4, 18, 0)),
        HabitCompletionModel(id=102, habit_id=3, completed_at=datetime(2024, 3, 4, 18, 0)),
    ])
    db_session.flush()


class TestLoadUserSnapshot:
    def test_only_users_habits(self, db_session, sample_user_id, stored_habits):
        snap = load_user_snapshot(db_session, sample_user_id)
        assert [h.habit_id for h in snap.habits] == [1, 2]
        assert 3 not in snap.completions

    def test_habit_fields(self, db_session, sample_user_id, stored_habits):
        snap = load_user_snapshot(db_session, sample_user_id)
        journal = snap.habit(2)
        assert journal.end_date == date(2024, 12, 31)
        assert journal.is_active is False
        assert [h.habit_id for h in snap.active_habits()] == [1]

    def test_first_schedule_kept(self, db_session, sample_user_id, stored_habits):
        snap = load_user_snapshot(db_session, sample_user_id)
        rule = snap.rule_of(1)
        assert rule.frequency_type == "Weekly"
        assert rule.weekdays == frozenset({0, 2, 4})

    def test_monthly_days_parsed(self, db_session, sample_user_id, stored_habits):
        snap = load_user_snapshot(db_session, sample_user_id)
        assert snap.rule_of(2).days_of_month == frozenset({1, 15})

    def test_completions_grouped_and_deduped_by_date(self, db_session, sample_user_id, stored_habits):
        snap = load_user_snapshot(db_session, sample_user_id)
        assert len(snap.completions[1]) == 2
        assert snap.completions[1][0].notes == "legs"
        assert snap.dates_of(1) == {date(2024, 3, 4)}

    def test_unknown_user(self, db_session, stored_habits):
        snap = load_user_snapshot(db_session, "nobody")
        assert snap.habits == []
        assert snap.rules == {}
        assert snap.completions == {}


class TestLoadHabitSnapshot:
    def test_single_habit(self, db_session, stored_habits):
        snap = load_habit_snapshot(db_session, 3)
        assert [h.habit_id for h in snap.habits] == [3]
        assert snap.rule_of(3) is None

    def test_missing_habit(self, db_session, stored_habits):
        assert load_habit_snapshot(db_session, 999).habits == []
