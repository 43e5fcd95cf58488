"""Loads one consistent Snapshot per request from the habit and completion stores"""
import logging
from datetime import date, datetime

from sqlalchemy.orm import Session

from habitcore.domain.habit import CompletionEvent, Habit
from habitcore.domain.recurrence import RecurrenceRule, rule_from_db
from habitcore.domain.snapshot import Snapshot
from habitcore.infrastructure.db.models import HabitCompletionModel, HabitModel, HabitScheduleModel

logger = logging.getLogger(__name__)


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def habit_from_db(row: HabitModel) -> Habit:
    return Habit(
        habit_id=row.id,
        user_id=row.user_id,
        name=row.name,
        start_date=_as_date(row.start_date),
        end_date=_as_date(row.end_date),
        frequency=row.frequency or "daily",
        is_active=bool(row.is_active),
        category_id=row.category_id,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def completion_from_db(row: HabitCompletionModel) -> CompletionEvent:
    return CompletionEvent(
        completion_id=row.id,
        habit_id=row.habit_id,
        completed_at=row.completed_at,
        notes=row.notes,
    )


def _load_rules(db: Session, habit_ids: list[int]) -> dict[int, RecurrenceRule]:
    if not habit_ids:
        return {}
    rows = db.query(HabitScheduleModel).filter(
        HabitScheduleModel.habit_id.in_(habit_ids)
    ).order_by(HabitScheduleModel.id.asc()).all()

    rules: dict[int, RecurrenceRule] = {}
    for row in rows:
        if row.habit_id in rules:
            logger.warning("Habit %d has more than one schedule, ignoring schedule %d",
                           row.habit_id, row.id)
            continue
        rules[row.habit_id] = rule_from_db(row)
    return rules


def _load_completions(db: Session, habit_ids: list[int]) -> dict[int, list[CompletionEvent]]:
    if not habit_ids:
        return {}
    rows = db.query(HabitCompletionModel).filter(
        HabitCompletionModel.habit_id.in_(habit_ids)
    ).order_by(HabitCompletionModel.completed_at.asc()).all()

    out: dict[int, list[CompletionEvent]] = {}
    for row in rows:
        out.setdefault(row.habit_id, []).append(completion_from_db(row))
    return out


def _snapshot(db: Session, habit_rows: list[HabitModel]) -> Snapshot:
    habits = [habit_from_db(r) for r in habit_rows]
    habit_ids = [h.habit_id for h in habits]
    return Snapshot(
        habits=habits,
        rules=_load_rules(db, habit_ids),
        completions=_load_completions(db, habit_ids),
    )


def load_user_snapshot(db: Session, user_id: str) -> Snapshot:
    """All habits of a user (active or not) with their rules and completions."""
    rows = db.query(HabitModel).filter(
        HabitModel.user_id == user_id,
    ).order_by(HabitModel.id.asc()).all()
    return _snapshot(db, rows)


def load_habit_snapshot(db: Session, habit_id: int) -> Snapshot:
    """Snapshot holding a single habit; empty when the habit does not exist."""
    rows = db.query(HabitModel).filter(HabitModel.id == habit_id).all()
    return _snapshot(db, rows)
