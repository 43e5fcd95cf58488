"""
Schedule API endpoints (due checks)
"""
from datetime import date, tzinfo

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from habitcore.api.deps import get_calendar_tz, get_db, get_today
from habitcore.application.statistics import (
    HabitNotFoundError, check_habit, due_habits_with_progress,
)
from habitcore.infrastructure.db.repository import load_habit_snapshot, load_user_snapshot


router = APIRouter(prefix="/api/v1/schedule", tags=["schedule"])


# === Response models ===

class DueCheckResponse(BaseModel):
    habit_id: int
    date: date
    due: bool


class DueHabitResponse(BaseModel):
    habit_id: int
    name: str
    description: str | None
    category_id: int | None
    start_date: date
    end_date: date | None
    frequency: str
    is_active: bool
    weekly_completions: int
    monthly_completions: int
    completion_dates: list[date]


# === Endpoints ===

@router.get("/check/{habit_id}/{on}", response_model=DueCheckResponse)
def check_habit_for_date(habit_id: int, on: date, db: Session = Depends(get_db)):
    """Is the habit due on the given date"""
    snapshot = load_habit_snapshot(db, habit_id)
    try:
        due = check_habit(snapshot, habit_id, on)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DueCheckResponse(habit_id=habit_id, date=on, due=due)


@router.get("/due-today/{user_id}", response_model=list[DueHabitResponse])
def get_habits_due_today(
    user_id: str,
    on: date | None = None,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """Active habits due today (or on ?on=YYYY-MM-DD) with their recent completions"""
    snapshot = load_user_snapshot(db, user_id)
    return [
        DueHabitResponse(
            habit_id=d.habit.habit_id,
            name=d.habit.name,
            description=d.habit.description,
            category_id=d.habit.category_id,
            start_date=d.habit.start_date,
            end_date=d.habit.end_date,
            frequency=d.habit.frequency,
            is_active=d.habit.is_active,
            weekly_completions=d.weekly_completions,
            monthly_completions=d.monthly_completions,
            completion_dates=d.completion_dates,
        )
        for d in due_habits_with_progress(snapshot, on or today, tz)
    ]
