"""
Statistics API endpoints (overview, heatmap, per-habit details)
"""
from datetime import date, tzinfo

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from habitcore.api.deps import get_calendar_tz, get_db, get_today
from habitcore.config import get_settings
from habitcore.application.heatmap import HeatmapEntry
from habitcore.application.statistics import (
    HabitNotFoundError, StatisticsRangeError, habit_details, heatmaps, overview,
)
from habitcore.infrastructure.db.repository import load_user_snapshot


router = APIRouter(prefix="/api/v1/statistics", tags=["statistics"])


# === Response models ===

class OverviewResponse(BaseModel):
    completion_rate: float
    current_streak: int
    longest_streak: int
    total_habits: int
    active_days_in_month: int
    days_in_month: int


class HeatmapEntryResponse(BaseModel):
    date: date
    is_completed: bool
    intensity: int


class HabitHeatmapResponse(BaseModel):
    habit_id: int
    habit_name: str
    description: str | None
    category_id: int | None
    completion_data: list[HeatmapEntryResponse]


class HabitDetailsResponse(HabitHeatmapResponse):
    current_streak: int
    longest_streak: int
    total_completions: int
    weekly_completions: int
    monthly_completions: int


# === Helper functions ===

def _days_or_default(days: int | None) -> int:
    return days if days is not None else get_settings().HEATMAP_DEFAULT_DAYS


def _entries(entries: list[HeatmapEntry]) -> list[HeatmapEntryResponse]:
    return [
        HeatmapEntryResponse(date=e.date, is_completed=e.completed, intensity=e.intensity)
        for e in entries
    ]


# === Endpoints ===

@router.get("/{user_id}/overview", response_model=OverviewResponse)
def get_overview(
    user_id: str,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """Month-to-date completion rate, streaks and active days"""
    stats = overview(load_user_snapshot(db, user_id), today, tz)
    return OverviewResponse(
        completion_rate=stats.completion_rate,
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
        total_habits=stats.total_habits,
        active_days_in_month=stats.active_days_in_month,
        days_in_month=stats.days_in_month,
    )


@router.get("/{user_id}/heatmap", response_model=list[HabitHeatmapResponse])
def get_heatmap(
    user_id: str,
    days: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """Heatmap of every active habit over the last `days` days"""
    snapshot = load_user_snapshot(db, user_id)
    try:
        result = heatmaps(snapshot, today, _days_or_default(days), tz)
    except StatisticsRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [
        HabitHeatmapResponse(
            habit_id=h.habit_id,
            habit_name=h.name,
            description=h.description,
            category_id=h.category_id,
            completion_data=_entries(h.completion_data),
        )
        for h in result
    ]


@router.get("/{user_id}/habit/{habit_id}/details", response_model=HabitDetailsResponse)
def get_habit_details(
    user_id: str,
    habit_id: int,
    days: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """Streaks, completion counts and heatmap of one habit"""
    snapshot = load_user_snapshot(db, user_id)
    try:
        d = habit_details(snapshot, habit_id, today, _days_or_default(days), tz)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StatisticsRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return HabitDetailsResponse(
        habit_id=d.habit_id,
        habit_name=d.name,
        description=d.description,
        category_id=d.category_id,
        current_streak=d.current_streak,
        longest_streak=d.longest_streak,
        total_completions=d.total_completions,
        weekly_completions=d.weekly_completions,
        monthly_completions=d.monthly_completions,
        completion_data=_entries(d.completion_data),
    )
