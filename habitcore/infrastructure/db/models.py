"""
SQLAlchemy ORM models for the habit and completion stores (read side only)
"""
from datetime import date as date_type, datetime
from sqlalchemy import String, Integer, Text, TIMESTAMP, Date, func, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from habitcore.infrastructure.db.session import Base


class HabitModel(Base):
    """Habits owned by a user"""
    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False, server_default="daily")  # daily/weekly/monthly/custom
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class HabitScheduleModel(Base):
    """Recurrence rule of a habit (one per habit)"""
    __tablename__ = "habit_schedules"

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id"), nullable=False, index=True)

    frequency_type: Mapped[str] = mapped_column(String(20), nullable=False, server_default="Daily")  # Daily/Weekly/Monthly
    frequency_value: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")
    days_of_week: Mapped[str | None] = mapped_column(String(50), nullable=True)  # "Mon,Wed,Fri"
    days_of_month: Mapped[str | None] = mapped_column(String(100), nullable=True)  # "1,15,31"
    day_of_month: Mapped[int | None] = mapped_column(Integer, nullable=True)  # legacy single day, 0 = unset
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")


class HabitCompletionModel(Base):
    """One "mark complete" action; several may exist for the same day"""
    __tablename__ = "habit_completions"

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id"), nullable=False)
    completed_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)  # UTC
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        Index('ix_habit_completion_habit_at', 'habit_id', 'completed_at'),
    )
