"""Pydantic models for the intake API."""

from datetime import date, datetime

from pydantic import BaseModel, StrictInt


class AddWaterRequest(BaseModel):
    """Request body for recording an intake."""

    amount: StrictInt


class DailyGoalRequest(BaseModel):
    """Request body for changing the daily goal."""

    daily_goal: StrictInt


class IntakeEntryResponse(BaseModel):
    """Intake entry with display strings."""

    id: int
    amount: int
    timestamp: datetime
    display_time: str
    display_date: str


class DailySummaryResponse(BaseModel):
    """Today's progress toward the goal."""

    day: date
    daily_goal: int
    today_total: int
    completion_percentage: float
    entries: list[IntakeEntryResponse]


class ResetResponse(BaseModel):
    """Result of resetting today's entries."""

    removed: int


class PresetsResponse(BaseModel):
    """Quick-add amounts in milliliters."""

    amounts: list[int]
