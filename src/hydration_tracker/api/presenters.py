"""Display formatting for intake entries."""

from datetime import datetime, tzinfo

from hydration_tracker.api.models import DailySummaryResponse, IntakeEntryResponse
from hydration_tracker.domain.intake import DailySummary, IntakeEntry

MERIDIEM_AM = "오전"
MERIDIEM_PM = "오후"
NOON = 12


def format_display_time(moment: datetime) -> str:
    """Format as a 12-hour time with a Korean meridiem marker, e.g. "오후 3:05"."""
    marker = MERIDIEM_AM if moment.hour < NOON else MERIDIEM_PM
    hour = moment.hour % NOON or NOON
    return f"{marker} {hour}:{moment.minute:02d}"


def format_display_date(moment: datetime) -> str:
    """Format as a calendar date, e.g. "2024-03-09"."""
    return moment.strftime("%Y-%m-%d")


def present_entry(entry: IntakeEntry, tz: tzinfo | None) -> IntakeEntryResponse:
    """Convert an entry into its API representation in the given timezone."""
    local = entry.timestamp.astimezone(tz)
    return IntakeEntryResponse(
        id=entry.id,
        amount=entry.amount,
        timestamp=entry.timestamp,
        display_time=format_display_time(local),
        display_date=format_display_date(local),
    )


def present_summary(summary: DailySummary, tz: tzinfo | None) -> DailySummaryResponse:
    """Convert today's summary into its API representation."""
    return DailySummaryResponse(
        day=summary.day,
        daily_goal=summary.daily_goal,
        today_total=summary.total,
        completion_percentage=summary.completion_percentage,
        entries=[present_entry(entry, tz) for entry in summary.entries],
    )
