"""Tests for the intake log and its derived daily queries."""

from datetime import datetime

import pytest

from hydration_tracker.domain.errors import InvalidAmountError, InvalidGoalError
from hydration_tracker.domain.intake import IntakeEntry, IntakeSnapshot
from hydration_tracker.services.intake_log import IntakeLog
from tests.conftest import SEOUL, FixedClock, utc


def test_scenario_totals_and_percentage() -> None:
    clock = FixedClock()
    log = IntakeLog(clock=clock)
    for amount in (150, 100, 200, 200):
        log.append(amount)
        clock.advance(minutes=10)

    assert log.daily_goal == 2000
    assert log.today_total() == 650
    assert log.completion_percentage() == pytest.approx(0.325)
    assert [entry.amount for entry in log.today_entries()] == [200, 200, 100, 150]


def test_today_entries_are_newest_first() -> None:
    clock = FixedClock()
    log = IntakeLog(clock=clock)
    first = log.append(100)
    clock.advance(hours=1)
    second = log.append(250)

    assert log.today_entries() == [second, first]


def test_entries_with_equal_timestamps_order_by_insertion() -> None:
    log = IntakeLog(clock=FixedClock())
    first = log.append(100)
    second = log.append(100)

    assert [entry.id for entry in log.today_entries()] == [second.id, first.id]


def test_entries_from_other_days_are_excluded() -> None:
    clock = FixedClock(current=datetime(2024, 3, 9, 23, 50, tzinfo=SEOUL))
    log = IntakeLog(clock=clock)
    log.append(300)

    clock.advance(minutes=20)

    assert log.today_entries() == []
    assert log.today_total() == 0
    assert log.completion_percentage() == 0


def test_today_uses_clock_timezone() -> None:
    clock = FixedClock(current=datetime(2024, 3, 9, 9, 0, tzinfo=SEOUL))
    early_morning_seoul = IntakeEntry(id=1, amount=200, timestamp=utc(2024, 3, 8, 16))
    previous_evening_seoul = IntakeEntry(
        id=2, amount=500, timestamp=utc(2024, 3, 8, 14, 59)
    )
    log = IntakeLog(clock=clock, entries=[early_morning_seoul, previous_evening_seoul])

    assert log.today_entries() == [early_morning_seoul]
    assert log.today_total() == 200


def test_completion_percentage_may_exceed_one() -> None:
    log = IntakeLog(clock=FixedClock(), daily_goal=500)
    log.append(400)
    log.append(350)

    assert log.completion_percentage() == pytest.approx(1.5)


def test_append_stamps_entry_with_clock_time() -> None:
    clock = FixedClock()
    log = IntakeLog(clock=clock)

    entry = log.append(150)

    assert entry.timestamp == clock.current
    assert entry.id == 1
    assert log.next_id == 2


@pytest.mark.parametrize("amount", [0, -50, True, 1.5, "200"])
def test_append_rejects_invalid_amounts(amount: object) -> None:
    log = IntakeLog(clock=FixedClock())

    with pytest.raises(InvalidAmountError):
        log.append(amount)  # type: ignore[arg-type]

    assert log.entries == []
    assert log.next_id == 1


def test_remove_today_keeps_prior_days() -> None:
    clock = FixedClock()
    old = IntakeEntry(id=1, amount=400, timestamp=utc(2024, 3, 1, 3))
    log = IntakeLog(clock=clock, entries=[old], next_id=2)
    log.append(150)
    log.append(250)

    removed = log.remove_today()

    assert [entry.amount for entry in removed] == [150, 250]
    assert log.entries == [old]
    assert log.today_entries() == []


def test_ids_are_not_reused_after_reset() -> None:
    log = IntakeLog(clock=FixedClock())
    log.append(100)
    log.remove_today()

    entry = log.append(200)

    assert entry.id == 2


@pytest.mark.parametrize("goal", [0, -1, False])
def test_set_daily_goal_rejects_non_positive(goal: object) -> None:
    log = IntakeLog(clock=FixedClock())

    with pytest.raises(InvalidGoalError):
        log.set_daily_goal(goal)  # type: ignore[arg-type]

    assert log.daily_goal == 2000


def test_constructor_rejects_zero_goal() -> None:
    with pytest.raises(InvalidGoalError):
        IntakeLog(clock=FixedClock(), daily_goal=0)


def test_from_snapshot_keeps_ids_unique() -> None:
    entries = [IntakeEntry(id=7, amount=100, timestamp=utc(2024, 3, 9, 1))]
    snapshot = IntakeSnapshot(daily_goal=1500, entries=entries, next_id=3)

    log = IntakeLog.from_snapshot(snapshot, FixedClock())

    assert log.daily_goal == 1500
    assert log.next_id == 8
    assert log.snapshot().entries == entries


def test_summary_matches_queries() -> None:
    log = IntakeLog(clock=FixedClock(), daily_goal=1000)
    log.append(250)

    summary = log.summary()

    assert summary.day.isoformat() == "2024-03-09"
    assert summary.total == log.today_total() == 250
    assert summary.completion_percentage == log.completion_percentage() == 0.25
    assert summary.entries == log.today_entries()


@pytest.mark.parametrize("amount", [0, -500])
def test_from_snapshot_rejects_non_positive_amounts(amount: int) -> None:
    entries = [IntakeEntry(id=1, amount=amount, timestamp=utc(2024, 3, 9, 1))]
    snapshot = IntakeSnapshot(daily_goal=2000, entries=entries, next_id=2)

    with pytest.raises(InvalidAmountError):
        IntakeLog.from_snapshot(snapshot, FixedClock())
