"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from hydration_tracker.adapters.memory_intake_repository import (
    InMemoryIntakeRepository,
)
from hydration_tracker.config import Settings
from hydration_tracker.containers import AppContainer
from hydration_tracker.domain.errors import ClockUnavailableError, StorageError
from hydration_tracker.domain.intake import IntakeSnapshot
from hydration_tracker.services.clock import Clock
from hydration_tracker.services.intake import IntakeRepository, IntakeService

SEOUL = ZoneInfo("Asia/Seoul")


@dataclass
class FixedClock(Clock):
    """Clock that only moves when told to."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 3, 9, 14, 30, tzinfo=SEOUL)
    )

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@dataclass
class FailingClock(Clock):
    """Clock whose reads always fail."""

    error: Exception

    def now(self) -> datetime:
        raise self.error


@dataclass
class FlakyClock(Clock):
    """Clock that fails once its allowed reads are used up."""

    reads_left: int
    current: datetime = field(
        default_factory=lambda: datetime(2024, 3, 9, 14, 30, tzinfo=SEOUL)
    )

    def now(self) -> datetime:
        if self.reads_left <= 0:
            raise ClockUnavailableError("clock went away")
        self.reads_left -= 1
        return self.current


@dataclass
class FailingIntakeRepository(IntakeRepository):
    """Repository that fails on save once armed."""

    snapshot: IntakeSnapshot | None = None
    fail_saves: bool = False
    saves: int = 0

    def load(self) -> IntakeSnapshot | None:
        return self.snapshot

    def save(self, snapshot: IntakeSnapshot) -> None:
        if self.fail_saves:
            raise StorageError("disk full")
        self.saves += 1
        self.snapshot = snapshot


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        daily_goal_ml=2000,
        timezone="Asia/Seoul",
        storage_backend="memory",
        quick_add_amounts="150,100,200",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def repository() -> InMemoryIntakeRepository:
    return InMemoryIntakeRepository()


@pytest.fixture
def intake_service(
    repository: InMemoryIntakeRepository, clock: FixedClock
) -> IntakeService:
    return IntakeService.open(repository=repository, clock=clock)


@pytest.fixture
def container(
    settings: Settings, clock: FixedClock, intake_service: IntakeService
) -> AppContainer:
    return AppContainer(
        settings=settings,
        clock=clock,
        intake_service=intake_service,
    )
