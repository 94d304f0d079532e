"""Tests for container wiring."""

import pytest

from hydration_tracker.adapters.json_file_intake_repository import (
    JsonFileIntakeRepository,
)
from hydration_tracker.adapters.memory_intake_repository import (
    InMemoryIntakeRepository,
)
from hydration_tracker.config import Settings
from hydration_tracker.containers import build_container, build_repository


def test_build_container_creates_service(settings: Settings) -> None:
    container = build_container(settings)

    assert container.intake_service.daily_goal == 2000
    assert isinstance(container.intake_service.repository, InMemoryIntakeRepository)
    assert container.clock.now().utcoffset() is not None


def test_build_repository_file_backend(tmp_path) -> None:
    settings = Settings(storage_backend="file", storage_path=str(tmp_path / "x.json"))

    repository = build_repository(settings)

    assert isinstance(repository, JsonFileIntakeRepository)
    assert repository.path == tmp_path / "x.json"


def test_build_repository_requires_supabase_credentials() -> None:
    settings = Settings(
        storage_backend="supabase", supabase_url=None, supabase_service_key=None
    )

    with pytest.raises(ValueError, match="supabase_url"):
        build_repository(settings)


def test_build_repository_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Unknown storage backend"):
        build_repository(Settings(storage_backend="redis"))
