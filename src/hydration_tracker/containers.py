"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from hydration_tracker.adapters.json_file_intake_repository import (
    JsonFileIntakeRepository,
)
from hydration_tracker.adapters.memory_intake_repository import (
    InMemoryIntakeRepository,
)
from hydration_tracker.adapters.supabase_intake_repository import (
    SupabaseIntakeRepository,
)
from hydration_tracker.config import Settings
from hydration_tracker.services.clock import Clock, SystemClock
from hydration_tracker.services.intake import IntakeRepository, IntakeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    intake_service: IntakeService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    clock = SystemClock(resolved_settings.timezone)
    repository = build_repository(resolved_settings)
    intake_service = IntakeService.open(
        repository=repository,
        clock=clock,
        default_goal=resolved_settings.daily_goal_ml,
    )
    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        intake_service=intake_service,
    )


def build_repository(settings: Settings) -> IntakeRepository:
    """Return the repository for the configured storage backend."""
    backend = settings.storage_backend.strip().lower()
    if backend == "memory":
        return InMemoryIntakeRepository()
    if backend == "file":
        return JsonFileIntakeRepository(Path(settings.storage_path))
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseIntakeRepository(client)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")
