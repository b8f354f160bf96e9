"""Dependency container wiring for the application."""

from dataclasses import dataclass

from fluid_tracker.adapters.json_file_store import JsonFileKeyValueStore
from fluid_tracker.config import Settings
from fluid_tracker.domain.preferences import Preferences
from fluid_tracker.services.calendar import CalendarService
from fluid_tracker.services.clock import Clock, wall_clock
from fluid_tracker.services.daily_logs import DailyLogService
from fluid_tracker.services.preferences import PreferencesService
from fluid_tracker.services.registry import FluidRegistry
from fluid_tracker.services.storage import InMemoryKeyValueStore, KeyValueStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    registry: FluidRegistry
    preferences_service: PreferencesService
    daily_log_service: DailyLogService
    calendar_service: CalendarService


def build_container(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if store is None:
        if resolved_settings.store_path:
            store = JsonFileKeyValueStore.create(resolved_settings.store_path)
        else:
            store = InMemoryKeyValueStore()
    resolved_clock = clock or wall_clock(resolved_settings.timezone)

    registry = FluidRegistry(store, resolved_settings.fluids_key)
    registry.ensure_defaults()
    preferences_service = PreferencesService(
        store=store,
        key=resolved_settings.preferences_key,
        defaults=Preferences(
            use_oz=resolved_settings.prefer_oz,
            use_meridiem=resolved_settings.use_meridiem,
        ),
    )
    daily_log_service = DailyLogService(
        store=store,
        registry=registry,
        preferences=preferences_service,
        clock=resolved_clock,
        default_goal=resolved_settings.default_goal,
        default_goal_oz=resolved_settings.default_goal_oz,
        key_prefix=resolved_settings.key_prefix,
    )
    calendar_service = CalendarService(
        store=store,
        clock=resolved_clock,
        key_prefix=resolved_settings.key_prefix,
    )

    return AppContainer(
        settings=resolved_settings,
        store=store,
        registry=registry,
        preferences_service=preferences_service,
        daily_log_service=daily_log_service,
        calendar_service=calendar_service,
    )
