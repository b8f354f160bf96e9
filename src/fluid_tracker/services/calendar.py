"""Calendar service for month grids."""

from dataclasses import dataclass

from fluid_tracker.domain.calendar import (
    DEFAULT_KEY_PREFIX,
    CalendarGrid,
    Month,
    build_calendar_grid,
)
from fluid_tracker.services.clock import Clock
from fluid_tracker.services.storage import KeyValueStore


@dataclass
class CalendarService:
    """Builds calendar grids annotated with which days hold data."""

    store: KeyValueStore
    clock: Clock
    key_prefix: str = DEFAULT_KEY_PREFIX

    def current_month(self) -> Month:
        return Month.from_date(self.clock().date())

    def get_month_grid(self, year: int, month: int) -> CalendarGrid:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")
        return build_calendar_grid(
            Month(year, month),
            self.clock().date(),
            lambda key: self.store.get(key) is not None,
            self.key_prefix,
        )
