"""Daily log service: today's entries, goals and day views."""

import logging
from dataclasses import dataclass
from datetime import date

from fluid_tracker.domain.calendar import DEFAULT_KEY_PREFIX, storage_key_for_day
from fluid_tracker.domain.daily_log import DailyLog, decode_daily_log, encode_daily_log
from fluid_tracker.domain.entries import Entry, EntryView, format_entry
from fluid_tracker.domain.fluids import Fluid
from fluid_tracker.domain.units import convert_amount, format_amount
from fluid_tracker.services.clock import Clock
from fluid_tracker.services.preferences import PreferencesService
from fluid_tracker.services.registry import FluidRegistry
from fluid_tracker.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayView:
    """Display-ready summary of one day."""

    day: date
    key: str
    has_data: bool
    goal: str
    total: str
    remaining: str
    progress: float
    entries: list[EntryView]


@dataclass
class DailyLogService:
    """Loads, mutates and persists per-day logs."""

    store: KeyValueStore
    registry: FluidRegistry
    preferences: PreferencesService
    clock: Clock
    default_goal: float = 64.0
    default_goal_oz: bool = True
    key_prefix: str = DEFAULT_KEY_PREFIX

    def get_day(self, year: int, month: int, day: int) -> DailyLog:
        """Return the log for a day; days without data get a fresh, unsaved log."""
        raw = self.store.get(self._key(year, month, day))
        if raw is None:
            return self._new_log()
        return decode_daily_log(raw, self.registry.resolve)

    def register_entry(self, fluid: Fluid, is_oz: bool, amount: float) -> Entry:
        """Append an entry to today's log, stamped with the current time."""
        now = self.clock()
        log = self.get_day(now.year, now.month, now.day)
        entry = log.register(fluid, is_oz, amount, now)
        self._persist(now.year, now.month, now.day, log)
        logger.info(
            "Registered %s of %s at %d:%02d",
            entry.amount,
            fluid.name,
            entry.hour,
            entry.minute,
        )
        return entry

    def set_goal(
        self,
        year: int,
        month: int,
        day: int,
        goal: float,
        is_oz: bool | None = None,
    ) -> DailyLog:
        """Replace a day's goal, optionally switching the unit of the log."""
        log = self.get_day(year, month, day).with_goal(goal, is_oz)
        self._persist(year, month, day, log)
        return log

    def get_day_view(self, year: int, month: int, day: int) -> DayView:
        key = self._key(year, month, day)
        log = self.get_day(year, month, day)
        prefs = self.preferences.get_preferences()
        return DayView(
            day=date(year, month, day),
            key=key,
            has_data=self.store.get(key) is not None,
            goal=format_amount(log.goal, log.is_oz, prefs.use_oz),
            total=format_amount(log.total, log.is_oz, prefs.use_oz),
            remaining=format_amount(log.remaining, log.is_oz, prefs.use_oz),
            progress=log.progress,
            entries=[
                format_entry(entry, prefs.use_oz, prefs.use_meridiem)
                for entry in log.entries
            ],
        )

    def _new_log(self) -> DailyLog:
        use_oz = self.preferences.get_preferences().use_oz
        goal = convert_amount(self.default_goal, self.default_goal_oz, use_oz)
        return DailyLog.create(goal, use_oz)

    def _persist(self, year: int, month: int, day: int, log: DailyLog) -> None:
        # Fluid indices are resolved here, before the log buffer is written and
        # outside of any registry save pass.
        record = encode_daily_log(log, self.registry.ensure_saved)
        self.store.set(self._key(year, month, day), record)

    def _key(self, year: int, month: int, day: int) -> str:
        date(year, month, day)  # raises ValueError for days outside the month
        return storage_key_for_day(year, month, day, self.key_prefix)
