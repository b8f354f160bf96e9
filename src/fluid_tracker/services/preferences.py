"""User preferences service."""

import logging
from dataclasses import dataclass, replace

from fluid_tracker.domain.codec import RecordDecodeError
from fluid_tracker.domain.preferences import (
    Preferences,
    decode_preferences,
    encode_preferences,
)
from fluid_tracker.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class PreferencesService:
    """Reads and writes the preferences record."""

    store: KeyValueStore
    key: str
    defaults: Preferences

    def get_preferences(self) -> Preferences:
        """Return stored preferences, or the defaults when none are stored."""
        raw = self.store.get(self.key)
        if raw is None:
            return self.defaults
        return decode_preferences(raw)

    def set_preferences(
        self, use_oz: bool | None = None, use_meridiem: bool | None = None
    ) -> Preferences:
        """Update the given preferences and persist the result."""
        try:
            current = self.get_preferences()
        except RecordDecodeError:
            logger.warning("Stored preferences are malformed; rewriting from defaults")
            current = self.defaults
        changes: dict[str, bool] = {}
        if use_oz is not None:
            changes["use_oz"] = use_oz
        if use_meridiem is not None:
            changes["use_meridiem"] = use_meridiem
        updated = replace(current, **changes)
        self.store.set(self.key, encode_preferences(updated))
        return updated
