"""Per-day aggregate of entries and its storage record.

Record layout (``2 + 3 * len(entries)`` words)::

    U000000000000000 GGGGGGGGGGGGGGGG <entries>

- U: goal and total are in ounces
- G: goal * 10
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from fluid_tracker.domain.codec import RecordDecodeError, WordCursor, pack_words
from fluid_tracker.domain.entries import (
    ENTRY_WORDS,
    Entry,
    decode_entry,
    encode_entry,
)
from fluid_tracker.domain.fluids import Fluid
from fluid_tracker.domain.units import clamp_amount, round_half_up

HEADER_WORDS = 2


@dataclass
class DailyLog:
    """All entries registered on one calendar day."""

    is_oz: bool
    goal: float
    entries: list[Entry] = field(default_factory=list)
    total: float = 0.0

    @classmethod
    def create(cls, goal: object, is_oz: object) -> "DailyLog":
        return cls(is_oz=bool(is_oz), goal=clamp_amount(goal))

    def register(
        self, fluid: Fluid, is_oz: object, amount: object, now: datetime
    ) -> Entry:
        """Append an entry stamped with ``now``'s wall-clock time."""
        entry = Entry.create(fluid, is_oz, amount, now.hour, now.minute)
        self._append(entry)
        return entry

    def with_goal(self, goal: object, is_oz: bool | None = None) -> "DailyLog":
        """Return a copy with a new goal, re-totalling entries if the unit changes."""
        log = DailyLog.create(goal, self.is_oz if is_oz is None else is_oz)
        for entry in self.entries:
            log._append(entry)
        return log

    def _append(self, entry: Entry) -> None:
        self.total += entry.hydrating_amount(self.is_oz)
        self.entries.append(entry)

    @property
    def remaining(self) -> float:
        return max(self.goal - self.total, 0.0)

    @property
    def progress(self) -> float:
        """Share of the goal reached so far; 0 when no goal is set."""
        if self.goal <= 0:
            return 0.0
        return self.total / self.goal


def encode_daily_log(log: DailyLog, index_of: Callable[[Fluid], int]) -> str:
    """Encode a log; ``index_of`` maps each entry's fluid to its registry index."""
    header = pack_words(int(log.is_oz) << 15, int(round_half_up(log.goal * 10)))
    return header + "".join(
        encode_entry(entry, index_of(entry.fluid)) for entry in log.entries
    )


def decode_daily_log(text: str, resolve: Callable[[int], Fluid]) -> DailyLog:
    """Decode a log record, recomputing the total from its entries."""
    body = len(text) - HEADER_WORDS
    if body < 0 or body % ENTRY_WORDS:
        raise RecordDecodeError(
            f"daily log record has {len(text)} words; expected "
            f"{HEADER_WORDS} + {ENTRY_WORDS} * n"
        )
    cursor = WordCursor(text)
    is_oz = bool(cursor.read_word() >> 15)
    log = DailyLog.create(cursor.read_word() / 10, is_oz)
    for offset in range(HEADER_WORDS, len(text), ENTRY_WORDS):
        log._append(decode_entry(text, offset, resolve))
    return log
