"""Log entries and their fixed-size storage record.

Record layout (3 words)::

    U0000HHHHHmmmmmm aaaaaaaaaaaaaaaa IIIIIIIIIIIIIIII

- U: amount is in ounces
- H: hour, m: minute
- a: amount * 10
- I: fluid registry index
"""

from collections.abc import Callable
from dataclasses import dataclass

from fluid_tracker.domain.codec import RecordDecodeError, WordCursor, pack_words
from fluid_tracker.domain.fluids import Fluid
from fluid_tracker.domain.units import (
    clamp_amount,
    clamp_int,
    convert_amount,
    format_amount,
    format_time,
    round_half_up,
)

ENTRY_WORDS = 3


@dataclass(frozen=True)
class Entry:
    """One consumption event."""

    fluid: Fluid
    is_oz: bool
    amount: float
    hour: int
    minute: int

    @classmethod
    def create(
        cls,
        fluid: Fluid,
        is_oz: object,
        amount: object,
        hour: object = 0,
        minute: object = 0,
    ) -> "Entry":
        """Build an entry, clamping every numeric field into range."""
        return cls(
            fluid=fluid,
            is_oz=bool(is_oz),
            amount=clamp_amount(amount),
            hour=clamp_int(hour, 0, 23),
            minute=clamp_int(minute, 0, 59),
        )

    def hydrating_amount(self, to_oz: bool) -> float:
        """Amount that counts as water, expressed in the requested unit."""
        return convert_amount(self.amount, self.is_oz, to_oz) * self.fluid.hydration


@dataclass(frozen=True)
class EntryView:
    """Display projection of an entry."""

    time: str
    amount: str
    fluid: str
    color: str


def encode_entry(entry: Entry, fluid_index: int) -> str:
    """Encode an entry given the registry index of its fluid."""
    if fluid_index < 0:
        raise ValueError(f"fluid {entry.fluid.name!r} has not been saved")
    return pack_words(
        (int(entry.is_oz) << 15) | ((entry.hour & 31) << 6) | (entry.minute & 63),
        int(round_half_up(entry.amount * 10)),
        fluid_index,
    )


def decode_entry(text: str, offset: int, resolve: Callable[[int], Fluid]) -> Entry:
    """Decode the entry record at ``offset``; ``resolve`` maps fluid indices to fluids."""
    cursor = WordCursor(text, offset)
    if cursor.remaining < ENTRY_WORDS:
        raise RecordDecodeError(
            f"entry at word {offset} needs {ENTRY_WORDS} words, "
            f"found {cursor.remaining}"
        )
    packed = cursor.read_word()
    amount = cursor.read_word() / 10
    fluid = resolve(cursor.read_word())
    return Entry.create(
        fluid,
        is_oz=packed >> 15,
        amount=amount,
        hour=(packed >> 6) & 31,
        minute=packed & 63,
    )


def format_entry(entry: Entry, to_oz: bool, use_meridiem: bool) -> EntryView:
    return EntryView(
        time=format_time(entry.hour, entry.minute, use_meridiem),
        amount=format_amount(entry.amount, entry.is_oz, to_oz),
        fluid=entry.fluid.name,
        color=entry.fluid.color,
    )
