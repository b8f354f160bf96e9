"""User display preferences and their one-word storage record.

``00000000000000MU``: bit 0 (U) prefers ounces, bit 1 (M) uses 12-hour time.
Bit 1 is optional; records written without it read as a 24-hour clock.
"""

from dataclasses import dataclass

from fluid_tracker.domain.codec import RecordDecodeError, pack_words

PREFER_OZ_BIT = 0b01
MERIDIEM_BIT = 0b10


@dataclass(frozen=True)
class Preferences:
    """Display conventions chosen by the user."""

    use_oz: bool
    use_meridiem: bool


def encode_preferences(preferences: Preferences) -> str:
    word = 0
    if preferences.use_oz:
        word |= PREFER_OZ_BIT
    if preferences.use_meridiem:
        word |= MERIDIEM_BIT
    return pack_words(word)


def decode_preferences(text: str) -> Preferences:
    if len(text) != 1:
        raise RecordDecodeError(f"preferences record has {len(text)} words, expected 1")
    word = ord(text)
    return Preferences(
        use_oz=bool(word & PREFER_OZ_BIT),
        use_meridiem=bool(word & MERIDIEM_BIT),
    )
