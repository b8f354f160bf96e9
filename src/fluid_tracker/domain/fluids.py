"""Fluid value objects and their storage record codec.

Record layout (``2 + len(name)`` words)::

    Shhhhhhh000LLLLL 0000rrrrggggbbbb <name>

- S: always shown
- h: hydration percent (0-100)
- L: name length in UTF-16 code units (0-31)
- r, g, b: color nibbles
"""

import logging
import re
from dataclasses import dataclass

from fluid_tracker.domain.codec import (
    RecordDecodeError,
    WordCursor,
    from_code_units,
    pack_words,
    to_code_units,
)
from fluid_tracker.domain.units import clamp_int

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#999"
MAX_NAME_LENGTH = 31
RECORD_SEPARATOR = "\x1e"

_COLOR_RE = re.compile(r"^#[0-9a-f]{3}$")


@dataclass(frozen=True)
class Fluid:
    """A reusable definition of something that can be drunk."""

    name: str
    color: str
    hydration_percent: int
    always_shown: bool

    def __post_init__(self) -> None:
        # Every field must fit its record bits; equal records mean equal fluids.
        color = str(self.color).lower()
        if not _COLOR_RE.match(color):
            raise ValueError(f"color {self.color!r} is not a 3-digit hex code")
        if isinstance(self.hydration_percent, bool) or not isinstance(
            self.hydration_percent, int
        ):
            raise ValueError(f"hydration {self.hydration_percent!r} is not an integer")
        if not 0 <= self.hydration_percent <= 100:
            raise ValueError(f"hydration {self.hydration_percent} is outside 0-100")
        if len(to_code_units(self.name)) > MAX_NAME_LENGTH:
            raise ValueError(f"name {self.name!r} is longer than {MAX_NAME_LENGTH}")
        object.__setattr__(self, "color", color)
        object.__setattr__(self, "always_shown", bool(self.always_shown))

    @classmethod
    def create(
        cls,
        name: object,
        color: object = DEFAULT_COLOR,
        hydration: object = 100,
        always_shown: object = False,
    ) -> "Fluid":
        """Build a fluid from loosely validated input, normalizing every field."""
        clean_name = _truncate_name(str(name).replace(RECORD_SEPARATOR, " "))
        clean_color = str(color).lower()
        if not _COLOR_RE.match(clean_color):
            logger.warning(
                "Color value %r for %s is not a valid 3-digit hex code",
                clean_color,
                clean_name,
            )
            clean_color = DEFAULT_COLOR
        return cls(
            name=clean_name,
            color=clean_color,
            hydration_percent=clamp_int(hydration, 0, 100),
            always_shown=bool(always_shown),
        )

    @property
    def hydration(self) -> float:
        """Proportion of the amount that counts as water."""
        return self.hydration_percent / 100

    @property
    def encoded(self) -> str:
        return encode_fluid(self)


def encode_fluid(fluid: Fluid) -> str:
    """Encode a fluid into its record text."""
    units = to_code_units(fluid.name)
    header = (
        (int(fluid.always_shown) << 15) | (fluid.hydration_percent << 8) | len(units)
    )
    return pack_words(header, int(fluid.color[1:4], 16)) + units


def decode_fluid(text: str, offset: int = 0) -> tuple[Fluid, int]:
    """Decode the fluid record at ``offset`` and return it with the next offset."""
    cursor = WordCursor(text, offset)
    header = cursor.read_word()
    color = f"#{cursor.read_word() & 0x0FFF:03x}"
    units = cursor.read_text(header & 0b11111)
    fluid = Fluid(
        name=from_code_units(units),
        color=color,
        hydration_percent=min(100, (header >> 8) & 0b1111111),
        always_shown=bool(header >> 15),
    )
    return fluid, cursor.offset


def decode_fluids(text: str | None) -> list[Fluid]:
    """Decode a concatenation of fluid records; list position is the fluid index."""
    if not text:
        return []
    fluids: list[Fluid] = []
    offset = 0
    while offset < len(text):
        try:
            fluid, offset = decode_fluid(text, offset)
        except RecordDecodeError as exc:
            raise RecordDecodeError(f"fluid #{len(fluids)}: {exc}") from exc
        fluids.append(fluid)
    return fluids


def _truncate_name(name: str) -> str:
    units = to_code_units(name)[:MAX_NAME_LENGTH]
    if units and 0xD800 <= ord(units[-1]) <= 0xDBFF:
        units = units[:-1]
    return from_code_units(units)


# Built-in fluid offered on first start.
WATER = Fluid.create("Water", "#6CF", 100, always_shown=True)
