"""Wall-clock source for stamping entries."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def wall_clock(timezone_name: str | None = None) -> Clock:
    """Return a clock in the given IANA timezone, or local time when unset."""
    tz = ZoneInfo(timezone_name) if timezone_name else None

    def now() -> datetime:
        return datetime.now(tz=tz)

    return now
