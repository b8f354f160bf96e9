"""Calendar arithmetic: month navigation, storage keys and calendar grids."""

import calendar
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

DECEMBER = 12
WEEK_LENGTH = 7
DEFAULT_KEY_PREFIX = "moist"

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, honoring proleptic Gregorian leap years."""
    return calendar.monthrange(year, month)[1]


def storage_key_for_day(
    year: int, month: int, day: int, prefix: str = DEFAULT_KEY_PREFIX
) -> str:
    """Return the key addressing one day's log, e.g. ``moist:20240229``."""
    return f"{prefix}:{year:04d}{month:02d}{day:02d}"


@dataclass(frozen=True)
class Month:
    """A calendar month; ``month`` starts at 1 for January."""

    year: int
    month: int

    @classmethod
    def from_date(cls, value: date) -> "Month":
        return cls(value.year, value.month)

    def next(self) -> "Month":
        if self.month >= DECEMBER:
            return Month(self.year + 1, 1)
        return Month(self.year, self.month + 1)

    def previous(self) -> "Month":
        if self.month <= 1:
            return Month(self.year - 1, DECEMBER)
        return Month(self.year, self.month - 1)

    @property
    def days(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def label(self) -> str:
        """Short display name, e.g. ``February '24``."""
        return f"{_MONTH_NAMES[self.month - 1]} '{self.year % 100:02d}"

    def storage_key(self, day: int, prefix: str = DEFAULT_KEY_PREFIX) -> str:
        return storage_key_for_day(self.year, self.month, day, prefix)

    def first_weekday(self) -> int:
        """Weekday of day 1, with 0 meaning Sunday."""
        return (date(self.year, self.month, 1).weekday() + 1) % WEEK_LENGTH


@dataclass(frozen=True)
class CalendarCell:
    """One day of a calendar grid."""

    day: int
    key: str
    has_data: bool
    is_today: bool

    @property
    def openable(self) -> bool:
        return self.has_data or self.is_today


@dataclass(frozen=True)
class CalendarGrid:
    """Seven-column description of a month; ``None`` cells are leading blanks."""

    month: Month
    label: str
    leading_blanks: int
    rows: list[list[CalendarCell | None]]


def build_calendar_grid(
    month: Month,
    today: date,
    has_data: Callable[[str], bool],
    prefix: str = DEFAULT_KEY_PREFIX,
) -> CalendarGrid:
    """Describe a month as rows of seven cells, starting on Sunday.

    ``has_data`` is asked once per day key. The final row is not padded.
    """
    blanks = month.first_weekday()
    cells: list[CalendarCell | None] = [None] * blanks
    for day in range(1, month.days + 1):
        key = month.storage_key(day, prefix)
        cells.append(
            CalendarCell(
                day=day,
                key=key,
                has_data=has_data(key),
                is_today=today == date(month.year, month.month, day),
            )
        )
    rows = [cells[i : i + WEEK_LENGTH] for i in range(0, len(cells), WEEK_LENGTH)]
    return CalendarGrid(month=month, label=month.label, leading_blanks=blanks, rows=rows)
