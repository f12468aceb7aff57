"""Monday-start week windows.

All grouping in the roster view is relative to a ``WeekWindow``: the seven
calendar days from a Monday through the following Sunday.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Union

DAYS_PER_WEEK = 7


class WeekDirection(Enum):
    """Direction for stepping a window."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def delta_days(self) -> int:
        return DAYS_PER_WEEK if self is WeekDirection.FORWARD else -DAYS_PER_WEEK


@dataclass(frozen=True)
class WeekWindow:
    """A canonical Monday-start 7-day window.

    Instances are immutable; navigation returns a new window.

    Example:
        >>> window = WeekWindow.canonicalize(date(2024, 12, 11))
        >>> window.start_date
        datetime.date(2024, 12, 9)
        >>> window.display_range()
        '9 Dec – 15 Dec 2024'

    Attributes:
        start_date: The Monday the window begins on.
    """

    start_date: date

    def __post_init__(self):
        if isinstance(self.start_date, datetime):
            object.__setattr__(self, "start_date", self.start_date.date())
        if self.start_date.weekday() != 0:
            raise ValueError(
                f"WeekWindow must start on a Monday, got {self.start_date} "
                f"({self.start_date.strftime('%A')}); use WeekWindow.canonicalize"
            )

    @classmethod
    def canonicalize(cls, any_date: Union[date, datetime]) -> "WeekWindow":
        """Return the window containing ``any_date``.

        Args:
            any_date: Any calendar date or datetime (the time part is ignored).
        """
        if isinstance(any_date, datetime):
            any_date = any_date.date()
        return cls(any_date - timedelta(days=any_date.weekday()))

    @property
    def end_date(self) -> date:
        """The Sunday the window ends on (inclusive)."""
        return self.start_date + timedelta(days=DAYS_PER_WEEK - 1)

    @property
    def days(self) -> tuple[date, ...]:
        """The seven dates of the window, Monday first."""
        return tuple(self.start_date + timedelta(days=i) for i in range(DAYS_PER_WEEK))

    @property
    def iso_start(self) -> str:
        """Start date as YYYY-MM-DD, as sent to the roster service."""
        return self.start_date.isoformat()

    def step(self, direction: WeekDirection) -> "WeekWindow":
        """Return the window exactly one week forward or backward."""
        return WeekWindow(self.start_date + timedelta(days=direction.delta_days))

    def next(self) -> "WeekWindow":
        return self.step(WeekDirection.FORWARD)

    def previous(self) -> "WeekWindow":
        return self.step(WeekDirection.BACKWARD)

    def contains(self, d: Union[date, datetime]) -> bool:
        """Check whether a date (or the date of a datetime) lies in the window."""
        if isinstance(d, datetime):
            d = d.date()
        return self.start_date <= d <= self.end_date

    def day_index(self, d: Union[date, datetime]) -> int:
        """Index (0 = Monday) of a date within the window.

        Raises:
            ValueError: If the date is outside the window.
        """
        if isinstance(d, datetime):
            d = d.date()
        if not self.contains(d):
            raise ValueError(f"{d} is outside the week of {self.start_date}")
        return (d - self.start_date).days

    def display_range(self) -> str:
        """Format the window as 'D Mon – D Mon YYYY' using the last day's year."""
        end = self.end_date
        return (
            f"{self.start_date.day} {self.start_date.strftime('%b')} – "
            f"{end.day} {end.strftime('%b')} {end.year}"
        )

    def __str__(self) -> str:
        return self.display_range()
