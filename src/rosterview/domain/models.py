"""Domain models for the weekly roster view.

This module contains the records exchanged with the surrounding application
(shifts, availability entries, compliance issues) and the structures the
layout engine produces for renderers (timeline cells, day timelines).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, both cut to the minute.

    Negative if end precedes start.
    """
    start = start.replace(second=0, microsecond=0)
    end = end.replace(second=0, microsecond=0)
    return int((end - start).total_seconds() // 60)


class Severity(Enum):
    """Severity of a compliance annotation, most severe first."""

    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    WARNING = "WARNING"
    MINOR = "MINOR"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """Higher rank means more severe."""
        return _SEVERITY_RANK[self]

    @property
    def bucket(self) -> "SeverityBucket":
        """Display bucket this severity is counted under."""
        return _SEVERITY_BUCKET[self]

    @classmethod
    def parse(cls, raw: str) -> "Severity":
        """Parse a severity name, case-insensitively."""
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown severity: {raw!r}")


class SeverityBucket(Enum):
    """Coarse grouping of severities used for counters and colours."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


_SEVERITY_RANK = {
    Severity.CRITICAL: 4,
    Severity.MAJOR: 3,
    Severity.WARNING: 2,
    Severity.MINOR: 1,
    Severity.INFO: 0,
}

_SEVERITY_BUCKET = {
    Severity.CRITICAL: SeverityBucket.CRITICAL,
    Severity.MAJOR: SeverityBucket.MAJOR,
    Severity.WARNING: SeverityBucket.MAJOR,
    Severity.MINOR: SeverityBucket.MINOR,
    Severity.INFO: SeverityBucket.MINOR,
}


@dataclass(frozen=True)
class Annotation:
    """A compliance note attached to a shift.

    Attributes:
        severity: How serious the note is.
        text: Human-readable description.
    """

    severity: Severity
    text: str


@dataclass(frozen=True)
class Category:
    """Grouping key for shifts within a day (usually a work station).

    A category is either named or unassigned. Raw station values are
    normalised once through ``Category.of`` so that grouping never compares
    against sentinel strings.

    Attributes:
        name: Station name, or None for the unassigned category.
    """

    name: Optional[str] = None

    UNASSIGNED = None  # replaced below with the singleton instance

    @classmethod
    def of(cls, raw: Optional[str]) -> "Category":
        """Normalise a raw station value into a category."""
        if raw is None:
            return cls.UNASSIGNED
        name = str(raw).strip()
        if not name:
            return cls.UNASSIGNED
        return cls(name)

    @property
    def is_unassigned(self) -> bool:
        return self.name is None

    @property
    def sort_key(self) -> tuple:
        """Named categories alphabetically, unassigned last."""
        if self.name is None:
            return (1, "")
        return (0, self.name)

    def label(self, unassigned_label: str = "No Station") -> str:
        """Display label for this category."""
        return unassigned_label if self.name is None else self.name

    def __repr__(self) -> str:
        if self.name is None:
            return "Category(<unassigned>)"
        return f"Category({self.name!r})"


Category.UNASSIGNED = Category(None)


@dataclass(frozen=True)
class Shift:
    """A single time-bounded work shift.

    The calendar day a shift belongs to is the date of ``start``.

    Attributes:
        employee_id: Opaque employee identifier.
        start: Start instant (minute resolution).
        end: End instant (exclusive).
        category: Station grouping; see ``Category.of``.
        annotations: Compliance notes carried by the shift itself.
        employee_name: Display name supplied upstream, if any.
        shift_code: Shift code supplied upstream, if any.
        is_working: False for rostered-off entries.
    """

    employee_id: str
    start: datetime
    end: datetime
    category: Category = Category.UNASSIGNED
    annotations: tuple[Annotation, ...] = ()
    employee_name: Optional[str] = None
    shift_code: Optional[str] = None
    is_working: bool = True

    @property
    def day(self) -> date:
        """Calendar day the shift is placed on."""
        return self.start.date()

    @property
    def duration_minutes(self) -> int:
        return minutes_between(self.start, self.end)

    def overlaps(self, other: "Shift") -> bool:
        """Half-open overlap test; touching shifts do not overlap."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class AvailabilityRecord:
    """An employee's declared availability for one calendar date.

    Attributes:
        employee_id: Employee the record belongs to.
        date: Calendar date (no time component).
        shift_code: Shift code the employee is available for.
        store: Store reference.
        station: Station reference, if restricted to one.
        notes: Free-text notes.
    """

    employee_id: str
    date: date
    shift_code: Optional[str] = None
    store: Optional[str] = None
    station: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Employee:
    """Employee reference data used for display lookups."""

    id: str
    first_name: str
    last_name: str = ""
    station: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ComplianceIssue:
    """A compliance finding returned by the roster-generation service.

    Attributes:
        issue: Description of the finding.
        severity: Finding severity.
        employee_id: Employee the finding concerns, if any.
        suggestion: Suggested remedy, if any.
        details: Extra structured data passed through unchanged.
    """

    issue: str
    severity: Severity
    employee_id: Optional[str] = None
    suggestion: Optional[str] = None
    details: dict = field(default_factory=dict, compare=False, hash=False)

    def as_annotation(self) -> Annotation:
        return Annotation(severity=self.severity, text=self.issue)


@dataclass
class RosterResult:
    """Normalised roster-generation response.

    Attributes:
        status: Service status string (ok, partial, requires_human_review, ...).
        shifts: Generated shifts.
        issues: Compliance issues.
        passed: Whether compliance passed overall.
        week_start: Week start reported by the service.
        store_id: Store the roster was generated for.
    """

    status: str
    shifts: list[Shift] = field(default_factory=list)
    issues: list[ComplianceIssue] = field(default_factory=list)
    passed: bool = True
    week_start: Optional[date] = None
    store_id: Optional[str] = None


@dataclass
class LayoutConfig:
    """Configuration for the timeline layout engine.

    Attributes:
        unassigned_label: Label renderers show for the unassigned category.
    """

    unassigned_label: str = "No Station"


@dataclass(frozen=True)
class TimelineCell:
    """Placement of one shift in the weekly timeline.

    Offsets and heights are in minutes; renderers scale them to pixels or
    terminal rows. Horizontal placement within the category lane is
    ``column_index / column_count`` with width ``1 / column_count``.

    Attributes:
        shift: The source shift (not a copy).
        day_index: 0 (Monday) .. 6 (Sunday).
        column_index: Lane column within the overlap cluster.
        column_count: Columns needed by the shift's overlap cluster.
        top_offset_minutes: Minutes since the day's earliest shift start.
        height_minutes: Shift duration in minutes.
        annotations: Shift annotations followed by matching external issues.
        input_index: Position of the shift in the caller's input list.
    """

    shift: Shift
    day_index: int
    column_index: int
    column_count: int
    top_offset_minutes: int
    height_minutes: int
    annotations: tuple[Annotation, ...] = ()
    input_index: int = 0

    @property
    def category(self) -> Category:
        return self.shift.category

    @property
    def date(self) -> date:
        return self.shift.day

    @property
    def end_offset_minutes(self) -> int:
        return self.top_offset_minutes + self.height_minutes

    @property
    def worst_severity(self) -> Optional[Severity]:
        """Most severe annotation, or None if the cell has none."""
        if not self.annotations:
            return None
        return max((a.severity for a in self.annotations), key=lambda s: s.rank)


@dataclass
class DayTimeline:
    """All placed cells for one day of the window.

    Attributes:
        date: Calendar date.
        day_index: Position within the window.
        earliest_start: Earliest shift start of the day (offset origin).
        latest_end: Latest shift end of the day.
        categories: Categories present, in display order.
        cells: Cells of the day, ordered by category then start.
    """

    date: date
    day_index: int
    earliest_start: Optional[datetime] = None
    latest_end: Optional[datetime] = None
    categories: list[Category] = field(default_factory=list)
    cells: list[TimelineCell] = field(default_factory=list)

    @property
    def span_minutes(self) -> int:
        """Minutes from the earliest start to the latest end."""
        if self.earliest_start is None or self.latest_end is None:
            return 0
        return minutes_between(self.earliest_start, self.latest_end)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def cells_for(self, category: Category) -> list[TimelineCell]:
        return [c for c in self.cells if c.category == category]
