"""Weekly timeline layout.

The engine turns a flat list of shifts into placement geometry for a
weekly roster view:

1. Shifts are partitioned by the calendar date of their start, then by
   category (station). Shifts that cannot be placed are reported as
   diagnostics instead of raising.
2. Each (day, category) group is handed to the OverlapPartitioner, which
   resolves overlaps into parallel columns.
3. Vertical geometry is expressed in minutes from the day's earliest shift
   start, taken across all categories so that every lane of a day shares one
   time scale.

Shifts are assigned wholly to their start day. A shift that runs past
midnight keeps its full duration, so its height may extend beyond the end of
the calendar day.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Sequence

from rosterview.domain.compliance import issues_by_employee
from rosterview.domain.models import (
    Category,
    ComplianceIssue,
    DayTimeline,
    LayoutConfig,
    Shift,
    TimelineCell,
    minutes_between,
)
from rosterview.domain.week import WeekWindow
from rosterview.layout.overlap import Interval, OverlapPartitioner

logger = logging.getLogger(__name__)


class DiagnosticType(Enum):
    """Reasons a shift was left out of the layout."""

    MALFORMED_INTERVAL = "malformed_interval"
    OUT_OF_WINDOW_SHIFT = "out_of_window_shift"


@dataclass(frozen=True)
class Diagnostic:
    """A shift that was skipped, and why.

    Attributes:
        diagnostic_type: Reason the shift was skipped.
        message: Human-readable description.
        input_index: Position of the shift in the caller's list.
        shift: The offending shift.
    """

    diagnostic_type: DiagnosticType
    message: str
    input_index: int
    shift: Shift

    def __str__(self) -> str:
        return (
            f"[{self.diagnostic_type.value}] Shift #{self.input_index} "
            f"(employee {self.shift.employee_id}): {self.message}"
        )


@dataclass
class ShiftGroup:
    """Shifts of one category on one day, ordered by start then input order.

    Attributes:
        date: Calendar day.
        day_index: Position of the day in the window.
        category: Shared category.
        entries: (input index, shift) pairs.
    """

    date: date
    day_index: int
    category: Category
    entries: list[tuple[int, Shift]] = field(default_factory=list)

    @property
    def shifts(self) -> list[Shift]:
        return [shift for _, shift in self.entries]


@dataclass
class ShiftPartition:
    """Result of grouping shifts by day and category."""

    groups: list[ShiftGroup] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def ordered_shifts(self) -> list[Shift]:
        """Placeable shifts in display order: day, category, start."""
        return [shift for group in self.groups for shift in group.shifts]


def partition_shifts(shifts: Sequence[Shift], window: WeekWindow) -> ShiftPartition:
    """Group shifts by day and category.

    Shifts that do not end at least one whole minute after they start are
    rejected as malformed; otherwise shifts starting outside the window are
    rejected as out of window. Groups are ordered by day, then by category (named categories
    alphabetically, unassigned last).

    Args:
        shifts: Shifts in caller order.
        window: Week being laid out.
    """
    result = ShiftPartition()
    buckets: dict[tuple[int, Category], list[tuple[int, Shift]]] = defaultdict(list)

    for index, shift in enumerate(shifts):
        if shift.duration_minutes <= 0:
            result.diagnostics.append(
                Diagnostic(
                    diagnostic_type=DiagnosticType.MALFORMED_INTERVAL,
                    message=(
                        f"end {shift.end:%Y-%m-%d %H:%M} is not after "
                        f"start {shift.start:%Y-%m-%d %H:%M}"
                    ),
                    input_index=index,
                    shift=shift,
                )
            )
            continue

        if not window.contains(shift.start):
            result.diagnostics.append(
                Diagnostic(
                    diagnostic_type=DiagnosticType.OUT_OF_WINDOW_SHIFT,
                    message=(
                        f"starts on {shift.day}, outside the week "
                        f"{window.start_date} to {window.end_date}"
                    ),
                    input_index=index,
                    shift=shift,
                )
            )
            continue

        buckets[(window.day_index(shift.start), shift.category)].append((index, shift))

    for day_index, category in sorted(buckets, key=lambda k: (k[0], k[1].sort_key)):
        entries = sorted(buckets[(day_index, category)], key=lambda e: (e[1].start, e[0]))
        result.groups.append(
            ShiftGroup(
                date=window.days[day_index],
                day_index=day_index,
                category=category,
                entries=entries,
            )
        )

    for diagnostic in result.diagnostics:
        logger.warning("Skipping shift: %s", diagnostic)

    return result


@dataclass
class TimelineLayout:
    """Complete layout for one week.

    Attributes:
        window: The week laid out.
        days: Seven DayTimeline entries, Monday first (empty days included).
        diagnostics: Shifts that were skipped.
        config: Configuration the layout was built with.
    """

    window: WeekWindow
    days: list[DayTimeline] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    config: LayoutConfig = field(default_factory=LayoutConfig)

    def category_label(self, category: Category) -> str:
        return category.label(self.config.unassigned_label)

    @property
    def cells(self) -> list[TimelineCell]:
        """All cells, ordered by day, category and start."""
        return [cell for day in self.days for cell in day.cells]

    @property
    def is_empty(self) -> bool:
        return all(day.is_empty for day in self.days)

    def day(self, day_index: int) -> DayTimeline:
        return self.days[day_index]

    def cells_for(self, day_index: int, category: Category) -> list[TimelineCell]:
        return self.days[day_index].cells_for(category)

    def get_summary(self) -> dict:
        """Summary statistics for logging and reports."""
        cells = self.cells
        return {
            "week_start": self.window.start_date,
            "total_cells": len(cells),
            "days_with_shifts": sum(1 for d in self.days if not d.is_empty),
            "categories": len({c.category for c in cells}),
            "max_columns": max((c.column_count for c in cells), default=0),
            "diagnostics": len(self.diagnostics),
        }


class TimelineLayoutEngine:
    """Builds TimelineLayout objects from shift lists.

    The engine holds no state between calls; ``layout`` is a pure function
    of its arguments and the same input always yields the same layout.

    Example:
        >>> engine = TimelineLayoutEngine()
        >>> layout = engine.layout(shifts, WeekWindow.canonicalize(date(2024, 12, 11)))
        >>> for cell in layout.cells:
        ...     print(cell.day_index, cell.column_index, cell.top_offset_minutes)
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        partitioner: Optional[OverlapPartitioner] = None,
    ):
        self.config = config or LayoutConfig()
        self.partitioner = partitioner or OverlapPartitioner()

    def layout(
        self,
        shifts: Sequence[Shift],
        window: WeekWindow,
        issues: Iterable[ComplianceIssue] = (),
    ) -> TimelineLayout:
        """Lay out a week of shifts.

        Args:
            shifts: Shifts in caller order. They are never modified.
            window: The week to lay out.
            issues: External compliance issues; each is attached to every cell
                of the employee it names.

        Returns:
            TimelineLayout with cells and diagnostics.
        """
        partition = partition_shifts(shifts, window)
        issue_index = issues_by_employee(issues)

        days = [DayTimeline(date=d, day_index=i) for i, d in enumerate(window.days)]

        # Common vertical origin per day, across all categories
        for group in partition.groups:
            day = days[group.day_index]
            day.categories.append(group.category)
            for shift in group.shifts:
                if day.earliest_start is None or shift.start < day.earliest_start:
                    day.earliest_start = shift.start
                if day.latest_end is None or shift.end > day.latest_end:
                    day.latest_end = shift.end

        for group in partition.groups:
            day = days[group.day_index]
            intervals = [
                Interval(start=shift.start, end=shift.end, key=index)
                for index, shift in group.entries
            ]
            assignments = self.partitioner.partition(intervals)

            for assignment, (index, shift) in zip(assignments, group.entries):
                external = tuple(
                    issue.as_annotation()
                    for issue in issue_index.get(shift.employee_id, ())
                )
                day.cells.append(
                    TimelineCell(
                        shift=shift,
                        day_index=group.day_index,
                        column_index=assignment.column,
                        column_count=assignment.column_count,
                        top_offset_minutes=minutes_between(day.earliest_start, shift.start),
                        height_minutes=shift.duration_minutes,
                        annotations=shift.annotations + external,
                        input_index=index,
                    )
                )

        layout = TimelineLayout(
            window=window,
            days=days,
            diagnostics=partition.diagnostics,
            config=self.config,
        )
        logger.debug(
            "Laid out week %s: %d shifts in, %d cells, %d skipped",
            window.iso_start,
            len(shifts),
            len(layout.cells),
            len(layout.diagnostics),
        )
        return layout
