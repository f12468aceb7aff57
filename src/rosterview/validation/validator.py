"""Validation of produced timeline layouts.

This module re-checks a finished TimelineLayout independently of the engine
that built it, so renderers and tests can rely on:
- No two shifts sharing a station column overlap in time
- Every overlap cluster uses exactly as many columns as its busiest instant
- Vertical offsets and heights match the shift times
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rosterview.domain.models import DayTimeline, TimelineCell, minutes_between
from rosterview.layout.engine import TimelineLayout
from rosterview.layout.overlap import Interval, max_concurrency


class ValidationErrorType(Enum):
    """Types of layout validation errors."""

    COLUMN_COLLISION = "column_collision"
    COLUMN_OUT_OF_RANGE = "column_out_of_range"
    COLUMN_COUNT_NOT_OPTIMAL = "column_count_not_optimal"
    CLUSTER_COUNT_MISMATCH = "cluster_count_mismatch"
    WRONG_DAY = "wrong_day"
    OFFSET_MISMATCH = "offset_mismatch"
    HEIGHT_MISMATCH = "height_mismatch"
    NON_POSITIVE_HEIGHT = "non_positive_height"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    day_index: Optional[int] = None
    employee_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.day_index is not None:
            parts.append(f"Day {self.day_index}:")
        if self.employee_id:
            parts.append(f"Employee {self.employee_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a layout."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False


class LayoutValidator:
    """Validates timeline layouts.

    Example:
        >>> result = LayoutValidator().validate(layout)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def validate(self, layout: TimelineLayout) -> ValidationResult:
        """Validate every day of a layout."""
        result = ValidationResult(is_valid=True)
        for day in layout.days:
            self._validate_geometry(day, result)
            for category in day.categories:
                cells = day.cells_for(category)
                self._validate_columns(day, cells, result)
                self._validate_clusters(day, cells, result)
        return result

    def _validate_geometry(self, day: DayTimeline, result: ValidationResult) -> None:
        """Check day placement, offsets and heights of each cell."""
        if day.is_empty:
            return

        earliest = min(cell.shift.start for cell in day.cells)
        for cell in day.cells:
            shift = cell.shift
            if cell.day_index != day.day_index or shift.day != day.date:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.WRONG_DAY,
                        message=f"Shift starting {shift.start} placed on {day.date}",
                        day_index=day.day_index,
                        employee_id=shift.employee_id,
                    )
                )

            expected_offset = minutes_between(earliest, shift.start)
            if cell.top_offset_minutes != expected_offset:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.OFFSET_MISMATCH,
                        message=(
                            f"Top offset {cell.top_offset_minutes} != {expected_offset}"
                        ),
                        day_index=day.day_index,
                        employee_id=shift.employee_id,
                    )
                )

            if cell.height_minutes <= 0:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.NON_POSITIVE_HEIGHT,
                        message=f"Height {cell.height_minutes} is not positive",
                        day_index=day.day_index,
                        employee_id=shift.employee_id,
                    )
                )
            elif cell.height_minutes != shift.duration_minutes:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.HEIGHT_MISMATCH,
                        message=(
                            f"Height {cell.height_minutes} != duration "
                            f"{shift.duration_minutes}"
                        ),
                        day_index=day.day_index,
                        employee_id=shift.employee_id,
                    )
                )

    def _validate_columns(
        self,
        day: DayTimeline,
        cells: list[TimelineCell],
        result: ValidationResult,
    ) -> None:
        """Check column ranges and that no column holds overlapping shifts."""
        for cell in cells:
            if not 0 <= cell.column_index < cell.column_count:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.COLUMN_OUT_OF_RANGE,
                        message=(
                            f"Column {cell.column_index} outside 0..{cell.column_count - 1}"
                        ),
                        day_index=day.day_index,
                        employee_id=cell.shift.employee_id,
                    )
                )

        for i, a in enumerate(cells):
            for b in cells[i + 1 :]:
                if a.column_index == b.column_index and a.shift.overlaps(b.shift):
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.COLUMN_COLLISION,
                            message=(
                                f"{a.shift.employee_id} {a.shift.start:%H:%M}-"
                                f"{a.shift.end:%H:%M} collides with "
                                f"{b.shift.employee_id} {b.shift.start:%H:%M}-"
                                f"{b.shift.end:%H:%M} in column {a.column_index}"
                            ),
                            day_index=day.day_index,
                            details={"category": a.category.name},
                        )
                    )

    def _validate_clusters(
        self,
        day: DayTimeline,
        cells: list[TimelineCell],
        result: ValidationResult,
    ) -> None:
        """Check each overlap cluster reports its peak concurrency."""
        ordered = sorted(cells, key=lambda c: (c.shift.start, c.input_index))

        clusters: list[list[TimelineCell]] = []
        cluster_end = None
        for cell in ordered:
            if cluster_end is None or cell.shift.start >= cluster_end:
                clusters.append([])
                cluster_end = cell.shift.end
            clusters[-1].append(cell)
            cluster_end = max(cluster_end, cell.shift.end)

        for cluster in clusters:
            peak = max_concurrency(
                [
                    Interval(c.shift.start, c.shift.end)
                    for c in cluster
                    if c.shift.end > c.shift.start
                ]
            )
            counts = {c.column_count for c in cluster}
            if len(counts) > 1:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.CLUSTER_COUNT_MISMATCH,
                        message=f"Cluster reports differing column counts {sorted(counts)}",
                        day_index=day.day_index,
                    )
                )
            elif counts != {peak}:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.COLUMN_COUNT_NOT_OPTIMAL,
                        message=(
                            f"Cluster uses {counts.pop()} columns, peak overlap is {peak}"
                        ),
                        day_index=day.day_index,
                    )
                )
