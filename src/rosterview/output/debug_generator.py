"""Plain-text output for weekly layouts.

This module renders a TimelineLayout and an availability matrix as text:
- Per-day, per-station shift lists with column placement
- A character timeline per shift, scaled from the layout offsets
- Skipped shifts (diagnostics)
- The employee x day availability grid
"""

from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from rosterview.domain.models import Employee, SeverityBucket, TimelineCell
from rosterview.layout.availability import AvailabilityIndex
from rosterview.layout.engine import TimelineLayout

BUCKET_MARKS = {
    SeverityBucket.CRITICAL: "!!",
    SeverityBucket.MAJOR: "! ",
    SeverityBucket.MINOR: "? ",
}


class DebugGenerator:
    """Generates text output for layout inspection.

    Args:
        minutes_per_char: Minutes represented by one character of the
            timeline bars.
    """

    def __init__(self, minutes_per_char: int = 30):
        if minutes_per_char <= 0:
            raise ValueError("minutes_per_char must be positive")
        self.minutes_per_char = minutes_per_char

    def generate(
        self,
        layout: TimelineLayout,
        output_path: Union[str, Path],
        employee_names: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Render a layout and save it to a text file.

        Returns:
            The generated text content.
        """
        content = self.generate_to_string(layout, employee_names)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        layout: TimelineLayout,
        employee_names: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Render a layout as text."""
        names = employee_names or {}
        lines = []

        lines.append("=" * 80)
        lines.append(f"WEEKLY ROSTER - {layout.window.display_range()}")
        lines.append("=" * 80)

        summary = layout.get_summary()
        lines.append(f"Shifts placed: {summary['total_cells']}")
        lines.append(f"Days with shifts: {summary['days_with_shifts']}")
        lines.append(f"Widest cluster: {summary['max_columns']} columns")
        lines.append("")

        for day in layout.days:
            if day.is_empty:
                continue

            lines.append("-" * 80)
            lines.append(
                f"{day.date.strftime('%A')} {day.date.isoformat()}  "
                f"({day.earliest_start:%H:%M} - {day.latest_end:%H:%M}, "
                f"{len(day.cells)} shifts, {len(day.categories)} stations)"
            )
            lines.append("-" * 80)

            width = max(1, -(-day.span_minutes // self.minutes_per_char))
            for category in day.categories:
                cells = day.cells_for(category)
                lines.append(f"  [{layout.category_label(category)}] ({len(cells)})")
                for cell in cells:
                    lines.append("    " + self._cell_line(cell, names, width))
            lines.append("")

        if layout.diagnostics:
            lines.append("-" * 80)
            lines.append(f"SKIPPED SHIFTS ({len(layout.diagnostics)})")
            lines.append("-" * 80)
            for diagnostic in layout.diagnostics:
                lines.append(f"  {diagnostic}")
            lines.append("")

        return "\n".join(lines)

    def _cell_line(
        self,
        cell: TimelineCell,
        names: Mapping[str, str],
        width: int,
    ) -> str:
        shift = cell.shift
        name = (names.get(shift.employee_id) or shift.employee_name or shift.employee_id)[:18]
        times = f"{shift.start:%H:%M}-{shift.end:%H:%M}"
        column = f"{cell.column_index + 1}/{cell.column_count}"

        worst = cell.worst_severity
        mark = BUCKET_MARKS[worst.bucket] if worst else "  "

        start_char = cell.top_offset_minutes // self.minutes_per_char
        end_char = max(start_char + 1, -(-cell.end_offset_minutes // self.minutes_per_char))
        bar = " " * start_char + "#" * (end_char - start_char)
        bar = bar.ljust(width)

        return f"{mark}{name:<18} {times} col {column:>5} |{bar}|"

    def availability_to_string(
        self,
        index: AvailabilityIndex,
        employees: Sequence[Employee],
    ) -> str:
        """Render the employee x day availability grid.

        Each cell shows the shift code, or '-' where no record exists.
        """
        days = index.window.days
        header = f"{'Employee':<20}" + "".join(
            f"{d.strftime('%a')} {d.day:>2}".center(10) for d in days
        )

        lines = [f"AVAILABILITY - {index.window.display_range()}", header, "-" * len(header)]
        rows = index.matrix([e.id for e in employees])
        for employee, row in zip(employees, rows):
            cells = "".join(
                ((record.shift_code or "N/A") if record else "-").center(10)
                for record in row.cells
            )
            lines.append(f"{employee.full_name[:20]:<20}{cells}")

        return "\n".join(lines)
