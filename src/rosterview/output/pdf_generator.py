"""PDF generation for weekly roster timelines.

This module creates printable PDFs with one page per rostered day:
- An hour grid running down the page from the day's first start to last end
- One lane per station, with overlapping shifts split into columns
- Shift bands coloured by their most severe compliance annotation
- A summary page listing skipped shifts
"""

from io import BytesIO
from pathlib import Path
from typing import Mapping, Optional, Union

from rosterview.domain.models import DayTimeline, SeverityBucket, TimelineCell
from rosterview.layout.engine import TimelineLayout

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    None: (0.78, 0.80, 0.98),  # Indigo, no issues
    SeverityBucket.CRITICAL: (0.99, 0.80, 0.80),  # Red
    SeverityBucket.MAJOR: (1.0, 0.87, 0.70),  # Orange
    SeverityBucket.MINOR: (1.0, 0.95, 0.70),  # Yellow
    "grid": (0.85, 0.85, 0.85),
    "header": (0.93, 0.93, 0.93),
}

BORDER_COLORS = {
    None: (0.39, 0.40, 0.95),
    SeverityBucket.CRITICAL: (0.94, 0.27, 0.27),
    SeverityBucket.MAJOR: (0.98, 0.45, 0.09),
    SeverityBucket.MINOR: (0.92, 0.70, 0.03),
}


def _require_reportlab():
    try:
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas, landscape(letter)


class PDFGenerator:
    """Generates printable weekly timeline PDFs.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(layout, employee_names, "roster.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        min_band_height: float = 14,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.min_band_height = min_band_height

    def generate(
        self,
        layout: TimelineLayout,
        employee_names: Optional[Mapping[str, str]],
        output_path: Union[str, Path],
        include_summary: bool = True,
    ) -> None:
        """Generate the PDF and save it to a file.

        Args:
            layout: The weekly layout to render.
            employee_names: Employee ID to display name.
            output_path: Path to save the PDF.
            include_summary: Whether to add the skipped-shifts page.
        """
        canvas, pagesize = _require_reportlab()
        c = canvas.Canvas(str(output_path), pagesize=pagesize)
        self._draw(c, layout, employee_names or {}, include_summary)
        c.save()

    def generate_to_buffer(
        self,
        layout: TimelineLayout,
        employee_names: Optional[Mapping[str, str]] = None,
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate the PDF and return it as a bytes buffer."""
        canvas, pagesize = _require_reportlab()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        self._draw(c, layout, employee_names or {}, include_summary)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw(
        self,
        c,
        layout: TimelineLayout,
        names: Mapping[str, str],
        include_summary: bool,
    ) -> None:
        days = [day for day in layout.days if not day.is_empty]
        for page_num, day in enumerate(days, 1):
            self._draw_day_page(c, layout, day, names)
            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_num} of {len(days)}",
            )
            c.showPage()

        if include_summary or not days:
            self._draw_summary_page(c, layout)

    def _draw_day_page(
        self,
        c,
        layout: TimelineLayout,
        day: DayTimeline,
        names: Mapping[str, str],
    ) -> None:
        """Draw one day: hour axis on the left, one lane per station."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{day.date.strftime('%A, %B %d, %Y')}  ({layout.window.display_range()})",
        )
        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"{len(day.cells)} shifts - {len(day.categories)} stations",
        )

        # Grid runs on whole hours around the day's span
        lead_minutes = day.earliest_start.minute
        grid_minutes = -(-(day.span_minutes + lead_minutes) // 60) * 60
        grid_hours = grid_minutes // 60

        lane_header = 18
        grid_top = self.page_height - self.margin - 60 - lane_header
        grid_bottom = self.margin + 10
        axis_width = 40
        grid_left = self.margin + axis_width
        grid_width = self.page_width - self.margin - grid_left
        scale = (grid_top - grid_bottom) / grid_minutes

        # Hour lines and labels
        c.setFont("Helvetica", 8)
        for h in range(grid_hours + 1):
            y = grid_top - h * 60 * scale
            c.setStrokeColorRGB(*COLORS["grid"])
            c.setLineWidth(0.5)
            c.line(grid_left, y, grid_left + grid_width, y)
            c.setFillColorRGB(0.4, 0.4, 0.4)
            hour = (day.earliest_start.hour + h) % 24
            c.drawRightString(grid_left - 4, y - 3, f"{hour:02d}:00")

        lane_width = grid_width / len(day.categories)
        for lane, category in enumerate(day.categories):
            lane_x = grid_left + lane * lane_width
            cells = day.cells_for(category)

            c.setFillColorRGB(*COLORS["header"])
            c.rect(lane_x, grid_top, lane_width, lane_header, fill=1, stroke=0)
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica-Bold", 8)
            c.drawCentredString(
                lane_x + lane_width / 2,
                grid_top + 6,
                f"{layout.category_label(category)[:24]} ({len(cells)})",
            )

            c.setStrokeColorRGB(*COLORS["grid"])
            c.line(lane_x, grid_bottom, lane_x, grid_top + lane_header)

            for cell in cells:
                self._draw_cell(
                    c, cell, names, lane_x, lane_width, grid_top, scale, lead_minutes
                )

    def _draw_cell(
        self,
        c,
        cell: TimelineCell,
        names: Mapping[str, str],
        lane_x: float,
        lane_width: float,
        grid_top: float,
        scale: float,
        lead_minutes: int,
    ) -> None:
        """Draw a single shift band from its layout geometry."""
        column_width = lane_width / cell.column_count
        x = lane_x + cell.column_index * column_width + 1
        w = column_width - 2
        top = grid_top - (cell.top_offset_minutes + lead_minutes) * scale
        h = max(cell.height_minutes * scale, self.min_band_height)

        worst = cell.worst_severity
        bucket = worst.bucket if worst else None

        c.setFillColorRGB(*COLORS[bucket])
        c.rect(x, top - h, w, h, fill=1, stroke=0)
        c.setFillColorRGB(*BORDER_COLORS[bucket])
        c.rect(x, top - h, 3, h, fill=1, stroke=0)

        shift = cell.shift
        name = names.get(shift.employee_id) or shift.employee_name or shift.employee_id
        max_chars = max(3, int(w / 4.5))
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 7)
        c.drawString(x + 5, top - 9, name[:max_chars])
        if h >= 24:
            c.setFont("Helvetica", 6)
            c.drawString(x + 5, top - 17, f"{shift.start:%H:%M} - {shift.end:%H:%M}")

    def _draw_summary_page(self, c, layout: TimelineLayout) -> None:
        """Draw the summary page with skipped shifts."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Roster Summary - {layout.window.display_range()}",
        )

        summary = layout.get_summary()
        y = self.page_height - self.margin - 50
        c.setFont("Helvetica", 10)
        for stat in [
            f"Shifts placed: {summary['total_cells']}",
            f"Days with shifts: {summary['days_with_shifts']}",
            f"Stations: {summary['categories']}",
            f"Widest overlap: {summary['max_columns']} columns",
            f"Skipped shifts: {summary['diagnostics']}",
        ]:
            c.drawString(self.margin + 20, y, stat)
            y -= 15

        if layout.diagnostics:
            y -= 10
            c.setFont("Helvetica-Bold", 12)
            c.drawString(self.margin, y, "Skipped Shifts")
            y -= 18
            c.setFont("Helvetica", 8)
            for diagnostic in layout.diagnostics:
                if y < self.margin:
                    break
                c.drawString(self.margin + 20, y, str(diagnostic)[:140])
                y -= 12

        c.showPage()
