"""Flat tabular export of a week's roster."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

import pandas as pd

from rosterview.domain.models import LayoutConfig, Shift
from rosterview.domain.week import WeekWindow
from rosterview.layout.engine import partition_shifts

logger = logging.getLogger(__name__)

COLUMNS = ["date", "employee_id", "employee_name", "start", "end", "station", "status"]


@dataclass
class RosterExporter:
    """Exports a week's shifts as one row per shift.

    Rows follow the same day and station grouping as the timeline view, so
    the CSV reads in the order managers see on screen:
    - date
    - employee_id
    - employee_name
    - start / end (HH:MM)
    - station
    - status (Working / Off)

    Shifts the layout engine would skip (malformed or outside the week) are
    not exported.
    """

    config: LayoutConfig = field(default_factory=LayoutConfig)

    def to_frame(
        self,
        shifts: Sequence[Shift],
        window: WeekWindow,
        employee_names: Optional[Mapping[str, str]] = None,
    ) -> pd.DataFrame:
        """Build the export table.

        Args:
            shifts: Shifts in caller order.
            window: Week being exported.
            employee_names: Employee ID to display name. Falls back to the
                name carried on the shift, then to "Unknown".
        """
        names = employee_names or {}
        partition = partition_shifts(shifts, window)

        rows: list[dict] = []
        for group in partition.groups:
            for shift in group.shifts:
                rows.append(
                    {
                        "date": shift.day.isoformat(),
                        "employee_id": shift.employee_id,
                        "employee_name": names.get(shift.employee_id)
                        or shift.employee_name
                        or "Unknown",
                        "start": shift.start.strftime("%H:%M"),
                        "end": shift.end.strftime("%H:%M"),
                        "station": group.category.label(self.config.unassigned_label),
                        "status": "Working" if shift.is_working else "Off",
                    }
                )

        return pd.DataFrame(rows, columns=COLUMNS)

    def export(
        self,
        shifts: Sequence[Shift],
        window: WeekWindow,
        output_dir: Union[str, Path],
        employee_names: Optional[Mapping[str, str]] = None,
        store_id: Optional[str] = None,
    ) -> Path:
        """Write the export table to ``roster_<week start>[_<store>].csv``."""
        df = self.to_frame(shifts, window, employee_names)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        filename = f"roster_{window.iso_start}"
        if store_id:
            filename += f"_{store_id[:8]}"
        out_path = output_dir / f"{filename}.csv"
        df.to_csv(out_path, index=False)

        logger.info("Exported %d shifts to %s", len(df), out_path)
        return out_path
