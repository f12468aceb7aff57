"""Employee x day availability lookup for the weekly grid view."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from rosterview.domain.models import AvailabilityRecord
from rosterview.domain.week import WeekWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityRow:
    """One employee's availability across the window.

    Attributes:
        employee_id: Employee the row belongs to.
        cells: Seven entries, Monday first; None where no record exists.
    """

    employee_id: str
    cells: tuple[Optional[AvailabilityRecord], ...]

    @property
    def available_days(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)


class AvailabilityIndex:
    """Lookup from (employee ID, date) to at most one availability record.

    Only records whose date falls inside the window are retained. When
    several records share an (employee, date) pair, the last one in input
    order wins.

    Example:
        >>> index = AvailabilityIndex.build(records, window)
        >>> index.lookup("E1", date(2024, 12, 9))
    """

    def __init__(
        self,
        window: WeekWindow,
        entries: dict[tuple[str, date], AvailabilityRecord],
    ):
        self.window = window
        self._entries = entries

    @classmethod
    def build(
        cls,
        records: Iterable[AvailabilityRecord],
        window: WeekWindow,
    ) -> "AvailabilityIndex":
        """Index records for one window.

        Args:
            records: Availability records in any order.
            window: The week the index covers.
        """
        entries: dict[tuple[str, date], AvailabilityRecord] = {}
        ignored = 0
        replaced = 0
        for record in records:
            if not window.contains(record.date):
                ignored += 1
                continue
            key = (record.employee_id, record.date)
            if key in entries:
                replaced += 1
            entries[key] = record

        if ignored or replaced:
            logger.debug(
                "Availability for week %s: %d outside window ignored, %d duplicates replaced",
                window.iso_start,
                ignored,
                replaced,
            )
        return cls(window, entries)

    def lookup(self, employee_id: str, day: date) -> Optional[AvailabilityRecord]:
        """Return the record for an employee on a day, or None."""
        return self._entries.get((employee_id, day))

    def records_for(self, employee_id: str) -> list[AvailabilityRecord]:
        """All records of one employee, Monday first."""
        return [
            record
            for record in (self.lookup(employee_id, d) for d in self.window.days)
            if record is not None
        ]

    def matrix(self, employee_ids: Sequence[str]) -> list[AvailabilityRow]:
        """Build grid rows for the given employees, in the given order."""
        return [
            AvailabilityRow(
                employee_id=employee_id,
                cells=tuple(self.lookup(employee_id, d) for d in self.window.days),
            )
            for employee_id in employee_ids
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[str, date]) -> bool:
        return key in self._entries
