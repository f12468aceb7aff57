"""Tests for the employee x day availability index."""

from datetime import date

import pytest

from rosterview.domain.models import AvailabilityRecord
from rosterview.domain.week import WeekWindow
from rosterview.layout.availability import AvailabilityIndex


@pytest.fixture
def window():
    """The week of Monday 9 Dec 2024."""
    return WeekWindow.canonicalize(date(2024, 12, 9))


def make_record(employee_id: str, d: date, code: str = "1F", **kwargs) -> AvailabilityRecord:
    return AvailabilityRecord(employee_id=employee_id, date=d, shift_code=code, **kwargs)


class TestAvailabilityIndex:
    """Tests for AvailabilityIndex."""

    def test_lookup_present(self, window):
        record = make_record("E1", date(2024, 12, 10))
        index = AvailabilityIndex.build([record], window)

        assert index.lookup("E1", date(2024, 12, 10)) is record

    def test_lookup_absent(self, window):
        index = AvailabilityIndex.build([make_record("E1", date(2024, 12, 10))], window)

        assert index.lookup("E1", date(2024, 12, 11)) is None
        assert index.lookup("E2", date(2024, 12, 10)) is None

    def test_last_record_wins(self, window):
        """Duplicates for one employee and date resolve to the later record."""
        r1 = make_record("E1", date(2024, 12, 10), "1F")
        r2 = make_record("E1", date(2024, 12, 10), "2F")

        index = AvailabilityIndex.build([r1, r2], window)

        assert index.lookup("E1", date(2024, 12, 10)) is r2
        assert len(index) == 1

    def test_records_outside_window_ignored(self, window):
        records = [
            make_record("E1", date(2024, 12, 8)),
            make_record("E1", date(2024, 12, 16)),
            make_record("E1", date(2024, 12, 15)),
        ]
        index = AvailabilityIndex.build(records, window)

        assert len(index) == 1
        assert ("E1", date(2024, 12, 15)) in index
        assert index.lookup("E1", date(2024, 12, 16)) is None

    def test_empty_input(self, window):
        index = AvailabilityIndex.build([], window)
        assert len(index) == 0
        assert index.matrix(["E1"])[0].cells == (None,) * 7

    def test_records_for_is_monday_first(self, window):
        records = [
            make_record("E1", date(2024, 12, 14), "S"),
            make_record("E1", date(2024, 12, 9), "1F"),
            make_record("E2", date(2024, 12, 10), "2F"),
        ]
        index = AvailabilityIndex.build(records, window)

        assert [r.shift_code for r in index.records_for("E1")] == ["1F", "S"]

    def test_matrix_rows(self, window):
        records = [
            make_record("E1", date(2024, 12, 9), "1F", station="Grill"),
            make_record("E2", date(2024, 12, 15), "2F"),
        ]
        index = AvailabilityIndex.build(records, window)

        rows = index.matrix(["E2", "E1", "E3"])

        assert [r.employee_id for r in rows] == ["E2", "E1", "E3"]
        assert rows[0].cells[6].shift_code == "2F"
        assert rows[1].cells[0].station == "Grill"
        assert rows[1].available_days == 1
        assert rows[2].available_days == 0
        assert all(len(r.cells) == 7 for r in rows)
