"""Tests for upstream payload normalisation."""

import json
from datetime import date, datetime

import pytest

from rosterview.domain.models import Category, Severity
from rosterview.ingest.payload import (
    PayloadError,
    load_roster_result,
    parse_availability_records,
    parse_instant,
    parse_roster_result,
)


@pytest.fixture
def roster_payload():
    """A roster-generation response in the service's JSON shape."""
    return {
        "status": "partial",
        "roster": {
            "roster": [
                {
                    "employeeId": "E1",
                    "employeeName": "Alice Smith",
                    "start": "2024-12-09T08:00:00",
                    "end": "2024-12-09T12:00:00",
                    "station": "Grill",
                    "shiftCodeCode": "1F",
                    "isWorking": True,
                },
                {
                    "employeeId": "E2",
                    "start": "2024-12-09T10:00:00.000Z",
                    "end": "2024-12-09T14:30:45Z",
                    "stationCode": "TILL",
                    "isWorking": False,
                },
                {
                    "employeeId": "E3",
                    "start": "2024-12-10T06:30:00+11:00",
                    "end": "2024-12-10T15:00:00+11:00",
                },
            ],
            "metadata": {
                "generatedAt": "2024-12-01T00:00:00Z",
                "storeId": "store-123",
                "weekStart": "2024-12-09",
                "weekEnd": "2024-12-15",
                "employeeCount": 3,
            },
        },
        "compliance": {
            "passed": False,
            "issues": [
                {"issue": "Rest too short", "severity": "CRITICAL", "employeeId": "E1"},
                {"issue": "Low coverage", "severity": "warning"},
                {"issue": "Unknown", "severity": "BLOCKER", "employeeId": "E2"},
            ],
        },
        "agentTrace": [],
    }


class TestParseRosterResult:
    """Tests for parse_roster_result."""

    def test_shifts(self, roster_payload):
        result = parse_roster_result(roster_payload)

        assert [s.employee_id for s in result.shifts] == ["E1", "E2", "E3"]
        first = result.shifts[0]
        assert first.start == datetime(2024, 12, 9, 8, 0)
        assert first.category == Category("Grill")
        assert first.employee_name == "Alice Smith"
        assert first.shift_code == "1F"
        assert first.is_working

    def test_station_code_fallback_and_unassigned(self, roster_payload):
        result = parse_roster_result(roster_payload)

        assert result.shifts[1].category == Category("TILL")
        assert result.shifts[2].category == Category.UNASSIGNED
        assert not result.shifts[1].is_working

    def test_timestamps_keep_wall_clock_at_minute_resolution(self, roster_payload):
        result = parse_roster_result(roster_payload)

        assert result.shifts[1].end == datetime(2024, 12, 9, 14, 30)
        assert result.shifts[2].start == datetime(2024, 12, 10, 6, 30)
        assert result.shifts[2].start.tzinfo is None

    def test_metadata_and_compliance(self, roster_payload):
        result = parse_roster_result(roster_payload)

        assert result.status == "partial"
        assert result.store_id == "store-123"
        assert result.week_start == date(2024, 12, 9)
        assert not result.passed
        assert [(i.issue, i.severity) for i in result.issues] == [
            ("Rest too short", Severity.CRITICAL),
            ("Low coverage", Severity.WARNING),
        ]
        assert result.issues[1].employee_id is None

    def test_empty_roster(self):
        result = parse_roster_result({"status": "ok", "roster": {"roster": []}})

        assert result.shifts == []
        assert result.issues == []
        assert result.passed

    def test_missing_employee_raises(self, roster_payload):
        del roster_payload["roster"]["roster"][0]["employeeId"]

        with pytest.raises(PayloadError, match="employeeId"):
            parse_roster_result(roster_payload)

    def test_bad_timestamp_raises(self, roster_payload):
        roster_payload["roster"]["roster"][0]["start"] = "yesterday"

        with pytest.raises(PayloadError):
            parse_roster_result(roster_payload)

    def test_non_object_payload_raises(self):
        with pytest.raises(PayloadError):
            parse_roster_result([])

    def test_null_metadata_and_compliance(self):
        result = parse_roster_result(
            {"roster": {"roster": [], "metadata": None}, "compliance": None}
        )

        assert result.week_start is None
        assert result.store_id is None
        assert result.passed

    @pytest.mark.parametrize(
        "payload",
        [
            {"roster": "not an object"},
            {"roster": {"roster": {"employeeId": "E1"}}},
            {"roster": {"roster": [], "metadata": ["2024-12-09"]}},
            {"roster": {"roster": []}, "compliance": "failed"},
            {"roster": {"roster": []}, "compliance": {"issues": "none"}},
            {"roster": {"roster": []}, "compliance": {"issues": ["Rest too short"]}},
            {"roster": {"roster": ["E1"]}},
        ],
    )
    def test_bad_shapes_raise_payload_error(self, payload):
        with pytest.raises(PayloadError):
            parse_roster_result(payload)

    def test_numeric_employee_ids_match(self, roster_payload):
        roster_payload["roster"]["roster"][0]["employeeId"] = 101
        roster_payload["compliance"]["issues"][0]["employeeId"] = 101

        result = parse_roster_result(roster_payload)

        assert result.shifts[0].employee_id == "101"
        assert result.issues[0].employee_id == "101"

    @pytest.mark.parametrize(
        "raw, expected",
        [(False, False), ("false", False), ("False", False), ("true", True), (None, True)],
    )
    def test_is_working_flag(self, roster_payload, raw, expected):
        roster_payload["roster"]["roster"][0]["isWorking"] = raw

        result = parse_roster_result(roster_payload)

        assert result.shifts[0].is_working is expected

    def test_is_working_rejects_other_values(self, roster_payload):
        roster_payload["roster"]["roster"][0]["isWorking"] = "sometimes"

        with pytest.raises(PayloadError, match="isWorking"):
            parse_roster_result(roster_payload)

    def test_passed_string_flag(self, roster_payload):
        roster_payload["compliance"]["passed"] = "false"

        assert not parse_roster_result(roster_payload).passed

    def test_load_from_file(self, roster_payload, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(json.dumps(roster_payload), encoding="utf-8")

        result = load_roster_result(path)

        assert len(result.shifts) == 3

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PayloadError):
            load_roster_result(path)


class TestParseHelpers:
    """Tests for timestamp and availability parsing."""

    def test_parse_instant_drops_seconds(self):
        assert parse_instant("2024-12-09T08:15:59") == datetime(2024, 12, 9, 8, 15)

    def test_parse_instant_accepts_datetime(self):
        assert parse_instant(datetime(2024, 12, 9, 8, 15, 30)) == datetime(2024, 12, 9, 8, 15)

    def test_availability_nested_and_flat(self):
        items = [
            {
                "employee": {"id": "E1", "firstName": "Alice"},
                "date": "2024-12-09T00:00:00.000Z",
                "shiftCode": {"code": "1F"},
                "store": {"name": "Central"},
                "station": {"name": "Grill"},
                "notes": "Prefers mornings",
            },
            {"employeeId": "E2", "date": "2024-12-10", "shiftCode": "2F"},
            {"date": "2024-12-11"},
        ]
        records = parse_availability_records(items)

        assert len(records) == 2
        first, second = records
        assert first.employee_id == "E1"
        assert first.date == date(2024, 12, 9)
        assert first.shift_code == "1F"
        assert first.store == "Central"
        assert first.station == "Grill"
        assert first.notes == "Prefers mornings"
        assert second.shift_code == "2F"
        assert second.station is None

    def test_availability_bad_date_raises(self):
        with pytest.raises(PayloadError):
            parse_availability_records([{"employeeId": "E1", "date": "soon"}])

    def test_availability_non_object_raises(self):
        with pytest.raises(PayloadError, match=r"availability\[1\]"):
            parse_availability_records([{"employeeId": "E1", "date": "2024-12-09"}, "E2"])
