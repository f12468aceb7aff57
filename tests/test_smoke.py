"""Smoke tests for the command-line flows."""

import json
import sys
from datetime import date

import pytest

from rosterview.cli import create_sample_employees, create_sample_week, main
from rosterview.domain.week import WeekWindow
from rosterview.layout.engine import TimelineLayoutEngine
from rosterview.validation.validator import LayoutValidator


class TestSampleWeek:
    """Tests for the generated demo roster."""

    def test_every_employee_works_five_days(self):
        window = WeekWindow(date(2024, 12, 9))
        employees = create_sample_employees(10)
        shifts, availability, issues = create_sample_week(window, employees)

        assert len(shifts) == 50
        assert len(availability) == 70
        assert len(issues) == 2

    def test_sample_layout_is_valid(self):
        window = WeekWindow(date(2024, 12, 9))
        shifts, _, issues = create_sample_week(window, create_sample_employees(20))

        layout = TimelineLayoutEngine().layout(shifts, window, issues)

        assert not layout.diagnostics
        assert len(layout.cells) == len(shifts)
        assert LayoutValidator().validate(layout).is_valid


class TestCli:
    """End-to-end runs of the CLI entry point."""

    def _run(self, monkeypatch, *args) -> int:
        monkeypatch.setattr(sys, "argv", ["rosterview", *args])
        return main()

    def test_week(self, monkeypatch, capsys):
        assert self._run(monkeypatch, "week", "2024-12-11", "--steps", "-1") == 0

        out = capsys.readouterr().out
        assert out.startswith("2 Dec – 8 Dec 2024")
        assert "Mon 2024-12-02" in out

    def test_demo(self, monkeypatch, capsys, tmp_path):
        code = self._run(
            monkeypatch, "demo", "--date", "2024-12-11", "--csv", str(tmp_path)
        )

        assert code == 0
        out = capsys.readouterr().out
        assert "WEEKLY ROSTER - 9 Dec – 15 Dec 2024" in out
        assert "Layout validation: PASSED" in out
        assert (tmp_path / "roster_2024-12-09.csv").exists()

    def test_layout_payload(self, monkeypatch, capsys, tmp_path):
        payload = {
            "status": "ok",
            "roster": {
                "roster": [
                    {
                        "employeeId": "E1",
                        "employeeName": "Alice Smith",
                        "start": "2024-12-10T08:00:00Z",
                        "end": "2024-12-10T16:00:00Z",
                        "station": "Grill",
                    },
                    {
                        "employeeId": "E2",
                        "start": "2024-12-10T12:00:00Z",
                        "end": "2024-12-10T20:00:00Z",
                        "station": "Grill",
                    },
                ],
                "metadata": {"weekStart": "2024-12-09"},
            },
            "compliance": {"passed": True, "issues": []},
        }
        path = tmp_path / "result.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        assert self._run(monkeypatch, "layout", str(path)) == 0

        out = capsys.readouterr().out
        assert "Roster status: ok" in out
        assert "col   2/2" in out
        assert "Layout validation: PASSED" in out

    def test_layout_missing_file(self, monkeypatch, capsys, tmp_path):
        assert self._run(monkeypatch, "layout", str(tmp_path / "missing.json")) == 1
        assert "Error:" in capsys.readouterr().err

    def test_layout_malformed_payload(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"roster": {"roster": [], "metadata": "x"}}), encoding="utf-8")

        assert self._run(monkeypatch, "layout", str(path)) == 1
        assert "roster.metadata" in capsys.readouterr().err

    def test_invalid_date_exits(self, monkeypatch):
        with pytest.raises(SystemExit):
            self._run(monkeypatch, "week", "not-a-date")

    def test_no_command_prints_help(self, monkeypatch, capsys):
        assert self._run(monkeypatch, "--verbose") == 1
        assert "usage" in capsys.readouterr().out
