"""Normalisation of roster-service and availability-repository payloads.

The roster-generation service returns JSON with ISO-8601 timestamps and
nested station references. This module turns that shape into the domain
records the layout engine consumes. Timestamps are cut to minute
resolution; timezone-aware values keep their wall-clock time.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from rosterview.domain.models import (
    AvailabilityRecord,
    Category,
    ComplianceIssue,
    RosterResult,
    Severity,
    Shift,
)

logger = logging.getLogger(__name__)


class PayloadError(ValueError):
    """Raised when an upstream payload cannot be normalised."""


def parse_instant(raw: Any) -> datetime:
    """Parse an ISO-8601 timestamp to a naive, minute-resolution datetime."""
    if isinstance(raw, datetime):
        value = raw
    else:
        text = str(raw).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise PayloadError(f"Invalid timestamp: {raw!r}")
    return value.replace(second=0, microsecond=0, tzinfo=None)


def parse_date(raw: Any) -> date:
    """Parse a calendar date, accepting full timestamps (time part dropped)."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip().split("T")[0]
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise PayloadError(f"Invalid date: {raw!r}")


def _require(item: dict, key: str, where: str) -> Any:
    value = item.get(key)
    if value is None or value == "":
        raise PayloadError(f"{where}: missing '{key}'")
    return value


def _ref_name(value: Any) -> Optional[str]:
    """Name of a nested reference ({'name': ...}) or the value itself."""
    if value is None:
        return None
    if isinstance(value, dict):
        return value.get("name") or value.get("code")
    return str(value)


def _parse_flag(raw: Any, where: str, default: bool = True) -> bool:
    """Parse a JSON boolean, also accepting the strings 'true' and 'false'."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
        return raw.strip().lower() == "true"
    raise PayloadError(f"{where}: expected a boolean, got {raw!r}")


def _optional_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def parse_shift(item: dict, position: int = 0) -> Shift:
    """Normalise one roster entry.

    Station resolution follows the service: ``station`` first, then
    ``stationCode``, else the unassigned category.
    """
    where = f"roster[{position}]"
    if not isinstance(item, dict):
        raise PayloadError(f"{where}: expected an object, got {type(item).__name__}")

    return Shift(
        employee_id=str(_require(item, "employeeId", where)),
        start=parse_instant(_require(item, "start", where)),
        end=parse_instant(_require(item, "end", where)),
        category=Category.of(item.get("station") or item.get("stationCode")),
        employee_name=item.get("employeeName") or None,
        shift_code=item.get("shiftCodeCode") or None,
        is_working=_parse_flag(item.get("isWorking"), f"{where}.isWorking"),
    )


def _as_object(value: Any, where: str) -> dict:
    """Return ``value`` if it is a JSON object; None becomes an empty object."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PayloadError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _as_list(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def parse_issues(items: Iterable[dict]) -> list[ComplianceIssue]:
    """Normalise compliance issues; entries with an unknown severity are skipped."""
    issues = []
    for position, item in enumerate(items):
        item = _as_object(item, f"compliance.issues[{position}]")
        try:
            severity = Severity.parse(item.get("severity", ""))
        except ValueError:
            logger.warning(
                "Skipping compliance issue %d with unknown severity %r",
                position,
                item.get("severity"),
            )
            continue
        issues.append(
            ComplianceIssue(
                issue=str(item.get("issue", "")),
                severity=severity,
                employee_id=_optional_id(item.get("employeeId")),
                suggestion=item.get("suggestion") or None,
                details=dict(
                    _as_object(item.get("details"), f"compliance.issues[{position}].details")
                ),
            )
        )
    return issues


def parse_roster_result(payload: dict) -> RosterResult:
    """Normalise a roster-generation response.

    Args:
        payload: Decoded JSON of the service response.

    Raises:
        PayloadError: If required fields are missing or malformed.
    """
    if not isinstance(payload, dict):
        raise PayloadError("Roster payload must be a JSON object")

    roster = payload.get("roster") or {}
    if isinstance(roster, list):
        entries, metadata = roster, {}
    else:
        roster = _as_object(roster, "roster")
        entries = _as_list(roster.get("roster"), "roster.roster")
        metadata = _as_object(roster.get("metadata"), "roster.metadata")
    compliance = _as_object(payload.get("compliance"), "compliance")

    shifts = [parse_shift(item, i) for i, item in enumerate(entries)]
    issues = parse_issues(_as_list(compliance.get("issues"), "compliance.issues"))

    week_start = None
    if metadata.get("weekStart"):
        week_start = parse_date(metadata["weekStart"])

    passed = _parse_flag(compliance.get("passed"), "compliance.passed", default=not issues)

    return RosterResult(
        status=str(payload.get("status", "ok")),
        shifts=shifts,
        issues=issues,
        passed=passed,
        week_start=week_start,
        store_id=_optional_id(metadata.get("storeId")),
    )


def load_roster_result(path: Union[str, Path]) -> RosterResult:
    """Read and normalise a roster-generation response saved as JSON."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PayloadError(f"{path}: invalid JSON ({e})")
    return parse_roster_result(payload)


def parse_availability_records(items: Iterable[dict]) -> list[AvailabilityRecord]:
    """Normalise availability repository entries.

    Accepts either nested references (``employee.id``, ``shiftCode.code``,
    ``store.name``, ``station.name``) or flat ``employeeId`` style keys.
    Entries with no employee are skipped.
    """
    records = []
    for position, item in enumerate(items):
        item = _as_object(item, f"availability[{position}]")
        employee = item.get("employee") or {}
        employee_id = employee.get("id") if isinstance(employee, dict) else None
        employee_id = employee_id or item.get("employeeId")
        if not employee_id:
            logger.warning("Skipping availability entry %d without an employee", position)
            continue

        shift_code = item.get("shiftCode")
        if isinstance(shift_code, dict):
            shift_code = shift_code.get("code")

        records.append(
            AvailabilityRecord(
                employee_id=str(employee_id),
                date=parse_date(_require(item, "date", f"availability[{position}]")),
                shift_code=shift_code or None,
                store=_ref_name(item.get("store")),
                station=_ref_name(item.get("station")),
                notes=item.get("notes") or None,
            )
        )
    return records
