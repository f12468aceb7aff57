"""Command-line interface for the weekly roster view."""

import argparse
import logging
import sys
from datetime import date, datetime, time
from typing import Optional

from rosterview.domain.compliance import summarize_issues
from rosterview.domain.models import (
    AvailabilityRecord,
    Category,
    ComplianceIssue,
    Employee,
    Severity,
    Shift,
)
from rosterview.domain.week import WeekWindow
from rosterview.ingest.payload import PayloadError, load_roster_result
from rosterview.layout.availability import AvailabilityIndex
from rosterview.layout.engine import TimelineLayout, TimelineLayoutEngine
from rosterview.output.debug_generator import DebugGenerator
from rosterview.output.exporter import RosterExporter
from rosterview.output.pdf_generator import PDFGenerator
from rosterview.validation.validator import LayoutValidator

STATIONS = ["Grill", "Till", "Drive Thru", "McCafe", None]

# (start, end) wall-clock templates matching common shift codes
SHIFT_TEMPLATES = {
    "1F": (time(6, 30), time(15, 30)),
    "2F": (time(14, 0), time(23, 0)),
    "S": (time(6, 30), time(15, 0)),
    "SC": (time(11, 0), time(20, 0)),
    "3F": (time(8, 0), time(20, 0)),
}


def create_sample_employees(count: int = 12) -> list[Employee]:
    """Create sample employees for demos."""
    first_names = [
        "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
        "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
    ]
    employees = []
    for i in range(count):
        employees.append(
            Employee(
                id=f"E{i + 1:03d}",
                first_name=first_names[i % len(first_names)],
                last_name=f"Sample{i // len(first_names) + 1}",
                station=STATIONS[i % len(STATIONS)],
            )
        )
    return employees


def create_sample_week(
    window: WeekWindow,
    employees: list[Employee],
) -> tuple[list[Shift], list[AvailabilityRecord], list[ComplianceIssue]]:
    """Create a deterministic sample roster for one week.

    Every employee works five days with a two-day break that rotates
    through the week, cycling through the shift templates.
    """
    codes = list(SHIFT_TEMPLATES)
    shifts = []
    availability = []

    for i, employee in enumerate(employees):
        for day_index, d in enumerate(window.days):
            code = codes[(i + day_index) % len(codes)]
            availability.append(
                AvailabilityRecord(
                    employee_id=employee.id,
                    date=d,
                    shift_code=code,
                    store="Sample Store",
                    station=employee.station,
                )
            )
            if (day_index - i) % 7 in (5, 6):
                continue
            start_t, end_t = SHIFT_TEMPLATES[code]
            shifts.append(
                Shift(
                    employee_id=employee.id,
                    start=datetime.combine(d, start_t),
                    end=datetime.combine(d, end_t),
                    category=Category.of(employee.station),
                    shift_code=code,
                )
            )

    issues = []
    if employees:
        issues.append(
            ComplianceIssue(
                issue="Less than 10 hours rest between shifts",
                severity=Severity.CRITICAL,
                employee_id=employees[0].id,
            )
        )
    if len(employees) > 1:
        issues.append(
            ComplianceIssue(
                issue="Weekly hours above contract",
                severity=Severity.WARNING,
                employee_id=employees[1].id,
            )
        )
    return shifts, availability, issues


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date (expected YYYY-MM-DD): {raw}")


def _print_layout_report(layout: TimelineLayout, issues: list[ComplianceIssue]) -> None:
    summary = layout.get_summary()
    compliance = summarize_issues(issues)

    print(f"\n{'=' * 60}")
    print(f"Week: {layout.window.display_range()}")
    print(f"{'=' * 60}")
    print(f"  Shifts placed: {summary['total_cells']}")
    print(f"  Days with shifts: {summary['days_with_shifts']}")
    print(f"  Stations: {summary['categories']}")
    print(f"  Widest overlap: {summary['max_columns']} columns")

    counts = compliance.counts()
    print(
        f"\nCompliance: critical={len(compliance.critical)}, "
        f"major={len(compliance.major)}, minor={len(compliance.minor)} "
        f"({sum(counts.values())} total)"
    )

    result = LayoutValidator().validate(layout)
    if result.is_valid:
        print("\nLayout validation: PASSED")
    else:
        print(f"\nLayout validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")

    if layout.diagnostics:
        print(f"\nSkipped shifts ({len(layout.diagnostics)}):")
        for diagnostic in layout.diagnostics[:5]:
            print(f"    - {diagnostic}")
        if len(layout.diagnostics) > 5:
            print(f"    ... and {len(layout.diagnostics) - 5} more")


def _write_outputs(
    layout: TimelineLayout,
    shifts: list[Shift],
    names: dict[str, str],
    pdf_path: Optional[str],
    csv_dir: Optional[str],
    store_id: Optional[str] = None,
) -> None:
    if pdf_path:
        print(f"\nGenerating PDF: {pdf_path}")
        PDFGenerator().generate(layout, names, pdf_path)
        print("  PDF created successfully!")
    if csv_dir:
        out = RosterExporter(config=layout.config).export(
            shifts, layout.window, csv_dir, names, store_id=store_id
        )
        print(f"\nCSV written: {out}")


def run_week(anchor: date, steps: int = 0) -> None:
    """Print the window containing a date, optionally stepped by whole weeks."""
    window = WeekWindow.canonicalize(anchor)
    for _ in range(abs(steps)):
        window = window.next() if steps > 0 else window.previous()
    print(window.display_range())
    for d in window.days:
        print(f"  {d.strftime('%a')} {d.isoformat()}")


def run_demo(
    anchor: date,
    count: int = 12,
    pdf_path: Optional[str] = None,
    csv_dir: Optional[str] = None,
) -> None:
    """Lay out a generated sample week and print it."""
    window = WeekWindow.canonicalize(anchor)
    employees = create_sample_employees(count)
    shifts, availability, issues = create_sample_week(window, employees)
    names = {e.id: e.full_name for e in employees}

    layout = TimelineLayoutEngine().layout(shifts, window, issues)
    generator = DebugGenerator()
    print(generator.generate_to_string(layout, names))
    index = AvailabilityIndex.build(availability, window)
    print(generator.availability_to_string(index, employees))

    _print_layout_report(layout, issues)
    _write_outputs(layout, shifts, names, pdf_path, csv_dir)


def run_layout(
    payload_path: str,
    anchor: Optional[date] = None,
    pdf_path: Optional[str] = None,
    csv_dir: Optional[str] = None,
) -> int:
    """Lay out a saved roster-generation response."""
    try:
        roster = load_roster_result(payload_path)
    except (OSError, PayloadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if anchor is None:
        anchor = roster.week_start
    if anchor is None and roster.shifts:
        anchor = min(s.start for s in roster.shifts).date()
    if anchor is None:
        print("Error: no week given and the payload has no shifts", file=sys.stderr)
        return 1

    window = WeekWindow.canonicalize(anchor)
    layout = TimelineLayoutEngine().layout(roster.shifts, window, roster.issues)
    names = {s.employee_id: s.employee_name for s in roster.shifts if s.employee_name}

    print(f"Roster status: {roster.status}")
    print(DebugGenerator().generate_to_string(layout, names))
    _print_layout_report(layout, roster.issues)
    _write_outputs(layout, roster.shifts, names, pdf_path, csv_dir, roster.store_id)
    return 0


def main() -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Roster View - Weekly timeline layout tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s week 2024-12-11              Show the Monday-start week of a date
  %(prog)s week 2024-12-11 --steps -1   Show the previous week

  %(prog)s demo                         Lay out a sample week
  %(prog)s demo --pdf roster.pdf        Also render a PDF
  %(prog)s demo --csv exports/          Also export a CSV

  %(prog)s layout result.json           Lay out a saved roster response
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    week_parser = subparsers.add_parser("week", help="Show the week containing a date")
    week_parser.add_argument("date", type=_parse_date, help="Any date (YYYY-MM-DD)")
    week_parser.add_argument(
        "--steps", "-s",
        type=int,
        default=0,
        help="Whole weeks to step forward (positive) or backward (negative)",
    )

    demo_parser = subparsers.add_parser("demo", help="Lay out a generated sample week")
    demo_parser.add_argument(
        "--date", "-d",
        type=_parse_date,
        default=date(2024, 12, 9),
        help="Any date in the week to generate (default: 2024-12-09)",
    )
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=12,
        help="Number of employees to generate (default: 12)",
    )
    demo_parser.add_argument("--pdf", type=str, help="Output PDF file path")
    demo_parser.add_argument("--csv", type=str, help="Output directory for CSV export")

    layout_parser = subparsers.add_parser("layout", help="Lay out a saved roster response")
    layout_parser.add_argument("payload", type=str, help="Roster response JSON file")
    layout_parser.add_argument(
        "--week", "-w",
        type=_parse_date,
        help="Any date in the week to show (default: week from the payload)",
    )
    layout_parser.add_argument("--pdf", type=str, help="Output PDF file path")
    layout_parser.add_argument("--csv", type=str, help="Output directory for CSV export")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "week":
        run_week(args.date, args.steps)
        return 0
    elif args.command == "demo":
        run_demo(args.date, args.count, args.pdf, args.csv)
        return 0
    elif args.command == "layout":
        return run_layout(args.payload, args.week, args.pdf, args.csv)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
