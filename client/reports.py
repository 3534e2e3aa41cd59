# client/reports.py
"""
Inventory exports and dashboard aggregates over store snapshots.
"""
import csv
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date
from io import StringIO

from client.models import Asset, AssetStatus, Employee

INVENTORY_HEADERS = [
    "ID", "Tag", "Name", "Category", "Status", "Assigned To",
    "Location", "Purchase Date", "Cost",
]
ASSIGNMENT_HEADERS = [
    "Employee Name", "Asset Category", "Asset Name", "Asset Tag",
    "Serial Number", "Location",
]
BREAKDOWN_STATUSES = (AssetStatus.AVAILABLE, AssetStatus.ASSIGNED, AssetStatus.IN_REPAIR)


def _to_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    buf = StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(headers)
    for r in rows:
        w.writerow(r)
    return buf.getvalue()


def report_filename(prefix: str, today: date | None = None) -> str:
    """e.g. ``inventory_report_2024-05-01.csv``"""
    return f"{prefix}_{(today or date.today()).isoformat()}.csv"


def inventory_report_csv(assets: Iterable[Asset]) -> str:
    """Every asset, one row each."""
    return _to_csv(INVENTORY_HEADERS, (
        [
            a.id, a.tag, a.name, a.category, a.status.value, a.assigned_to or "",
            a.location, a.purchase_date.isoformat(), a.cost,
        ]
        for a in assets
    ))


def employee_assignments_csv(assets: Iterable[Asset], employees: Iterable[Employee]) -> str:
    """Assets currently out with someone, resolved to the employee's name."""
    names = {e.id: e.name for e in employees}
    return _to_csv(ASSIGNMENT_HEADERS, (
        [
            names.get(a.assigned_to, "Unknown"), a.category, a.name, a.tag,
            a.serial_number, a.location,
        ]
        for a in assets
        if a.status == AssetStatus.ASSIGNED and a.assigned_to
    ))


def status_counts(assets: Iterable[Asset]) -> dict[str, int]:
    """Count per status; every status is present, zero when unused."""
    counts = Counter(a.status for a in assets)
    return {s.value: counts.get(s, 0) for s in AssetStatus}


def category_status_breakdown(assets: Iterable[Asset]) -> list[dict]:
    """
    Per category: how many assets are Available, Assigned and In Repair.

    Categories keep first-seen order. Other statuses are not counted.
    """
    rows: dict[str, dict] = {}
    for a in assets:
        row = rows.setdefault(
            a.category,
            {"name": a.category, **{s.value: 0 for s in BREAKDOWN_STATUSES}},
        )
        if a.status in BREAKDOWN_STATUSES:
            row[a.status.value] += 1
    return list(rows.values())
