import csv
from datetime import date
from io import StringIO

from client.models import AssetStatus
from client.reports import (
    category_status_breakdown,
    employee_assignments_csv,
    inventory_report_csv,
    report_filename,
    status_counts,
)
from fakes import make_asset, make_employee


def rows(text):
    return list(csv.reader(StringIO(text)))


ASSETS = [
    make_asset("AST-1", name='Monitor 27", IPS', category="Monitor", location="HQ, Floor 2"),
    make_asset("AST-2", category="Laptop", status=AssetStatus.ASSIGNED, assigned_to="EMP-001"),
    make_asset("AST-3", category="Laptop", status=AssetStatus.IN_REPAIR),
    make_asset("AST-4", category="Laptop", status=AssetStatus.RETIRED),
    make_asset("AST-5", category="Phone", status=AssetStatus.ASSIGNED, assigned_to="EMP-GHOST"),
]


def test_inventory_report():
    table = rows(inventory_report_csv(ASSETS))
    assert table[0] == [
        "ID", "Tag", "Name", "Category", "Status", "Assigned To",
        "Location", "Purchase Date", "Cost",
    ]
    assert len(table) == 1 + len(ASSETS)
    # Commas and quotes survive the round trip
    assert table[1][2] == 'Monitor 27", IPS'
    assert table[1][6] == "HQ, Floor 2"
    assert table[2][4] == "Assigned"
    assert table[2][5] == "EMP-001"
    assert table[1][7] == "2023-09-01"


def test_employee_assignments_report():
    table = rows(employee_assignments_csv(ASSETS, [make_employee("EMP-001", name="Jane Doe")]))
    assert table[0][0] == "Employee Name"
    assert [r[0] for r in table[1:]] == ["Jane Doe", "Unknown"]
    assert table[1][3] == "TAG-AST-2"


def test_employee_assignments_report_empty():
    assert rows(employee_assignments_csv([make_asset()], [])) == [[
        "Employee Name", "Asset Category", "Asset Name", "Asset Tag", "Serial Number", "Location",
    ]]


def test_status_counts():
    counts = status_counts(ASSETS)
    assert counts["Available"] == 1
    assert counts["Assigned"] == 2
    assert counts["In Repair"] == 1
    assert counts["Retired"] == 1
    assert counts["Lost"] == 0


def test_category_breakdown():
    assert category_status_breakdown(ASSETS) == [
        {"name": "Monitor", "Available": 1, "Assigned": 0, "In Repair": 0},
        {"name": "Laptop", "Available": 0, "Assigned": 1, "In Repair": 1},
        {"name": "Phone", "Available": 0, "Assigned": 1, "In Repair": 0},
    ]


def test_report_filename():
    assert report_filename("inventory_report", date(2024, 5, 1)) == "inventory_report_2024-05-01.csv"
