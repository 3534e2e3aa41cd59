"""Script to seed an empty database with sample AssetGuard data

Usage:
    python seed_database.py

Uses DATABASE_URL from the active settings (MODE / APP_ENV). Creates the
tables first, then inserts sample records only if there are no employees yet.
"""
import asyncio
from datetime import date

from sqlalchemy import func, select

from config import settings
from core.security import get_password_hash
from db import AsyncSessionLocal, close_db, init_db
from db_models import (
    Asset,
    AssetRequest,
    Assignment,
    Employee,
    MaintenanceLog,
    RequestMetadata,
    User,
)

EMPLOYEES = [
    Employee(id="EMP-001", name="Sarah Chen", email="sarah.chen@company.com",
             department="Engineering", role="Senior Developer", join_date=date(2021, 3, 15)),
    Employee(id="EMP-002", name="Marcus Johnson", email="marcus.johnson@company.com",
             department="Design", role="UX Designer", join_date=date(2022, 1, 10)),
    Employee(id="EMP-003", name="Emily Rodriguez", email="emily.rodriguez@company.com",
             department="Marketing", role="Marketing Manager", join_date=date(2020, 6, 1)),
    Employee(id="EMP-ADMIN", name="IT Administrator", email="admin@company.com",
             department="IT", role="Administrator", join_date=date(2019, 9, 2)),
]

ASSETS = [
    Asset(id="AST-001", tag="LT-2023-001", name="MacBook Pro 16\"", serial_number="C02XG2JHMD6M",
          category="Laptop", vendor="Apple", purchase_date=date(2023, 2, 14), cost=2499.0,
          status="Assigned", condition="Good", location="HQ Floor 3", assigned_to="EMP-001"),
    Asset(id="AST-002", tag="LT-2023-002", name="Dell XPS 15", serial_number="DX15-88213",
          category="Laptop", vendor="Dell", purchase_date=date(2023, 4, 3), cost=1899.0,
          status="Available", condition="New", location="IT Storage"),
    Asset(id="AST-003", tag="MN-2022-014", name="LG UltraFine 27\"", serial_number="LG27-5510",
          category="Monitor", vendor="LG", purchase_date=date(2022, 11, 21), cost=699.0,
          status="In Repair", condition="Fair", location="IT Workshop"),
    Asset(id="AST-004", tag="PH-2024-003", name="iPhone 15", serial_number="F2LZ9Q1KN72J",
          category="Phone", vendor="Apple", purchase_date=date(2024, 1, 8), cost=999.0,
          status="Assigned", condition="New", location="Remote", assigned_to="EMP-003"),
    Asset(id="AST-005", tag="LT-2019-007", name="ThinkPad T480", serial_number="PF1KZ7Q3",
          category="Laptop", vendor="Lenovo", purchase_date=date(2019, 5, 17), cost=1249.0,
          status="Retired", condition="Poor", location="IT Storage"),
]

ASSIGNMENTS = [
    Assignment(id="ASG-001", asset_id="AST-001", employee_id="EMP-001",
               borrow_date=date(2023, 2, 20), is_active=True),
    Assignment(id="ASG-002", asset_id="AST-004", employee_id="EMP-003",
               borrow_date=date(2024, 1, 10), expected_return_date=date(2026, 1, 10), is_active=True),
]

MAINTENANCE = [
    MaintenanceLog(id="MNT-001", asset_id="AST-003", description="Backlight flickering, panel replacement",
                   vendor="LG Service Center", cost=180.0, date=date(2024, 5, 2), status="In Progress"),
]

REQUESTS = [
    AssetRequest(id="REQ-001", employee_id="EMP-002", category="Monitor",
                 reason="Second display for design reviews", status="Pending",
                 request_date=date(2024, 5, 6)),
]

# (id, name, email, password, role, employee_id)
ACCOUNTS = [
    ("USR-ADMIN", "IT Administrator", "admin@company.com", "admin123", "admin", "EMP-ADMIN"),
    ("USR-001", "Sarah Chen", "sarah.chen@company.com", "user123", "user", "EMP-001"),
    ("USR-002", "Marcus Johnson", "marcus.johnson@company.com", "user123", "user", "EMP-002"),
]


async def seed() -> None:
    print("Creating database tables...")
    await init_db()
    print("[OK] Tables ready")

    async with AsyncSessionLocal() as session:
        existing = (await session.execute(select(func.count(Employee.id)))).scalar() or 0
        if existing:
            print(f"Database already has {existing} employees, skipping seed")
            return

        session.add_all(EMPLOYEES)
        session.add_all(ASSETS)
        session.add_all(ASSIGNMENTS)
        session.add_all(MAINTENANCE)
        session.add_all(REQUESTS)
        session.add(RequestMetadata(
            id="META-REQ-001", request_id="REQ-001", user_id="USR-002",
            user_name="Marcus Johnson", user_email="marcus.johnson@company.com",
        ))
        for user_id, name, email, password, role, employee_id in ACCOUNTS:
            session.add(User(
                id=user_id, name=name, email=email,
                hashed_password=get_password_hash(password),
                role=role, employee_id=employee_id,
            ))
        await session.commit()

    print(f"[OK] Seeded {len(EMPLOYEES)} employees, {len(ASSETS)} assets, "
          f"{len(ASSIGNMENTS)} assignments, {len(MAINTENANCE)} maintenance logs, "
          f"{len(REQUESTS)} requests and {len(ACCOUNTS)} accounts")
    for _, _, email, password, role, _ in ACCOUNTS:
        print(f"  {role:<5} {email} / {password}")


async def main() -> None:
    try:
        await seed()
    finally:
        await close_db()


if __name__ == "__main__":
    print("=" * 60)
    print("DATABASE SEEDING SCRIPT")
    print("=" * 60)
    print(f"Database: {settings.DATABASE_URL}")
    print()
    asyncio.run(main())
