import os
import tempfile
from datetime import date
from pathlib import Path

os.environ["MODE"] = "test"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # ensure models are imported
from db_base import Base
from db_models.employee import Employee
from db_models.user import User
from core.security import get_password_hash, create_session_token

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"assetguard_test_{os.getpid()}.db"
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
sync_url = f"sqlite:///{TEST_DB_PATH}"

ADMIN_ID = "USR-ADMIN"
USER_ID = "USR-001"
OTHER_USER_ID = "USR-002"

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool  # Each test runs on its own event loop
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Fresh schema in a throwaway SQLite file
    sync_engine = create_engine(sync_url)
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()
    TEST_DB_PATH.unlink(missing_ok=True)


@pytest.fixture(scope="session", autouse=True)
def seed_accounts(prepare_db):
    """Seed one admin and two regular accounts, each linked to an employee."""
    sync_engine = create_engine(sync_url)
    Session = sessionmaker(bind=sync_engine)
    user_hash = get_password_hash("user123")

    with Session() as session:
        session.add_all([
            Employee(id="EMP-ADMIN", name="Alex Admin", email="admin@company.com",
                     department="IT", role="Administrator", join_date=date(2020, 1, 6)),
            Employee(id="EMP-001", name="Jane Doe", email="jane.doe@company.com",
                     department="Engineering", role="Developer", join_date=date(2021, 3, 15)),
            Employee(id="EMP-002", name="John Smith", email="john.smith@company.com",
                     department="Sales", role="Account Manager", join_date=date(2022, 7, 1)),
        ])
        session.add_all([
            User(id=ADMIN_ID, name="Alex Admin", email="admin@company.com",
                 hashed_password=get_password_hash("admin123"), role="admin", employee_id="EMP-ADMIN"),
            User(id=USER_ID, name="Jane Doe", email="jane.doe@company.com",
                 hashed_password=user_hash, role="user", employee_id="EMP-001"),
            User(id=OTHER_USER_ID, name="John Smith", email="john.smith@company.com",
                 hashed_password=user_hash, role="user", employee_id="EMP-002"),
        ])
        session.commit()
    sync_engine.dispose()


@pytest.fixture
def override_db():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(override_db):
    async with AsyncClient(transport=ASGITransport(app=override_db), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def asgi_transport(override_db):
    """Transport for the client core to talk to the app in-process."""
    return ASGITransport(app=override_db)


@pytest.fixture(scope="session")
def admin_token():
    return create_session_token({"sub": ADMIN_ID, "role": "admin"})


@pytest.fixture(scope="session")
def user_token():
    return create_session_token({"sub": USER_ID, "role": "user"})


@pytest.fixture(scope="session")
def other_user_token():
    return create_session_token({"sub": OTHER_USER_ID, "role": "user"})


@pytest.fixture(scope="session")
def admin_headers(admin_token):
    """Return authorization headers for the admin account."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture(scope="session")
def user_headers(user_token):
    """Return authorization headers for Jane (regular user)."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture(scope="session")
def other_user_headers(other_user_token):
    """Return authorization headers for John (regular user)."""
    return {"Authorization": f"Bearer {other_user_token}"}
