# db.py
from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from config import settings
from db_base import Base


# ---------- Engine & Session (async) ----------

def engine_options(database_url: str) -> dict:
    """
    Engine keyword arguments per backend.

    In-memory SQLite lives inside a single connection, so it is pinned with
    StaticPool; server databases get pre-ping to survive idle disconnects.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return {"poolclass": StaticPool}
        return {}
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.DATABASE_URL,  # postgresql+asyncpg://... or sqlite+aiosqlite:///...
    echo=settings.DEBUG,
    **engine_options(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


# ---------- Lifecycle helpers ----------

async def init_db() -> None:
    """
    Create missing tables from ORM metadata (local/dev and seeding).

    Deployed databases are managed by the Alembic scripts instead.
    """
    import db_models  # noqa: F401  registers every model on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()


# ---------- FastAPI dependency ----------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async DB session."""
    async with AsyncSessionLocal() as session:
        yield session
