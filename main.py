import json
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from config import settings
from core.logging_config import get_structured_logger, setup_logging
from db import AsyncSessionLocal, close_db, init_db
from api.auth.views import router as auth_router
from api.assets.views import router as assets_router
from api.employees.views import router as employees_router
from api.assignments.views import router as assignments_router
from api.maintenance.views import router as maintenance_router
from api.requests.views import router as requests_router
from api.dashboard.views import router as dashboard_router

logger = get_structured_logger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins: Vite dev server and the desktop shell
    return [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:4000",
        "app://.",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting AssetGuard API", env=settings.APP_ENV)
    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating tables from ORM metadata")
        await init_db()
    yield
    await close_db()


app = FastAPI(
    title="AssetGuard API",
    description="IT asset tracking: inventory, assignments, maintenance and service requests",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Authentication and user management
app.include_router(auth_router, prefix="/api/v1")

# Business endpoints
app.include_router(assets_router, prefix="/api/v1")
app.include_router(employees_router, prefix="/api/v1")
app.include_router(assignments_router, prefix="/api/v1")
app.include_router(maintenance_router, prefix="/api/v1")
app.include_router(requests_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check that also pings the database."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error("Health check database ping failed", error=str(exc))
        return {"status": "error", "database": "disconnected"}
    return {"status": "healthy", "database": "connected"}
