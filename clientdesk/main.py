"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from clientdesk.config import get_settings
from clientdesk.infrastructure.database import engine, Base
from clientdesk.core.logging import configure_logging
from clientdesk.core.middleware import setup_middleware
from clientdesk.core.exceptions import AppError, global_exception_handler

# Import all models so SQLAlchemy knows about them
from clientdesk.domain.models.client import Client  # noqa: F401
from clientdesk.domain.models.profile import Profile, ProfileFolder  # noqa: F401
from clientdesk.domain.models.project import Project  # noqa: F401

# Import routers
from clientdesk.interfaces.api.clients import router as clients_router
from clientdesk.interfaces.api.statuses import router as statuses_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Client Desk backend...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use migrations in production)
    if settings.ENVIRONMENT != "production":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")

    yield

    await engine.dispose()
    logger.info("Client Desk backend stopped")


app = FastAPI(
    title="Client Desk",
    description="API Backend — client records, project portfolio and payment progress",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

# Application errors render as problem details; anything else is a logged 500
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(clients_router)
app.include_router(statuses_router)


@app.get("/")
def root():
    return {
        "name": "Client Desk",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
