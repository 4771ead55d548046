from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.api.dependencies import get_session_service, initialize_services
from backend.api.health_routes import router as health_router
from backend.api.project_routes import router as project_router
from backend.api.session_routes import router as session_router
from backend.logging_config import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Initialize services on startup, flush open editing sessions on shutdown."""
    logger.info("Starting up: initializing services")
    initialize_services()

    yield

    logger.info("Shutting down: flushing open editing sessions")
    await get_session_service().close_all()


app = FastAPI(
    title="Desyn Animation Service",
    description="Animation projects with debounced autosave of editing sessions",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(project_router)
app.include_router(session_router)
