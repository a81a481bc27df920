"""Rubber Duck FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rubberduck import __version__
from rubberduck.config import Settings
from rubberduck.context.router import get_settings
from rubberduck.context.router import router as context_router
from rubberduck.logging_config import setup_logging

# Reads RUBBERDUCK_* from the environment and backend/.env; raises on invalid values
settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and wire settings into the routers."""
    setup_logging(settings.log_level)
    app.dependency_overrides.setdefault(get_settings, lambda: settings)
    yield


app = FastAPI(
    title="Rubber Duck",
    description="Conversation context-window selection for the Rubber Duck chat assistant",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(context_router)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}
