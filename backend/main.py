"""FastAPI application entry point for the Perception assistant service."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import accessibility, chat, preferences
from api.dependencies import get_completion_provider, get_storage
from api.errors import register_error_handlers
from config import settings
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage on startup and release the provider client on shutdown."""
    storage = get_storage()
    logger.info("Perception service starting (storage: %s)", storage.backend_name)
    provider = get_completion_provider()
    if not getattr(provider, "is_configured", lambda: True)():
        logger.warning("AI provider is not configured; AI endpoints will fail")
    yield
    close = getattr(provider, "close", None)
    if close is not None:
        await close()


app = FastAPI(
    title="Perception",
    description="Accessibility assistant backend for the Perception browser extension",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routers
app.include_router(preferences.router)
app.include_router(chat.router)
app.include_router(accessibility.router)


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
