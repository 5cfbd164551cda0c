"""FastAPI application entry point for the Stylist font preference service."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import font_preferences
from api.dependencies import get_storage
from api.errors import register_error_handlers
from config import settings
from logging_config import setup_logging

setup_logging("stylist")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    storage = get_storage()
    logger.info("Stylist service starting (storage: %s)", storage.backend_name)
    yield


app = FastAPI(
    title="Perception Stylist",
    description="Font family and size preferences for the Perception extension",
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

app.include_router(font_preferences.router)


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
