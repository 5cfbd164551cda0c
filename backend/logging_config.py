"""Centralized logging configuration shared by the Perception and Stylist apps."""

import logging

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [{service}] %(name)s  %(message)s"

# Chatty at INFO/DEBUG; only their warnings are useful in service logs
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "openai",
    "uvicorn.access",
)


def setup_logging(service: str = "perception") -> None:
    """Configure root logging for one service process.

    The level comes from settings.LOG_LEVEL; every line is tagged with
    ``service`` so the two apps can share a log sink.
    """
    logging.basicConfig(
        format=LOG_FORMAT.format(service=service),
        datefmt="%H:%M:%S",
        level=getattr(logging, settings.LOG_LEVEL),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
