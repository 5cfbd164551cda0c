"""Text simplification, alt-text, and read-aloud API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_accessibility_service
from schemas import (
    AltTextRequest,
    AltTextResponse,
    ReadAloudRequest,
    ReadAloudResponse,
    SimplifyRequest,
    SimplifyResponse,
    WordTiming,
)
from services.accessibility_service import AccessibilityService, compute_word_timings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["accessibility"])


@router.post("/simplify", response_model=SimplifyResponse)
async def simplify_text(
    body: SimplifyRequest,
    service: AccessibilityService = Depends(get_accessibility_service),
):
    """Rewrite text at an elementary, middle, or high school reading level."""
    try:
        simplified = await service.simplify(body.text, body.reading_level)
    except Exception:
        logger.error("Error in simplify endpoint", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to simplify text")

    return SimplifyResponse(
        original=body.text, simplified=simplified, reading_level=body.reading_level
    )


@router.post("/generate-alt-text", response_model=AltTextResponse)
async def generate_alt_text(
    body: AltTextRequest,
    service: AccessibilityService = Depends(get_accessibility_service),
):
    """Describe an image for screen readers, using the per-URL cache when allowed."""
    try:
        result = await service.generate_alt_text(body.image_url, body.use_cache)
    except Exception:
        logger.error("Error in generate-alt-text endpoint", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate alt text")

    return AltTextResponse(alt_text=result.alt_text, cached=result.cached)


@router.post("/read-aloud", response_model=ReadAloudResponse)
def read_aloud(body: ReadAloudRequest):
    """Compute constant-rate word timings for highlighting text as it is read."""
    result = compute_word_timings(body.text, body.words_per_minute)
    return ReadAloudResponse(
        text=body.text,
        word_timings=[
            WordTiming(word=t.word, start_time=t.start_time, duration=t.duration)
            for t in result.word_timings
        ],
        total_duration=result.total_duration,
        words_per_minute=body.words_per_minute,
    )
