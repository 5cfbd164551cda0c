"""Accessibility service - text simplification, alt text, and read-aloud timing."""

import asyncio
import logging
from dataclasses import dataclass

from config import settings
from integrations.completion_protocol import (
    CompletionOptions,
    CompletionProvider,
    ProviderMessage,
    image_part,
    text_part,
)
from storage.protocol import PerceptionStorage

logger = logging.getLogger(__name__)

READING_LEVEL_GRADES = {
    "elementary": "3rd-5th grade",
    "middle": "6th-8th grade",
    "high": "9th-12th grade",
}

SIMPLIFY_TEMPERATURE = 0.3
SIMPLIFY_MAX_TOKENS = 1000

ALT_TEXT_MAX_TOKENS = 300
ALT_TEXT_SYSTEM_PROMPT = (
    "You are an expert at creating descriptive alt text for images to help "
    "visually impaired users. Provide clear, concise descriptions that convey "
    "the essential information and context of the image."
)
ALT_TEXT_INSTRUCTION = "Please provide descriptive alt text for this image."
ALT_TEXT_FALLBACK = "Image description unavailable"


def simplify_system_prompt(reading_level: str) -> str:
    grade = READING_LEVEL_GRADES[reading_level]
    return (
        "You are an expert at rewriting text to be more accessible. Rewrite the "
        f"provided text to match a {grade} reading level. Use simple vocabulary, "
        "short sentences, and clear explanations. Maintain the core meaning and "
        "important information."
    )


@dataclass
class WordTimingResult:
    word: str
    start_time: float  # ms
    duration: float  # ms


@dataclass
class ReadAloudResult:
    word_timings: list[WordTimingResult]
    total_duration: float  # ms


def compute_word_timings(text: str, words_per_minute: float) -> ReadAloudResult:
    """Assign each word a constant-rate start offset and duration.

    Words are split on whitespace runs; every word lasts
    ``60000 / words_per_minute`` milliseconds.
    """
    words = text.split()
    ms_per_word = 60000 / words_per_minute
    timings = [
        WordTimingResult(word=word, start_time=index * ms_per_word, duration=ms_per_word)
        for index, word in enumerate(words)
    ]
    return ReadAloudResult(word_timings=timings, total_duration=len(words) * ms_per_word)


@dataclass
class AltTextResult:
    alt_text: str
    cached: bool


class AccessibilityService:
    """Provider-backed text and image helpers.

    Alt-text cache reads and writes run in a worker thread.
    """

    def __init__(self, provider: CompletionProvider, storage: PerceptionStorage):
        self._provider = provider
        self._storage = storage

    async def simplify(self, text: str, reading_level: str) -> str:
        """Rewrite ``text`` for the reading level; falls back to the original."""
        result = await self._provider.complete(
            [
                ProviderMessage(role="system", content=simplify_system_prompt(reading_level)),
                ProviderMessage(role="user", content=text),
            ],
            CompletionOptions(
                model=settings.CHAT_MODEL,
                temperature=SIMPLIFY_TEMPERATURE,
                max_tokens=SIMPLIFY_MAX_TOKENS,
            ),
        )
        return result.content or text

    async def generate_alt_text(self, image_url: str, use_cache: bool = True) -> AltTextResult:
        """Describe an image, serving and filling the per-URL cache."""
        if use_cache:
            cached = await asyncio.to_thread(self._storage.get_alt_text, image_url)
            if cached is not None:
                logger.debug("Alt text cache hit for %s", image_url)
                return AltTextResult(alt_text=cached.alt_text, cached=True)

        result = await self._provider.complete(
            [
                ProviderMessage(role="system", content=ALT_TEXT_SYSTEM_PROMPT),
                ProviderMessage(
                    role="user",
                    content=[text_part(ALT_TEXT_INSTRUCTION), image_part(image_url)],
                ),
            ],
            CompletionOptions(model=settings.VISION_MODEL, max_tokens=ALT_TEXT_MAX_TOKENS),
        )
        alt_text = result.content or ALT_TEXT_FALLBACK
        await asyncio.to_thread(self._storage.cache_alt_text, image_url, alt_text)
        logger.info("Generated alt text for %s", image_url)
        return AltTextResult(alt_text=alt_text, cached=False)
