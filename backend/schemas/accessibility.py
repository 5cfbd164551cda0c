"""Pydantic schemas for the text and image accessibility endpoints."""

from typing import Literal

from pydantic import AnyUrl, Field, TypeAdapter, ValidationError, field_validator

from schemas.base import CamelModel

ReadingLevel = Literal["elementary", "middle", "high"]

_URL_ADAPTER = TypeAdapter(AnyUrl)


class SimplifyRequest(CamelModel):
    text: str = Field(min_length=1)
    reading_level: ReadingLevel = "middle"


class SimplifyResponse(CamelModel):
    original: str
    simplified: str
    reading_level: ReadingLevel


class AltTextRequest(CamelModel):
    image_url: str
    use_cache: bool = True

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        """Must parse as a URL; the submitted string is kept as-is for the cache key."""
        try:
            _URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError("imageUrl must be a valid URL")
        return v


class AltTextResponse(CamelModel):
    alt_text: str
    cached: bool


class ReadAloudRequest(CamelModel):
    text: str = Field(min_length=1)
    words_per_minute: float = Field(default=150, ge=50, le=300)


class WordTiming(CamelModel):
    word: str
    start_time: float  # ms from start
    duration: float  # ms


class ReadAloudResponse(CamelModel):
    text: str
    word_timings: list[WordTiming]
    total_duration: float  # ms
    words_per_minute: float
