"""Pydantic schemas for user accessibility preferences."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel

ContrastLevel = Literal["normal", "high", "low", "inverted"]

FONT_SIZE_PERCENT_MIN = 50
FONT_SIZE_PERCENT_MAX = 300


class UserPreferencesResponse(CamelModel):
    """A user's full preference record."""

    id: str
    user_id: str
    focus_mode: bool
    motion_blocker: bool
    contrast_level: str
    larger_click_targets: bool
    text_simplification: bool
    read_aloud: bool
    font_size: str
    preferences: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class UserPreferencesUpdate(CamelModel):
    """Request body for a partial preference update. Unknown keys are ignored."""

    focus_mode: Optional[bool] = None
    motion_blocker: Optional[bool] = None
    contrast_level: Optional[ContrastLevel] = None
    larger_click_targets: Optional[bool] = None
    text_simplification: Optional[bool] = None
    read_aloud: Optional[bool] = None
    font_size: Optional[str] = None
    preferences: Optional[dict[str, Any]] = None

    @field_validator("font_size", mode="before")
    @classmethod
    def normalize_font_size(cls, v: Any) -> Any:
        """Accept an integer or a digit string; store as a string percentage."""
        if v is None:
            return v
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError("fontSize must be an integer percentage")
        text = str(v).strip()
        if not text.isdigit():
            raise ValueError("fontSize must be an integer percentage")
        size = int(text)
        if not FONT_SIZE_PERCENT_MIN <= size <= FONT_SIZE_PERCENT_MAX:
            raise ValueError(
                f"fontSize must be between {FONT_SIZE_PERCENT_MIN} and {FONT_SIZE_PERCENT_MAX}"
            )
        return str(size)

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, with explicit nulls dropped."""
        return {
            k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None
        }


class FontSizeAdjustRequest(CamelModel):
    """Request body for POST /api/font-size/{userId}."""

    action: Literal["increase", "decrease", "set", "reset"]
    value: Optional[float] = Field(
        default=None, ge=FONT_SIZE_PERCENT_MIN, le=FONT_SIZE_PERCENT_MAX
    )


class FontSizeResponse(CamelModel):
    font_size: int
    percentage: str


class FontSizeAdjustResponse(FontSizeResponse):
    previous_size: int
    action: str
