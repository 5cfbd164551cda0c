"""Pydantic schemas for Stylist font preferences."""

from typing import Literal, Optional

from pydantic import Field

from schemas.base import CamelModel

FontFamily = Literal["Arial", "Verdana", "Georgia", "Times New Roman", "Courier"]

FONT_SIZE_PX_MIN = 12
FONT_SIZE_PX_MAX = 24


class FontPreferenceCreate(CamelModel):
    """Request body for creating a font preference."""

    font_family: FontFamily
    font_size: int = Field(ge=FONT_SIZE_PX_MIN, le=FONT_SIZE_PX_MAX, strict=True)


class FontPreferenceUpdate(CamelModel):
    """Request body for a partial font preference update."""

    font_family: Optional[FontFamily] = None
    font_size: Optional[int] = Field(
        default=None, ge=FONT_SIZE_PX_MIN, le=FONT_SIZE_PX_MAX, strict=True
    )


class FontPreferenceResponse(CamelModel):
    id: str
    font_family: str
    font_size: int
