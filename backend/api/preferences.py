"""User preference and font-size API endpoints."""

from fastapi import APIRouter, Depends

from api.dependencies import get_preference_service
from schemas import (
    FontSizeAdjustRequest,
    FontSizeAdjustResponse,
    FontSizeResponse,
    UserPreferencesResponse,
    UserPreferencesUpdate,
)
from services.preference_service import PreferenceService

router = APIRouter(prefix="/api", tags=["preferences"])


@router.get("/preferences/{user_id}", response_model=UserPreferencesResponse)
def get_preferences(
    user_id: str, service: PreferenceService = Depends(get_preference_service)
):
    """Get a user's preferences, creating the default record on first access."""
    return UserPreferencesResponse.model_validate(service.get_or_create(user_id))


@router.put("/preferences/{user_id}", response_model=UserPreferencesResponse)
def update_preferences(
    user_id: str,
    body: UserPreferencesUpdate,
    service: PreferenceService = Depends(get_preference_service),
):
    """Apply a partial update (creating the record if it doesn't exist)."""
    record = service.update(user_id, body.changes())
    return UserPreferencesResponse.model_validate(record)


@router.get("/font-size/{user_id}", response_model=FontSizeResponse)
def get_font_size(
    user_id: str, service: PreferenceService = Depends(get_preference_service)
):
    """Get the user's page font size as a percentage."""
    font_size = service.get_font_size(user_id)
    return FontSizeResponse(font_size=font_size, percentage=f"{font_size}%")


@router.post("/font-size/{user_id}", response_model=FontSizeAdjustResponse)
def adjust_font_size(
    user_id: str,
    body: FontSizeAdjustRequest,
    service: PreferenceService = Depends(get_preference_service),
):
    """Increase, decrease, set, or reset the user's font size.

    Sizes saturate at 50% and 300%; increase/decrease step by 10.
    """
    result = service.adjust_font_size(user_id, body.action, body.value)
    return FontSizeAdjustResponse(
        font_size=result.font_size,
        previous_size=result.previous_size,
        action=result.action,
        percentage=result.percentage,
    )
