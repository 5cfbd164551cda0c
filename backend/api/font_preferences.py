"""Stylist font preference API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_font_preference_service
from schemas import FontPreferenceCreate, FontPreferenceResponse, FontPreferenceUpdate
from services.font_preference_service import FontPreferenceService
from storage.exceptions import RecordNotFoundError

router = APIRouter(prefix="/api/font-preferences", tags=["font-preferences"])


@router.get("/current", response_model=FontPreferenceResponse)
def get_current_font_preference(
    service: FontPreferenceService = Depends(get_font_preference_service),
):
    """Get the most recently created font preference."""
    preference = service.get_current()
    if preference is None:
        raise HTTPException(
            status_code=404,
            detail="No font preferences found. Please create font preferences first",
        )
    return FontPreferenceResponse.model_validate(preference)


@router.get("/{preference_id}", response_model=FontPreferenceResponse)
def get_font_preference(
    preference_id: str,
    service: FontPreferenceService = Depends(get_font_preference_service),
):
    preference = service.get(preference_id)
    if preference is None:
        raise HTTPException(status_code=404, detail="Font preference not found")
    return FontPreferenceResponse.model_validate(preference)


@router.post("", response_model=FontPreferenceResponse, status_code=201)
def create_font_preference(
    body: FontPreferenceCreate,
    service: FontPreferenceService = Depends(get_font_preference_service),
):
    """Create a font preference and make it the current one."""
    preference = service.create(body.font_family, body.font_size)
    return FontPreferenceResponse.model_validate(preference)


@router.put("/{preference_id}", response_model=FontPreferenceResponse)
def update_font_preference(
    preference_id: str,
    body: FontPreferenceUpdate,
    service: FontPreferenceService = Depends(get_font_preference_service),
):
    """Partially update a font preference."""
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    try:
        preference = service.update(preference_id, changes)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Font preference not found")
    return FontPreferenceResponse.model_validate(preference)


@router.delete("/{preference_id}", status_code=204)
def delete_font_preference(
    preference_id: str,
    service: FontPreferenceService = Depends(get_font_preference_service),
):
    """Delete a font preference; deleting the current one clears the pointer."""
    if not service.delete(preference_id):
        raise HTTPException(status_code=404, detail="Font preference not found")
