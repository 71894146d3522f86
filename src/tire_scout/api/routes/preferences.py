"""Preference API endpoints."""

from fastapi import APIRouter

from tire_scout.api.dependencies import ScoringConfigDep
from tire_scout.api.schemas import PreferenceEditRequest, PreferenceEditResponse
from tire_scout.scoring.preferences import apply_edit

router = APIRouter()


@router.post("/edit", response_model=PreferenceEditResponse)
async def edit_preferences(
    request: PreferenceEditRequest,
    config: ScoringConfigDep,
) -> PreferenceEditResponse:
    """Apply one weight change and renormalize all weights to 100.

    All-zero weights are returned unchanged.
    """
    preferences = apply_edit(request.preferences, request.key, request.value, config.rounding)
    return PreferenceEditResponse(preferences=preferences, total=preferences.total)
