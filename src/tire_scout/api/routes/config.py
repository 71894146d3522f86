"""Configuration API endpoints."""

from fastapi import APIRouter

from tire_scout.api.dependencies import ScoringConfigDep
from tire_scout.models.pydantic_models import ScoringConfig

router = APIRouter()


@router.get("/scoring", response_model=ScoringConfig)
async def get_scoring_config_endpoint(
    config: ScoringConfigDep,
) -> ScoringConfig:
    """Get the scoring configuration.

    Returns the grade table, plausible noise range, weight rounding policy
    and starting preferences.
    """
    return config
