"""FastAPI dependency injection for configuration and services."""

from typing import Annotated

import yaml
from fastapi import Depends, HTTPException
from pydantic import ValidationError

from tire_scout.config import load_scoring_config
from tire_scout.models.pydantic_models import ScoringConfig
from tire_scout.services.ranking_service import RankingService


def get_scoring_config() -> ScoringConfig:
    """Dependency that provides the scoring configuration.

    Returns:
        Loaded ScoringConfig from config file.

    Raises:
        HTTPException: 500 if the config file is missing or invalid.
    """
    try:
        return load_scoring_config()
    except (FileNotFoundError, yaml.YAMLError, ValidationError, ValueError) as e:
        raise HTTPException(status_code=500, detail=f"Error loading scoring config: {e}") from e


def get_ranking_service(
    config: Annotated[ScoringConfig, Depends(get_scoring_config)],
) -> RankingService:
    """Dependency that provides a RankingService instance.

    Args:
        config: Scoring config from get_scoring_config dependency.

    Returns:
        RankingService instance.
    """
    return RankingService(config)


# Type aliases for cleaner dependency injection
ScoringConfigDep = Annotated[ScoringConfig, Depends(get_scoring_config)]
RankingServiceDep = Annotated[RankingService, Depends(get_ranking_service)]
