"""Weighted aggregation of normalized scores into an attractiveness score."""

from tire_scout.models.pydantic_models import Criterion, NormalizedScoreSet, PreferenceSet
from tire_scout.scoring.preferences import WEIGHT_TOTAL, round_half_up


def compute_attractiveness_score(
    normalized_scores: NormalizedScoreSet,
    preferences: PreferenceSet | None,
) -> int:
    """Combine criterion scores and preference weights into one 0-100 score.

    Formula:
        score = round(100 * sum(normalized[c] * weight[c] / 100))

    Args:
        normalized_scores: Criterion scores of one product.
        preferences: Importance weights, or None if the user has not set any.

    Returns:
        Integer score in [0, 100]. 0 without preferences or with all weights 0.
    """
    if preferences is None:
        return 0

    weighted = sum(
        normalized_scores.score(criterion) * (preferences.weight(criterion) / WEIGHT_TOTAL)
        for criterion in Criterion
    )

    # Weights drifting to 101 could push a perfect product past 100
    return max(0, min(100, round_half_up(weighted * 100)))
