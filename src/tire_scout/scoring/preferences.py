"""Preference weight editing with renormalization to a total of 100."""

import math

from tire_scout.models.pydantic_models import Criterion, PreferenceSet, RoundingPolicy

WEIGHT_TOTAL = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _round_independent(scaled: dict[Criterion, float]) -> dict[Criterion, int]:
    return {criterion: round_half_up(value) for criterion, value in scaled.items()}


def _round_largest_remainder(scaled: dict[Criterion, float]) -> dict[Criterion, int]:
    # Floors first, then hand out the shortfall by largest fraction (criterion order on ties)
    floors = {criterion: math.floor(value) for criterion, value in scaled.items()}
    shortfall = WEIGHT_TOTAL - sum(floors.values())
    by_remainder = sorted(
        scaled, key=lambda criterion: scaled[criterion] - floors[criterion], reverse=True
    )
    for criterion in by_remainder[:shortfall]:
        floors[criterion] += 1
    return floors


def apply_edit(
    current: PreferenceSet,
    key: Criterion | str,
    new_value: int,
    rounding: RoundingPolicy = RoundingPolicy.LARGEST_REMAINDER,
) -> PreferenceSet:
    """Set one weight and rescale all five so they sum to 100.

    Algorithm:
    1. Replace current[key] with new_value
    2. sum = total of the five weights
    3. sum == 0: return the candidate unchanged (nothing to distribute)
    4. Scale every weight by 100 / sum and round

    Largest-remainder rounding always totals exactly 100. With
    independent rounding each weight is rounded on its own and the total
    can drift by up to 2 either way.

    Args:
        current: Weights before the edit.
        key: Criterion being edited.
        new_value: New weight for key, 0-100.
        rounding: Rounding policy for the rescaled weights.

    Returns:
        New PreferenceSet. Re-applying the same edit to a result that
        totals 100 returns it unchanged.

    Raises:
        ValueError: If key is not a criterion.
        ValidationError: If new_value is outside 0-100.
    """
    criterion = Criterion(key)
    candidate = current.as_dict()
    candidate[criterion] = new_value
    candidate_set = PreferenceSet(**{c.value: weight for c, weight in candidate.items()})

    total = candidate_set.total
    if total == 0:
        return candidate_set

    factor = WEIGHT_TOTAL / total
    scaled = {c: weight * factor for c, weight in candidate_set.as_dict().items()}
    if rounding == RoundingPolicy.LARGEST_REMAINDER:
        rounded = _round_largest_remainder(scaled)
    else:
        rounded = _round_independent(scaled)

    return PreferenceSet(**{c.value: weight for c, weight in rounded.items()})
