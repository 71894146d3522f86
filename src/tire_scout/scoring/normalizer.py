"""Criterion normalization relative to a comparison set."""

from collections.abc import Sequence

from tire_scout.models.pydantic_models import (
    Criterion,
    Direction,
    NormalizedScoreSet,
    ProductRecord,
    ScoringConfig,
)
from tire_scout.scoring.parsers import (
    coerce_positive_number,
    decode_grade,
    parse_noise_level,
    parse_rating,
)

# Price and noise: lower is better. Grades and rating: higher is better.
CRITERION_DIRECTIONS: dict[Criterion, Direction] = {
    Criterion.PRICE: Direction.DESCENDING,
    Criterion.WET_GRIP: Direction.ASCENDING,
    Criterion.FUEL_EFFICIENCY: Direction.ASCENDING,
    Criterion.SATISFACTION: Direction.ASCENDING,
    Criterion.NOISE: Direction.DESCENDING,
}

ComparisonValues = dict[Criterion, list[float]]


def parse_criterion(
    record: ProductRecord, criterion: Criterion, config: ScoringConfig
) -> float | None:
    """Parse the raw field behind one criterion.

    Decoded grade 0 (worst or missing) counts as no value, like any
    other non-positive number.

    Returns:
        Parsed value, or None if the record has no usable value.
    """
    if criterion == Criterion.PRICE:
        return coerce_positive_number(record.price)
    if criterion == Criterion.NOISE:
        return parse_noise_level(record.noise_level, config.noise_range)
    if criterion == Criterion.SATISFACTION:
        rating = parse_rating(record.user_rating)
        return float(rating) if rating is not None else None

    raw = record.wet_grip if criterion == Criterion.WET_GRIP else record.fuel_efficiency
    grade = decode_grade(raw, config.grade_table)
    return float(grade) if grade > 0 else None


def normalize_score(
    value: float | None,
    comparison_values: Sequence[float],
    direction: Direction,
) -> float:
    """Map a parsed value onto [0, 1] relative to the comparison values.

    Formula:
        descending: score = 1 - (value - min) / (max - min)
        ascending:  score = (value - min) / (max - min)

    Degenerate cases:
        - no value or empty comparison values: 0
        - all comparison values equal: 1

    Args:
        value: Parsed value of the record, or None.
        comparison_values: Non-missing values across the comparison set.
        direction: Whether higher (ascending) or lower (descending) is better.

    Returns:
        Score in [0, 1].
    """
    if value is None or not comparison_values:
        return 0.0

    low = min(comparison_values)
    high = max(comparison_values)
    if high == low:
        return 1.0

    ratio = (value - low) / (high - low)
    score = 1.0 - ratio if direction == Direction.DESCENDING else ratio

    # Clamp float round-off and values outside the comparison set
    return min(1.0, max(0.0, score))


def collect_comparison_values(
    comparison_set: Sequence[ProductRecord], config: ScoringConfig
) -> ComparisonValues:
    """Parse every criterion across the comparison set, dropping missing values."""
    values: ComparisonValues = {criterion: [] for criterion in Criterion}
    for record in comparison_set:
        for criterion in Criterion:
            parsed = parse_criterion(record, criterion, config)
            if parsed is not None:
                values[criterion].append(parsed)
    return values


def normalize_against(
    record: ProductRecord, comparison_values: ComparisonValues, config: ScoringConfig
) -> NormalizedScoreSet:
    """Score one record against comparison values collected beforehand."""
    scores = {
        criterion.value: normalize_score(
            parse_criterion(record, criterion, config),
            comparison_values[criterion],
            CRITERION_DIRECTIONS[criterion],
        )
        for criterion in Criterion
    }
    return NormalizedScoreSet(**scores)


def compute_normalized_scores(
    record: ProductRecord,
    comparison_set: Sequence[ProductRecord],
    config: ScoringConfig | None = None,
) -> NormalizedScoreSet:
    """Compute the five criterion scores of a record within a comparison set.

    The scores are only meaningful relative to comparison_set; scoring
    against another set gives unrelated numbers.

    Args:
        record: Product to score.
        comparison_set: Products the record is compared against.
        config: Grade table and noise range. Defaults to ScoringConfig().

    Returns:
        NormalizedScoreSet with values in [0, 1].
    """
    config = config or ScoringConfig()
    return normalize_against(record, collect_comparison_values(comparison_set, config), config)
