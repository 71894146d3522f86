"""Scoring modules."""

from tire_scout.scoring.aggregator import compute_attractiveness_score
from tire_scout.scoring.normalizer import compute_normalized_scores, normalize_score
from tire_scout.scoring.parsers import (
    coerce_positive_number,
    decode_grade,
    parse_noise_level,
    parse_rating,
)
from tire_scout.scoring.preferences import apply_edit

__all__ = [
    "apply_edit",
    "coerce_positive_number",
    "compute_attractiveness_score",
    "compute_normalized_scores",
    "decode_grade",
    "normalize_score",
    "parse_noise_level",
    "parse_rating",
]
