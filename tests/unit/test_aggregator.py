"""Unit tests for the weighted aggregator."""

from tire_scout.models.pydantic_models import NormalizedScoreSet, PreferenceSet
from tire_scout.scoring.aggregator import compute_attractiveness_score

PRICE_ONLY = PreferenceSet(price=100, wet_grip=0, fuel_efficiency=0, satisfaction=0, noise=0)
ALL_ZERO = PreferenceSet(price=0, wet_grip=0, fuel_efficiency=0, satisfaction=0, noise=0)


class TestComputeAttractivenessScore:
    """Tests for combining scores and weights."""

    def test_price_only_weights(self) -> None:
        """With all weight on price the score is the price score in percent."""
        assert compute_attractiveness_score(NormalizedScoreSet(price=1.0), PRICE_ONLY) == 100
        assert compute_attractiveness_score(NormalizedScoreSet(price=0.6), PRICE_ONLY) == 60
        assert compute_attractiveness_score(NormalizedScoreSet(price=0.0), PRICE_ONLY) == 0

    def test_weighted_sum(self) -> None:
        """Scores are combined as a dot product with weight fractions."""
        scores = NormalizedScoreSet(price=0.5, wet_grip=1.0)
        preferences = PreferenceSet(price=50, wet_grip=50, fuel_efficiency=0, satisfaction=0, noise=0)

        assert compute_attractiveness_score(scores, preferences) == 75

    def test_perfect_product_scores_100(self) -> None:
        """Top marks everywhere with equal weights gives 100."""
        scores = NormalizedScoreSet(
            price=1.0, wet_grip=1.0, fuel_efficiency=1.0, satisfaction=1.0, noise=1.0
        )

        assert compute_attractiveness_score(scores, PreferenceSet()) == 100

    def test_rounds_half_up(self) -> None:
        """12.5 rounds to 13."""
        assert compute_attractiveness_score(NormalizedScoreSet(price=0.125), PRICE_ONLY) == 13

    def test_absent_preferences_score_zero(self) -> None:
        """No preferences means no score."""
        assert compute_attractiveness_score(NormalizedScoreSet(price=1.0), None) == 0

    def test_all_zero_weights_score_zero(self) -> None:
        """All-zero weights tie every product at 0."""
        scores = NormalizedScoreSet(
            price=1.0, wet_grip=1.0, fuel_efficiency=1.0, satisfaction=1.0, noise=1.0
        )

        assert compute_attractiveness_score(scores, ALL_ZERO) == 0

    def test_drifted_weights_capped_at_100(self) -> None:
        """Weights totalling 102 cannot push the score past 100."""
        scores = NormalizedScoreSet(
            price=1.0, wet_grip=1.0, fuel_efficiency=1.0, satisfaction=1.0, noise=1.0
        )
        drifted = PreferenceSet(price=50, wet_grip=13, fuel_efficiency=13, satisfaction=13, noise=13)

        assert compute_attractiveness_score(scores, drifted) == 100
