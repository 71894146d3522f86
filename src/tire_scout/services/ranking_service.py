"""Service layer for scoring and ranking a comparison set."""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from tire_scout.models.pydantic_models import (
    Criterion,
    PreferenceSet,
    ProductRecord,
    RankingResult,
    ScoredProduct,
    ScoringConfig,
    SortConfig,
    SortField,
    SortOrder,
)
from tire_scout.scoring.aggregator import compute_attractiveness_score
from tire_scout.scoring.normalizer import (
    collect_comparison_values,
    normalize_against,
    parse_criterion,
)
from tire_scout.scoring.parsers import coerce_positive_number, parse_noise_level, parse_rating

logger = logging.getLogger(__name__)

TEXT_FIELDS = {SortField.VENDOR, SortField.BRAND, SortField.MODEL, SortField.SIZE}


class RankingService:
    """Service for scoring and ordering products.

    Every call is a full batch recompute over the comparison set it is
    given; nothing is cached between calls.
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        """Initialize with scoring configuration.

        Args:
            config: Grade table, noise range and rounding. Defaults to ScoringConfig().
        """
        self._config = config or ScoringConfig()

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def score_catalog(
        self,
        comparison_set: Sequence[ProductRecord],
        preferences: PreferenceSet | None,
    ) -> list[ScoredProduct]:
        """Score every product against the whole comparison set.

        Args:
            comparison_set: Products being compared, in caller order.
            preferences: Importance weights, or None for an unscored view.

        Returns:
            ScoredProduct per record, in input order.
        """
        comparison_values = collect_comparison_values(comparison_set, self._config)
        logger.debug(
            "Scoring %d products, comparison value counts: %s",
            len(comparison_set),
            {criterion.value: len(values) for criterion, values in comparison_values.items()},
        )

        scored = []
        for position, record in enumerate(comparison_set):
            normalized = normalize_against(record, comparison_values, self._config)
            scored.append(
                ScoredProduct(
                    product=record,
                    position=position,
                    normalized_scores=normalized,
                    attractiveness_score=compute_attractiveness_score(normalized, preferences),
                )
            )
        return scored

    def rank_catalog(
        self,
        comparison_set: Sequence[ProductRecord],
        preferences: PreferenceSet | None,
        sort: SortConfig | None = None,
    ) -> RankingResult:
        """Score and order a comparison set.

        Sorting by score is descending by default and stable, so ties keep
        input order. Without preferences every score is 0 and a score sort
        leaves the caller's order untouched.

        Args:
            comparison_set: Products being compared, in caller order.
            preferences: Importance weights, or None.
            sort: Column and direction. Defaults to score descending.

        Returns:
            RankingResult with ordered items.
        """
        sort = sort or SortConfig()
        items = self.score_catalog(comparison_set, preferences)

        if preferences is None and sort.field == SortField.ATTRACTIVENESS_SCORE:
            return RankingResult(items=items, sort=sort, scored=False)

        return RankingResult(
            items=sort_products(items, sort, self._config),
            sort=sort,
            scored=preferences is not None,
        )


def _sort_key_getter(
    field: SortField, config: ScoringConfig
) -> Callable[[ScoredProduct], Any]:
    """Return a function extracting the comparable value of a column, None if missing."""
    if field == SortField.ATTRACTIVENESS_SCORE:
        return lambda item: item.attractiveness_score
    if field in TEXT_FIELDS:

        def text_value(item: ScoredProduct) -> str | None:
            value = getattr(item.product, field.value)
            return str(value).casefold() if value else None

        return text_value
    if field == SortField.PRICE:
        return lambda item: coerce_positive_number(item.product.price)
    if field == SortField.USER_RATING:
        return lambda item: parse_rating(item.product.user_rating)
    if field == SortField.NOISE_LEVEL:
        return lambda item: parse_noise_level(item.product.noise_level, config.noise_range)

    criterion = Criterion(field.value)
    return lambda item: parse_criterion(item.product, criterion, config)


def sort_products(
    items: Sequence[ScoredProduct],
    sort: SortConfig,
    config: ScoringConfig | None = None,
) -> list[ScoredProduct]:
    """Stable sort by one column; products missing that value go last.

    Args:
        items: Scored products in their current order.
        sort: Column and direction.
        config: Used to parse noise levels and grades. Defaults to ScoringConfig().

    Returns:
        New ordered list.
    """
    get_value = _sort_key_getter(sort.field, config or ScoringConfig())

    present = [item for item in items if get_value(item) is not None]
    missing = [item for item in items if get_value(item) is None]

    # reverse=True keeps equal items in their original relative order
    present.sort(key=get_value, reverse=sort.order == SortOrder.DESC)
    return present + missing
