"""Unit tests for RankingService."""

import pytest

from tire_scout.models.pydantic_models import (
    PreferenceSet,
    ProductRecord,
    ScoringConfig,
    SortConfig,
    SortField,
    SortOrder,
)
from tire_scout.services.ranking_service import RankingService, sort_products

PRICE_ONLY = PreferenceSet(price=100, wet_grip=0, fuel_efficiency=0, satisfaction=0, noise=0)
ALL_ZERO = PreferenceSet(price=0, wet_grip=0, fuel_efficiency=0, satisfaction=0, noise=0)


@pytest.fixture
def ranking_service() -> RankingService:
    """Create a RankingService with default config."""
    return RankingService()


@pytest.fixture
def priced_products() -> list[ProductRecord]:
    """Three products that only differ in price."""
    return [
        ProductRecord(id="a", price=100),
        ProductRecord(id="b", price=120),
        ProductRecord(id="c", price=150),
    ]


@pytest.fixture
def mixed_products() -> list[ProductRecord]:
    """Products with varied and partly missing fields."""
    return [
        ProductRecord(id="p1", brand="nokian", price=89.9, wet_grip="A", fuel_efficiency="B", dex_rating=5, noise_level="71 dB"),
        ProductRecord(id="p2", brand="Michelin", price=124.5, wet_grip="A", fuel_efficiency="A", dex_rating=4, noise_level="69/70 dB"),
        ProductRecord(id="p3", brand="Hankook", price="74.00", wet_grip="b", fuel_efficiency="C", dex_rating="4", noise_level=72),
        ProductRecord(id="p4", brand="Linglong", price=52, wet_grip="C", fuel_efficiency="E", noise_level="n/a"),
    ]


def ids(items) -> list:
    return [item.product.id for item in items]


class TestScoreCatalog:
    """Tests for RankingService.score_catalog()."""

    def test_price_scenario(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """Price-only weights score 100/60/0 for prices 100/120/150."""
        scored = ranking_service.score_catalog(priced_products, PRICE_ONLY)

        assert [item.attractiveness_score for item in scored] == [100, 60, 0]
        assert scored[1].normalized_scores.price == pytest.approx(0.6)

    def test_keeps_input_order_and_positions(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """Scored items mirror the comparison set."""
        scored = ranking_service.score_catalog(list(reversed(priced_products)), PRICE_ONLY)

        assert ids(scored) == ["c", "b", "a"]
        assert [item.position for item in scored] == [0, 1, 2]

    def test_empty_comparison_set(self, ranking_service: RankingService) -> None:
        """Nothing in, nothing out."""
        assert ranking_service.score_catalog([], PRICE_ONLY) == []

    def test_scores_within_bounds(
        self, ranking_service: RankingService, mixed_products: list[ProductRecord]
    ) -> None:
        """Every score lies within 0-100."""
        for item in ranking_service.score_catalog(mixed_products, PreferenceSet()):
            assert 0 <= item.attractiveness_score <= 100


class TestRankCatalog:
    """Tests for RankingService.rank_catalog()."""

    def test_price_scenario_order(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """Cheapest first when only price matters."""
        result = ranking_service.rank_catalog(priced_products, PRICE_ONLY)

        assert ids(result.items) == ["a", "b", "c"]
        assert [item.attractiveness_score for item in result.items] == [100, 60, 0]
        assert result.scored is True

    def test_orders_by_score_descending(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """Input order does not matter for distinct scores."""
        result = ranking_service.rank_catalog(list(reversed(priced_products)), PRICE_ONLY)

        assert ids(result.items) == ["a", "b", "c"]

    def test_all_zero_weights_keep_input_order(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """All products tie at 0 and stay in input order."""
        shuffled = [priced_products[2], priced_products[0], priced_products[1]]

        result = ranking_service.rank_catalog(shuffled, ALL_ZERO)

        assert [item.attractiveness_score for item in result.items] == [0, 0, 0]
        assert ids(result.items) == ["c", "a", "b"]

    def test_ties_keep_input_order(self, ranking_service: RankingService) -> None:
        """Equal scores preserve relative input order."""
        products = [
            ProductRecord(id="x", price=150),
            ProductRecord(id="y", price=100),
            ProductRecord(id="z", price=150),
            ProductRecord(id="w", price=100),
        ]

        result = ranking_service.rank_catalog(products, PRICE_ONLY)

        assert ids(result.items) == ["y", "w", "x", "z"]

    def test_without_preferences_is_unscored(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """No preferences: scores 0 and the caller's order."""
        shuffled = [priced_products[1], priced_products[2], priced_products[0]]

        result = ranking_service.rank_catalog(shuffled, None)

        assert result.scored is False
        assert ids(result.items) == ["b", "c", "a"]
        assert all(item.attractiveness_score == 0 for item in result.items)

    def test_without_preferences_field_sort_applies(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """An explicit column sort still works unscored."""
        result = ranking_service.rank_catalog(
            priced_products, None, SortConfig(field=SortField.PRICE, order=SortOrder.DESC)
        )

        assert ids(result.items) == ["c", "b", "a"]
        assert result.scored is False

    def test_recompute_on_membership_change(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """Dropping the cheapest product rescales the rest."""
        result = ranking_service.rank_catalog(priced_products[1:], PRICE_ONLY)

        assert [item.attractiveness_score for item in result.items] == [100, 0]

    def test_recompute_on_preference_change(
        self, ranking_service: RankingService, mixed_products: list[ProductRecord]
    ) -> None:
        """Changing weights reorders the same catalog."""
        by_price = ranking_service.rank_catalog(mixed_products, PRICE_ONLY)
        by_fuel = ranking_service.rank_catalog(
            mixed_products,
            PreferenceSet(price=0, wet_grip=0, fuel_efficiency=100, satisfaction=0, noise=0),
        )

        assert ids(by_price.items)[0] == "p4"
        assert ids(by_fuel.items)[0] == "p2"

    def test_returns_sort_config(
        self, ranking_service: RankingService, priced_products: list[ProductRecord]
    ) -> None:
        """Default sort is score descending."""
        result = ranking_service.rank_catalog(priced_products, PRICE_ONLY)

        assert result.sort == SortConfig(field=SortField.ATTRACTIVENESS_SCORE, order=SortOrder.DESC)

    def test_uses_configured_noise_range(self) -> None:
        """Config passed to the service reaches the parsers."""
        products = [ProductRecord(id="q", noise_level=55), ProductRecord(id="l", noise_level=75)]
        noise_only = PreferenceSet(price=0, wet_grip=0, fuel_efficiency=0, satisfaction=0, noise=100)
        service = RankingService(ScoringConfig(noise_range={"min": 60, "max": 80}))

        result = service.rank_catalog(products, noise_only)

        # 55 dB is implausible under this range, so only "l" has a noise value
        assert ids(result.items) == ["l", "q"]
        assert [item.attractiveness_score for item in result.items] == [100, 0]


class TestSortProducts:
    """Tests for column sorting."""

    @pytest.fixture
    def scored(self, mixed_products: list[ProductRecord]):
        return RankingService().score_catalog(mixed_products, PreferenceSet())

    def test_price_ascending(self, scored) -> None:
        """Numeric strings sort as numbers."""
        result = sort_products(scored, SortConfig(field=SortField.PRICE, order=SortOrder.ASC))

        assert ids(result) == ["p4", "p3", "p1", "p2"]

    def test_rating_descending_missing_last(self, scored) -> None:
        """Missing ratings go last; ties keep input order."""
        result = sort_products(scored, SortConfig(field=SortField.USER_RATING, order=SortOrder.DESC))

        assert ids(result) == ["p1", "p2", "p3", "p4"]

    def test_missing_last_in_both_directions(self, scored) -> None:
        """Products without a noise value stay at the end."""
        ascending = sort_products(scored, SortConfig(field=SortField.NOISE_LEVEL, order=SortOrder.ASC))
        descending = sort_products(scored, SortConfig(field=SortField.NOISE_LEVEL, order=SortOrder.DESC))

        assert ids(ascending) == ["p2", "p1", "p3", "p4"]
        assert ids(descending) == ["p3", "p1", "p2", "p4"]

    def test_grades_sort_by_decoded_value(self, scored) -> None:
        """Descending wet grip puts A grades first."""
        result = sort_products(scored, SortConfig(field=SortField.WET_GRIP, order=SortOrder.DESC))

        assert ids(result) == ["p1", "p2", "p3", "p4"]

    def test_text_sort_ignores_case(self, scored) -> None:
        """Brands sort case-insensitively."""
        result = sort_products(scored, SortConfig(field=SortField.BRAND, order=SortOrder.ASC))

        assert ids(result) == ["p3", "p4", "p2", "p1"]


class TestSortConfigToggle:
    """Tests for column selection."""

    def test_new_field_starts_ascending(self) -> None:
        """Selecting another column sorts it ascending."""
        assert SortConfig().toggle(SortField.PRICE) == SortConfig(
            field=SortField.PRICE, order=SortOrder.ASC
        )

    def test_same_field_flips(self) -> None:
        """Selecting the active column twice toggles direction."""
        first = SortConfig().toggle(SortField.PRICE)
        second = first.toggle(SortField.PRICE)
        third = second.toggle(SortField.PRICE)

        assert second.order == SortOrder.DESC
        assert third.order == SortOrder.ASC

    def test_default_score_column_flips_to_ascending(self) -> None:
        """Score starts descending, so selecting it again goes ascending."""
        assert SortConfig().toggle(SortField.ATTRACTIVENESS_SCORE).order == SortOrder.ASC
