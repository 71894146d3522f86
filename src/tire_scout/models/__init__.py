"""Data models for tire scout."""

from tire_scout.models.pydantic_models import (
    BrandStats,
    CatalogQuery,
    CatalogStats,
    Criterion,
    Direction,
    NormalizedScoreSet,
    PreferenceSet,
    ProductRecord,
    RankingResult,
    ScoredProduct,
    ScoringConfig,
    SortConfig,
    SortField,
    SortOrder,
)

__all__ = [
    "BrandStats",
    "CatalogQuery",
    "CatalogStats",
    "Criterion",
    "Direction",
    "NormalizedScoreSet",
    "PreferenceSet",
    "ProductRecord",
    "RankingResult",
    "ScoredProduct",
    "ScoringConfig",
    "SortConfig",
    "SortField",
    "SortOrder",
]
