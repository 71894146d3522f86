"""Service layer for tire scout business logic."""

from tire_scout.services.catalog_service import (
    CatalogFormatError,
    analyze_catalog,
    available_values,
    brand_breakdown,
    filter_catalog,
    load_catalog,
    validate_product,
)
from tire_scout.services.ranking_service import RankingService, sort_products

__all__ = [
    "CatalogFormatError",
    "RankingService",
    "analyze_catalog",
    "available_values",
    "brand_breakdown",
    "filter_catalog",
    "load_catalog",
    "sort_products",
    "validate_product",
]
