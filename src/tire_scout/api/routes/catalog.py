"""Catalog analysis API endpoints."""

from fastapi import APIRouter, HTTPException

from tire_scout.api.dependencies import ScoringConfigDep
from tire_scout.api.schemas import (
    CatalogStatsRequest,
    CatalogValidationResponse,
    FacetRequest,
    FacetResponse,
    ProductIssues,
)
from tire_scout.models.pydantic_models import BrandStats, CatalogStats, ProductRecord
from tire_scout.services.catalog_service import (
    analyze_catalog,
    available_values,
    brand_breakdown,
    validate_product,
)

router = APIRouter()


@router.post("/stats", response_model=CatalogStats)
async def catalog_stats(
    request: CatalogStatsRequest,
    config: ScoringConfigDep,
) -> CatalogStats:
    """Get count, min, max and average of one metric plus season counts."""
    try:
        return analyze_catalog(request.products, request.metric, config)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/validate", response_model=CatalogValidationResponse)
async def validate_catalog(
    products: list[ProductRecord],
) -> CatalogValidationResponse:
    """Report missing and malformed fields per product."""
    results = [ProductIssues(id=product.id, issues=validate_product(product)) for product in products]
    return CatalogValidationResponse(
        results=results,
        invalid_count=sum(1 for result in results if result.issues),
    )


@router.post("/facets", response_model=FacetResponse)
async def catalog_facets(
    request: FacetRequest,
) -> FacetResponse:
    """List the widths, profiles or rim sizes available for the current selection."""
    try:
        values = available_values(request.products, request.field, request.query)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return FacetResponse(field=request.field, values=values)


@router.post("/brands", response_model=list[BrandStats])
async def catalog_brands(
    products: list[ProductRecord],
) -> list[BrandStats]:
    """Count products per brand with a summer/winter split."""
    return brand_breakdown(products)
