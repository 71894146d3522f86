"""API request and response schemas."""

from pydantic import BaseModel, Field

from tire_scout.models.pydantic_models import (
    CatalogQuery,
    Criterion,
    NormalizedScoreSet,
    PreferenceSet,
    ProductRecord,
    SortConfig,
    SortField,
    SortOrder,
)


class PreferenceEditRequest(BaseModel):
    """One slider change applied to the current weights."""

    preferences: PreferenceSet
    key: Criterion
    value: int = Field(..., ge=0, le=100, description="New weight for key")


class PreferenceEditResponse(BaseModel):
    """Renormalized weights."""

    preferences: PreferenceSet
    total: int = Field(description="Sum of weights, 100 unless all zero or rounded independently")


class RankingRequest(BaseModel):
    """Comparison set and preferences to rank."""

    products: list[ProductRecord]
    preferences: PreferenceSet | None = None
    sort_by: SortField = SortField.ATTRACTIVENESS_SCORE
    sort_order: SortOrder = SortOrder.DESC
    query: CatalogQuery | None = Field(None, description="Narrow the comparison set first")


class RankedProduct(BaseModel):
    """Single ranked product."""

    rank: int
    attractiveness_score: int
    normalized_scores: NormalizedScoreSet | None
    product: ProductRecord


class RankingResponse(BaseModel):
    """Ranked comparison set."""

    items: list[RankedProduct]
    count: int = Field(description="Number of products in the comparison set")
    scored: bool = Field(description="False when no preferences were given")
    sort: SortConfig


class CatalogStatsRequest(BaseModel):
    """Products and metric to summarize."""

    products: list[ProductRecord]
    metric: str = "price"


class ProductIssues(BaseModel):
    """Validation issues of one product."""

    id: str | int | None
    issues: list[str]


class CatalogValidationResponse(BaseModel):
    """Validation report for a catalog slice."""

    results: list[ProductIssues]
    invalid_count: int


class FacetRequest(BaseModel):
    """Products and the size dimension to list values for."""

    products: list[ProductRecord]
    field: str = Field(..., description="width, profile or rim_size")
    query: CatalogQuery | None = Field(None, description="Selections made so far")


class FacetResponse(BaseModel):
    """Distinct values on offer for one size dimension."""

    field: str
    values: list[int | float]
