"""Ranking API endpoints."""

from fastapi import APIRouter

from tire_scout.api.dependencies import RankingServiceDep
from tire_scout.api.schemas import RankedProduct, RankingRequest, RankingResponse
from tire_scout.models.pydantic_models import SortConfig
from tire_scout.services.catalog_service import filter_catalog

router = APIRouter()


@router.post("", response_model=RankingResponse)
async def rank_products(
    request: RankingRequest,
    service: RankingServiceDep,
) -> RankingResponse:
    """Score and rank a comparison set.

    The whole set is rescored on every call. Without preferences the
    products come back unscored in request order unless another column
    is chosen with sort_by.
    """
    comparison_set = filter_catalog(request.products, request.query)
    result = service.rank_catalog(
        comparison_set,
        request.preferences,
        SortConfig(field=request.sort_by, order=request.sort_order),
    )

    return RankingResponse(
        items=[
            RankedProduct(
                rank=rank,
                attractiveness_score=item.attractiveness_score,
                normalized_scores=item.normalized_scores,
                product=item.product,
            )
            for rank, item in enumerate(result.items, 1)
        ],
        count=len(result.items),
        scored=result.scored,
        sort=result.sort,
    )
