"""JSON export functionality for ranked products."""

import json
from pathlib import Path
from typing import Any, TextIO

from tire_scout.models.pydantic_models import RankingResult, ScoredProduct


def scored_product_to_dict(item: ScoredProduct, rank: int) -> dict[str, Any]:
    """Convert a ScoredProduct to a JSON-serializable dictionary.

    Product fields are dumped by name, including unknown document fields.
    """
    return {
        "rank": rank,
        "attractiveness_score": item.attractiveness_score,
        "normalized_scores": (
            item.normalized_scores.model_dump() if item.normalized_scores else None
        ),
        "product": item.product.model_dump(mode="json"),
    }


def export_to_json(
    result: RankingResult,
    output: Path | TextIO | None = None,
    indent: int = 2,
) -> str:
    """Export a ranking to JSON format.

    Args:
        result: Ranked products.
        output: Optional file path or file-like object. If None, returns string.
        indent: JSON indentation level.

    Returns:
        JSON string if output is None, empty string otherwise.
    """
    data = {
        "count": len(result.items),
        "scored": result.scored,
        "sort": result.sort.model_dump(mode="json"),
        "products": [
            scored_product_to_dict(item, rank) for rank, item in enumerate(result.items, 1)
        ],
    }

    if output is None:
        return json.dumps(data, indent=indent, ensure_ascii=False)

    if isinstance(output, Path):
        with open(output, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
        return ""

    json.dump(data, output, indent=indent, ensure_ascii=False)
    return ""
