"""CSV export functionality for ranked products."""

import csv
from io import StringIO
from pathlib import Path
from typing import TextIO

from tire_scout.models.pydantic_models import Criterion, RankingResult, ScoredProduct

# Columns to export
EXPORT_COLUMNS = [
    "rank",
    "id",
    "vendor",
    "brand",
    "model",
    "size",
    "season",
    "price",
    "user_rating",
    "wet_grip",
    "fuel_efficiency",
    "noise_level",
    "attractiveness_score",
    *[f"score_{criterion.value}" for criterion in Criterion],
]


def _text(value: object) -> str:
    return "" if value is None else str(value)


def scored_product_to_row(item: ScoredProduct, rank: int) -> dict[str, str]:
    """Convert a ScoredProduct to a CSV row dictionary.

    Args:
        item: Scored product.
        rank: 1-based position in the ranking.

    Returns:
        Dictionary with column names as keys.
    """
    product = item.product
    row = {
        "rank": str(rank),
        "id": _text(product.id),
        "vendor": _text(product.vendor),
        "brand": _text(product.brand),
        "model": _text(product.model),
        "size": _text(product.size),
        "season": _text(product.season),
        "price": _text(product.price),
        "user_rating": _text(product.user_rating),
        "wet_grip": _text(product.wet_grip),
        "fuel_efficiency": _text(product.fuel_efficiency),
        "noise_level": _text(product.noise_level),
        "attractiveness_score": str(item.attractiveness_score),
    }
    for criterion in Criterion:
        score = item.normalized_scores.score(criterion) if item.normalized_scores else None
        row[f"score_{criterion.value}"] = f"{score:.3f}" if score is not None else ""
    return row


def export_to_csv(
    result: RankingResult,
    output: Path | TextIO | None = None,
) -> str:
    """Export a ranking to CSV format.

    Args:
        result: Ranked products.
        output: Optional file path or file-like object. If None, returns string.

    Returns:
        CSV string if output is None, empty string otherwise.
    """
    rows = [scored_product_to_row(item, rank) for rank, item in enumerate(result.items, 1)]

    if output is None:
        buffer = StringIO()
        writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue()

    if isinstance(output, Path):
        with open(output, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
            writer.writeheader()
            writer.writerows(rows)
        return ""

    writer = csv.DictWriter(output, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return ""
