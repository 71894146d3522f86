"""Catalog loading, selection, validation and statistics."""

import csv
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tire_scout.models.pydantic_models import (
    BrandStats,
    CatalogQuery,
    CatalogStats,
    ProductRecord,
    ScoringConfig,
    Season,
)
from tire_scout.scoring.parsers import coerce_positive_number, parse_noise_level, parse_rating

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["season", "brand", "width", "rim_size", "price"]
NUMERIC_FIELDS = ["width", "rim_size", "price"]
STATS_METRICS = ["price", "noise_level", "user_rating", "width", "profile", "rim_size"]
FACET_FIELDS = ["width", "profile", "rim_size"]
UNKNOWN_BRAND = "Unknown"


class CatalogFormatError(Exception):
    """Raised when a catalog file cannot be read as products."""

    pass


def _read_json_rows(path: Path) -> list[Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("products")
    if not isinstance(data, list):
        raise CatalogFormatError(f"Expected a list of products in {path}")
    return data


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        # Empty cells mean absent fields
        return [{key: value for key, value in row.items() if value != ""} for row in reader]


def load_catalog(path: Path) -> list[ProductRecord]:
    """Load a comparison set from a JSON or CSV export of the product store.

    JSON may be a list of documents or an object with a "products" list.
    Input order is preserved. Records without an id get their 1-based
    position. Rows that are not objects or fail validation are skipped
    with a warning.

    Args:
        path: Path to a .json or .csv file.

    Returns:
        List of ProductRecord in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        CatalogFormatError: If the format is unsupported or malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            rows = _read_json_rows(path)
        except json.JSONDecodeError as e:
            raise CatalogFormatError(f"Invalid JSON in {path}: {e}") from e
    elif suffix == ".csv":
        rows = _read_csv_rows(path)
    else:
        raise CatalogFormatError(f"Unsupported catalog format: {suffix or path.name}")

    records = []
    for position, row in enumerate(rows, 1):
        if not isinstance(row, dict):
            logger.warning("Skipping catalog row %d: not an object", position)
            continue
        # csv.DictReader files cells beyond the header under the None key
        if None in row:
            logger.warning("Skipping catalog row %d: more cells than header columns", position)
            continue
        row.setdefault("id", position)
        try:
            records.append(ProductRecord(**row))
        except ValidationError:
            logger.warning("Skipping catalog row %d: invalid field types", position, exc_info=True)

    logger.debug("Loaded %d products from %s", len(records), path)
    return records


def matches_query(record: ProductRecord, query: CatalogQuery) -> bool:
    """Check a record against every predicate set on the query."""
    if query.season is not None and record.season != query.season:
        return False
    for field in FACET_FIELDS:
        expected = getattr(query, field)
        if expected is not None and coerce_positive_number(getattr(record, field)) != expected:
            return False
    return True


def filter_catalog(
    records: Sequence[ProductRecord], query: CatalogQuery | None
) -> list[ProductRecord]:
    """Select the comparison set matching query, keeping input order."""
    if query is None or query.is_empty():
        return list(records)
    return [record for record in records if matches_query(record, query)]


def validate_product(record: ProductRecord) -> list[str]:
    """List data quality issues of a record.

    Returns:
        Human-readable issues, empty if the record is complete.
    """
    issues = []

    for field in REQUIRED_FIELDS:
        if not getattr(record, field):
            issues.append(f"Missing {field}")

    valid_seasons = [season.value for season in Season]
    if record.season and record.season not in valid_seasons:
        issues.append(f"Invalid season value: {record.season}")

    for field in NUMERIC_FIELDS:
        value = getattr(record, field)
        if value and not _is_numeric(value):
            issues.append(f"Invalid {field} value: {value}")

    return issues


def _is_numeric(value: object) -> bool:
    try:
        float(str(value).strip())
    except ValueError:
        return False
    return True


def _metric_value(record: ProductRecord, metric: str, config: ScoringConfig) -> float | None:
    if metric == "noise_level":
        return parse_noise_level(record.noise_level, config.noise_range)
    if metric == "user_rating":
        rating = parse_rating(record.user_rating)
        return float(rating) if rating is not None else None
    return coerce_positive_number(getattr(record, metric))


def analyze_catalog(
    records: Sequence[ProductRecord],
    metric: str,
    config: ScoringConfig | None = None,
) -> CatalogStats:
    """Summarize one metric across a catalog slice.

    Only positive, parseable values count towards the statistics; the
    season breakdown counts every record.

    Args:
        records: Catalog slice.
        metric: One of STATS_METRICS.
        config: Noise range used for noise_level. Defaults to ScoringConfig().

    Returns:
        CatalogStats with None statistics when no value is usable.

    Raises:
        ValueError: If metric is not supported.
    """
    if metric not in STATS_METRICS:
        raise ValueError(f"Unknown metric: {metric}. Use one of {', '.join(STATS_METRICS)}")

    config = config or ScoringConfig()
    values = [
        value
        for value in (_metric_value(record, metric, config) for record in records)
        if value is not None
    ]

    season_breakdown = {
        "summer": sum(1 for record in records if record.season == Season.SUMMER.value),
        "winter": sum(1 for record in records if record.season == Season.WINTER.value),
    }

    if not values:
        return CatalogStats(metric=metric, season_breakdown=season_breakdown)

    return CatalogStats(
        metric=metric,
        total=len(values),
        min=min(values),
        max=max(values),
        average=sum(values) / len(values),
        season_breakdown=season_breakdown,
    )


def available_values(
    records: Sequence[ProductRecord],
    field: str,
    query: CatalogQuery | None = None,
) -> list[int | float]:
    """List the distinct sizes on offer for one dimension.

    Used to build cascading size pickers: widths for a season and rim
    size, then profiles once the width is chosen.

    Args:
        records: Catalog slice.
        field: One of FACET_FIELDS.
        query: Predicates narrowing the records first.

    Returns:
        Distinct positive values in ascending order. Whole numbers come
        back as int.

    Raises:
        ValueError: If field is not supported.
    """
    if field not in FACET_FIELDS:
        raise ValueError(f"Unknown facet: {field}. Use one of {', '.join(FACET_FIELDS)}")

    values = {
        coerce_positive_number(getattr(record, field)) for record in filter_catalog(records, query)
    }
    values.discard(None)
    return [int(value) if value.is_integer() else value for value in sorted(values)]


def brand_breakdown(records: Sequence[ProductRecord]) -> list[BrandStats]:
    """Count products per brand with a summer/winter split.

    Records without a brand are counted under UNKNOWN_BRAND. Brands are
    ordered by product count, ties in order of first appearance.
    """
    brands: dict[str, BrandStats] = {}
    for record in records:
        name = record.brand or UNKNOWN_BRAND
        current = brands.get(name) or BrandStats(brand=name)
        brands[name] = current.model_copy(
            update={
                "total": current.total + 1,
                "summer": current.summer + (record.season == Season.SUMMER.value),
                "winter": current.winter + (record.season == Season.WINTER.value),
            }
        )

    return sorted(brands.values(), key=lambda stats: stats.total, reverse=True)
