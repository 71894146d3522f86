"""CLI interface for tire-scout."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tire_scout import __version__
from tire_scout.config import load_scoring_config
from tire_scout.export.csv_exporter import export_to_csv
from tire_scout.export.json_exporter import export_to_json, scored_product_to_dict
from tire_scout.models.pydantic_models import (
    CatalogQuery,
    Criterion,
    PreferenceSet,
    ProductRecord,
    RankingResult,
    ScoringConfig,
    SortConfig,
    SortField,
    SortOrder,
)
from tire_scout.scoring.preferences import apply_edit
from tire_scout.services.catalog_service import (
    FACET_FIELDS,
    STATS_METRICS,
    CatalogFormatError,
    analyze_catalog,
    available_values,
    brand_breakdown,
    filter_catalog,
    load_catalog,
    validate_product,
)
from tire_scout.services.ranking_service import RankingService

app = typer.Typer(
    name="tire-scout",
    help="Rank tire catalogs by your own priorities",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

# Scores at or above this are highlighted in the ranking table
HIGHLIGHT_SCORE = 90


def output_json(data: Any) -> None:
    """Output JSON to stdout (for LLM consumption)."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tire-scout version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show debug logging.",
    ),
) -> None:
    """Preference-weighted tire comparison."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_weight_edits(edits: list[str] | None) -> list[tuple[Criterion, int]]:
    """Parse repeated KEY=VALUE weight options.

    Raises:
        typer.BadParameter: If an edit is malformed.
    """
    parsed = []
    for edit in edits or []:
        key, sep, value = edit.partition("=")
        valid_keys = ", ".join(c.value for c in Criterion)
        if not sep:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{edit}'")
        try:
            criterion = Criterion(key.strip())
        except ValueError as e:
            raise typer.BadParameter(f"Unknown weight '{key}'. Use one of: {valid_keys}") from e
        try:
            weight = int(value)
        except ValueError as e:
            raise typer.BadParameter(f"Weight for {key} must be an integer, got '{value}'") from e
        if not 0 <= weight <= 100:
            raise typer.BadParameter(f"Weight for {key} must be between 0 and 100")
        parsed.append((criterion, weight))
    return parsed


def apply_weight_edits(
    preferences: PreferenceSet, edits: list[tuple[Criterion, int]], config: ScoringConfig
) -> PreferenceSet:
    """Apply slider edits in order, renormalizing after each one."""
    for criterion, weight in edits:
        preferences = apply_edit(preferences, criterion, weight, config.rounding)
    return preferences


def _load_config_or_exit(config_path: Path | None) -> ScoringConfig:
    try:
        return load_scoring_config(config_path)
    except (FileNotFoundError, yaml.YAMLError, ValidationError, ValueError) as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1) from e


def _load_catalog_or_exit(catalog: Path) -> list[ProductRecord]:
    try:
        return load_catalog(catalog)
    except (FileNotFoundError, CatalogFormatError) as e:
        logger.debug("Failed to load catalog %s", catalog, exc_info=True)
        console.print(f"[red]Error loading catalog: {e}[/red]")
        raise typer.Exit(1) from e


def _rank(
    catalog: Path,
    config_path: Path | None,
    weights: list[str] | None,
    unscored: bool,
    sort_by: SortField,
    order: SortOrder,
    query: CatalogQuery,
) -> tuple[RankingResult, PreferenceSet | None]:
    config = _load_config_or_exit(config_path)
    edits = parse_weight_edits(weights)
    records = filter_catalog(_load_catalog_or_exit(catalog), query)

    preferences = None if unscored else apply_weight_edits(config.preferences, edits, config)
    service = RankingService(config)
    return service.rank_catalog(records, preferences, SortConfig(field=sort_by, order=order)), preferences


def _grade(value: object) -> str:
    return str(value).upper() if value else "-"


@app.command()
def rank(
    catalog: Path = typer.Argument(..., help="Catalog file (.json or .csv)."),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to scoring config YAML file.",
    ),
    weight: list[str] | None = typer.Option(
        None,
        "--weight",
        "-w",
        help="Weight edit KEY=VALUE, applied like a slider (repeatable, e.g. -w price=60).",
    ),
    unscored: bool = typer.Option(
        False,
        "--unscored",
        help="Ignore preferences and keep catalog order.",
    ),
    sort_by: SortField = typer.Option(
        SortField.ATTRACTIVENESS_SCORE,
        "--sort",
        "-s",
        help="Column to sort by.",
    ),
    order: SortOrder = typer.Option(
        SortOrder.DESC,
        "--order",
        "-o",
        help="Sort direction.",
    ),
    season: str | None = typer.Option(None, "--season", help="Season code (So, Wi)."),
    width: float | None = typer.Option(None, "--width", help="Tire width in mm."),
    profile: float | None = typer.Option(None, "--profile", help="Aspect ratio."),
    rim_size: float | None = typer.Option(None, "--rim-size", help="Rim diameter in inches."),
    limit: int = typer.Option(
        20,
        "--limit",
        "-l",
        help="Maximum number of products to show.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (for LLM/programmatic consumption).",
    ),
) -> None:
    """Score and rank a catalog by preference weights."""
    query = CatalogQuery(season=season, width=width, profile=profile, rim_size=rim_size)
    result, preferences = _rank(catalog, config, weight, unscored, sort_by, order, query)
    shown = result.items[:limit]

    if json_output:
        output_json({
            "products": [scored_product_to_dict(item, idx) for idx, item in enumerate(shown, 1)],
            "count": len(shown),
            "total": len(result.items),
            "scored": result.scored,
            "preferences": preferences.model_dump() if preferences else None,
            "sort": result.sort.model_dump(mode="json"),
        })
        return

    if not result.items:
        console.print("[yellow]No products found.[/yellow]")
        return

    table = Table(title=f"Tire Ranking ({len(shown)} shown)")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Brand", style="white")
    table.add_column("Model", style="white", max_width=30)
    table.add_column("Size", style="dim")
    table.add_column("Price", style="green", justify="right")
    table.add_column("Rating", style="blue", justify="right")
    table.add_column("Wet", justify="center")
    table.add_column("Fuel", justify="center")
    table.add_column("Noise", justify="right")
    table.add_column("Score", style="yellow", justify="right")

    for idx, item in enumerate(shown, 1):
        product = item.product
        score = item.attractiveness_score
        score_str = f"[bold green]{score}[/bold green]" if score >= HIGHLIGHT_SCORE else str(score)
        table.add_row(
            str(idx),
            product.brand or "-",
            product.model or "-",
            product.size or "-",
            str(product.price) if product.price is not None else "-",
            str(product.user_rating) if product.user_rating is not None else "-",
            _grade(product.wet_grip),
            _grade(product.fuel_efficiency),
            str(product.noise_level) if product.noise_level is not None else "-",
            score_str if result.scored else "-",
        )

    console.print(table)

    if preferences is not None:
        weights_str = ", ".join(f"{c.value}={w}" for c, w in preferences.as_dict().items())
        console.print(f"[dim]Weights: {weights_str} (total {preferences.total}%)[/dim]")
    if len(result.items) > limit:
        console.print(f"[dim]Showing {limit} of {len(result.items)} products[/dim]")


@app.command()
def prefs(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to scoring config YAML file.",
    ),
    weight: list[str] | None = typer.Option(
        None,
        "--weight",
        "-w",
        help="Weight edit KEY=VALUE, applied like a slider (repeatable).",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (for LLM/programmatic consumption).",
    ),
) -> None:
    """Show preference weights after applying edits."""
    scoring_config = _load_config_or_exit(config)
    preferences = apply_weight_edits(
        scoring_config.preferences, parse_weight_edits(weight), scoring_config
    )

    if json_output:
        output_json({"preferences": preferences.model_dump(), "total": preferences.total})
        return

    table = Table(title="Preferences")
    table.add_column("Criterion", style="cyan")
    table.add_column("Weight", style="yellow", justify="right")
    for criterion, value in preferences.as_dict().items():
        table.add_row(criterion.value, f"{value}%")
    console.print(table)

    total_style = "green" if preferences.total == 100 else "yellow"
    console.print(f"[{total_style}]Total: {preferences.total}%[/{total_style}]")


@app.command()
def validate(
    catalog: Path = typer.Argument(..., help="Catalog file (.json or .csv)."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (for LLM/programmatic consumption).",
    ),
) -> None:
    """Report missing and malformed catalog fields."""
    records = _load_catalog_or_exit(catalog)
    report = [(record, validate_product(record)) for record in records]
    invalid = [(record, issues) for record, issues in report if issues]

    if json_output:
        output_json({
            "results": [{"id": record.id, "issues": issues} for record, issues in report],
            "count": len(records),
            "invalid_count": len(invalid),
        })
        return

    if not invalid:
        console.print(f"[green]All {len(records)} products are valid.[/green]")
        return

    table = Table(title=f"Catalog Issues ({len(invalid)} of {len(records)} products)")
    table.add_column("ID", style="cyan")
    table.add_column("Brand", style="white")
    table.add_column("Issues", style="red")
    for record, issues in invalid:
        table.add_row(str(record.id), record.brand or "-", "; ".join(issues))
    console.print(table)
    raise typer.Exit(1)


@app.command()
def stats(
    catalog: Path = typer.Argument(..., help="Catalog file (.json or .csv)."),
    metric: str = typer.Option(
        "price",
        "--metric",
        "-m",
        help=f"Metric to summarize ({', '.join(STATS_METRICS)}).",
    ),
    brands: bool = typer.Option(
        False,
        "--brands",
        "-b",
        help="Also count products per brand and season.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to scoring config YAML file.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (for LLM/programmatic consumption).",
    ),
) -> None:
    """Show count, min, max and average of a catalog metric."""
    scoring_config = _load_config_or_exit(config)
    records = _load_catalog_or_exit(catalog)

    try:
        summary = analyze_catalog(records, metric, scoring_config)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    brand_stats = brand_breakdown(records) if brands else []

    if json_output:
        data = summary.model_dump()
        if brands:
            data["brands"] = [entry.model_dump() for entry in brand_stats]
        output_json(data)
        return

    def fmt(value: float | None) -> str:
        return f"{value:,.2f}" if value is not None else "-"

    table = Table(title=f"Catalog Statistics: {metric}")
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", style="yellow", justify="right")
    table.add_row("Products with value", str(summary.total))
    table.add_row("Min", fmt(summary.min))
    table.add_row("Max", fmt(summary.max))
    table.add_row("Average", fmt(summary.average))
    for season_name, count in summary.season_breakdown.items():
        table.add_row(f"{season_name.capitalize()} tires", str(count))
    console.print(table)

    if brands:
        brand_table = Table(title="Products by Brand")
        brand_table.add_column("Brand", style="cyan")
        brand_table.add_column("Total", style="yellow", justify="right")
        brand_table.add_column("Summer", justify="right")
        brand_table.add_column("Winter", justify="right")
        for entry in brand_stats:
            brand_table.add_row(entry.brand, str(entry.total), str(entry.summer), str(entry.winter))
        console.print(brand_table)


@app.command()
def facets(
    catalog: Path = typer.Argument(..., help="Catalog file (.json or .csv)."),
    field: str = typer.Argument(..., help=f"Size dimension ({', '.join(FACET_FIELDS)})."),
    season: str | None = typer.Option(None, "--season", help="Season code (So, Wi)."),
    width: float | None = typer.Option(None, "--width", help="Tire width in mm."),
    profile: float | None = typer.Option(None, "--profile", help="Aspect ratio."),
    rim_size: float | None = typer.Option(None, "--rim-size", help="Rim diameter in inches."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (for LLM/programmatic consumption).",
    ),
) -> None:
    """List the sizes available for a selection (e.g. widths for a season and rim size)."""
    records = _load_catalog_or_exit(catalog)
    query = CatalogQuery(season=season, width=width, profile=profile, rim_size=rim_size)

    try:
        values = available_values(records, field, query)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    if json_output:
        output_json({"field": field, "values": values, "count": len(values)})
        return

    if not values:
        console.print(f"[yellow]No {field} values for this selection.[/yellow]")
        return

    console.print(f"[cyan]{field}:[/cyan] {', '.join(str(value) for value in values)}")


@app.command()
def export(
    catalog: Path = typer.Argument(..., help="Catalog file (.json or .csv)."),
    format: str = typer.Option(
        "csv",
        "--format",
        "-f",
        help="Export format (csv, json).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to scoring config YAML file.",
    ),
    weight: list[str] | None = typer.Option(
        None,
        "--weight",
        "-w",
        help="Weight edit KEY=VALUE, applied like a slider (repeatable).",
    ),
    season: str | None = typer.Option(None, "--season", help="Season code (So, Wi)."),
) -> None:
    """Export a ranked catalog to a file."""
    if format not in ("csv", "json"):
        console.print(f"[red]Unknown format: {format}. Use 'csv' or 'json'.[/red]")
        raise typer.Exit(1)

    result, _ = _rank(
        catalog,
        config,
        weight,
        False,
        SortField.ATTRACTIVENESS_SCORE,
        SortOrder.DESC,
        CatalogQuery(season=season),
    )

    if not result.items:
        console.print("[yellow]No products to export.[/yellow]")
        return

    if output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output = Path(f"ranking_{timestamp}.{format}")

    console.print(f"[bold blue]Exporting {len(result.items)} products to {output}...[/bold blue]")

    if format == "csv":
        export_to_csv(result, output)
    else:
        export_to_json(result, output)

    console.print(f"[green]Export complete: {output}[/green]")


if __name__ == "__main__":
    app()
