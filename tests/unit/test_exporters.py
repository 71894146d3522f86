"""Unit tests for ranking exporters."""

import csv
import json
from io import StringIO
from pathlib import Path

import pytest

from tire_scout.export.csv_exporter import EXPORT_COLUMNS, export_to_csv
from tire_scout.export.json_exporter import export_to_json
from tire_scout.models.pydantic_models import PreferenceSet, ProductRecord, RankingResult
from tire_scout.services.ranking_service import RankingService


@pytest.fixture
def ranking() -> RankingResult:
    """A small price-only ranking."""
    products = [
        ProductRecord(id="b", brand="Hankook", price=120, wet_grip="B"),
        ProductRecord(id="a", brand="Nokian", price=100, extra_note="kept"),
    ]
    preferences = PreferenceSet(price=100, wet_grip=0, fuel_efficiency=0, satisfaction=0, noise=0)
    return RankingService().rank_catalog(products, preferences)


class TestCsvExporter:
    """Tests for export_to_csv()."""

    def test_returns_string(self, ranking: RankingResult) -> None:
        """Without output the CSV text is returned."""
        rows = list(csv.DictReader(StringIO(export_to_csv(ranking))))

        assert [row["id"] for row in rows] == ["a", "b"]
        assert [row["rank"] for row in rows] == ["1", "2"]
        assert rows[0]["attractiveness_score"] == "100"
        assert rows[0]["score_price"] == "1.000"
        assert rows[0]["wet_grip"] == ""

    def test_writes_file(self, tmp_path: Path, ranking: RankingResult) -> None:
        """A Path output is written with the header."""
        output = tmp_path / "ranking.csv"

        assert export_to_csv(ranking, output) == ""
        header = output.read_text(encoding="utf-8").splitlines()[0]
        assert header.split(",") == EXPORT_COLUMNS

    def test_writes_file_object(self, ranking: RankingResult) -> None:
        """File-like outputs receive the CSV."""
        buffer = StringIO()

        export_to_csv(ranking, buffer)

        assert buffer.getvalue().startswith("rank,id,")


class TestJsonExporter:
    """Tests for export_to_json()."""

    def test_returns_string(self, ranking: RankingResult) -> None:
        """Without output the JSON text is returned."""
        data = json.loads(export_to_json(ranking))

        assert data["count"] == 2
        assert data["scored"] is True
        assert data["sort"] == {"field": "attractiveness_score", "order": "desc"}
        assert data["products"][0]["product"]["id"] == "a"
        assert data["products"][0]["product"]["extra_note"] == "kept"
        assert data["products"][1]["normalized_scores"]["price"] == 0.0

    def test_writes_file(self, tmp_path: Path, ranking: RankingResult) -> None:
        """A Path output is written."""
        output = tmp_path / "ranking.json"

        export_to_json(ranking, output)

        assert json.loads(output.read_text(encoding="utf-8"))["count"] == 2
