"""Export modules."""

from tire_scout.export.csv_exporter import export_to_csv
from tire_scout.export.json_exporter import export_to_json

__all__ = ["export_to_csv", "export_to_json"]
