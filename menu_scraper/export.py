"""
Export layer for extraction results: JSON (output contract) and RFC-4180 CSV.
"""
import csv
import json
import logging
from typing import List, Optional
from pathlib import Path

from .config import CrawlerConfig
from .models import ExtractionResult
from .normalize import parse_price

logger = logging.getLogger(__name__)

# Strict CSV column order - DO NOT MODIFY ORDER
CSV_COLUMNS = [
    "Restaurant",
    "Name",
    "Price",
    "Price Value",
    "Image URL",
]


def _price_value(price: str) -> str:
    value = parse_price(price)
    return str(int(value)) if value.is_integer() else str(value)


class MenuExporter:
    """Writes extraction results to disk"""

    def __init__(self, config: CrawlerConfig):
        self.config = config

    def _output_file(self, output_path: Optional[str]) -> Path:
        output_file = Path(output_path or self.config.output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        return output_file

    def export(self, results: List[ExtractionResult], output_path: Optional[str] = None) -> str:
        """Export in the configured format"""
        if self.config.output_format == "csv":
            return self.export_csv(results, output_path)
        return self.export_json(results, output_path)

    def export_json(self, results: List[ExtractionResult], output_path: Optional[str] = None) -> str:
        """
        Export results as JSON

        A single result is written as one object, several as a list.

        Returns:
            Path to created JSON file
        """
        output_file = self._output_file(output_path)
        payload = [result.to_dict() for result in results]
        if len(payload) == 1:
            payload = payload[0]

        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        logger.info(f"Exported {len(results)} results to {output_file}")
        return str(output_file)

    def export_csv(self, results: List[ExtractionResult], output_path: Optional[str] = None) -> str:
        """
        Export one row per menu item

        Returns:
            Path to created CSV file
        """
        output_file = self._output_file(output_path)
        rows = 0

        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(
                f,
                fieldnames=CSV_COLUMNS,
                quoting=csv.QUOTE_MINIMAL,
                doublequote=True
            )
            writer.writeheader()

            for result in results:
                for item in result.items:
                    writer.writerow({
                        "Restaurant": result.restaurant_name,
                        "Name": item.name,
                        "Price": item.price,
                        "Price Value": _price_value(item.price),
                        "Image URL": item.image_url or "",
                    })
                    rows += 1

        logger.info(f"Exported {rows} rows to {output_file}")
        return str(output_file)
