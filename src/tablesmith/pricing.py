"""Material price table loader.

Reads a CSV with a header row and ``material,thickness_mm,price_per_sqm``
columns. Prices are per square metre of top surface. The validation core does
not depend on this module.
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MaterialPriceMap = dict[str, list["MaterialPrice"]]


@dataclass(frozen=True, slots=True)
class MaterialPrice:
    material: str
    thickness_mm: float
    price_per_sqm: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "material": self.material,
            "thickness_mm": self.thickness_mm,
            "price_per_sqm": self.price_per_sqm,
        }


def _parse_number(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def load_material_prices(csv_path: Path | str) -> MaterialPriceMap:
    """Load prices keyed by material, one entry per listed thickness.

    The first row is treated as a header. Rows with missing cells or
    non-numeric thickness/price are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"Price file not found: {path}")

    prices: MaterialPriceMap = {}
    skipped = 0
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        next(reader, None)
        for row in reader:
            cells = [cell.strip() for cell in row]
            if len(cells) < 3 or not all(cells[:3]):
                if any(cells):
                    skipped += 1
                continue
            material, thickness_text, price_text = cells[:3]
            thickness = _parse_number(thickness_text)
            price = _parse_number(price_text)
            if thickness is None or price is None:
                skipped += 1
                continue
            prices.setdefault(material, []).append(MaterialPrice(material, thickness, price))

    if skipped:
        logger.warning("Skipped %d malformed row(s) in %s", skipped, path)
    logger.debug("Loaded prices for %d material(s) from %s", len(prices), path)
    return prices


def lookup_price(prices: MaterialPriceMap, material: str, thickness_mm: float) -> MaterialPrice | None:
    """Entry for the exact material and thickness, or None if not listed."""
    for entry in prices.get(material, []):
        if entry.thickness_mm == thickness_mm:
            return entry
    return None
