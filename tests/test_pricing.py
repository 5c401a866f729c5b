"""Tests for the material price loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from tablesmith.pricing import MaterialPrice, load_material_prices, lookup_price

PRICE_CSV = """material,thickness_mm,price_per_sqm
sintered_stone,12,820.50
sintered_stone,20,1040
quartz,20,950
quartz,,100
marble,thick,100
granite,30
"""


@pytest.fixture
def price_file(tmp_path: Path) -> Path:
    path = tmp_path / "prices.csv"
    path.write_text(PRICE_CSV, encoding="utf-8")
    return path


class TestLoadMaterialPrices:
    def test_groups_by_material(self, price_file: Path) -> None:
        prices = load_material_prices(price_file)

        assert set(prices) == {"sintered_stone", "quartz"}
        assert prices["sintered_stone"] == [
            MaterialPrice("sintered_stone", 12.0, 820.5),
            MaterialPrice("sintered_stone", 20.0, 1040.0),
        ]

    def test_malformed_rows_are_skipped(self, price_file: Path) -> None:
        prices = load_material_prices(price_file)
        assert prices["quartz"] == [MaterialPrice("quartz", 20.0, 950.0)]

    def test_header_only(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("material,thickness_mm,price_per_sqm\n", encoding="utf-8")
        assert load_material_prices(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_material_prices(tmp_path / "nope.csv")


class TestLookupPrice:
    def test_exact_thickness(self, price_file: Path) -> None:
        entry = lookup_price(load_material_prices(price_file), "sintered_stone", 20)

        assert entry is not None
        assert entry.price_per_sqm == 1040.0

    def test_unlisted_thickness_or_material(self, price_file: Path) -> None:
        prices = load_material_prices(price_file)

        assert lookup_price(prices, "sintered_stone", 30) is None
        assert lookup_price(prices, "onyx", 20) is None
