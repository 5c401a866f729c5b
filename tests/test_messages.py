"""Tests for the message catalog."""

from __future__ import annotations

import pytest

from tablesmith.constraints.messages import (
    SUPPORTED_LOCALES,
    catalog_keys,
    check_locale,
    label,
    render,
    render_text,
)


class TestCatalog:
    def test_locales_share_keys(self) -> None:
        assert catalog_keys("pl") == catalog_keys("en")

    @pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
    def test_every_finding_key_has_a_template(self, locale: str) -> None:
        keys = catalog_keys(locale)  # type: ignore[arg-type]
        for key in (
            "MAT-01",
            "MAT-02",
            "SPAN-01",
            "SPAN-02",
            "STAB-01",
            "STAB-02",
            "STAB-03.metal",
            "STAB-03.wood",
            "LEG-01",
            "LEG-02",
            "LEG-03.metal",
            "LEG-03.wood",
            "LEG-04",
            "LEG-05",
            "HGT-01.low",
            "HGT-01.high",
            "HGT-03",
            "EDGE.top",
            "EDGE.face",
            "COMP-01",
            "COMP-02",
            "COMP-03",
            "RADIAL-01",
            "RADIAL-02",
            "RADIAL-03",
        ):
            assert key in keys, key

    def test_unknown_locale(self) -> None:
        with pytest.raises(ValueError, match="Unsupported locale"):
            check_locale("de")


class TestRender:
    def test_user_message_is_localized_and_tech_is_english(self) -> None:
        user_pl, tech = render("MAT-01", "pl", material="quartz", min=20.0, thickness=12.0)
        user_en, tech_en = render("MAT-01", "en", material="quartz", min=20.0, thickness=12.0)

        assert "kwarc" in user_pl
        assert '"quartz"' in user_en
        assert tech == tech_en == "Material quartz requires min 20mm thickness, got 12mm."

    def test_numbers_use_millimetre_formatting(self) -> None:
        text = render_text("RADIAL-02", "en", min=3, count=2.0)
        assert text == "A radial base needs at least 3 halfcylinders. Got 2."

    def test_unknown_key(self) -> None:
        with pytest.raises(KeyError):
            render("NOPE-01", "en")

    def test_labels_fall_back_to_raw_value(self) -> None:
        assert label("material", "sintered_stone", "pl") == "spiek kwarcowy"
        assert label("material", "onyx", "en") == "onyx"
