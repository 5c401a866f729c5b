"""Tests for the seven rule checkers.

Each checker is exercised in isolation against the standard rule set. Specs
start from the valid dining table in conftest and override only what the
rule under test needs.
"""

from __future__ import annotations

import pytest

from conftest import composite_spec_data, radial_spec_data
from tablesmith.constraints.checks import (
    CompositeChecker,
    EdgeChecker,
    HeightChecker,
    LegChecker,
    MaterialChecker,
    SpanChecker,
    StabilityChecker,
    default_checkers,
)
from tablesmith.constraints.primitives import Finding, RuleChecker


def _ids(findings: list[Finding]) -> list[str]:
    return [f.rule_id for f in findings]


def _only(findings: list[Finding], rule_id: str) -> Finding:
    matches = [f for f in findings if f.rule_id == rule_id]
    assert len(matches) == 1, _ids(findings)
    return matches[0]


class TestCheckerRegistry:
    def test_default_order(self) -> None:
        names = [checker.name for checker in default_checkers()]
        assert names == ["material", "span", "stability", "legs", "height", "edge", "composite"]

    def test_checkers_are_rule_checkers(self) -> None:
        assert all(isinstance(checker, RuleChecker) for checker in default_checkers())

    def test_valid_spec_passes_every_checker(self, make_spec, rules) -> None:
        spec = make_spec()
        for checker in default_checkers():
            assert checker.check(spec, rules) == [], checker.name

    @pytest.mark.parametrize("builder", [radial_spec_data, composite_spec_data])
    def test_other_valid_fixtures_pass(self, make_spec, rules, builder) -> None:
        spec = make_spec(builder())
        for checker in default_checkers():
            assert checker.check(spec, rules) == [], checker.name


class TestMaterialChecker:
    def test_below_material_minimum(self, make_spec, rules) -> None:
        findings = MaterialChecker().check(make_spec(top_material="quartz", top_thickness_mm=12), rules, "en")

        finding = _only(findings, "MAT-01")
        assert finding.field == "top_thickness_mm"
        assert (finding.value, finding.limit) == (12, 20)
        assert finding.message_tech == "Material quartz requires min 20mm thickness, got 12mm."

    def test_long_sintered_top_needs_upgrade(self, make_spec, rules) -> None:
        findings = MaterialChecker().check(make_spec(top_thickness_mm=12, top_length_mm=1600), rules)

        assert _ids(findings) == ["MAT-02"]
        assert findings[0].limit == 20

    def test_long_marble_top_needs_30mm(self, make_spec, rules) -> None:
        findings = MaterialChecker().check(make_spec(top_material="marble", top_length_mm=1500), rules)

        assert _ids(findings) == ["MAT-02"]
        assert findings[0].limit == 30

    def test_upgrade_threshold_is_exclusive(self, make_spec, rules) -> None:
        spec = make_spec(top_material="marble", top_length_mm=1400)
        assert MaterialChecker().check(spec, rules) == []

    def test_both_minimums_reported(self, make_spec, rules) -> None:
        spec = make_spec(top_material="granite", top_thickness_mm=12, top_length_mm=1600)
        assert _ids(MaterialChecker().check(spec, rules)) == ["MAT-01", "MAT-02"]

    def test_composite_tops_are_skipped(self, make_spec, rules) -> None:
        spec = make_spec(
            top_material="quartz",
            top_construction="composite",
            top_thickness_mm=12,
            top_face_thickness_mm=3,
            top_length_mm=2000,
        )
        assert MaterialChecker().check(spec, rules) == []


class TestSpanChecker:
    def test_thin_sintered_over_900(self, make_spec, rules) -> None:
        findings = SpanChecker().check(make_spec(top_thickness_mm=12, top_length_mm=1000), rules)

        finding = _only(findings, "SPAN-01")
        assert finding.field == "top_length_mm"
        assert (finding.value, finding.limit) == (1000, 900)

    def test_tier_boundary_is_inclusive(self, make_spec, rules) -> None:
        assert SpanChecker().check(make_spec(top_length_mm=1800), rules) == []
        assert _ids(SpanChecker().check(make_spec(top_length_mm=1801), rules)) == ["SPAN-01"]

    def test_highest_satisfied_tier_is_used(self, make_spec, rules) -> None:
        assert SpanChecker().check(make_spec(top_thickness_mm=30, top_length_mm=2400), rules) == []

    def test_composite_multiplier(self, make_spec, rules) -> None:
        composite = {"top_construction": "composite", "top_face_thickness_mm": 5}
        assert SpanChecker().check(make_spec(top_length_mm=2500, **composite), rules) == []

        findings = SpanChecker().check(make_spec(top_length_mm=2600, **composite), rules)
        assert _only(findings, "SPAN-01").limit == pytest.approx(2520)

    def test_no_reachable_tier_means_no_limit(self, make_spec, rules) -> None:
        spec = make_spec(top_material="quartz", top_thickness_mm=12, top_length_mm=3000)
        assert SpanChecker().check(spec, rules) == []

    @pytest.mark.parametrize("count", [3, 5])
    def test_odd_leg_counts_are_not_span_checked(self, make_spec, rules, count: int) -> None:
        spec = make_spec(leg_count=count, top_thickness_mm=12, top_length_mm=3000)
        assert SpanChecker().check(spec, rules) == []

    def test_round_pedestal_uses_diameter(self, make_spec, rules) -> None:
        spec = make_spec(
            top_shape_type="round",
            top_length_mm=1200,
            top_width_mm=1200,
            leg_count=1,
            leg_profile_type="pedestal",
        )
        finding = _only(SpanChecker().check(spec, rules), "SPAN-02")

        assert (finding.value, finding.limit) == (1200, 1000)

    def test_square_pedestal_uses_diagonal(self, make_spec, rules) -> None:
        fits = make_spec(top_shape_type="square", top_length_mm=700, top_width_mm=700, leg_count=1)
        assert SpanChecker().check(fits, rules) == []

        too_big = make_spec(top_shape_type="square", top_length_mm=800, top_width_mm=800, leg_count=1)
        finding = _only(SpanChecker().check(too_big, rules), "SPAN-02")
        assert finding.value == pytest.approx(1131.37, abs=0.01)

    def test_thin_pedestal_top_uses_fallback(self, make_spec, rules) -> None:
        spec = make_spec(
            top_thickness_mm=12, top_shape_type="round", top_length_mm=850, top_width_mm=850, leg_count=1
        )
        assert _only(SpanChecker().check(spec, rules), "SPAN-02").limit == 800

    def test_pedestal_profile_skips_multi_leg_check(self, make_spec, rules) -> None:
        spec = make_spec(leg_profile_type="pedestal", top_thickness_mm=12, top_length_mm=3000)
        assert "SPAN-01" not in _ids(SpanChecker().check(spec, rules))

    def test_pedestal_profile_on_four_legs_uses_diagonal(self, make_spec, rules) -> None:
        spec = make_spec(leg_profile_type="pedestal", top_length_mm=1800, top_width_mm=900)
        assert _ids(SpanChecker().check(spec, rules)) == ["SPAN-02"]

    def test_radial_base_is_not_a_pedestal(self, make_spec, rules) -> None:
        spec = make_spec(radial_spec_data(), top_length_mm=1500, top_width_mm=1500)
        assert SpanChecker().check(spec, rules) == []


class TestStabilityChecker:
    def test_narrow_top(self, make_spec, rules) -> None:
        finding = _only(StabilityChecker().check(make_spec(top_width_mm=300), rules), "STAB-01")

        assert finding.field == "top_width_mm"
        assert finding.limit == 0.45
        assert finding.value == pytest.approx(300 / 720)

    def test_ratio_boundary_is_inclusive(self, make_spec, rules) -> None:
        assert StabilityChecker().check(make_spec(top_width_mm=324), rules) == []

    def test_radial_footprint_is_twice_the_spread(self, make_spec, rules) -> None:
        spec = make_spec(radial_spec_data(), leg_radial_spread_mm=150)
        findings = StabilityChecker().check(spec, rules)

        assert _ids(findings) == ["STAB-01"]
        assert findings[0].value == pytest.approx(300 / 750)

    def test_small_pedestal_base(self, make_spec, rules) -> None:
        spec = make_spec(
            top_shape_type="round",
            top_length_mm=900,
            top_width_mm=900,
            leg_count=1,
            leg_profile_type="pedestal",
            leg_profile_size_mm=250,
            leg_height_mm=730,
            total_height_mm=750,
            has_foot_base=True,
        )
        finding = _only(StabilityChecker().check(spec, rules), "STAB-02")

        assert finding.field == "leg_profile_size_mm"
        assert finding.limit == 300

    def test_tall_thin_metal_leg_needs_foot_base(self, make_spec, rules) -> None:
        spec = make_spec(leg_height_mm=701, leg_profile_size_mm=59, total_height_mm=721)
        finding = _only(StabilityChecker().check(spec, rules), "STAB-03")

        assert finding.field == "has_foot_base"
        assert finding.limit == 60

    def test_foot_base_satisfies_rule(self, make_spec, rules) -> None:
        spec = make_spec(leg_height_mm=701, leg_profile_size_mm=59, total_height_mm=721, has_foot_base=True)
        assert StabilityChecker().check(spec, rules) == []

    def test_height_threshold_is_exclusive(self, make_spec, rules) -> None:
        assert StabilityChecker().check(make_spec(leg_profile_size_mm=40), rules) == []

    def test_wood_has_stricter_profile_threshold(self, make_spec, rules) -> None:
        thin = make_spec(leg_material="solid_wood", leg_profile_size_mm=79, leg_height_mm=710, total_height_mm=730)
        thick = make_spec(leg_material="solid_wood", leg_profile_size_mm=80, leg_height_mm=710, total_height_mm=730)

        assert _ids(StabilityChecker().check(thin, rules)) == ["STAB-03"]
        assert StabilityChecker().check(thick, rules) == []

    def test_radial_base_skips_pedestal_and_foot_rules(self, make_spec, rules) -> None:
        spec = make_spec(radial_spec_data(), leg_profile_size_mm=20, leg_height_mm=1000, total_height_mm=1020)
        assert StabilityChecker().check(spec, rules) == []


class TestLegChecker:
    @pytest.mark.parametrize(
        ("profile_type", "size", "limit"),
        [("round", 29, 30), ("square", 39, 40), ("rectangular", 39, 40)],
    )
    def test_metal_profile_minimum(self, make_spec, rules, profile_type: str, size: float, limit: float) -> None:
        spec = make_spec(leg_profile_type=profile_type, leg_profile_size_mm=size, leg_height_mm=600, total_height_mm=620)
        finding = _only(LegChecker().check(spec, rules), "LEG-01")

        assert finding.limit == limit

    def test_untabled_metal_profile_has_no_minimum(self, make_spec, rules) -> None:
        spec = make_spec(leg_profile_type="trestle", leg_profile_size_mm=30)
        assert LegChecker().check(spec, rules) == []

    def test_short_wood_leg(self, make_spec, rules) -> None:
        spec = make_spec(leg_material="solid_wood", leg_profile_size_mm=59)
        finding = _only(LegChecker().check(spec, rules), "LEG-02")

        assert finding.limit == 60

    def test_tall_wood_leg_threshold_is_inclusive(self, make_spec, rules) -> None:
        spec = make_spec(leg_material="solid_wood", leg_profile_size_mm=79, leg_height_mm=750, total_height_mm=770)
        assert _only(LegChecker().check(spec, rules), "LEG-02").limit == 80

        shorter = make_spec(leg_material="solid_wood", leg_profile_size_mm=60, leg_height_mm=749, total_height_mm=769)
        assert LegChecker().check(shorter, rules) == []

    def test_slender_metal_leg(self, make_spec, rules) -> None:
        spec = make_spec(leg_profile_size_mm=40, leg_height_mm=1050, total_height_mm=1070)
        finding = _only(LegChecker().check(spec, rules), "LEG-03")

        assert finding.value == pytest.approx(26.25)
        assert finding.limit == 25
        assert "Min profile: 42mm" in finding.message_tech

    def test_wood_slenderness_is_stricter(self, make_spec, rules) -> None:
        spec = make_spec(leg_material="laminated_wood", leg_profile_size_mm=60, leg_height_mm=920, total_height_mm=940)
        assert _ids(LegChecker().check(spec, rules)) == ["LEG-02", "LEG-03"]

    def test_zero_profile_is_infinitely_slender(self, make_spec, rules) -> None:
        spec = make_spec(leg_profile_type="trestle", leg_profile_size_mm=0, leg_height_mm=700, total_height_mm=720)
        finding = _only(LegChecker().check(spec, rules), "LEG-03")

        assert finding.value is None
        assert finding.limit == 25
        assert "slenderness inf" in finding.message_tech
        assert "Min profile: 28mm" in finding.message_tech

    def test_single_leg_under_rectangle(self, make_spec, rules) -> None:
        finding = _only(LegChecker().check(make_spec(leg_count=1), rules), "LEG-04")
        assert finding.field == "leg_count"

    @pytest.mark.parametrize("shape", ["round", "square"])
    def test_single_leg_under_allowed_shapes(self, make_spec, rules, shape: str) -> None:
        spec = make_spec(leg_count=1, top_shape_type=shape, top_length_mm=900, top_width_mm=900)
        assert LegChecker().check(spec, rules) == []

    def test_pedestal_profile_under_oval_top(self, make_spec, rules) -> None:
        spec = make_spec(leg_profile_type="pedestal", top_shape_type="oval")
        assert _ids(LegChecker().check(spec, rules)) == ["LEG-04", "LEG-05"]

    def test_placement_warning(self, make_spec, rules) -> None:
        spec = make_spec(top_shape_type="round", top_length_mm=1200, top_width_mm=1200)
        finding = _only(LegChecker().check(spec, rules), "LEG-05")

        assert finding.value == 4

    def test_no_placement_warning_under_four_legs(self, make_spec, rules) -> None:
        spec = make_spec(top_shape_type="round", top_length_mm=1200, top_width_mm=1200, leg_count=3)
        assert LegChecker().check(spec, rules) == []

    def test_radial_spread(self, make_spec, rules) -> None:
        spec = make_spec(radial_spec_data(), leg_radial_spread_mm=200)
        finding = _only(LegChecker().check(spec, rules), "RADIAL-01")

        assert finding.field == "leg_radial_spread_mm"
        assert finding.limit == 300

    def test_radial_count_and_diameter(self, make_spec, rules) -> None:
        spec = make_spec(radial_spec_data(), leg_radial_count=2, leg_profile_size_mm=50)
        assert _ids(LegChecker().check(spec, rules)) == ["RADIAL-02", "RADIAL-03"]

    def test_zero_radial_count(self, make_spec, rules) -> None:
        finding = _only(LegChecker().check(make_spec(radial_spec_data(), leg_radial_count=0), rules), "RADIAL-02")
        assert (finding.value, finding.limit) == (0, 3)

    def test_radial_without_spread_skips_spread_rule(self, make_spec, rules) -> None:
        spec = make_spec(radial_spec_data(), leg_radial_spread_mm=None)
        assert LegChecker().check(spec, rules) == []

    def test_radial_bypasses_standard_leg_rules(self, make_spec, rules) -> None:
        spec = make_spec(
            radial_spec_data(),
            top_shape_type="rectangle",
            leg_profile_size_mm=20,
            leg_radial_spread_mm=450,
            leg_height_mm=1000,
            total_height_mm=1020,
        )
        assert _ids(LegChecker().check(spec, rules)) == ["RADIAL-03"]


class TestHeightChecker:
    def test_too_low(self, make_spec, rules) -> None:
        spec = make_spec(leg_height_mm=320, total_height_mm=340)
        findings = HeightChecker().check(spec, rules, "en")

        assert _ids(findings) == ["HGT-01"]
        assert findings[0].limit == 350
        assert findings[0].message_tech == "totalHeight 340mm below minimum 350mm."

    def test_too_high(self, make_spec, rules) -> None:
        spec = make_spec(leg_height_mm=1130, total_height_mm=1150)
        findings = HeightChecker().check(spec, rules)

        assert _ids(findings) == ["HGT-01"]
        assert findings[0].limit == 1100

    def test_sum_mismatch(self, make_spec, rules) -> None:
        finding = _only(HeightChecker().check(make_spec(total_height_mm=725), rules), "HGT-03")

        assert finding.field == "total_height_mm"
        assert finding.limit == 720

    def test_sum_within_tolerance(self, make_spec, rules) -> None:
        assert HeightChecker().check(make_spec(total_height_mm=722), rules) == []

    def test_bounds_and_sum_reported_independently(self, make_spec, rules) -> None:
        assert _ids(HeightChecker().check(make_spec(total_height_mm=1200), rules)) == ["HGT-01", "HGT-03"]


class TestEdgeChecker:
    def test_mitered_needs_20mm(self, make_spec, rules) -> None:
        spec = make_spec(top_edge_finish="mitered", top_thickness_mm=12, top_length_mm=800)
        finding = _only(EdgeChecker().check(spec, rules), "EDGE-01")

        assert finding.field == "top_edge_finish"
        assert (finding.value, finding.limit) == (12, 20)

    def test_beveled_needs_12mm(self, make_spec, rules) -> None:
        assert _ids(EdgeChecker().check(make_spec(top_edge_finish="beveled", top_thickness_mm=11), rules)) == [
            "EDGE-02"
        ]
        assert EdgeChecker().check(make_spec(top_edge_finish="beveled", top_thickness_mm=12), rules) == []

    @pytest.mark.parametrize("finish", ["straight", "rounded"])
    def test_other_finishes_have_no_minimum(self, make_spec, rules, finish: str) -> None:
        assert EdgeChecker().check(make_spec(top_edge_finish=finish, top_thickness_mm=6), rules) == []

    def test_composite_edge_is_cut_into_face(self, make_spec, rules) -> None:
        spec = make_spec(composite_spec_data(), top_edge_finish="mitered")
        finding = _only(EdgeChecker().check(spec, rules, "en"), "EDGE-01")

        assert finding.value == 12
        assert "(face panel)" in finding.message_tech

    def test_composite_with_thick_face(self, make_spec, rules) -> None:
        spec = make_spec(
            composite_spec_data(), top_edge_finish="mitered", top_thickness_mm=50, top_face_thickness_mm=20
        )
        assert EdgeChecker().check(spec, rules) == []


class TestCompositeChecker:
    def test_thin_face(self, make_spec, rules) -> None:
        spec = make_spec(composite_spec_data(), top_thickness_mm=30, top_face_thickness_mm=4)
        finding = _only(CompositeChecker().check(spec, rules), "COMP-01")

        assert finding.field == "top_face_thickness_mm"
        assert finding.limit == 12

    def test_thin_core(self, make_spec, rules) -> None:
        spec = make_spec(composite_spec_data(), top_thickness_mm=30, top_face_thickness_mm=12)
        findings = CompositeChecker().check(spec, rules)

        assert _ids(findings) == ["COMP-02"]
        assert (findings[0].value, findings[0].limit) == (6, 10)

    def test_solid_tops_are_skipped(self, make_spec, rules) -> None:
        assert CompositeChecker().check(make_spec(top_face_thickness_mm=2), rules) == []

    def test_composite_without_face_is_skipped(self, make_spec, rules) -> None:
        spec = make_spec(composite_spec_data(), top_face_thickness_mm=None)
        assert CompositeChecker().check(spec, rules) == []

    @pytest.mark.parametrize(("thickness", "face"), [(20, 6), (25, 8), (30, 12), (31, 10.5), (40, 16)])
    def test_total_rule_is_implied_by_core_rule(self, make_spec, rules, thickness: float, face: float) -> None:
        spec = make_spec(composite_spec_data(), top_thickness_mm=thickness, top_face_thickness_mm=face)
        assert "COMP-03" not in _ids(CompositeChecker().check(spec, rules))
