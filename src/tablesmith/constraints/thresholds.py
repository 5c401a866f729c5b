"""Threshold derivations shared by the rule checkers and the field bounds.

Each function takes the rule set plus whatever context is known and returns
the bound a rule compares against. Missing context (``None``) yields ``None``
or the permissive default, so the same derivation serves full validation and
partial-specification bounding.

All values are millimetres unless noted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ..rulesets import FootBaseRule, MaterialClass, RuleSet, SpanTier, ThicknessUpgrade

BoundKind = Literal["min", "max"]

# Guards ceil() against float noise such as 0.45 * 1000 = 450.00000000000006
_RATIO_PRECISION = 9


@dataclass(frozen=True, slots=True)
class Bound:
    """A threshold paired with the value compared against it.

    Attributes:
        limit: The threshold
        value: The compared quantity, None when not yet known
        kind: "min" if the value must reach the limit, "max" if it must not exceed it
    """

    limit: float
    value: float | None = None
    kind: BoundKind = "min"

    @property
    def violated(self) -> bool:
        if self.value is None:
            return False
        if self.kind == "min":
            return self.value < self.limit
        return self.value > self.limit


def ceil_ratio(ratio: float, value: float) -> int:
    """Smallest whole millimetre not below ``ratio * value``."""
    return math.ceil(round(ratio * value, _RATIO_PRECISION))


def percent(ratio: float) -> int:
    return round(ratio * 100)


# ---------------------------------------------------------------------------
# Support classification
# ---------------------------------------------------------------------------


def is_radial(profile_type: str | None) -> bool:
    return profile_type == "radial_halfcylinder"


def is_pedestal(leg_count: int | None, profile_type: str | None) -> bool:
    """Single central support: one leg or a pedestal profile, never radial."""
    if is_radial(profile_type):
        return False
    return leg_count == 1 or profile_type == "pedestal"


def is_multi_leg(rules: RuleSet, leg_count: int | None) -> bool:
    return leg_count is not None and leg_count in rules.span.multi_leg_counts


def leg_span_applies(rules: RuleSet, leg_count: int | None, profile_type: str | None) -> bool:
    """Whether the multi-leg span tiers govern this base (never a central support)."""
    return is_multi_leg(rules, leg_count) and not is_pedestal(leg_count, profile_type)


# ---------------------------------------------------------------------------
# Material thickness
# ---------------------------------------------------------------------------


def material_min_thickness(rules: RuleSet, material: str | None) -> float | None:
    if material is None:
        return None
    return rules.material.min_thickness_mm.get(material)


def span_upgrades(rules: RuleSet, material: str | None, length: float | None) -> list[ThicknessUpgrade]:
    """Span-triggered thickness upgrades that apply to a material at a length."""
    if material is None or length is None:
        return []
    return [u for u in rules.material.span_upgrades if material in u.materials and length > u.span_threshold_mm]


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------


def composite_multiplier(rules: RuleSet, composite: bool) -> float:
    return rules.span.composite_span_multiplier if composite else 1.0


def effective_span(shape: str | None, length: float, width: float | None) -> float:
    """Worst-case unsupported distance: diameter if round, else the diagonal."""
    if shape == "round" or width is None:
        return length
    return math.hypot(length, width)


def _material_tiers(rules: RuleSet, material: str) -> list[SpanTier]:
    return sorted(
        (t for t in rules.span.multi_leg_tiers if material in t.materials),
        key=lambda t: t.min_thickness_mm,
    )


def _scaled_span(tier: SpanTier, multiplier: float) -> float:
    return round(tier.max_span_mm * multiplier, _RATIO_PRECISION)


def span_tier(rules: RuleSet, material: str | None, thickness: float | None) -> SpanTier | None:
    """Highest tier for the material whose minimum thickness is satisfied."""
    if material is None or thickness is None:
        return None
    for tier in reversed(_material_tiers(rules, material)):
        if thickness >= tier.min_thickness_mm:
            return tier
    return None


def max_span(rules: RuleSet, material: str | None, thickness: float | None, multiplier: float = 1.0) -> float | None:
    """Allowed top length for a multi-leg table, None if no tier applies."""
    tier = span_tier(rules, material, thickness)
    if tier is None:
        return None
    return _scaled_span(tier, multiplier)


def min_thickness_for_span(
    rules: RuleSet, material: str | None, length: float | None, multiplier: float = 1.0
) -> float | None:
    """Thickness of the thinnest tier covering ``length``, None if no tier does."""
    if material is None or length is None:
        return None
    for tier in _material_tiers(rules, material):
        if length <= _scaled_span(tier, multiplier):
            return tier.min_thickness_mm
    return None


def pedestal_max_span(rules: RuleSet, thickness: float) -> float:
    """Largest effective span over a single central support."""
    for tier in sorted(rules.span.pedestal_tiers, key=lambda t: t.min_thickness_mm, reverse=True):
        if thickness >= tier.min_thickness_mm:
            return tier.max_diagonal_mm
    return rules.span.pedestal_fallback_max_diagonal_mm


def thickest_pedestal_tier(rules: RuleSet) -> float | None:
    if not rules.span.pedestal_tiers:
        return None
    return max(t.min_thickness_mm for t in rules.span.pedestal_tiers)


# ---------------------------------------------------------------------------
# Stability
# ---------------------------------------------------------------------------


def footprint(profile_type: str | None, width: float | None, spread: float | None) -> float | None:
    """Narrowest supporting dimension: the spread diameter for radial bases."""
    if is_radial(profile_type) and spread is not None:
        return spread * 2
    return width


def min_footprint(rules: RuleSet, total: float) -> int:
    return ceil_ratio(rules.stability.min_footprint_ratio, total)


def pedestal_min_base(rules: RuleSet, total: float) -> int:
    return ceil_ratio(rules.stability.pedestal_base_ratio, total)


def foot_base_rule(rules: RuleSet, leg_material: str | None) -> FootBaseRule | None:
    material_class = rules.material_class(leg_material)
    if material_class is None:
        return None
    return rules.stability.foot_base.get(material_class)


def needs_foot_base(rules: RuleSet, leg_material: str, leg_height: float, profile: float) -> FootBaseRule | None:
    """The foot-base rule that a tall, thin leg breaks, if any."""
    rule = foot_base_rule(rules, leg_material)
    if rule is None:
        return None
    if leg_height > rule.max_leg_height_without_base_mm and profile < rule.min_profile_without_base_mm:
        return rule
    return None


# ---------------------------------------------------------------------------
# Legs
# ---------------------------------------------------------------------------


def leg_class(rules: RuleSet, leg_material: str | None) -> MaterialClass | None:
    return rules.material_class(leg_material)


def metal_min_profile(rules: RuleSet, profile_type: str | None) -> float | None:
    if profile_type is None:
        return None
    return rules.legs.metal_min_profile_mm.get(profile_type)


def wood_min_profile(rules: RuleSet, leg_height: float) -> float:
    if leg_height >= rules.legs.wood_tall_threshold_mm:
        return rules.legs.wood_min_profile_tall_mm
    return rules.legs.wood_min_profile_short_mm


def max_slenderness(rules: RuleSet, leg_material: str | None) -> float | None:
    material_class = leg_class(rules, leg_material)
    if material_class is None:
        return None
    return rules.legs.max_slenderness.get(material_class)


def slenderness(leg_height: float, profile: float) -> float:
    """Height over profile size. A zero profile is infinitely slender."""
    if profile <= 0:
        return math.inf
    return leg_height / profile


def slenderness_min_profile(rules: RuleSet, leg_material: str | None, leg_height: float) -> int | None:
    limit = max_slenderness(rules, leg_material)
    if limit is None:
        return None
    return math.ceil(round(leg_height / limit, _RATIO_PRECISION))


def radial_min_spread(rules: RuleSet, total: float) -> int:
    return ceil_ratio(rules.legs.radial_spread_ratio, total)


# ---------------------------------------------------------------------------
# Edge and composite
# ---------------------------------------------------------------------------


def edge_min_thickness(rules: RuleSet, edge_finish: str | None) -> float | None:
    if edge_finish is None:
        return None
    return rules.edge.min_thickness_mm.get(edge_finish)


def machined_thickness(composite: bool, thickness: float, face: float | None) -> float:
    """Thickness the edge is cut into: the face panel of a composite top."""
    if composite and face is not None:
        return face
    return thickness


def composite_face_min(rules: RuleSet, material: str | None) -> float:
    if material is None:
        return rules.composite.default_face_min_mm
    return rules.composite.face_min_mm.get(material, rules.composite.default_face_min_mm)


def composite_min_total(rules: RuleSet, face: float) -> float:
    return 2 * face + rules.composite.min_core_mm


def composite_max_face(rules: RuleSet, thickness: float) -> int:
    """Thickest face that still leaves the minimum core."""
    return math.floor((thickness - rules.composite.min_core_mm) / 2)
