"""Live field bounds for a partially filled specification.

Given any subset of fields, derive for each numeric field the currently legal
``[min, max]`` range, a recommended value where one makes sense, and a
localized reason naming the tightest restriction. Unknown context never
restricts: a rule contributes only when every field it needs is set.

The bounds come from the same threshold functions the rule checkers use, so
a value inside a reported range does not trip the matching rule.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..rulesets import load_ruleset
from . import thresholds
from .messages import DEFAULT_LOCALE, Locale, check_locale, render_text

if TYPE_CHECKING:
    from ..rulesets import RuleSet
    from ..spec import PartialSpecification

logger = logging.getLogger(__name__)

# Recommended thickness when the material is unknown
_DEFAULT_RECOMMENDED_THICKNESS_MM = 20.0


@dataclass(frozen=True, slots=True)
class FieldConstraint:
    """Legal range for one numeric field.

    Attributes:
        min: Smallest legal value
        max: Largest legal value
        reason: Localized explanation of the tightest restriction
        recommended: Suggested default, when one is derived
    """

    min: float
    max: float
    reason: str
    recommended: float | None = None

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"min": self.min, "max": self.max, "reason": self.reason}
        if self.recommended is not None:
            result["recommended"] = self.recommended
        return result


@dataclass(frozen=True)
class FieldConstraints:
    """Legal ranges for every bounded numeric field."""

    top_thickness_mm: FieldConstraint
    top_face_thickness_mm: FieldConstraint
    top_length_mm: FieldConstraint
    top_width_mm: FieldConstraint
    total_height_mm: FieldConstraint
    leg_profile_size_mm: FieldConstraint
    leg_radial_spread_mm: FieldConstraint

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            "top_thickness_mm": self.top_thickness_mm.to_dict(),
            "top_face_thickness_mm": self.top_face_thickness_mm.to_dict(),
            "top_length_mm": self.top_length_mm.to_dict(),
            "top_width_mm": self.top_width_mm.to_dict(),
            "total_height_mm": self.total_height_mm.to_dict(),
            "leg_profile_size_mm": self.leg_profile_size_mm.to_dict(),
            "leg_radial_spread_mm": self.leg_radial_spread_mm.to_dict(),
        }


class _Tightest:
    """Running minimum (or maximum) bound with the reason that set it."""

    def __init__(self, value: float, reason: str, *, upper: bool = False) -> None:
        self.value = value
        self.reason = reason
        self.upper = upper

    def offer(self, candidate: float | None, reason: str) -> None:
        if candidate is None:
            return
        tighter = candidate < self.value if self.upper else candidate > self.value
        if tighter:
            self.value = candidate
            self.reason = reason


def get_field_constraints(
    partial: PartialSpecification,
    rules: RuleSet | None = None,
    locale: Locale = DEFAULT_LOCALE,
) -> FieldConstraints:
    """Derive the legal range of every bounded numeric field.

    Args:
        partial: Partially filled specification
        rules: Rule set to derive bounds from (standard rule set by default)
        locale: Locale of the reasons

    Returns:
        FieldConstraints with one FieldConstraint per bounded field
    """
    if rules is None:
        rules = load_ruleset()
    locale = check_locale(locale)
    constraints = FieldConstraints(
        top_thickness_mm=_top_thickness(partial, rules, locale),
        top_face_thickness_mm=_top_face(partial, rules, locale),
        top_length_mm=_top_length(partial, rules, locale),
        top_width_mm=_top_width(partial, rules, locale),
        total_height_mm=_total_height(rules, locale),
        leg_profile_size_mm=_leg_profile(partial, rules, locale),
        leg_radial_spread_mm=_radial_spread(partial, rules, locale),
    )
    logger.debug("Field constraints: %s", constraints.to_dict())
    return constraints


def _is_composite(p: PartialSpecification) -> bool:
    return p.top_construction == "composite"


def _top_thickness(p: PartialSpecification, rules: RuleSet, locale: Locale) -> FieldConstraint:
    limits = rules.field_limits.top_thickness_mm
    bound = _Tightest(limits.min, render_text("bounds.thickness.base", locale))

    if _is_composite(p):
        face = p.top_face_thickness_mm
        if face is None:
            face = thresholds.composite_face_min(rules, p.top_material)
        min_total = thresholds.composite_min_total(rules, face)
        bound.offer(
            min_total,
            render_text(
                "bounds.thickness.composite", locale, face=face, min_core=rules.composite.min_core_mm, min=min_total
            ),
        )
        # the edge is machined into the face, bounded by _top_face
        return FieldConstraint(min=bound.value, max=limits.max, reason=bound.reason, recommended=bound.value)

    material_min = thresholds.material_min_thickness(rules, p.top_material)
    if material_min is not None:
        bound.offer(
            material_min,
            render_text("bounds.thickness.material", locale, material=p.top_material, min=material_min),
        )

    for upgrade in thresholds.span_upgrades(rules, p.top_material, p.top_length_mm):
        bound.offer(
            upgrade.min_thickness_mm,
            render_text(
                "bounds.thickness.span_upgrade",
                locale,
                material=p.top_material,
                length=p.top_length_mm,
                min=upgrade.min_thickness_mm,
            ),
        )

    if thresholds.leg_span_applies(rules, p.leg_count, p.leg_profile_type):
        span_min = thresholds.min_thickness_for_span(rules, p.top_material, p.top_length_mm)
        if span_min is not None:
            bound.offer(
                span_min,
                render_text(
                    "bounds.thickness.span", locale, material=p.top_material, length=p.top_length_mm, min=span_min
                ),
            )

    edge_min = thresholds.edge_min_thickness(rules, p.top_edge_finish)
    if edge_min is not None:
        bound.offer(edge_min, render_text("bounds.thickness.edge", locale, edge=p.top_edge_finish, min=edge_min))

    return FieldConstraint(
        min=bound.value,
        max=limits.max,
        reason=bound.reason,
        recommended=_recommended_thickness(p, rules, bound.value),
    )


def _recommended_thickness(p: PartialSpecification, rules: RuleSet, at_least: float) -> float:
    """Thinnest standard tier that covers the known length, never below ``at_least``."""
    if p.top_material is None:
        return max(at_least, _DEFAULT_RECOMMENDED_THICKNESS_MM)
    recommended = at_least
    material_min = thresholds.material_min_thickness(rules, p.top_material)
    if material_min is not None:
        recommended = max(recommended, material_min)
    for upgrade in thresholds.span_upgrades(rules, p.top_material, p.top_length_mm):
        recommended = max(recommended, upgrade.min_thickness_mm)
    covering = thresholds.min_thickness_for_span(rules, p.top_material, p.top_length_mm)
    if covering is not None:
        recommended = max(recommended, covering)
    return recommended


def _top_face(p: PartialSpecification, rules: RuleSet, locale: Locale) -> FieldConstraint:
    limits = rules.field_limits.top_face_thickness_mm
    bound = _Tightest(limits.min, render_text("bounds.face.base", locale))

    if _is_composite(p):
        if p.top_material is not None:
            face_min = thresholds.composite_face_min(rules, p.top_material)
            bound.offer(face_min, render_text("bounds.face.material", locale, material=p.top_material, min=face_min))
        edge_min = thresholds.edge_min_thickness(rules, p.top_edge_finish)
        if edge_min is not None:
            bound.offer(edge_min, render_text("bounds.face.edge", locale, edge=p.top_edge_finish, min=edge_min))

    max_face = limits.max
    if p.top_thickness_mm is not None:
        max_face = min(limits.max, thresholds.composite_max_face(rules, p.top_thickness_mm))
    return FieldConstraint(
        min=bound.value,
        max=max(bound.value, max_face),
        reason=bound.reason,
        recommended=bound.value,
    )


def _top_length(p: PartialSpecification, rules: RuleSet, locale: Locale) -> FieldConstraint:
    limits = rules.field_limits.top_length_mm
    bound = _Tightest(limits.max, render_text("bounds.length.base", locale), upper=True)

    if thresholds.is_pedestal(p.leg_count, p.leg_profile_type):
        allowed = _pedestal_max_length(p, rules)
        if allowed is not None:
            bound.offer(
                max(allowed, limits.min),
                render_text(
                    "bounds.length.pedestal",
                    locale,
                    thickness=p.top_thickness_mm,
                    max=thresholds.pedestal_max_span(rules, p.top_thickness_mm),
                ),
            )
    elif thresholds.leg_span_applies(rules, p.leg_count, p.leg_profile_type):
        multiplier = thresholds.composite_multiplier(rules, _is_composite(p))
        allowed = thresholds.max_span(rules, p.top_material, p.top_thickness_mm, multiplier)
        if allowed is not None:
            allowed = float(math.floor(allowed))
            bonus = render_text("bounds.length.bonus", locale, multiplier=multiplier) if multiplier > 1 else ""
            bound.offer(
                allowed,
                render_text(
                    "bounds.length.span",
                    locale,
                    material=p.top_material,
                    thickness=p.top_thickness_mm,
                    max=allowed,
                    bonus=bonus,
                ),
            )

    return FieldConstraint(min=limits.min, max=bound.value, reason=bound.reason)


def _pedestal_max_length(p: PartialSpecification, rules: RuleSet) -> float | None:
    """Longest top whose effective span fits over a central support."""
    if p.top_thickness_mm is None or p.top_shape_type is None:
        return None
    max_span = thresholds.pedestal_max_span(rules, p.top_thickness_mm)
    if p.top_shape_type == "round":
        return float(max_span)
    if p.top_width_mm is None:
        return None
    # diagonal: length^2 + width^2 <= max_span^2
    return float(math.floor(math.sqrt(max(max_span**2 - p.top_width_mm**2, 0.0))))


def _top_width(p: PartialSpecification, rules: RuleSet, locale: Locale) -> FieldConstraint:
    limits = rules.field_limits.top_width_mm
    bound = _Tightest(limits.min, render_text("bounds.width.base", locale))

    if not thresholds.is_radial(p.leg_profile_type) and p.total_height_mm is not None:
        min_width = thresholds.min_footprint(rules, p.total_height_mm)
        bound.offer(
            min_width,
            render_text(
                "bounds.width.stability",
                locale,
                min=min_width,
                percent=thresholds.percent(rules.stability.min_footprint_ratio),
                total=p.total_height_mm,
            ),
        )

    return FieldConstraint(min=bound.value, max=limits.max, reason=bound.reason)


def _total_height(rules: RuleSet, locale: Locale) -> FieldConstraint:
    height = rules.height
    return FieldConstraint(
        min=height.min_total_mm,
        max=height.max_total_mm,
        reason=render_text("bounds.height", locale, min=height.min_total_mm, max=height.max_total_mm),
    )


def _leg_profile(p: PartialSpecification, rules: RuleSet, locale: Locale) -> FieldConstraint:
    limits = rules.field_limits.leg_profile_size_mm
    bound = _Tightest(limits.min, render_text("bounds.profile.base", locale))

    if thresholds.is_radial(p.leg_profile_type):
        radial_min = rules.legs.radial_min_diameter_mm
        bound.offer(radial_min, render_text("bounds.profile.radial", locale, min=radial_min))
        return FieldConstraint(min=bound.value, max=limits.max, reason=bound.reason)

    material_class = thresholds.leg_class(rules, p.leg_material)

    if material_class == "metal":
        metal_min = thresholds.metal_min_profile(rules, p.leg_profile_type)
        if metal_min is not None:
            bound.offer(
                metal_min,
                render_text("bounds.profile.metal", locale, profile_type=p.leg_profile_type, min=metal_min),
            )

    if material_class == "wood" and p.leg_height_mm is not None:
        wood_min = thresholds.wood_min_profile(rules, p.leg_height_mm)
        bound.offer(wood_min, render_text("bounds.profile.wood", locale, leg_height=p.leg_height_mm, min=wood_min))

    if p.leg_height_mm is not None:
        slender_min = thresholds.slenderness_min_profile(rules, p.leg_material, p.leg_height_mm)
        if slender_min is not None:
            bound.offer(
                slender_min,
                render_text(
                    "bounds.profile.slenderness",
                    locale,
                    max=thresholds.max_slenderness(rules, p.leg_material),
                    min=slender_min,
                    leg_height=p.leg_height_mm,
                ),
            )

    if thresholds.is_pedestal(p.leg_count, p.leg_profile_type) and p.total_height_mm is not None:
        pedestal_min = thresholds.pedestal_min_base(rules, p.total_height_mm)
        bound.offer(
            pedestal_min,
            render_text(
                "bounds.profile.pedestal",
                locale,
                min=pedestal_min,
                percent=thresholds.percent(rules.stability.pedestal_base_ratio),
                total=p.total_height_mm,
            ),
        )

    return FieldConstraint(min=bound.value, max=limits.max, reason=bound.reason)


def _radial_spread(p: PartialSpecification, rules: RuleSet, locale: Locale) -> FieldConstraint:
    limits = rules.field_limits.leg_radial_spread_mm
    bound = _Tightest(limits.min, render_text("bounds.spread.base", locale))

    if p.total_height_mm is not None:
        spread_min = thresholds.radial_min_spread(rules, p.total_height_mm)
        bound.offer(
            spread_min,
            render_text(
                "bounds.spread.stability",
                locale,
                min=spread_min,
                percent=thresholds.percent(rules.legs.radial_spread_ratio),
                total=p.total_height_mm,
            ),
        )

    return FieldConstraint(min=bound.value, max=limits.max, reason=bound.reason)
