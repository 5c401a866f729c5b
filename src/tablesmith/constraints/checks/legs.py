"""Leg profile, slenderness and placement rules.

Radial halfcylinder bases have their own rules (RADIAL-01..03) and bypass
the standard leg rules entirely:

- LEG-01: metal profile minimum by profile type
- LEG-02: wooden profile minimum by leg height
- LEG-03: slenderness (height / profile) limit per material class
- LEG-04: a single central support needs a round or square top
- LEG-05: symmetric placement warning for round/oval tops on many legs
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .. import thresholds
from ..primitives import Finding, RuleChecker, make_finding
from ..thresholds import Bound

if TYPE_CHECKING:
    from ...rulesets import RuleSet
    from ...spec import Specification
    from ..messages import Locale


class LegChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "legs"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        if spec.is_radial:
            return self._check_radial(spec, rules, locale)

        findings: list[Finding] = []
        legs = rules.legs
        profile = spec.leg_profile_size_mm
        material_class = thresholds.leg_class(rules, spec.leg_material)

        if material_class == "metal":
            metal_min = thresholds.metal_min_profile(rules, spec.leg_profile_type)
            if metal_min is not None and Bound(metal_min, profile).violated:
                findings.append(
                    make_finding(
                        "LEG-01",
                        "leg_profile_size_mm",
                        locale=locale,
                        value=profile,
                        limit=metal_min,
                        profile_type=spec.leg_profile_type,
                        min=metal_min,
                        profile=profile,
                    )
                )

        if material_class == "wood":
            wood_min = thresholds.wood_min_profile(rules, spec.leg_height_mm)
            if Bound(wood_min, profile).violated:
                findings.append(
                    make_finding(
                        "LEG-02",
                        "leg_profile_size_mm",
                        locale=locale,
                        value=profile,
                        limit=wood_min,
                        leg_height=spec.leg_height_mm,
                        min=wood_min,
                        profile=profile,
                    )
                )

        max_slenderness = thresholds.max_slenderness(rules, spec.leg_material)
        ratio = thresholds.slenderness(spec.leg_height_mm, profile)
        if max_slenderness is not None and Bound(max_slenderness, ratio, kind="max").violated:
            findings.append(
                make_finding(
                    "LEG-03",
                    "leg_profile_size_mm",
                    locale=locale,
                    message_key=f"LEG-03.{material_class}",
                    value=ratio if math.isfinite(ratio) else None,
                    limit=max_slenderness,
                    slenderness=f"{ratio:.1f}",
                    max=max_slenderness,
                    min_profile=thresholds.slenderness_min_profile(rules, spec.leg_material, spec.leg_height_mm),
                )
            )

        if (
            thresholds.is_pedestal(spec.leg_count, spec.leg_profile_type)
            and spec.top_shape_type not in legs.pedestal_top_shapes
        ):
            findings.append(
                make_finding(
                    "LEG-04",
                    "leg_count",
                    locale=locale,
                    shape=spec.top_shape_type,
                    allowed="/".join(legs.pedestal_top_shapes),
                )
            )

        if (
            spec.top_shape_type in legs.placement_warning_shapes
            and spec.leg_count >= legs.placement_warning_min_legs
        ):
            findings.append(
                make_finding(
                    "LEG-05",
                    "leg_count",
                    locale=locale,
                    value=spec.leg_count,
                    limit=legs.placement_warning_min_legs,
                    count=spec.leg_count,
                )
            )

        return findings

    def _check_radial(self, spec: Specification, rules: RuleSet, locale: Locale) -> list[Finding]:
        findings: list[Finding] = []
        legs = rules.legs
        total = spec.total_height_mm

        if spec.leg_radial_spread_mm is not None:
            min_spread = thresholds.radial_min_spread(rules, total)
            if Bound(min_spread, spec.leg_radial_spread_mm).violated:
                findings.append(
                    make_finding(
                        "RADIAL-01",
                        "leg_radial_spread_mm",
                        locale=locale,
                        value=spec.leg_radial_spread_mm,
                        limit=min_spread,
                        spread=spec.leg_radial_spread_mm,
                        total=total,
                        min=min_spread,
                        ratio=f"{legs.radial_spread_ratio:.2f}",
                        percent=thresholds.percent(legs.radial_spread_ratio),
                    )
                )

        if spec.leg_radial_count is not None and Bound(legs.radial_min_count, spec.leg_radial_count).violated:
            findings.append(
                make_finding(
                    "RADIAL-02",
                    "leg_radial_count",
                    locale=locale,
                    value=spec.leg_radial_count,
                    limit=legs.radial_min_count,
                    min=legs.radial_min_count,
                    count=spec.leg_radial_count,
                )
            )

        if Bound(legs.radial_min_diameter_mm, spec.leg_profile_size_mm).violated:
            findings.append(
                make_finding(
                    "RADIAL-03",
                    "leg_profile_size_mm",
                    locale=locale,
                    value=spec.leg_profile_size_mm,
                    limit=legs.radial_min_diameter_mm,
                    min=legs.radial_min_diameter_mm,
                    profile=spec.leg_profile_size_mm,
                )
            )

        return findings
