"""Tipping stability rules.

STAB-01 compares the footprint with the total height. The footprint is the
top width, or twice the spread radius for radial bases. STAB-02 sizes the
base of a single central support. STAB-03 asks for a foot base under tall,
thin metal or wooden legs. STAB-02 and STAB-03 do not apply to radial bases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import thresholds
from ..primitives import Finding, RuleChecker, make_finding
from ..thresholds import Bound

if TYPE_CHECKING:
    from ...rulesets import RuleSet
    from ...spec import Specification
    from ..messages import Locale


class StabilityChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "stability"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        findings: list[Finding] = []
        total = spec.total_height_mm
        min_ratio = rules.stability.min_footprint_ratio

        footprint = thresholds.footprint(spec.leg_profile_type, spec.top_width_mm, spec.leg_radial_spread_mm)
        if footprint is not None and total > 0:
            ratio = footprint / total
            if Bound(min_ratio, ratio).violated:
                findings.append(
                    make_finding(
                        "STAB-01",
                        "top_width_mm",
                        locale=locale,
                        value=ratio,
                        limit=min_ratio,
                        footprint=footprint,
                        total=total,
                        ratio=f"{ratio:.2f}",
                        min_ratio=f"{min_ratio:.2f}",
                        min=thresholds.min_footprint(rules, total),
                    )
                )

        if spec.is_radial:
            return findings

        if thresholds.is_pedestal(spec.leg_count, spec.leg_profile_type):
            min_base = thresholds.pedestal_min_base(rules, total)
            if Bound(min_base, spec.leg_profile_size_mm).violated:
                findings.append(
                    make_finding(
                        "STAB-02",
                        "leg_profile_size_mm",
                        locale=locale,
                        value=spec.leg_profile_size_mm,
                        limit=min_base,
                        profile=spec.leg_profile_size_mm,
                        total=total,
                        min=min_base,
                        min_ratio=f"{rules.stability.pedestal_base_ratio:.2f}",
                        percent=thresholds.percent(rules.stability.pedestal_base_ratio),
                    )
                )

        if not spec.has_foot_base:
            rule = thresholds.needs_foot_base(
                rules, spec.leg_material, spec.leg_height_mm, spec.leg_profile_size_mm
            )
            if rule is not None:
                findings.append(
                    make_finding(
                        "STAB-03",
                        "has_foot_base",
                        locale=locale,
                        message_key=f"STAB-03.{thresholds.leg_class(rules, spec.leg_material)}",
                        value=spec.leg_profile_size_mm,
                        limit=rule.min_profile_without_base_mm,
                        leg_height=spec.leg_height_mm,
                        profile=spec.leg_profile_size_mm,
                        max_height=rule.max_leg_height_without_base_mm,
                        min_profile=rule.min_profile_without_base_mm,
                    )
                )

        return findings
