"""Material thickness rules for solid stone tops.

MAT-01: absolute minimum thickness per material.
MAT-02: raised minimum once the top length passes a material threshold.

Composite tops are skipped; their face panels are governed by COMP-01.
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


class MaterialChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "material"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        findings: list[Finding] = []
        if spec.is_composite:
            return findings

        material_min = thresholds.material_min_thickness(rules, spec.top_material)
        if material_min is not None and Bound(material_min, spec.top_thickness_mm).violated:
            findings.append(
                make_finding(
                    "MAT-01",
                    "top_thickness_mm",
                    locale=locale,
                    value=spec.top_thickness_mm,
                    limit=material_min,
                    material=spec.top_material,
                    min=material_min,
                    thickness=spec.top_thickness_mm,
                )
            )

        for upgrade in thresholds.span_upgrades(rules, spec.top_material, spec.top_length_mm):
            if Bound(upgrade.min_thickness_mm, spec.top_thickness_mm).violated:
                findings.append(
                    make_finding(
                        "MAT-02",
                        "top_thickness_mm",
                        locale=locale,
                        value=spec.top_thickness_mm,
                        limit=upgrade.min_thickness_mm,
                        material=spec.top_material,
                        min=upgrade.min_thickness_mm,
                        thickness=spec.top_thickness_mm,
                        length=spec.top_length_mm,
                        threshold=upgrade.span_threshold_mm,
                    )
                )

        return findings
