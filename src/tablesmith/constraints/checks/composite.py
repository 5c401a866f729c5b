"""Composite (face panels around a core) top rules.

Only evaluated for composite tops that state a face thickness.

- COMP-01: face panel below the material minimum
- COMP-02: core (total - 2 x face) below the minimum core
- COMP-03: total below 2 x face + minimum core while the core passes

COMP-03 cannot fire once COMP-02 passes: core >= min_core is the same
inequality as total >= 2 x face + min_core. It is kept so that a rule set
or model change that separates the two conditions is still caught.
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


class CompositeChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "composite"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        findings: list[Finding] = []
        face = spec.top_face_thickness_mm
        if not spec.is_composite or face is None:
            return findings

        min_core = rules.composite.min_core_mm
        thickness = spec.top_thickness_mm

        face_min = thresholds.composite_face_min(rules, spec.top_material)
        if Bound(face_min, face).violated:
            findings.append(
                make_finding(
                    "COMP-01",
                    "top_face_thickness_mm",
                    locale=locale,
                    value=face,
                    limit=face_min,
                    material=spec.top_material,
                    min=face_min,
                    face=face,
                )
            )

        core = thickness - 2 * face
        core_bound = Bound(min_core, core)
        if core_bound.violated:
            findings.append(
                make_finding(
                    "COMP-02",
                    "top_face_thickness_mm",
                    locale=locale,
                    value=core,
                    limit=min_core,
                    thickness=thickness,
                    face=face,
                    core=core,
                    min_core=min_core,
                )
            )

        min_total = thresholds.composite_min_total(rules, face)
        if Bound(min_total, thickness).violated and not core_bound.violated:
            findings.append(
                make_finding(
                    "COMP-03",
                    "top_thickness_mm",
                    locale=locale,
                    value=thickness,
                    limit=min_total,
                    thickness=thickness,
                    face=face,
                    min_total=min_total,
                    min_core=min_core,
                )
            )

        return findings
