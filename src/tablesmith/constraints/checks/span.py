"""Unsupported span rules.

SPAN-02 covers a single central support and is checked against the effective
span (diameter for round tops, diagonal otherwise). SPAN-01 covers 2, 4 and 6
leg tables and compares the top length with the tier the thickness reaches.
A material with no reachable tier has no defined limit and is not reported.
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


class SpanChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "span"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        findings: list[Finding] = []

        if thresholds.is_pedestal(spec.leg_count, spec.leg_profile_type):
            span = thresholds.effective_span(spec.top_shape_type, spec.top_length_mm, spec.top_width_mm)
            max_diagonal = thresholds.pedestal_max_span(rules, spec.top_thickness_mm)
            if Bound(max_diagonal, span, kind="max").violated:
                findings.append(
                    make_finding(
                        "SPAN-02",
                        "top_length_mm",
                        locale=locale,
                        value=span,
                        limit=max_diagonal,
                        span=round(span),
                        max=max_diagonal,
                        thickness=spec.top_thickness_mm,
                        material=spec.top_material,
                    )
                )
            return findings

        if not thresholds.leg_span_applies(rules, spec.leg_count, spec.leg_profile_type):
            return findings

        tier = thresholds.span_tier(rules, spec.top_material, spec.top_thickness_mm)
        if tier is None:
            return findings

        multiplier = thresholds.composite_multiplier(rules, spec.is_composite)
        allowed = thresholds.max_span(rules, spec.top_material, spec.top_thickness_mm, multiplier)
        if allowed is not None and Bound(allowed, spec.top_length_mm, kind="max").violated:
            findings.append(
                make_finding(
                    "SPAN-01",
                    "top_length_mm",
                    locale=locale,
                    value=spec.top_length_mm,
                    limit=allowed,
                    material=spec.top_material,
                    thickness=spec.top_thickness_mm,
                    max_span=tier.max_span_mm,
                    allowed=round(allowed),
                    multiplier=multiplier,
                    length=spec.top_length_mm,
                )
            )
        return findings
