"""Total height rules.

HGT-01 bounds the total height (too low and too high are reported
separately). HGT-03 checks that the total equals leg height plus top
thickness within the rule set's tolerance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..primitives import Finding, RuleChecker, make_finding
from ..thresholds import Bound

if TYPE_CHECKING:
    from ...rulesets import RuleSet
    from ...spec import Specification
    from ..messages import Locale


class HeightChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "height"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        findings: list[Finding] = []
        height = rules.height
        total = spec.total_height_mm

        if Bound(height.min_total_mm, total).violated:
            findings.append(
                make_finding(
                    "HGT-01",
                    "total_height_mm",
                    locale=locale,
                    message_key="HGT-01.low",
                    value=total,
                    limit=height.min_total_mm,
                    total=total,
                    min=height.min_total_mm,
                )
            )
        if Bound(height.max_total_mm, total, kind="max").violated:
            findings.append(
                make_finding(
                    "HGT-01",
                    "total_height_mm",
                    locale=locale,
                    message_key="HGT-01.high",
                    value=total,
                    limit=height.max_total_mm,
                    total=total,
                    max=height.max_total_mm,
                )
            )

        expected = spec.leg_height_mm + spec.top_thickness_mm
        diff = abs(total - expected)
        if Bound(height.tolerance_mm, diff, kind="max").violated:
            findings.append(
                make_finding(
                    "HGT-03",
                    "total_height_mm",
                    locale=locale,
                    value=total,
                    limit=expected,
                    total=total,
                    leg_height=spec.leg_height_mm,
                    thickness=spec.top_thickness_mm,
                    expected=expected,
                    diff=diff,
                    tolerance=height.tolerance_mm,
                )
            )

        return findings
