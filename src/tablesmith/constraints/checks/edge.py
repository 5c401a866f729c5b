"""Edge finish rules.

Mitered (EDGE-01) and beveled (EDGE-02) edges remove stock at the edge and
need a minimum thickness. On composite tops the edge is cut into the face
panel, so the face thickness is compared instead of the total.
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

EDGE_RULE_IDS: dict[str, str] = {
    "mitered": "EDGE-01",
    "beveled": "EDGE-02",
}


class EdgeChecker(RuleChecker):
    @property
    def name(self) -> str:
        return "edge"

    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        findings: list[Finding] = []
        min_thickness = thresholds.edge_min_thickness(rules, spec.top_edge_finish)
        rule_id = EDGE_RULE_IDS.get(spec.top_edge_finish)
        if min_thickness is None or rule_id is None:
            return findings

        on_face = spec.is_composite and spec.top_face_thickness_mm is not None
        machined = thresholds.machined_thickness(spec.is_composite, spec.top_thickness_mm, spec.top_face_thickness_mm)
        if Bound(min_thickness, machined).violated:
            findings.append(
                make_finding(
                    rule_id,
                    "top_edge_finish",
                    locale=locale,
                    message_key="EDGE.face" if on_face else "EDGE.top",
                    value=machined,
                    limit=min_thickness,
                    edge=spec.top_edge_finish,
                    min=min_thickness,
                    thickness=machined,
                )
            )
        return findings
