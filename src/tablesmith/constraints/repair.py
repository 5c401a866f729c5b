"""Suggestion generator: a greedy repair of invalid specifications.

Each violation is resolved by one rule-specific local edit on a private
working copy, applied in violation order. Afterwards the total height is
recomputed as leg height plus top thickness. The result is *intended* to be
valid but is not re-validated: one fix may break a rule another fix relied
on (e.g. a height clamp followed by a thickness increase).

With ``passes > 1`` the checkers are re-run on the candidate and the fixes
re-applied until no violations remain or the pass budget is spent.

Projection policy per rule (cheapest direction first):
    thickness up before shrinking the top, profile up before re-engineering
    the leg, foot base before anything else for STAB-03.

Every edit is recorded as a :class:`RepairAction`; :class:`RepairResult`
carries the audit trail and distance metrics in bound-normalized space.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from ..rulesets import RuleSet, load_ruleset
from ..spec import Specification
from . import thresholds
from .checks import default_checkers
from .messages import DEFAULT_LOCALE, Locale

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .primitives import Finding

logger = logging.getLogger(__name__)

# Pseudo rule id recorded for the final height recomputation
HEIGHT_SUM_ID = "HEIGHT_SUM"

_CATEGORICAL_FIELDS = frozenset({"has_foot_base", "top_edge_finish", "leg_profile_type"})


@dataclass(frozen=True, slots=True)
class RepairAction:
    """A single edit applied to one specification field.

    Attributes:
        path: Specification field name (e.g., "top_thickness_mm")
        before: Value before the edit
        after: Value after the edit
        reason: Human-readable explanation of the edit
        rule_id: ID of the rule that triggered the edit
    """

    path: str
    before: Any
    after: Any
    reason: str
    rule_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "before": self.before,
            "after": self.after,
            "reason": self.reason,
            "rule_id": self.rule_id,
        }


@dataclass(frozen=True)
class RepairDistanceMetrics:
    """Distance between original and suggestion in normalized space.

    Numeric fields are normalized by their rule-set range; categorical edits
    (edge finish, profile type, foot base) count as a full unit step.

    Attributes:
        l2_distance: L2 (Euclidean) norm of the normalized change vector
        linf_distance: L-infinity (max) norm of the normalized change vector
        normalized_sum_distance: Sum of relative changes |after - before| / max(|before|, 1)
    """

    l2_distance: float
    linf_distance: float
    normalized_sum_distance: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            "l2_distance": self.l2_distance,
            "linf_distance": self.linf_distance,
            "normalized_sum_distance": self.normalized_sum_distance,
        }


@dataclass(frozen=True)
class RepairResult:
    """Suggested specification plus the audit trail that produced it.

    Attributes:
        original: The specification that was repaired
        suggested: The suggested (complete) specification
        repair_actions: Every recorded edit, in application order
        passes: Number of repair passes applied
        distance_metrics: Distance between original and suggestion
    """

    original: Specification
    suggested: Specification
    repair_actions: tuple[RepairAction, ...]
    passes: int
    distance_metrics: RepairDistanceMetrics

    @property
    def repair_map(self) -> dict[str, dict[str, Any]]:
        """Net change per field: first ``before`` and last ``after``."""
        return _build_repair_map(self.repair_actions)

    @property
    def repair_reason(self) -> list[str]:
        return [action.reason for action in self.repair_actions]

    @property
    def rule_ids(self) -> list[str]:
        """Rules that led to at least one edit, in first-edit order."""
        seen: dict[str, None] = {}
        for action in self.repair_actions:
            seen.setdefault(action.rule_id, None)
        return list(seen)

    def to_dict(self) -> dict[str, Any]:
        """Convert repair result to a dictionary for serialization."""
        return {
            "repair_map": self.repair_map,
            "repair_reason": self.repair_reason,
            "repair_actions": [action.to_dict() for action in self.repair_actions],
            "passes": self.passes,
            "distance_metrics": self.distance_metrics.to_dict(),
        }


def _build_repair_map(actions: Sequence[RepairAction]) -> dict[str, dict[str, Any]]:
    merged: dict[str, dict[str, Any]] = {}
    for action in actions:
        entry = merged.get(action.path)
        if entry is None:
            merged[action.path] = {"before": action.before, "after": action.after}
        else:
            entry["after"] = action.after
    return {path: merged[path] for path in sorted(merged) if merged[path]["before"] != merged[path]["after"]}


def _normalization_range(rules: RuleSet, path: str) -> float | None:
    limits = rules.field_limits
    if path in ("leg_count", "leg_radial_count"):
        return 5.0
    if path in ("total_height_mm", "leg_height_mm"):
        return rules.height.max_total_mm
    limit = getattr(limits, path, None)
    if limit is None:
        return None
    return limit.max - limit.min


def _compute_distance_metrics(
    repair_map: dict[str, dict[str, Any]], rules: RuleSet
) -> RepairDistanceMetrics:
    """Compute L2/Linf metrics over net per-field changes."""
    if not repair_map:
        return RepairDistanceMetrics(l2_distance=0.0, linf_distance=0.0, normalized_sum_distance=0.0)

    normalized: list[float] = []
    relative: list[float] = []
    for path, change in repair_map.items():
        before, after = change["before"], change["after"]
        if path in _CATEGORICAL_FIELDS:
            normalized.append(1.0)
            relative.append(1.0)
            continue
        before_value = float(before or 0.0)
        after_value = float(after or 0.0)
        span = _normalization_range(rules, path)
        delta = abs(after_value - before_value)
        normalized.append(delta / span if span else delta)
        relative.append(delta / max(abs(before_value), 1.0))

    diffs = np.asarray(normalized, dtype=float)
    return RepairDistanceMetrics(
        l2_distance=float(np.linalg.norm(diffs)),
        linf_distance=float(np.max(diffs)),
        normalized_sum_distance=float(np.sum(np.asarray(relative, dtype=float))),
    )


class RepairEngine:
    """Table-driven per-rule fixes applied to a mutable payload.

    The payload is ``Specification.model_dump()``; fixes read the payload as
    left by earlier fixes in the same pass.
    """

    def __init__(self, rules: RuleSet) -> None:
        self.rules = rules
        self.actions: list[RepairAction] = []
        self._fixes: dict[str, Callable[[dict[str, Any]], None]] = {
            "MAT-01": self._fix_material_min,
            "MAT-02": self._fix_material_span,
            "SPAN-01": self._fix_span,
            "SPAN-02": self._fix_pedestal_span,
            "STAB-01": self._fix_footprint,
            "STAB-02": self._fix_pedestal_base,
            "STAB-03": self._fix_foot_base,
            "LEG-01": self._fix_metal_profile,
            "LEG-02": self._fix_wood_profile,
            "LEG-03": self._fix_slenderness,
            "LEG-04": self._fix_pedestal_shape,
            "HGT-01": self._fix_height_bounds,
            "HGT-03": self._fix_height_sum,
            "EDGE-01": self._fix_mitered_edge,
            "EDGE-02": self._fix_beveled_edge,
            "COMP-01": self._fix_face_min,
            "COMP-02": partial(self._fix_core, rule_id="COMP-02"),
            "COMP-03": partial(self._fix_core, rule_id="COMP-03"),
            "RADIAL-01": self._fix_radial_spread,
            "RADIAL-02": self._fix_radial_count,
            "RADIAL-03": self._fix_radial_diameter,
        }

    def _record(self, path: str, before: Any, after: Any, reason: str, rule_id: str) -> Any:
        """Record a repair action and return the repaired value."""
        if before != after:
            self.actions.append(RepairAction(path=path, before=before, after=after, reason=reason, rule_id=rule_id))
            logger.debug("%s: %s %s -> %s", rule_id, path, before, after)
        return after

    def _set(self, payload: dict[str, Any], path: str, value: Any, reason: str, rule_id: str) -> None:
        payload[path] = self._record(path, payload[path], value, reason, rule_id)

    def _raise_to(self, payload: dict[str, Any], path: str, limit: float | None, reason: str, rule_id: str) -> None:
        """Raise a field to a minimum and record the repair if needed."""
        value = payload[path]
        if limit is None or (value is not None and value >= limit):
            return
        self._set(payload, path, limit, reason.format(value=value, limit=limit), rule_id)

    def _lower_to(self, payload: dict[str, Any], path: str, limit: float | None, reason: str, rule_id: str) -> None:
        """Lower a field to a maximum and record the repair if needed."""
        value = payload[path]
        if limit is None or value is None or value <= limit:
            return
        self._set(payload, path, limit, reason.format(value=value, limit=limit), rule_id)

    def apply(self, payload: dict[str, Any], violation: Finding) -> None:
        fix = self._fixes.get(violation.rule_id)
        if fix is None:
            logger.debug("No fix for %s", violation.rule_id)
            return
        fix(payload)

    def recompute_total_height(self, payload: dict[str, Any]) -> None:
        total = payload["leg_height_mm"] + payload["top_thickness_mm"]
        self._set(payload, "total_height_mm", total, f"Total height set to leg + top = {total}mm", HEIGHT_SUM_ID)

    # -- top ---------------------------------------------------------------

    def _fix_material_min(self, payload: dict[str, Any]) -> None:
        limit = thresholds.material_min_thickness(self.rules, payload["top_material"])
        self._raise_to(
            payload, "top_thickness_mm", limit, "Thickness {value}mm raised to material minimum {limit}mm", "MAT-01"
        )

    def _fix_material_span(self, payload: dict[str, Any]) -> None:
        upgrades = thresholds.span_upgrades(self.rules, payload["top_material"], payload["top_length_mm"])
        limit = max((u.min_thickness_mm for u in upgrades), default=None)
        self._raise_to(
            payload, "top_thickness_mm", limit, "Thickness {value}mm raised to {limit}mm for the top length", "MAT-02"
        )

    def _fix_span(self, payload: dict[str, Any]) -> None:
        material = payload["top_material"]
        multiplier = thresholds.composite_multiplier(self.rules, payload["top_construction"] == "composite")
        required = thresholds.min_thickness_for_span(self.rules, material, payload["top_length_mm"], multiplier)
        if required is not None:
            self._raise_to(
                payload, "top_thickness_mm", required, "Thickness {value}mm raised to span tier {limit}mm", "SPAN-01"
            )
            return
        allowed = thresholds.max_span(self.rules, material, payload["top_thickness_mm"], multiplier)
        if allowed is not None:
            self._lower_to(
                payload, "top_length_mm", math.floor(allowed), "Length {value}mm reduced to max span {limit}mm", "SPAN-01"
            )

    def _fix_pedestal_span(self, payload: dict[str, Any]) -> None:
        thickest = thresholds.thickest_pedestal_tier(self.rules)
        if thickest is not None and payload["top_thickness_mm"] < thickest:
            self._raise_to(
                payload,
                "top_thickness_mm",
                thickest,
                "Thickness {value}mm raised to {limit}mm for a pedestal top",
                "SPAN-02",
            )
            return
        max_diagonal = thresholds.pedestal_max_span(self.rules, payload["top_thickness_mm"])
        span = thresholds.effective_span(payload["top_shape_type"], payload["top_length_mm"], payload["top_width_mm"])
        if span <= max_diagonal:
            return
        scale = max_diagonal / span
        for path in ("top_length_mm", "top_width_mm"):
            scaled = math.floor(payload[path] * scale)
            self._set(payload, path, scaled, f"Scaled by {scale:.3f} to fit pedestal span {max_diagonal}mm", "SPAN-02")

    # -- stability ---------------------------------------------------------

    def _fix_footprint(self, payload: dict[str, Any]) -> None:
        total = payload["total_height_mm"]
        if thresholds.is_radial(payload["leg_profile_type"]) and payload["leg_radial_spread_mm"] is not None:
            limit = thresholds.ceil_ratio(self.rules.stability.min_footprint_ratio / 2, total)
            self._raise_to(
                payload,
                "leg_radial_spread_mm",
                limit,
                "Radial spread {value}mm raised to {limit}mm for stability",
                "STAB-01",
            )
            return
        self._raise_to(
            payload,
            "top_width_mm",
            thresholds.min_footprint(self.rules, total),
            "Width {value}mm raised to {limit}mm for stability",
            "STAB-01",
        )

    def _fix_pedestal_base(self, payload: dict[str, Any]) -> None:
        self._raise_to(
            payload,
            "leg_profile_size_mm",
            thresholds.pedestal_min_base(self.rules, payload["total_height_mm"]),
            "Pedestal base {value}mm raised to {limit}mm",
            "STAB-02",
        )

    def _fix_foot_base(self, payload: dict[str, Any]) -> None:
        self._set(payload, "has_foot_base", True, "Foot base added under tall thin legs", "STAB-03")

    # -- legs --------------------------------------------------------------

    def _fix_metal_profile(self, payload: dict[str, Any]) -> None:
        limit = thresholds.metal_min_profile(self.rules, payload["leg_profile_type"])
        if limit is None:
            limit = self.rules.legs.metal_default_min_profile_mm
        self._raise_to(
            payload, "leg_profile_size_mm", limit, "Metal leg profile {value}mm raised to {limit}mm", "LEG-01"
        )

    def _fix_wood_profile(self, payload: dict[str, Any]) -> None:
        limit = thresholds.wood_min_profile(self.rules, payload["leg_height_mm"])
        self._raise_to(
            payload, "leg_profile_size_mm", limit, "Wood leg profile {value}mm raised to {limit}mm", "LEG-02"
        )

    def _fix_slenderness(self, payload: dict[str, Any]) -> None:
        limit = thresholds.slenderness_min_profile(self.rules, payload["leg_material"], payload["leg_height_mm"])
        self._raise_to(
            payload, "leg_profile_size_mm", limit, "Leg profile {value}mm raised to {limit}mm for slenderness", "LEG-03"
        )

    def _fix_pedestal_shape(self, payload: dict[str, Any]) -> None:
        self._set(payload, "leg_count", 4, "Single support replaced by 4 legs", "LEG-04")
        if payload["leg_profile_type"] == "pedestal":
            self._set(payload, "leg_profile_type", "square", "Pedestal profile replaced by square legs", "LEG-04")

    # -- height ------------------------------------------------------------

    def _fix_height_bounds(self, payload: dict[str, Any]) -> None:
        height = self.rules.height
        total = payload["total_height_mm"]
        if total < height.min_total_mm:
            bound = height.min_total_mm
        elif total > height.max_total_mm:
            bound = height.max_total_mm
        else:
            return
        self._set(payload, "total_height_mm", bound, f"Total height {total}mm clamped to {bound}mm", "HGT-01")
        leg = max(bound - payload["top_thickness_mm"], 0)
        self._set(payload, "leg_height_mm", leg, f"Leg height set to {leg}mm to match total {bound}mm", "HGT-01")

    def _fix_height_sum(self, payload: dict[str, Any]) -> None:
        total = payload["leg_height_mm"] + payload["top_thickness_mm"]
        self._set(payload, "total_height_mm", total, f"Total height set to leg + top = {total}mm", "HGT-03")

    # -- edge --------------------------------------------------------------

    def _fix_mitered_edge(self, payload: dict[str, Any]) -> None:
        limit = thresholds.edge_min_thickness(self.rules, "mitered")
        if payload["top_construction"] == "composite" and payload["top_face_thickness_mm"] is not None:
            self._raise_to(
                payload, "top_face_thickness_mm", limit, "Face {value}mm raised to {limit}mm for a mitered edge", "EDGE-01"
            )
            return
        self._raise_to(
            payload, "top_thickness_mm", limit, "Thickness {value}mm raised to {limit}mm for a mitered edge", "EDGE-01"
        )

    def _fix_beveled_edge(self, payload: dict[str, Any]) -> None:
        self._set(payload, "top_edge_finish", "straight", "Beveled edge replaced by a straight edge", "EDGE-02")

    # -- composite ---------------------------------------------------------

    def _fix_face_min(self, payload: dict[str, Any]) -> None:
        limit = thresholds.composite_face_min(self.rules, payload["top_material"])
        self._raise_to(
            payload, "top_face_thickness_mm", limit, "Face {value}mm raised to material minimum {limit}mm", "COMP-01"
        )

    def _fix_core(self, payload: dict[str, Any], rule_id: str) -> None:
        face = payload["top_face_thickness_mm"]
        if face is None:
            face = thresholds.composite_face_min(self.rules, payload["top_material"])
        self._raise_to(
            payload,
            "top_thickness_mm",
            thresholds.composite_min_total(self.rules, face),
            "Thickness {value}mm raised to {limit}mm to keep the minimum core",
            rule_id,
        )

    # -- radial ------------------------------------------------------------

    def _fix_radial_spread(self, payload: dict[str, Any]) -> None:
        self._raise_to(
            payload,
            "leg_radial_spread_mm",
            thresholds.radial_min_spread(self.rules, payload["total_height_mm"]),
            "Radial spread {value}mm raised to {limit}mm",
            "RADIAL-01",
        )

    def _fix_radial_count(self, payload: dict[str, Any]) -> None:
        self._set(
            payload,
            "leg_radial_count",
            self.rules.legs.radial_min_count,
            "Halfcylinder count raised to the minimum",
            "RADIAL-02",
        )

    def _fix_radial_diameter(self, payload: dict[str, Any]) -> None:
        self._raise_to(
            payload,
            "leg_profile_size_mm",
            self.rules.legs.radial_min_diameter_mm,
            "Halfcylinder diameter {value}mm raised to {limit}mm",
            "RADIAL-03",
        )


def find_violations(spec: Specification, rules: RuleSet, locale: Locale = DEFAULT_LOCALE) -> list[Finding]:
    """Run every checker and keep the findings that block validity."""
    findings: list[Finding] = []
    for checker in default_checkers():
        findings.extend(checker.check(spec, rules, locale))
    return [f for f in findings if f.rule_id not in rules.warning_rule_ids]


def suggest(
    spec: Specification,
    violations: Sequence[Finding],
    rules: RuleSet | None = None,
    *,
    passes: int = 1,
    locale: Locale = DEFAULT_LOCALE,
) -> RepairResult:
    """Produce a suggested specification resolving ``violations``.

    Args:
        spec: The invalid specification (left untouched)
        violations: Its violations, in engine order
        rules: Rule set to repair against (standard rule set by default)
        passes: Maximum repair passes; 1 is the plain greedy pass, more
            re-validate the candidate between passes
        locale: Locale used when re-validating between passes

    Returns:
        RepairResult with the suggested specification and the audit trail
    """
    if passes < 1:
        raise ValueError(f"passes must be >= 1, got {passes}")
    if rules is None:
        rules = load_ruleset()

    engine = RepairEngine(rules)
    payload = spec.model_dump()
    current = list(violations)
    applied = 0

    while current and applied < passes:
        for violation in current:
            engine.apply(payload, violation)
        engine.recompute_total_height(payload)
        applied += 1
        if applied < passes:
            current = find_violations(Specification.model_validate(payload), rules, locale)
            logger.debug("Repair pass %d left %d violation(s)", applied, len(current))

    suggested = Specification.model_validate(payload)
    actions = tuple(engine.actions)
    return RepairResult(
        original=spec,
        suggested=suggested,
        repair_actions=actions,
        passes=applied,
        distance_metrics=_compute_distance_metrics(_build_repair_map(actions), rules),
    )
