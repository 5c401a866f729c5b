"""Rule evaluation, repair suggestion and field bounding for table specifications.

This package provides:
- Seven rule checkers (material, span, stability, legs, height, edge,
  composite) producing :class:`Finding` records
- ValidationEngine: runs the checkers in a fixed order and partitions
  findings into violations and warnings
- suggest / RepairEngine: greedy per-violation repair with an audit trail
  and distance metrics
- get_field_constraints: per-field legal ranges for a partial specification

The checkers and the field bounds share the derivations in
:mod:`tablesmith.constraints.thresholds`, so a value inside a reported range
never trips the corresponding rule.

Usage:
    from tablesmith.constraints import ValidationEngine

    engine = ValidationEngine(locale="en")
    result = engine.validate(spec)
    if not result.is_valid:
        for violation in result.violations:
            print(violation.rule_id, violation.message)
"""

from __future__ import annotations

from .checks import (
    CompositeChecker,
    EdgeChecker,
    HeightChecker,
    LegChecker,
    MaterialChecker,
    SpanChecker,
    StabilityChecker,
    default_checkers,
)
from .engine import ValidationEngine, ValidationResult, create_validation_engine
from .field_bounds import FieldConstraint, FieldConstraints, get_field_constraints
from .messages import DEFAULT_LOCALE, SUPPORTED_LOCALES, Locale, render
from .primitives import Finding, RuleChecker, SpecificationRejected
from .repair import (
    RepairAction,
    RepairDistanceMetrics,
    RepairEngine,
    RepairResult,
    find_violations,
    suggest,
)
from .thresholds import Bound

__all__ = [
    "DEFAULT_LOCALE",
    "SUPPORTED_LOCALES",
    "Bound",
    "CompositeChecker",
    "EdgeChecker",
    "FieldConstraint",
    "FieldConstraints",
    "Finding",
    "HeightChecker",
    "LegChecker",
    "Locale",
    "MaterialChecker",
    "RepairAction",
    "RepairDistanceMetrics",
    "RepairEngine",
    "RepairResult",
    "RuleChecker",
    "SpanChecker",
    "SpecificationRejected",
    "StabilityChecker",
    "ValidationEngine",
    "ValidationResult",
    "create_validation_engine",
    "default_checkers",
    "find_violations",
    "get_field_constraints",
    "render",
    "suggest",
]
