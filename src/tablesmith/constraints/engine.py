"""Validation engine: runs every rule checker and classifies the findings.

The engine orchestrates:
- The seven rule checkers in a fixed order
  (material -> span -> stability -> legs -> height -> edge -> composite)
- Partitioning of findings into violations and warnings by the rule set's
  warning ids
- Delegation of violations (never warnings) to the suggester

Public API:
    engine = ValidationEngine(rules)
    result = engine.validate(spec)
    engine.enforce(spec)            # raises SpecificationRejected when invalid
    results = engine.validate_many(specs)

Invalid specifications are a normal outcome represented as data; only
malformed input (rejected by the pydantic model) raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..rulesets import RuleSet, load_ruleset
from .checks import default_checkers
from .messages import DEFAULT_LOCALE, Locale, check_locale
from .primitives import Finding, RuleChecker, SpecificationRejected
from .repair import RepairResult, suggest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..spec import Specification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one specification.

    Attributes:
        is_valid: True iff there are no violations (warnings never count)
        violations: Findings that block validity, in checker order
        warnings: Informational findings
        suggested_specification: Present iff invalid; always a full Specification
        repair: Audit trail of the suggestion, present iff invalid
    """

    is_valid: bool
    violations: tuple[Finding, ...]
    warnings: tuple[Finding, ...]
    suggested_specification: Specification | None = None
    repair: RepairResult | None = None

    @property
    def violation_ids(self) -> list[str]:
        return [v.rule_id for v in self.violations]

    @property
    def warning_ids(self) -> list[str]:
        return [w.rule_id for w in self.warnings]

    def to_dict(self) -> dict[str, Any]:
        """Convert result to a dictionary for serialization."""
        result: dict[str, Any] = {
            "is_valid": self.is_valid,
            "violations": [v.to_dict() for v in self.violations],
            "warnings": [w.to_dict() for w in self.warnings],
        }
        if self.suggested_specification is not None:
            result["suggested_specification"] = self.suggested_specification.model_dump(mode="json")
        if self.repair is not None:
            result["repair"] = self.repair.to_dict()
        return result


@dataclass
class ValidationEngine:
    """Rule evaluation engine for table specifications.

    Usage:
        from tablesmith.constraints import ValidationEngine

        engine = ValidationEngine(locale="en")
        result = engine.validate(spec)
        if not result.is_valid:
            print(result.suggested_specification)

    Attributes:
        rules: Rule set to evaluate against (standard rule set by default)
        locale: Locale of user-facing messages
        repair_passes: Maximum suggester passes; 1 keeps the plain greedy pass
    """

    rules: RuleSet | None = None
    locale: Locale = DEFAULT_LOCALE
    repair_passes: int = 1

    _checkers: list[RuleChecker] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.rules is None:
            self.rules = load_ruleset()
        self.locale = check_locale(self.locale)
        if self.repair_passes < 1:
            raise ValueError(f"repair_passes must be >= 1, got {self.repair_passes}")
        self._checkers = default_checkers()

    @property
    def checkers(self) -> tuple[RuleChecker, ...]:
        return tuple(self._checkers)

    def evaluate(self, spec: Specification) -> list[Finding]:
        """Run every checker and return all findings without classifying them."""
        assert self.rules is not None
        findings: list[Finding] = []
        for checker in self._checkers:
            found = checker.check(spec, self.rules, self.locale)
            logger.debug("%s checker: %d finding(s)", checker.name, len(found))
            findings.extend(found)
        return findings

    def validate(self, spec: Specification) -> ValidationResult:
        """Validate a specification and suggest a repair when it is invalid."""
        assert self.rules is not None
        findings = self.evaluate(spec)
        warning_ids = self.rules.warning_rule_ids
        violations = tuple(f for f in findings if f.rule_id not in warning_ids)
        warnings = tuple(f for f in findings if f.rule_id in warning_ids)

        if not violations:
            logger.info("Specification valid (%d warning(s))", len(warnings))
            return ValidationResult(is_valid=True, violations=(), warnings=warnings)

        logger.info(
            "Specification invalid: %s",
            ", ".join(v.rule_id for v in violations),
        )
        repair = suggest(spec, violations, self.rules, passes=self.repair_passes, locale=self.locale)
        return ValidationResult(
            is_valid=False,
            violations=violations,
            warnings=warnings,
            suggested_specification=repair.suggested,
            repair=repair,
        )

    def enforce(self, spec: Specification) -> ValidationResult:
        """Validate and raise instead of suggesting when invalid.

        Raises:
            SpecificationRejected: If the specification has violations
        """
        result = self.validate(spec)
        if not result.is_valid:
            raise SpecificationRejected(result.violations)
        return result

    def validate_many(self, specs: Iterable[Specification]) -> list[ValidationResult]:
        """Validate each specification independently."""
        return [self.validate(spec) for spec in specs]


def create_validation_engine(
    ruleset: str | RuleSet | None = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
    repair_passes: int = 1,
) -> ValidationEngine:
    """Create a ValidationEngine from a packaged rule set ID or a RuleSet.

    Args:
        ruleset: Rule set ID (e.g., "standard"), a RuleSet, or None for the default
        locale: Locale of user-facing messages
        repair_passes: Maximum suggester passes

    Returns:
        Configured ValidationEngine instance
    """
    rules = load_ruleset(ruleset) if isinstance(ruleset, str) else ruleset
    return ValidationEngine(rules=rules, locale=locale, repair_passes=repair_passes)
