"""Public API for table specification validation.

This module provides the entry points used by the configurator and the CLI:
- validate: Validate a Specification and suggest a repair when invalid
- enforce: Validate and raise SpecificationRejected when invalid
- validate_many: Validate several specifications independently
- field_constraints: Legal ranges for a partially filled specification
- validate_file / field_constraints_file: Same, loading YAML/JSON from disk

Every function accepts a rule set ID or a RuleSet and defaults to the
standard rule set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .constraints import (
    DEFAULT_LOCALE,
    FieldConstraints,
    Locale,
    ValidationEngine,
    ValidationResult,
    create_validation_engine,
    get_field_constraints,
)
from .rulesets import RuleSet, load_ruleset
from .spec import PartialSpecification, Specification, load_partial_spec, load_spec

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

RuleSetRef = str | RuleSet | None


def _engine(ruleset: RuleSetRef, locale: Locale, repair_passes: int) -> ValidationEngine:
    return create_validation_engine(ruleset, locale=locale, repair_passes=repair_passes)


def _coerce_spec(spec: Specification | Mapping[str, Any]) -> Specification:
    if isinstance(spec, Specification):
        return spec
    return Specification.model_validate(dict(spec))


def validate(
    spec: Specification | Mapping[str, Any],
    ruleset: RuleSetRef = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
    repair_passes: int = 1,
) -> ValidationResult:
    """Validate a specification against a rule set.

    Args:
        spec: A Specification, or a mapping accepted by Specification.model_validate
        ruleset: Rule set ID, RuleSet, or None for the standard rule set
        locale: Locale of user-facing messages ("pl" or "en")
        repair_passes: Maximum suggester passes

    Returns:
        ValidationResult; suggested_specification is set iff the spec is invalid

    Raises:
        pydantic.ValidationError: If a mapping fails model validation
    """
    return _engine(ruleset, locale, repair_passes).validate(_coerce_spec(spec))


def enforce(
    spec: Specification | Mapping[str, Any],
    ruleset: RuleSetRef = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
) -> ValidationResult:
    """Validate and raise SpecificationRejected if there are violations."""
    return _engine(ruleset, locale, 1).enforce(_coerce_spec(spec))


def validate_many(
    specs: Iterable[Specification | Mapping[str, Any]],
    ruleset: RuleSetRef = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
    repair_passes: int = 1,
) -> list[ValidationResult]:
    engine = _engine(ruleset, locale, repair_passes)
    return engine.validate_many(_coerce_spec(spec) for spec in specs)


def field_constraints(
    partial: PartialSpecification | Mapping[str, Any],
    ruleset: RuleSetRef = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
) -> FieldConstraints:
    """Per-field legal ranges for a partially filled specification."""
    if not isinstance(partial, PartialSpecification):
        partial = PartialSpecification.model_validate(dict(partial))
    rules = load_ruleset(ruleset) if isinstance(ruleset, str) else ruleset
    return get_field_constraints(partial, rules, locale)


def validate_file(
    path: Path | str,
    ruleset: RuleSetRef = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
    repair_passes: int = 1,
) -> ValidationResult:
    """Load a Specification from YAML/JSON and validate it."""
    spec = load_spec(path)
    logger.debug("Loaded specification from %s", path)
    return validate(spec, ruleset, locale=locale, repair_passes=repair_passes)


def field_constraints_file(
    path: Path | str,
    ruleset: RuleSetRef = None,
    *,
    locale: Locale = DEFAULT_LOCALE,
) -> FieldConstraints:
    return field_constraints(load_partial_spec(path), ruleset, locale=locale)
