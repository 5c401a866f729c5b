"""Core types shared by the rule checkers, the engine and the suggester.

A rule outcome is a :class:`Finding`. Findings are plain data: a checker
returns them, the engine partitions them into violations and warnings by the
rule set's warning ids, and the suggester consumes the violations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .messages import Locale, render

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..rulesets import RuleSet
    from ..spec import Specification


@dataclass(frozen=True, slots=True)
class Finding:
    """Outcome of a single rule evaluation.

    Attributes:
        rule_id: Stable rule identifier (e.g., "SPAN-01")
        field: Specification field the finding is reported against
        message: User-facing explanation in the requested locale
        message_tech: Technical explanation in English for logs
        value: The compared quantity, when the rule is numeric
        limit: The threshold the value was compared against
    """

    rule_id: str
    field: str
    message: str
    message_tech: str
    value: float | None = None
    limit: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to a dictionary for serialization."""
        return {
            "rule_id": self.rule_id,
            "field": self.field,
            "message": self.message,
            "message_tech": self.message_tech,
            "value": self.value,
            "limit": self.limit,
        }


def make_finding(
    rule_id: str,
    field: str,
    *,
    locale: Locale,
    message_key: str | None = None,
    value: float | None = None,
    limit: float | None = None,
    **params: Any,
) -> Finding:
    """Build a finding with both message registers rendered from the catalog.

    ``message_key`` defaults to the rule id; rules with several wordings
    (e.g. "HGT-01.low" / "HGT-01.high") pass it explicitly.
    """
    message, message_tech = render(message_key or rule_id, locale, **params)
    return Finding(
        rule_id=rule_id,
        field=field,
        message=message,
        message_tech=message_tech,
        value=None if value is None else float(value),
        limit=None if limit is None else float(limit),
    )


class SpecificationRejected(ValueError):
    """Raised by ``enforce`` when a specification has violations.

    Attributes:
        violations: Tuple of violation findings
    """

    def __init__(self, violations: Sequence[Finding]) -> None:
        self.violations = tuple(violations)
        details = [f"{v.rule_id} [{v.field}]: {v.message_tech}" for v in self.violations]
        message = "Specification rejected:\n" + "\n".join(f"  - {d}" for d in details)
        super().__init__(message)

    @property
    def rule_ids(self) -> list[str]:
        """Return list of violated rule IDs."""
        return [v.rule_id for v in self.violations]


class RuleChecker(ABC):
    """Abstract base class for one family of structural rules.

    Checkers are stateless: the rule set and locale are passed on every call,
    so one instance can serve any number of engines.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the rule family this checker handles."""
        ...

    @abstractmethod
    def check(self, spec: Specification, rules: RuleSet, locale: Locale = "pl") -> list[Finding]:
        """Check one rule family.

        Args:
            spec: Specification being validated
            rules: Rule set to evaluate against
            locale: Locale of the user-facing messages

        Returns:
            List of findings, empty when every rule passes
        """
        ...
