"""Rule checkers, one module per rule family."""

from __future__ import annotations

from ..primitives import RuleChecker
from .composite import CompositeChecker
from .edge import EdgeChecker
from .height import HeightChecker
from .legs import LegChecker
from .material import MaterialChecker
from .span import SpanChecker
from .stability import StabilityChecker


def default_checkers() -> list[RuleChecker]:
    """Return one instance of every checker in evaluation order."""
    return [
        MaterialChecker(),
        SpanChecker(),
        StabilityChecker(),
        LegChecker(),
        HeightChecker(),
        EdgeChecker(),
        CompositeChecker(),
    ]


__all__ = [
    "CompositeChecker",
    "EdgeChecker",
    "HeightChecker",
    "LegChecker",
    "MaterialChecker",
    "SpanChecker",
    "StabilityChecker",
    "default_checkers",
]
