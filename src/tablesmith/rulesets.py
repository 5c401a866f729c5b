"""Rule sets: the threshold tables every rule check is evaluated against.

This module provides:
- Pydantic models for the rule set schema
- Loading and caching of rule set JSON profiles shipped with the package
- Loading of alternate rule sets from files or dictionaries

A rule set is immutable configuration. It is loaded once and injected into the
validation engine and the field-constraint calculator, so both can be run
against alternate tables (e.g. in tests) without touching module globals.

All dimensions are millimetres.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Path to the packaged rule set profiles
RULESETS_DIR = Path(__file__).resolve().parent / "profiles"

DEFAULT_RULESET_ID = "standard"

MaterialClass = Literal["metal", "wood"]


class _RuleSetBase(BaseModel):
    """Base model for rule set components with strict validation."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class ThicknessUpgrade(_RuleSetBase):
    """Raised minimum thickness once the top length passes a threshold."""

    materials: tuple[str, ...] = Field(..., min_length=1)
    span_threshold_mm: float = Field(..., gt=0)
    min_thickness_mm: float = Field(..., gt=0)


class SpanTier(_RuleSetBase):
    """Maximum supported top length for a material at or above a thickness."""

    materials: tuple[str, ...] = Field(..., min_length=1)
    min_thickness_mm: float = Field(..., gt=0)
    max_span_mm: float = Field(..., gt=0)


class PedestalTier(_RuleSetBase):
    """Maximum top span over a single central leg at or above a thickness."""

    min_thickness_mm: float = Field(..., gt=0)
    max_diagonal_mm: float = Field(..., gt=0)


class FootBaseRule(_RuleSetBase):
    max_leg_height_without_base_mm: float = Field(..., gt=0)
    min_profile_without_base_mm: float = Field(..., gt=0)


class MaterialRules(_RuleSetBase):
    min_thickness_mm: dict[str, float]
    span_upgrades: tuple[ThicknessUpgrade, ...] = ()


class SpanRules(_RuleSetBase):
    multi_leg_counts: tuple[int, ...] = (2, 4, 6)
    multi_leg_tiers: tuple[SpanTier, ...]
    pedestal_tiers: tuple[PedestalTier, ...]
    pedestal_fallback_max_diagonal_mm: float = Field(..., gt=0, description="Limit when no pedestal tier matches")
    composite_span_multiplier: float = Field(1.0, ge=1.0, description="Stiffness bonus for composite tops")


class StabilityRules(_RuleSetBase):
    min_footprint_ratio: float = Field(..., gt=0, description="footprint / total height")
    pedestal_base_ratio: float = Field(..., gt=0, description="pedestal base / total height")
    foot_base: dict[MaterialClass, FootBaseRule]


class LegRules(_RuleSetBase):
    material_classes: dict[str, MaterialClass]
    metal_min_profile_mm: dict[str, float]
    metal_default_min_profile_mm: float = Field(..., gt=0)
    wood_min_profile_short_mm: float = Field(..., gt=0)
    wood_min_profile_tall_mm: float = Field(..., gt=0)
    wood_tall_threshold_mm: float = Field(..., gt=0)
    max_slenderness: dict[MaterialClass, float]
    pedestal_top_shapes: tuple[str, ...]
    placement_warning_shapes: tuple[str, ...]
    placement_warning_min_legs: int = Field(..., ge=1)
    radial_spread_ratio: float = Field(..., gt=0)
    radial_min_count: int = Field(..., ge=1)
    radial_min_diameter_mm: float = Field(..., gt=0)


class HeightRules(_RuleSetBase):
    min_total_mm: float = Field(..., gt=0)
    max_total_mm: float = Field(..., gt=0)
    tolerance_mm: float = Field(..., ge=0)


class EdgeRules(_RuleSetBase):
    min_thickness_mm: dict[str, float]


class CompositeRules(_RuleSetBase):
    face_min_mm: dict[str, float]
    default_face_min_mm: float = Field(..., gt=0)
    min_core_mm: float = Field(..., gt=0)


class FieldLimit(_RuleSetBase):
    min: float = Field(..., ge=0)
    max: float = Field(..., gt=0)


class FieldLimits(_RuleSetBase):
    """Absolute manufacturing bounds, never crossed regardless of context."""

    top_thickness_mm: FieldLimit
    top_face_thickness_mm: FieldLimit
    top_length_mm: FieldLimit
    top_width_mm: FieldLimit
    leg_profile_size_mm: FieldLimit
    leg_radial_spread_mm: FieldLimit


class RuleSet(_RuleSetBase):
    """Full set of structural rule tables.

    Example usage:
        rules = load_ruleset("standard")
        rules.material.min_thickness_mm["quartz"]
    """

    schema_version: Literal[1] = Field(1, description="Schema version for rule set format")
    id: str = Field(..., min_length=1, pattern=r"^[a-z0-9_]+$")
    name: str = Field(..., min_length=1)
    description: str | None = Field(default=None)
    warning_rule_ids: frozenset[str] = Field(default_factory=frozenset)
    material: MaterialRules
    span: SpanRules
    stability: StabilityRules
    legs: LegRules
    height: HeightRules
    edge: EdgeRules
    composite: CompositeRules
    field_limits: FieldLimits

    def material_class(self, leg_material: str | None) -> MaterialClass | None:
        if leg_material is None:
            return None
        return self.legs.material_classes.get(leg_material)


RULESET_SCHEMA = RuleSet.model_json_schema()


def load_ruleset(ruleset_id: str = DEFAULT_RULESET_ID) -> RuleSet:
    """Load a packaged rule set by ID.

    Args:
        ruleset_id: The rule set ID (e.g., "standard")

    Returns:
        Validated RuleSet instance

    Raises:
        FileNotFoundError: If the profile JSON file doesn't exist
        ValidationError: If the profile JSON is invalid
    """
    return _load_ruleset_cached(ruleset_id)


@lru_cache(maxsize=16)
def _load_ruleset_cached(ruleset_id: str) -> RuleSet:
    """Cached implementation of load_ruleset."""
    path = RULESETS_DIR / f"{ruleset_id}.json"
    if not path.exists():
        raise FileNotFoundError(f"Rule set not found: {path}")
    logger.debug("Loading rule set %s from %s", ruleset_id, path)
    return load_ruleset_file(path)


def load_ruleset_file(path: Path | str) -> RuleSet:
    """Load a rule set from an arbitrary JSON file (not cached)."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return RuleSet.model_validate(data)


def load_ruleset_from_dict(data: dict[str, Any]) -> RuleSet:
    """Load a rule set from a dictionary (for inline/override tables)."""
    return RuleSet.model_validate(data)


def list_available_rulesets() -> list[str]:
    """List all packaged rule set IDs."""
    if not RULESETS_DIR.exists():
        return []
    return sorted(p.stem for p in RULESETS_DIR.glob("*.json"))


def clear_ruleset_cache() -> None:
    """Clear the rule set cache. Useful for testing."""
    _load_ruleset_cached.cache_clear()
