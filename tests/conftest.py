# SPDX-License-Identifier: MIT
"""Pytest configuration and shared fixtures for test suite.

This module provides:
- Deterministic test environment setup
- The standard rule set
- Specification builders starting from a valid four-leg dining table
"""
from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tablesmith.rulesets import RuleSet, clear_ruleset_cache, load_ruleset
from tablesmith.spec import PartialSpecification, Specification

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).resolve().parent
ROOT_DIR = TESTS_DIR.parent


# ---------------------------------------------------------------------------
# Environment Setup
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest environment for determinism."""
    deterministic_env = {
        "LC_ALL": "C",
        "LANG": "C",
        "TZ": "UTC",
        "PYTHONHASHSEED": "0",
    }
    for key, value in deterministic_env.items():
        os.environ.setdefault(key, value)


# ---------------------------------------------------------------------------
# Spec builders
# ---------------------------------------------------------------------------


def valid_spec_data() -> dict[str, Any]:
    """1800 x 900 x 20 sintered stone top on four 60mm steel legs, 720mm tall.

    Passes every rule of the standard rule set with no warnings.
    """
    return {
        "top_material": "sintered_stone",
        "top_construction": "solid",
        "top_thickness_mm": 20,
        "top_face_thickness_mm": None,
        "top_shape_type": "rectangle",
        "top_length_mm": 1800,
        "top_width_mm": 900,
        "top_edge_finish": "straight",
        "leg_count": 4,
        "leg_material": "steel",
        "leg_profile_type": "square",
        "leg_profile_size_mm": 60,
        "leg_profile_width_mm": None,
        "leg_height_mm": 700,
        "has_foot_base": False,
        "leg_radial_count": None,
        "leg_radial_spread_mm": None,
        "total_height_mm": 720,
    }


def radial_spec_data() -> dict[str, Any]:
    """Round 1000mm top on a valid four-halfcylinder radial base."""
    data = valid_spec_data()
    data.update(
        top_shape_type="round",
        top_length_mm=1000,
        top_width_mm=1000,
        leg_count=1,
        leg_profile_type="radial_halfcylinder",
        leg_profile_size_mm=80,
        leg_radial_count=4,
        leg_radial_spread_mm=350,
        leg_height_mm=730,
        total_height_mm=750,
    )
    return data


def composite_spec_data() -> dict[str, Any]:
    """Valid quartz composite top: 12mm faces around a 10mm core."""
    data = valid_spec_data()
    data.update(
        top_material="quartz",
        top_construction="composite",
        top_thickness_mm=34,
        top_face_thickness_mm=12,
        top_length_mm=1600,
        leg_height_mm=686,
    )
    return data


@pytest.fixture(scope="session")
def rules() -> RuleSet:
    """The packaged standard rule set."""
    return load_ruleset()


@pytest.fixture
def spec_data() -> dict[str, Any]:
    """Fresh valid specification data, safe to mutate."""
    return valid_spec_data()


@pytest.fixture
def make_spec() -> Callable[..., Specification]:
    """Fixture providing a builder: valid data overridden by keyword arguments.

    Usage:
        def test_something(make_spec):
            spec = make_spec(top_thickness_mm=12)
    """

    def _make(base: dict[str, Any] | None = None, **overrides: Any) -> Specification:
        data = dict(base) if base is not None else valid_spec_data()
        data.update(overrides)
        return Specification.model_validate(data)

    return _make


@pytest.fixture
def make_partial() -> Callable[..., PartialSpecification]:
    """Fixture providing a PartialSpecification builder from keyword arguments."""

    def _make(**fields: Any) -> PartialSpecification:
        return PartialSpecification.model_validate(fields)

    return _make


@pytest.fixture
def fresh_ruleset_cache():
    """Clear the rule set cache before and after a test."""
    clear_ruleset_cache()
    yield
    clear_ruleset_cache()
