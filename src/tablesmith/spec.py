from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .units import LengthMM

TopMaterial = Literal["sintered_stone", "quartz", "marble", "granite"]
TopConstruction = Literal["solid", "composite"]
TopShapeType = Literal["rectangle", "square", "oval", "round", "custom"]
TopEdgeFinish = Literal["straight", "beveled", "rounded", "mitered"]
LegMaterial = Literal["steel", "stainless_steel", "aluminum", "solid_wood", "laminated_wood"]
LegProfileType = Literal["round", "square", "rectangular", "trestle", "pedestal", "radial_halfcylinder"]


class _SpecBase(BaseModel):
    # camelCase aliases keep configurator payloads (topThicknessMm, ...) loadable as-is
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Specification(_SpecBase):
    """A complete table specification as submitted for validation.

    Dimensions are millimetres. ``total_height_mm`` is expected (not enforced)
    to equal ``leg_height_mm + top_thickness_mm``; the height rules report the
    mismatch instead of rejecting the model.
    """

    # top
    top_material: TopMaterial
    top_construction: TopConstruction = "solid"
    top_thickness_mm: LengthMM
    top_face_thickness_mm: LengthMM | None = None
    top_shape_type: TopShapeType
    top_length_mm: LengthMM
    top_width_mm: LengthMM
    top_edge_finish: TopEdgeFinish

    # legs
    leg_count: int = Field(..., ge=1, le=6)
    leg_material: LegMaterial
    leg_profile_type: LegProfileType
    leg_profile_size_mm: LengthMM
    leg_profile_width_mm: LengthMM | None = None
    leg_height_mm: LengthMM
    has_foot_base: bool = False
    leg_radial_count: int | None = Field(default=None, ge=0)
    leg_radial_spread_mm: LengthMM | None = None

    # whole table
    total_height_mm: LengthMM

    @property
    def is_composite(self) -> bool:
        return self.top_construction == "composite"

    @property
    def is_radial(self) -> bool:
        return self.leg_profile_type == "radial_halfcylinder"

    @property
    def core_thickness_mm(self) -> float | None:
        """Core of a composite top: total thickness minus both face panels."""
        if not self.is_composite or self.top_face_thickness_mm is None:
            return None
        return self.top_thickness_mm - 2 * self.top_face_thickness_mm


class PartialSpecification(_SpecBase):
    """An in-progress specification; any subset of fields may be set."""

    top_material: TopMaterial | None = None
    top_construction: TopConstruction | None = None
    top_thickness_mm: LengthMM | None = None
    top_face_thickness_mm: LengthMM | None = None
    top_shape_type: TopShapeType | None = None
    top_length_mm: LengthMM | None = None
    top_width_mm: LengthMM | None = None
    top_edge_finish: TopEdgeFinish | None = None
    leg_count: int | None = Field(default=None, ge=1, le=6)
    leg_material: LegMaterial | None = None
    leg_profile_type: LegProfileType | None = None
    leg_profile_size_mm: LengthMM | None = None
    leg_profile_width_mm: LengthMM | None = None
    leg_height_mm: LengthMM | None = None
    has_foot_base: bool | None = None
    leg_radial_count: int | None = Field(default=None, ge=0)
    leg_radial_spread_mm: LengthMM | None = None
    total_height_mm: LengthMM | None = None

    @classmethod
    def from_specification(cls, spec: Specification) -> PartialSpecification:
        return cls.model_validate(spec.model_dump())


SPECIFICATION_SCHEMA = Specification.model_json_schema(by_alias=True)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def load_spec_dict(data: dict[str, Any]) -> Specification:
    """Validate and load a Specification from a dictionary.

    Both snake_case field names and camelCase aliases are accepted.

    Raises:
        pydantic.ValidationError: If the data fails validation.
    """
    return Specification.model_validate(data)


def load_spec(path: Path | str) -> Specification:
    """Load and validate a Specification from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is unsupported or the file is not a mapping.
        pydantic.ValidationError: If the data fails validation.
    """
    return _load_model_file(Specification, path)


def load_partial_spec(path: Path | str) -> PartialSpecification:
    """Load a PartialSpecification from a YAML or JSON file."""
    return _load_model_file(PartialSpecification, path)


def read_mapping_file(path: Path | str) -> dict[str, Any]:
    """Read a YAML (.yaml/.yml) or JSON (.json) file that must hold a mapping."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Specification file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix in (".yaml", ".yml"):
        import yaml

        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Specification file must contain a mapping, got {type(data).__name__}")
    return data


def _load_model_file(model: type[_ModelT], path: Path | str) -> _ModelT:
    return model.model_validate(read_mapping_file(path))
