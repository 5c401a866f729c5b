"""tablesmith: structural validation and repair suggestion for stone tables."""

__version__ = "0.1.0"

from .api import (
    enforce,
    field_constraints,
    field_constraints_file,
    validate,
    validate_file,
    validate_many,
)
from .constraints import (
    FieldConstraint,
    FieldConstraints,
    Finding,
    RepairAction,
    RepairDistanceMetrics,
    RepairResult,
    SpecificationRejected,
    ValidationEngine,
    ValidationResult,
    create_validation_engine,
    get_field_constraints,
    suggest,
)
from .pricing import MaterialPrice, load_material_prices, lookup_price
from .rulesets import (
    DEFAULT_RULESET_ID,
    RULESET_SCHEMA,
    RULESETS_DIR,
    RuleSet,
    clear_ruleset_cache,
    list_available_rulesets,
    load_ruleset,
    load_ruleset_file,
    load_ruleset_from_dict,
)
from .spec import (
    SPECIFICATION_SCHEMA,
    PartialSpecification,
    Specification,
    load_partial_spec,
    load_spec,
    load_spec_dict,
)
from .units import LengthMM, format_mm, parse_length_mm

__all__ = [
    "DEFAULT_RULESET_ID",
    "RULESETS_DIR",
    "RULESET_SCHEMA",
    "SPECIFICATION_SCHEMA",
    "FieldConstraint",
    "FieldConstraints",
    "Finding",
    "LengthMM",
    "MaterialPrice",
    "PartialSpecification",
    "RepairAction",
    "RepairDistanceMetrics",
    "RepairResult",
    "RuleSet",
    "Specification",
    "SpecificationRejected",
    "ValidationEngine",
    "ValidationResult",
    "__version__",
    "clear_ruleset_cache",
    "create_validation_engine",
    "enforce",
    "field_constraints",
    "field_constraints_file",
    "format_mm",
    "get_field_constraints",
    "list_available_rulesets",
    "load_material_prices",
    "load_partial_spec",
    "load_ruleset",
    "load_ruleset_file",
    "load_ruleset_from_dict",
    "load_spec",
    "load_spec_dict",
    "lookup_price",
    "parse_length_mm",
    "suggest",
    "validate",
    "validate_file",
    "validate_many",
]
