"""Command-line interface for tablesmith.

Subcommands:
    tablesmith validate SPEC [--json] [--ruleset ID|PATH] [--locale pl|en] [--repair-passes N]
    tablesmith bounds PARTIAL [--json] [--ruleset ID|PATH] [--locale pl|en]
    tablesmith rulesets [--json]
    tablesmith price CSV MATERIAL THICKNESS [--json]

Exit codes: 0 on success, 2 when the specification is invalid, 1 on errors
(missing files, malformed input, unknown rule sets).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from . import __version__
from .api import field_constraints_file, validate_file
from .constraints import SUPPORTED_LOCALES, FieldConstraints, ValidationResult
from .pricing import load_material_prices, lookup_price
from .rulesets import DEFAULT_RULESET_ID, RuleSet, list_available_rulesets, load_ruleset, load_ruleset_file
from .units import format_mm

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def canonical_json_dumps(data: Any) -> str:
    """Serialize JSON with sorted keys and compact separators."""
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the tablesmith CLI.

    Returns:
        ArgumentParser with all subcommands configured.
    """
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--json", action="store_true", help="Emit canonical JSON instead of text")

    rules_opts = argparse.ArgumentParser(add_help=False)
    rules_opts.add_argument(
        "--ruleset",
        default=DEFAULT_RULESET_ID,
        help="Packaged rule set ID or path to a rule set JSON file",
    )
    rules_opts.add_argument("--locale", choices=SUPPORTED_LOCALES, default="pl")

    parser = argparse.ArgumentParser(
        prog="tablesmith",
        description="Validate stone table specifications and suggest repairs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_cmd = subparsers.add_parser(
        "validate",
        help="Validate a specification file (YAML or JSON)",
        parents=[shared, rules_opts],
    )
    validate_cmd.add_argument("spec", type=Path)
    validate_cmd.add_argument(
        "--repair-passes",
        type=int,
        default=1,
        help="Maximum suggester passes (default: 1, a single greedy pass)",
    )

    bounds_cmd = subparsers.add_parser(
        "bounds",
        help="Report legal field ranges for a partial specification",
        parents=[shared, rules_opts],
    )
    bounds_cmd.add_argument("partial", type=Path)

    subparsers.add_parser("rulesets", help="List packaged rule sets", parents=[shared])

    price_cmd = subparsers.add_parser(
        "price",
        help="Look up a material price by thickness",
        parents=[shared],
    )
    price_cmd.add_argument("csv", type=Path)
    price_cmd.add_argument("material")
    price_cmd.add_argument("thickness", type=float)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tablesmith CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.WARNING
    if args.verbose >= 1:
        log_level = logging.INFO
    if args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    try:
        if args.command == "validate":
            return _cmd_validate(args)
        if args.command == "bounds":
            return _cmd_bounds(args)
        if args.command == "rulesets":
            return _cmd_rulesets(args)
        if args.command == "price":
            return _cmd_price(args)
    except (FileNotFoundError, ValueError) as e:
        # pydantic.ValidationError is a ValueError subclass
        if isinstance(e, ValidationError):
            sys.stderr.write(f"Error: Invalid input:\n{e}\n")
        else:
            sys.stderr.write(f"Error: {e}\n")
        return EXIT_ERROR

    parser.error(f"Unknown command: {args.command}")
    return EXIT_ERROR


def _resolve_ruleset(ref: str) -> RuleSet:
    path = Path(ref)
    if path.suffix.lower() == ".json":
        return load_ruleset_file(path)
    return load_ruleset(ref)


# =============================================================================
# Command Handlers
# =============================================================================


def _cmd_validate(args: argparse.Namespace) -> int:
    rules = _resolve_ruleset(args.ruleset)
    result = validate_file(args.spec, rules, locale=args.locale, repair_passes=args.repair_passes)

    if args.json:
        sys.stdout.write(canonical_json_dumps(result.to_dict()) + "\n")
    else:
        sys.stdout.write(_format_result(result))

    return EXIT_OK if result.is_valid else EXIT_INVALID


def _format_result(result: ValidationResult) -> str:
    lines = ["VALID" if result.is_valid else "INVALID"]
    for violation in result.violations:
        lines.append(f"  [{violation.rule_id}] {violation.field}: {violation.message}")
    for warning in result.warnings:
        lines.append(f"  warning [{warning.rule_id}] {warning.field}: {warning.message}")
    if result.repair is not None:
        lines.append("Suggested changes:")
        for path, change in result.repair.repair_map.items():
            lines.append(f"  {path}: {_format_value(change['before'])} -> {_format_value(change['after'])}")
    return "\n".join(lines) + "\n"


def _format_value(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return str(value)
    if isinstance(value, (int, float)):
        return format_mm(value)
    return str(value)


def _cmd_bounds(args: argparse.Namespace) -> int:
    rules = _resolve_ruleset(args.ruleset)
    constraints = field_constraints_file(args.partial, rules, locale=args.locale)

    if args.json:
        sys.stdout.write(canonical_json_dumps(constraints.to_dict()) + "\n")
    else:
        sys.stdout.write(_format_bounds(constraints))
    return EXIT_OK


def _format_bounds(constraints: FieldConstraints) -> str:
    lines = []
    for name, bound in constraints.to_dict().items():
        line = f"{name}: {format_mm(bound['min'])}..{format_mm(bound['max'])}"
        if "recommended" in bound:
            line += f" (recommended {format_mm(bound['recommended'])})"
        lines.append(f"{line}  {bound['reason']}")
    return "\n".join(lines) + "\n"


def _cmd_rulesets(args: argparse.Namespace) -> int:
    entries = []
    for ruleset_id in list_available_rulesets():
        rules = load_ruleset(ruleset_id)
        entries.append({"id": rules.id, "name": rules.name, "description": rules.description})

    if args.json:
        sys.stdout.write(canonical_json_dumps(entries) + "\n")
    else:
        for entry in entries:
            sys.stdout.write(f"{entry['id']}: {entry['name']}\n")
    return EXIT_OK


def _cmd_price(args: argparse.Namespace) -> int:
    prices = load_material_prices(args.csv)
    entry = lookup_price(prices, args.material, args.thickness)
    if entry is None:
        sys.stderr.write(f"Error: No price for {args.material} at {format_mm(args.thickness)}mm\n")
        return EXIT_ERROR

    if args.json:
        sys.stdout.write(canonical_json_dumps(entry.to_dict()) + "\n")
    else:
        sys.stdout.write(f"{entry.material} {format_mm(entry.thickness_mm)}mm: {entry.price_per_sqm:.2f}/m2\n")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
