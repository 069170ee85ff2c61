"""
Command-line interface for headless design checks.

Validate designs, run the reachability check and normalise design files
without the editor.

Usage::

    python -m cli validate design.json
    python -m cli simulate design.json
    python -m cli simulate design.json --format json
    python -m cli export design.json --output normalised.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import validate_circuit_data
from models.circuit import CircuitModel

logger = logging.getLogger(__name__)


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a design JSON file without exiting.

    IDs are kept as they appear in the file so reports can refer to them.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
    except ValueError as e:
        return None, f"invalid design file: {e}"

    return CircuitModel.from_dict(data), ""


def load_circuit(filepath: str) -> CircuitModel:
    """Load a design file or exit with status 1."""
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def _print_findings(findings) -> None:
    for finding in findings:
        where = f" [{finding.component_id}]" if finding.component_id else ""
        print(f"  {finding.type.capitalize()}: {finding.message}{where}")


def cmd_validate(args: argparse.Namespace) -> int:
    """Report empty-design and floating-component warnings."""
    controller = CircuitController(load_circuit(args.circuit))
    findings = controller.validate_circuit()

    if not findings:
        print(f"Design is valid: {args.circuit}")
        return 0

    print(f"Design has {len(findings)} finding(s): {args.circuit}")
    _print_findings(findings)
    return 1 if any(f.is_error for f in findings) else 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Run the source-to-ground reachability check."""
    controller = CircuitController(load_circuit(args.circuit))
    result = controller.simulation.simulate_circuit()

    if args.format == "json":
        output = {
            "success": result.success,
            "active_components": sorted(result.active_components),
            "findings": [f.to_dict() for f in result.findings],
        }
        print(json.dumps(output, indent=2))
    else:
        if result.active_components:
            print("Active components:")
            for comp_id in sorted(result.active_components):
                comp = controller.model.components[comp_id]
                print(f"  {comp_id} ({comp.component_type.value})")
        _print_findings(result.findings)

    return 0 if result.success else 1


def cmd_export(args: argparse.Namespace) -> int:
    """Write the design back out in normalised form (snapped, version tagged)."""
    controller = CircuitController(load_circuit(args.circuit))
    output_text = controller.get_circuit_json()

    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schematic-cli",
        description="Headless checks for schematic editor design files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="check for floating components")
    validate_parser.add_argument("circuit", help="design JSON file")
    validate_parser.set_defaults(func=cmd_validate)

    simulate_parser = subparsers.add_parser("simulate", help="find components powered from a source to ground")
    simulate_parser.add_argument("circuit", help="design JSON file")
    simulate_parser.add_argument("--format", choices=["text", "json"], default="text")
    simulate_parser.set_defaults(func=cmd_simulate)

    export_parser = subparsers.add_parser("export", help="rewrite a design file in normalised form")
    export_parser.add_argument("circuit", help="design JSON file")
    export_parser.add_argument("--output", "-o", help="output file (default: stdout)")
    export_parser.set_defaults(func=cmd_export)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
