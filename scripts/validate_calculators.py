#!/usr/bin/env python3
"""Calculator Validation Script - check every definition file before shipping.

Detects:
- Files that fail to parse or do not match the definition schema
- Duplicate calculator ids across files
- Outputs using unknown formulas or reading undeclared inputs
- Conditions with forward or undeclared dependencies
- Missing SEO keywords and help content (warnings)

Usage:
    python scripts/validate_calculators.py
    python scripts/validate_calculators.py --dir path/to/definitions
    python scripts/validate_calculators.py --fail-on-warnings
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from calckit.calculators.registry import load_definition_file  # noqa: E402
from calckit.calculators.schemas import CalculatorDefinition  # noqa: E402
from calckit.calculators.validation import validate_definitions  # noqa: E402

DEFAULT_DIR = PROJECT_ROOT / "calckit" / "calculators" / "definitions"
MAX_ERRORS_SHOWN = 20
MAX_WARNINGS_SHOWN = 10


def load_all(definitions_dir: Path) -> tuple[list[CalculatorDefinition], list[str]]:
    """Load every YAML file, collecting parse failures instead of stopping."""
    definitions: list[CalculatorDefinition] = []
    failures: list[str] = []
    for yaml_file in sorted(definitions_dir.glob("*.yaml")):
        try:
            calc = load_definition_file(yaml_file)
        except Exception as e:
            failures.append(f"{yaml_file.name}: {e}")
            continue
        if yaml_file.stem != calc.id:
            failures.append(f"{yaml_file.name}: file name doesn't match id \"{calc.id}\"")
        definitions.append(calc)
    return definitions, failures


def main():
    parser = argparse.ArgumentParser(
        description="Validate calculator definition files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=DEFAULT_DIR,
        help="Definitions directory (default: calckit/calculators/definitions)",
    )
    parser.add_argument(
        "--fail-on-warnings",
        action="store_true",
        help="Exit with an error status when there are warnings",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Show every error and warning instead of the first few",
    )
    args = parser.parse_args()

    if not args.dir.exists():
        print(f"Error: definitions directory not found: {args.dir}")
        sys.exit(2)

    definitions, failures = load_all(args.dir)
    report = validate_definitions(definitions)
    errors = failures + [f"{i.calculator_id}: {i.message}" for i in report.errors]
    warnings = [f"{i.calculator_id}: {i.message}" for i in report.warnings]

    print("\n" + "=" * 40)
    print("      CALCULATOR VALIDATION REPORT")
    print("=" * 40 + "\n")

    print(f"Total calculators: {len(definitions)}")
    print("\nBy category:")
    by_category = Counter(calc.category.value for calc in definitions)
    for category, count in by_category.most_common():
        print(f"   {category}: {count}")

    error_limit = None if args.all else MAX_ERRORS_SHOWN
    warning_limit = None if args.all else MAX_WARNINGS_SHOWN

    if errors:
        print(f"\nErrors ({len(errors)}):")
        for error in errors[:error_limit]:
            print(f"   - {error}")
        if error_limit is not None and len(errors) > error_limit:
            print(f"   ... and {len(errors) - error_limit} more errors")

    if warnings:
        print(f"\nWarnings ({len(warnings)}):")
        for warning in warnings[:warning_limit]:
            print(f"   - {warning}")
        if warning_limit is not None and len(warnings) > warning_limit:
            print(f"   ... and {len(warnings) - warning_limit} more warnings")

    print("\n" + "=" * 40 + "\n")

    if errors or (args.fail_on_warnings and warnings):
        print(f"Validation failed with {len(errors)} errors and {len(warnings)} warnings")
        sys.exit(1)
    print("All calculators passed validation!")


if __name__ == "__main__":
    main()
