"""Meta/system API routes.

Provides a definitions version so renderers can invalidate cached
calculator definitions.
"""

import hashlib

from fastapi import APIRouter

from calckit.calculators.registry import get_calculator_registry
from calckit.formulas.registry import get_formula_registry

router = APIRouter(prefix="/meta", tags=["meta"])


def _compute_definitions_hash() -> str:
    """Fingerprint of the loaded calculators and formulas.

    Covers ids, categories and the formula each output uses, which is
    enough to notice added, removed or rewired calculators.
    """
    calculator_registry = get_calculator_registry()
    formula_registry = get_formula_registry()

    fingerprint_parts = [
        f"calculators:{calculator_registry.count()}",
        f"formulas:{formula_registry.count()}",
        f"formula_names:{','.join(spec.name for spec in formula_registry.list_all())}",
    ]
    for calc in sorted(calculator_registry.list_all(), key=lambda c: c.id):
        fingerprint_parts.append(
            f"calculator:{calc.id}:{calc.category.value}:"
            f"{','.join(f.id for f in calc.inputs)}:"
            f"{','.join(o.formula for o in calc.outputs)}"
        )

    fingerprint = "|".join(fingerprint_parts)
    return hashlib.sha256(fingerprint.encode()).hexdigest()[:16]


@router.get("/definitions-version")
async def get_definitions_version() -> dict:
    """Get version info for all definitions.

    The version_hash changes whenever a calculator is added, removed or
    rewired, or the set of registered formulas changes.
    """
    calculator_registry = get_calculator_registry()
    formula_registry = get_formula_registry()

    return {
        "version_hash": _compute_definitions_hash(),
        "calculator_count": calculator_registry.count(),
        "formula_count": formula_registry.count(),
        "nondeterministic_formulas": formula_registry.list_nondeterministic(),
        "validation": {
            "errors": len(calculator_registry.report.errors),
            "warnings": len(calculator_registry.report.warnings),
        },
    }
