"""Load-time checks for calculator definitions.

Schema validation only guarantees that a definition is well-formed. These
checks catch the authoring defects that would otherwise surface as wrong
results at evaluation time: outputs reading fields that do not exist,
conditions that look ahead, defaults of the wrong kind.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from calckit.fields.coercion import is_sentinel, to_date, to_number, to_time
from calckit.fields.schemas import FieldKind, InputField
from calckit.formulas.registry import FormulaRegistry, get_formula_registry

from .schemas import CalculatorDefinition, OutputField


class IssueLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    """A single problem found in a definition."""

    calculator_id: str
    level: IssueLevel
    message: str


class ValidationReport(BaseModel):
    """All issues found for one or more definitions."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationReport") -> None:
        self.issues.extend(other.issues)


def _default_matches_kind(field: InputField) -> bool:
    value = field.default
    if value is None:
        return True
    if field.kind == FieldKind.NUMBER:
        return not isinstance(value, bool) and not is_sentinel(to_number(value))
    if field.kind == FieldKind.CHECKBOX:
        return isinstance(value, bool)
    if field.kind == FieldKind.DATE:
        return not is_sentinel(to_date(value))
    if field.kind == FieldKind.TIME:
        return not is_sentinel(to_time(value))
    return isinstance(value, str)


class _Checker:
    """Collects issues for one definition."""

    def __init__(self, definition: CalculatorDefinition, formulas: FormulaRegistry):
        self.definition = definition
        self.formulas = formulas
        self.report = ValidationReport()

    def error(self, message: str) -> None:
        self.report.issues.append(
            ValidationIssue(calculator_id=self.definition.id, level=IssueLevel.ERROR, message=message)
        )

    def warning(self, message: str) -> None:
        self.report.issues.append(
            ValidationIssue(calculator_id=self.definition.id, level=IssueLevel.WARNING, message=message)
        )

    def run(self) -> ValidationReport:
        definition = self.definition
        if not definition.inputs:
            self.error("Calculator has no inputs")
        if not definition.outputs:
            self.error("Calculator has no outputs")

        self.check_inputs()
        for index, output in enumerate(definition.outputs):
            self.check_output(index, output)

        if definition.meta is None:
            self.warning("Missing meta tags")
        elif not definition.meta.keywords:
            self.warning("Missing keywords")
        if definition.content is None:
            self.warning("Missing content (what_is, how_to, faq)")
        return self.report

    def check_inputs(self) -> None:
        seen: dict[str, int] = {}
        declared = {f.id: i for i, f in reversed(list(enumerate(self.definition.inputs)))}

        for index, field in enumerate(self.definition.inputs):
            if field.id in seen:
                self.error(f"Duplicate input id '{field.id}'")
            seen[field.id] = index

            if field.kind == FieldKind.SELECT:
                if not field.options:
                    self.error(f"Select input '{field.id}' has no options")
                elif field.default is not None and str(field.default) not in field.option_values():
                    self.warning(f"Default of select input '{field.id}' is not one of its options")

            if not _default_matches_kind(field):
                self.error(
                    f"Default {field.default!r} of input '{field.id}' does not match kind '{field.kind.value}'"
                )

            if field.condition is not None:
                for dep in sorted(field.condition.depends_on()):
                    if dep == field.id:
                        self.error(f"Condition of input '{field.id}' depends on itself")
                    elif dep not in declared:
                        self.error(f"Condition of input '{field.id}' reads undeclared input '{dep}'")
                    elif declared[dep] > index:
                        self.error(
                            f"Condition of input '{field.id}' reads '{dep}', which is declared after it"
                        )

    def check_output(self, index: int, output: OutputField) -> None:
        where = f"Output {index} ('{output.label}')"
        spec = self.formulas.get(output.formula)
        if spec is None:
            self.error(f"{where} uses unknown formula '{output.formula}'")
            return

        unknown_params = set(output.params) - set(spec.params)
        if unknown_params:
            self.error(f"{where} passes parameters {sorted(unknown_params)} not accepted by '{spec.name}'")

        unknown_binds = set(output.bind) - set(spec.reads)
        if unknown_binds:
            self.error(f"{where} binds keys {sorted(unknown_binds)} that '{spec.name}' does not read")

        for key in spec.reads:
            # A read pinned by a constant param needs no input
            if key in output.params:
                continue
            target = output.bind.get(key, key)
            field = self.definition.get_input(target)
            if field is None:
                self.error(f"{where} reads '{target}', which is not an input of this calculator")
            elif field.is_conditional and key not in spec.gated:
                self.warning(
                    f"{where} reads conditional input '{target}' without checking its visibility"
                )


def validate_definition(
    definition: CalculatorDefinition,
    formulas: Optional[FormulaRegistry] = None,
) -> ValidationReport:
    """Check one definition against the registered formulas."""
    return _Checker(definition, formulas or get_formula_registry()).run()


def validate_definitions(
    definitions: list[CalculatorDefinition],
    formulas: Optional[FormulaRegistry] = None,
) -> ValidationReport:
    """Check several definitions, including id uniqueness across them."""
    report = ValidationReport()
    seen: set[str] = set()
    for definition in definitions:
        if definition.id in seen:
            report.issues.append(
                ValidationIssue(
                    calculator_id=definition.id,
                    level=IssueLevel.ERROR,
                    message=f"Duplicate calculator id '{definition.id}'",
                )
            )
        seen.add(definition.id)
        report.extend(validate_definition(definition, formulas))
    return report
