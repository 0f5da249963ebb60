"""Exceptions raised for authoring-time defects in calculator definitions.

Runtime evaluation never raises; these only surface while loading or
registering definitions and formulas.
"""


class CalculatorDefinitionError(ValueError):
    """A calculator definition is structurally invalid."""


class DuplicateCalculatorError(CalculatorDefinitionError):
    """Two definition files declare the same calculator id."""

    def __init__(self, calculator_id: str, first_source: str, second_source: str):
        self.calculator_id = calculator_id
        self.first_source = first_source
        self.second_source = second_source
        super().__init__(
            f"Duplicate calculator id '{calculator_id}' in {second_source} "
            f"(already defined in {first_source})"
        )


class UnknownFormulaError(CalculatorDefinitionError):
    """An output references a formula name that is not registered."""
