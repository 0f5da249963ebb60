"""Pydantic schemas for calculator input fields.

An InputField describes one user-entry point of a calculator: its kind,
default value, decorative unit, enumerated options and an optional
visibility condition expressed over sibling fields.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldKind(str, Enum):
    """Value kinds an input field can declare."""
    NUMBER = "number"
    TEXT = "text"
    SELECT = "select"
    CHECKBOX = "checkbox"
    DATE = "date"
    TIME = "time"


class ConditionOp(str, Enum):
    """Comparison applied by a leaf Condition."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    TRUTHY = "truthy"
    FALSY = "falsy"


class Choice(BaseModel):
    """One option of a select field."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Text shown to the user")
    value: str = Field(..., description="Value placed in the snapshot when selected")


class Condition(BaseModel):
    """Declarative visibility predicate over sibling input values.

    A leaf condition compares one sibling field with ``op``/``value``.
    A composite condition combines children with ``all_of`` or ``any_of``.
    Exactly one of the two shapes must be used.
    """
    model_config = ConfigDict(frozen=True)

    field: Optional[str] = Field(None, description="Sibling input id this condition reads")
    op: ConditionOp = Field(ConditionOp.EQUALS, description="Comparison to apply")
    value: Any = Field(None, description="Operand for equals/not_equals/in/not_in")
    all_of: tuple["Condition", ...] = Field(default_factory=tuple, description="All children must hold")
    any_of: tuple["Condition", ...] = Field(default_factory=tuple, description="At least one child must hold")

    @model_validator(mode="after")
    def validate_shape(self) -> "Condition":
        """Ensure the condition is either a leaf or a composite."""
        composite = bool(self.all_of) or bool(self.any_of)
        if self.field is None and not composite:
            raise ValueError("Condition needs either 'field' or 'all_of'/'any_of'")
        if self.field is not None and composite:
            raise ValueError("Condition cannot combine 'field' with 'all_of'/'any_of'")
        if self.all_of and self.any_of:
            raise ValueError("Condition cannot set both 'all_of' and 'any_of'")
        if self.op in (ConditionOp.IN, ConditionOp.NOT_IN) and self.field is not None:
            if not isinstance(self.value, (list, tuple)):
                raise ValueError(f"Operator '{self.op.value}' requires a list value")
        return self

    def depends_on(self) -> set[str]:
        """Input ids this condition reads, including nested children."""
        if self.field is not None:
            return {self.field}
        deps: set[str] = set()
        for child in (*self.all_of, *self.any_of):
            deps |= child.depends_on()
        return deps


DefaultValue = Union[bool, int, float, str]


class InputField(BaseModel):
    """One declared, typed, optionally-conditional input of a calculator."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identifier unique within the calculator")
    label: str = Field(..., description="Display label")
    kind: FieldKind = Field(FieldKind.NUMBER, description="Value kind")
    default: Optional[DefaultValue] = Field(None, description="Value used when the user supplied nothing")
    placeholder: Optional[str] = Field(None, description="Placeholder hint")
    unit: Optional[str] = Field(None, description="Decorative unit label")
    options: tuple[Choice, ...] = Field(default_factory=tuple, description="Ordered choices (select kind)")
    condition: Optional[Condition] = Field(None, description="Visibility predicate")
    # Rendering hints only; values are never clamped.
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_names(cls, data: Any) -> Any:
        """Accept the website's 'type'/'defaultValue' field names."""
        if isinstance(data, dict):
            data = dict(data)
            renames = {"type": "kind", "defaultValue": "default"}
            for old_key, new_key in renames.items():
                if old_key in data and new_key not in data:
                    data[new_key] = data.pop(old_key)
        return data

    @property
    def is_conditional(self) -> bool:
        return self.condition is not None

    def option_values(self) -> list[str]:
        return [choice.value for choice in self.options]
