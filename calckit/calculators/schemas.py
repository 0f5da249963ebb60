"""Calculator definition schemas.

A calculator is a static, declarative record: ordered typed inputs, ordered
outputs naming registered formulas, SEO metadata and help content. Every
collection is a tuple and every model is frozen, so a loaded definition
can be shared freely without copying.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from calckit.fields.schemas import InputField


# ============================================================================
# Enums
# ============================================================================


class CalculatorCategory(str, Enum):
    """Site sections a calculator is listed under."""

    MATH = "math"
    FINANCE = "finance"
    HEALTH = "health"
    CONVERSION = "conversion"
    PHYSICS = "physics"
    CHEMISTRY = "chemistry"
    CONSTRUCTION = "construction"
    FOOD = "food"
    EVERYDAY = "everyday"
    SPORTS = "sports"
    STATISTICS = "statistics"
    ECOLOGY = "ecology"
    BIOLOGY = "biology"
    EDUCATION = "education"
    OTHER = "other"


# ============================================================================
# Sub-models
# ============================================================================


class SeoMeta(BaseModel):
    """Search-engine metadata for a calculator page."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Page title")
    description: str = Field(..., description="Meta description")
    keywords: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Search keywords",
        examples=[["meters to feet", "m to ft"]],
    )


class FaqEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class CalculatorContent(BaseModel):
    """Static help text shown below the calculator."""
    model_config = ConfigDict(frozen=True)

    what_is: Optional[str] = Field(None, description="Explanation of what the calculator computes (HTML)")
    how_to: Optional[str] = Field(None, description="Usage instructions (HTML)")
    faq: tuple[FaqEntry, ...] = Field(default_factory=tuple, description="Question and answer pairs")

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_names(cls, data: Any) -> Any:
        """Accept the website's camelCase content keys."""
        if isinstance(data, dict):
            data = dict(data)
            renames = {"whatIs": "what_is", "howTo": "how_to"}
            for old_key, new_key in renames.items():
                if old_key in data and new_key not in data:
                    data[new_key] = data.pop(old_key)
        return data


class OutputField(BaseModel):
    """One derived result of a calculator.

    ``bind`` and ``params`` are read-only mappings so a registered
    definition cannot be rewired by one of its readers.
    """
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Display label")
    unit: Optional[str] = Field(None, description="Unit appended to the displayed value")
    formula: str = Field(
        ...,
        description="Registered formula name",
        examples=["conversion.meters_to_feet", "health.bmi"],
    )
    bind: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Formula key -> input id, for calculators that name their inputs differently",
    )
    params: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Constant keyword arguments passed to the formula (e.g. decimals)",
    )

    @field_validator("bind", "params")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("bind", "params")
    def _as_dict(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)


# ============================================================================
# Main definition
# ============================================================================


class CalculatorDefinition(BaseModel):
    """Complete, immutable definition of one calculator."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Stable URL slug, unique across the catalogue",
        examples=["meters-to-feet", "bmi"],
    )
    title: str = Field(..., description="Display title")
    description: str = Field(..., description="One-sentence summary")
    category: CalculatorCategory = Field(..., description="Catalogue section")
    icon: Optional[str] = Field(None, description="Icon name used by the renderer")
    meta: Optional[SeoMeta] = Field(None, description="SEO metadata")
    inputs: tuple[InputField, ...] = Field(..., description="Ordered input fields")
    outputs: tuple[OutputField, ...] = Field(..., description="Ordered output fields")
    content: Optional[CalculatorContent] = Field(None, description="Help content")

    def get_input(self, input_id: str) -> Optional[InputField]:
        for field in self.inputs:
            if field.id == input_id:
                return field
        return None

    def input_ids(self) -> list[str]:
        return [field.id for field in self.inputs]


# ============================================================================
# API response models
# ============================================================================


class CalculatorSummary(BaseModel):
    """Lightweight calculator info for listing endpoints."""

    id: str
    title: str
    description: str
    category: CalculatorCategory
    icon: Optional[str] = None
    input_count: int = Field(default=0)
    output_count: int = Field(default=0)


class ResolvedContent(BaseModel):
    """Help content with generated fallbacks filled in."""

    calculator_id: str
    what_is: str
    how_to: str
    faq: list[FaqEntry] = Field(default_factory=list)
    generated: list[str] = Field(
        default_factory=list,
        description="Sections that were generated because the definition had none",
    )
