"""Shared FHIR R4 data types.

All models accept the camelCase names used in FHIR JSON and expose them as
snake_case attributes. Decoding is tolerant:

* unknown keys are ignored,
* numbers and booleans written as strings are coerced,
* an optional field whose value cannot be read is dropped to its default
  instead of failing the whole document.

Required fields are still enforced. Coding systems and codes are carried as
opaque strings; nothing here interprets clinical terminology.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class FHIRModel(BaseModel):
    """Shared configuration: camelCase aliases, unknown keys ignored, frozen."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    def as_fhir_dict(self) -> dict[str, Any]:
        """Dump back to FHIR JSON shape (camelCase keys, absent fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FHIRElement(FHIRModel):
    """Base for every FHIR element and resource model.

    Adds the lenient decode: an optional field that fails to validate falls
    back to its default.
    """

    @field_validator("*", mode="wrap")
    @classmethod
    def _drop_unreadable_optional(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields.get(info.field_name or "")
            if field is None or field.is_required():
                raise
            logger.debug(
                "Dropping unreadable optional field %s.%s", cls.__name__, info.field_name
            )
            return field.get_default(call_default_factory=True)


class Coding(FHIRElement):
    system: str | None = None
    version: str | None = None
    code: str | None = None
    display: str | None = None
    user_selected: bool | None = None


class CodeableConcept(FHIRElement):
    coding: list[Coding] | None = None
    text: str | None = None

    def has_code(self, *codes: str) -> bool:
        return any(c.code in codes for c in self.coding or [])

    @property
    def display_text(self) -> str | None:
        """``text`` if present, else the first coding's display or code."""
        if self.text:
            return self.text
        for coding in self.coding or []:
            if coding.display or coding.code:
                return coding.display or coding.code
        return None


class Period(FHIRElement):
    start: str | None = None
    end: str | None = None


class Identifier(FHIRElement):
    use: str | None = None
    type: CodeableConcept | None = None
    system: str | None = None
    value: str | None = None
    period: Period | None = None


class Reference(FHIRElement):
    reference: str | None = None
    type: str | None = None
    identifier: Identifier | None = None
    display: str | None = None


class Quantity(FHIRElement):
    value: float | None = None
    comparator: str | None = None
    unit: str | None = None
    system: str | None = None
    code: str | None = None


class Duration(Quantity):
    """FHIR Duration: a Quantity measuring elapsed time."""


class Range(FHIRElement):
    low: Quantity | None = None
    high: Quantity | None = None


class Ratio(FHIRElement):
    numerator: Quantity | None = None
    denominator: Quantity | None = None


class Annotation(FHIRElement):
    text: str
    author_reference: Reference | None = None
    author_string: str | None = None
    time: str | None = None


class TimingRepeat(FHIRElement):
    bounds_duration: Duration | None = None
    bounds_range: Range | None = None
    bounds_period: Period | None = None
    count: int | None = None
    count_max: int | None = None
    duration: float | None = None
    duration_max: float | None = None
    duration_unit: str | None = None
    frequency: int | None = None
    frequency_max: int | None = None
    period: float | None = None
    period_max: float | None = None
    period_unit: str | None = None
    day_of_week: list[str] | None = None
    time_of_day: list[str] | None = None
    when_: list[str] | None = Field(default=None, alias="when")
    offset: int | None = None


class Timing(FHIRElement):
    event: list[str] | None = None
    repeat: TimingRepeat | None = None
    code: CodeableConcept | None = None


class DoseAndRate(FHIRElement):
    type: CodeableConcept | None = None
    dose_range: Range | None = None
    dose_quantity: Quantity | None = None
    rate_ratio: Ratio | None = None
    rate_range: Range | None = None
    rate_quantity: Quantity | None = None


class Dosage(FHIRElement):
    sequence: int | None = None
    text: str | None = None
    additional_instruction: list[CodeableConcept] | None = None
    patient_instruction: str | None = None
    timing: Timing | None = None
    as_needed_boolean: bool | None = None
    as_needed_codeable_concept: CodeableConcept | None = None
    site: CodeableConcept | None = None
    route: CodeableConcept | None = None
    method: CodeableConcept | None = None
    dose_and_rate: list[DoseAndRate] | None = None
    max_dose_per_period: Ratio | None = None
    max_dose_per_administration: Quantity | None = None
    max_dose_per_lifetime: Quantity | None = None


class SampledData(FHIRElement):
    origin: Quantity
    period: float
    dimensions: int
    factor: float | None = None
    lower_limit: float | None = None
    upper_limit: float | None = None
    data: str | None = None
