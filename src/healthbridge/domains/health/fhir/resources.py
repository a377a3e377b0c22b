"""FHIR resource models supported by the clinical record parser.

Seven resource types are recognised. Each is a mostly-optional record that
mirrors the FHIR R4 schema; the fields FHIR marks as mandatory (``status``,
``vaccineCode``, ``patient``, ``subject`` ...) are required here too.

Observation ``value[x]`` is held as a single tagged value rather than eleven
nullable siblings: ``observation.value`` is one of the ``Value*`` models (or
``None``), and ``value.kind`` says which representative the document used.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer, model_validator

from healthbridge.domains.health.fhir.types import (
    Annotation,
    CodeableConcept,
    Dosage,
    Duration,
    FHIRElement,
    FHIRModel,
    Identifier,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SampledData,
    Timing,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# value[x]
# ---------------------------------------------------------------------------

class ValueQuantity(FHIRModel):
    kind: Literal["Quantity"] = "Quantity"
    value: Quantity


class ValueCodeableConcept(FHIRModel):
    kind: Literal["CodeableConcept"] = "CodeableConcept"
    value: CodeableConcept


class ValueString(FHIRModel):
    kind: Literal["String"] = "String"
    value: str


class ValueBoolean(FHIRModel):
    kind: Literal["Boolean"] = "Boolean"
    value: bool


class ValueInteger(FHIRModel):
    kind: Literal["Integer"] = "Integer"
    value: int


class ValueRange(FHIRModel):
    kind: Literal["Range"] = "Range"
    value: Range


class ValueRatio(FHIRModel):
    kind: Literal["Ratio"] = "Ratio"
    value: Ratio


class ValueSampledData(FHIRModel):
    kind: Literal["SampledData"] = "SampledData"
    value: SampledData


class ValueTime(FHIRModel):
    kind: Literal["Time"] = "Time"
    value: str


class ValueDateTime(FHIRModel):
    kind: Literal["DateTime"] = "DateTime"
    value: str


class ValuePeriod(FHIRModel):
    kind: Literal["Period"] = "Period"
    value: Period


ObservationValue = Annotated[
    Union[
        ValueQuantity,
        ValueCodeableConcept,
        ValueString,
        ValueBoolean,
        ValueInteger,
        ValueRange,
        ValueRatio,
        ValueSampledData,
        ValueTime,
        ValueDateTime,
        ValuePeriod,
    ],
    Field(discriminator="kind"),
]

# Declaration order of the value[x] representatives; the first one present wins.
VALUE_KINDS = (
    "Quantity",
    "CodeableConcept",
    "String",
    "Boolean",
    "Integer",
    "Range",
    "Ratio",
    "SampledData",
    "Time",
    "DateTime",
    "Period",
)


class ChoiceValueElement(FHIRElement):
    """An element carrying FHIR ``value[x]``, folded into one tagged ``value``."""

    value: ObservationValue | None = None
    data_absent_reason: CodeableConcept | None = None

    @model_validator(mode="before")
    @classmethod
    def _collect_value_choice(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        keys = [f"value{kind}" for kind in VALUE_KINDS]
        if not any(key in data for key in keys):
            return data
        data = dict(data)
        present = {
            kind: data.pop(f"value{kind}")
            for kind in VALUE_KINDS
            if f"value{kind}" in data
        }
        populated = [kind for kind, raw in present.items() if raw is not None]
        if len(populated) > 1:
            logger.warning(
                "%s carries %d value[x] representatives (%s); keeping value%s",
                cls.__name__, len(populated), ", ".join(populated), populated[0],
            )
        if populated:
            kind = populated[0]
            data["value"] = {"kind": kind, "value": present[kind]}
        return data

    @model_serializer(mode="wrap")
    def _expand_value_choice(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        tagged = data.pop("value", None)
        if isinstance(tagged, dict) and "value" in tagged:
            data[f"value{tagged['kind']}"] = tagged["value"]
        return data


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

class FHIRResourceBase(FHIRElement):
    """Common shape of every resource: ``resourceType`` plus optional ``id``."""

    resource_type: str
    id: str | None = None


class ImmunizationPerformer(FHIRElement):
    actor: Reference
    function: CodeableConcept | None = None


class ImmunizationEducation(FHIRElement):
    document_type: str | None = None
    reference: str | None = None
    publication_date: str | None = None
    presentation_date: str | None = None


class ImmunizationReaction(FHIRElement):
    date: str | None = None
    detail: Reference | None = None
    reported: bool | None = None


class ImmunizationProtocolApplied(FHIRElement):
    series: str | None = None
    authority: Reference | None = None
    target_disease: list[CodeableConcept] | None = None
    dose_number_positive_int: int | None = None
    dose_number_string: str | None = None
    series_doses_positive_int: int | None = None
    series_doses_string: str | None = None


class FHIRImmunization(FHIRResourceBase):
    resource_type: Literal["Immunization"] = "Immunization"
    status: str  # completed | entered-in-error | not-done
    vaccine_code: CodeableConcept
    patient: Reference
    identifier: list[Identifier] | None = None
    status_reason: CodeableConcept | None = None
    encounter: Reference | None = None
    occurrence_date_time: str | None = None
    occurrence_string: str | None = None
    recorded: str | None = None
    primary_source: bool | None = None
    report_origin: CodeableConcept | None = None
    location: Reference | None = None
    manufacturer: Reference | None = None
    lot_number: str | None = None
    expiration_date: str | None = None
    site: CodeableConcept | None = None
    route: CodeableConcept | None = None
    dose_quantity: Quantity | None = None
    performer: list[ImmunizationPerformer] | None = None
    note: list[Annotation] | None = None
    reason_code: list[CodeableConcept] | None = None
    reason_reference: list[Reference] | None = None
    is_subpotent: bool | None = None
    subpotent_reason: list[CodeableConcept] | None = None
    education: list[ImmunizationEducation] | None = None
    program_eligibility: list[CodeableConcept] | None = None
    funding_source: CodeableConcept | None = None
    reaction: list[ImmunizationReaction] | None = None
    protocol_applied: list[ImmunizationProtocolApplied] | None = None


class FHIRMedicationStatement(FHIRResourceBase):
    resource_type: Literal["MedicationStatement"] = "MedicationStatement"
    status: str
    subject: Reference
    identifier: list[Identifier] | None = None
    based_on: list[Reference] | None = None
    part_of: list[Reference] | None = None
    status_reason: list[CodeableConcept] | None = None
    category: CodeableConcept | None = None
    medication_codeable_concept: CodeableConcept | None = None
    medication_reference: Reference | None = None
    context: Reference | None = None
    effective_date_time: str | None = None
    effective_period: Period | None = None
    date_asserted: str | None = None
    information_source: Reference | None = None
    derived_from: list[Reference] | None = None
    reason_code: list[CodeableConcept] | None = None
    reason_reference: list[Reference] | None = None
    note: list[Annotation] | None = None
    dosage: list[Dosage] | None = None


class InitialFill(FHIRElement):
    quantity: Quantity | None = None
    duration: Duration | None = None


class DispenseRequest(FHIRElement):
    initial_fill: InitialFill | None = None
    dispense_interval: Duration | None = None
    validity_period: Period | None = None
    number_of_repeats_allowed: int | None = None
    quantity: Quantity | None = None
    expected_supply_duration: Duration | None = None
    performer: Reference | None = None


class Substitution(FHIRElement):
    allowed_boolean: bool | None = None
    allowed_codeable_concept: CodeableConcept | None = None
    reason: CodeableConcept | None = None


class FHIRMedicationRequest(FHIRResourceBase):
    resource_type: Literal["MedicationRequest"] = "MedicationRequest"
    status: str
    intent: str  # proposal | plan | order | ...
    subject: Reference
    identifier: list[Identifier] | None = None
    status_reason: CodeableConcept | None = None
    category: list[CodeableConcept] | None = None
    priority: str | None = None
    do_not_perform: bool | None = None
    reported_boolean: bool | None = None
    reported_reference: Reference | None = None
    medication_codeable_concept: CodeableConcept | None = None
    medication_reference: Reference | None = None
    encounter: Reference | None = None
    supporting_information: list[Reference] | None = None
    authored_on: str | None = None
    requester: Reference | None = None
    performer: Reference | None = None
    performer_type: CodeableConcept | None = None
    recorder: Reference | None = None
    reason_code: list[CodeableConcept] | None = None
    reason_reference: list[Reference] | None = None
    instantiates_canonical: list[str] | None = None
    instantiates_uri: list[str] | None = None
    based_on: list[Reference] | None = None
    group_identifier: Identifier | None = None
    course_of_therapy_type: CodeableConcept | None = None
    insurance: list[Reference] | None = None
    note: list[Annotation] | None = None
    dosage_instruction: list[Dosage] | None = None
    dispense_request: DispenseRequest | None = None
    substitution: Substitution | None = None
    prior_prescription: Reference | None = None
    detected_issue: list[Reference] | None = None
    event_history: list[Reference] | None = None


class AllergyReaction(FHIRElement):
    manifestation: list[CodeableConcept]
    substance: CodeableConcept | None = None
    description: str | None = None
    onset: str | None = None
    severity: str | None = None  # mild | moderate | severe
    exposure_route: CodeableConcept | None = None
    note: list[Annotation] | None = None


class FHIRAllergyIntolerance(FHIRResourceBase):
    resource_type: Literal["AllergyIntolerance"] = "AllergyIntolerance"
    patient: Reference
    identifier: list[Identifier] | None = None
    clinical_status: CodeableConcept | None = None
    verification_status: CodeableConcept | None = None
    type: str | None = None  # allergy | intolerance
    category: list[str] | None = None
    criticality: str | None = None
    code: CodeableConcept | None = None
    encounter: Reference | None = None
    onset_date_time: str | None = None
    onset_age: Quantity | None = None
    onset_period: Period | None = None
    onset_range: Range | None = None
    onset_string: str | None = None
    recorded_date: str | None = None
    recorder: Reference | None = None
    asserter: Reference | None = None
    last_occurrence: str | None = None
    note: list[Annotation] | None = None
    reaction: list[AllergyReaction] | None = None

    def is_active(self) -> bool:
        """True unless the clinical status says inactive or resolved."""
        if self.clinical_status is None:
            return True
        return not self.clinical_status.has_code("inactive", "resolved")


class ConditionStage(FHIRElement):
    summary: CodeableConcept | None = None
    assessment: list[Reference] | None = None
    type: CodeableConcept | None = None


class ConditionEvidence(FHIRElement):
    code: list[CodeableConcept] | None = None
    detail: list[Reference] | None = None


class FHIRCondition(FHIRResourceBase):
    resource_type: Literal["Condition"] = "Condition"
    subject: Reference
    identifier: list[Identifier] | None = None
    clinical_status: CodeableConcept | None = None
    verification_status: CodeableConcept | None = None
    category: list[CodeableConcept] | None = None
    severity: CodeableConcept | None = None
    code: CodeableConcept | None = None
    body_site: list[CodeableConcept] | None = None
    encounter: Reference | None = None
    onset_date_time: str | None = None
    onset_age: Quantity | None = None
    onset_period: Period | None = None
    onset_range: Range | None = None
    onset_string: str | None = None
    abatement_date_time: str | None = None
    abatement_age: Quantity | None = None
    abatement_period: Period | None = None
    abatement_range: Range | None = None
    abatement_string: str | None = None
    recorded_date: str | None = None
    recorder: Reference | None = None
    asserter: Reference | None = None
    stage: list[ConditionStage] | None = None
    evidence: list[ConditionEvidence] | None = None
    note: list[Annotation] | None = None

    def is_resolved(self) -> bool:
        if self.clinical_status is None:
            return False
        return self.clinical_status.has_code("resolved", "remission")


class ReferenceRange(FHIRElement):
    low: Quantity | None = None
    high: Quantity | None = None
    type: CodeableConcept | None = None
    applies_to: list[CodeableConcept] | None = None
    age: Range | None = None
    text: str | None = None


class ObservationComponent(ChoiceValueElement):
    code: CodeableConcept
    interpretation: list[CodeableConcept] | None = None
    reference_range: list[ReferenceRange] | None = None


class FHIRObservation(FHIRResourceBase, ChoiceValueElement):
    resource_type: Literal["Observation"] = "Observation"
    status: str
    code: CodeableConcept
    identifier: list[Identifier] | None = None
    based_on: list[Reference] | None = None
    part_of: list[Reference] | None = None
    category: list[CodeableConcept] | None = None
    subject: Reference | None = None
    focus: list[Reference] | None = None
    encounter: Reference | None = None
    effective_date_time: str | None = None
    effective_period: Period | None = None
    effective_timing: Timing | None = None
    effective_instant: str | None = None
    issued: str | None = None
    performer: list[Reference] | None = None
    interpretation: list[CodeableConcept] | None = None
    note: list[Annotation] | None = None
    body_site: CodeableConcept | None = None
    method: CodeableConcept | None = None
    specimen: Reference | None = None
    device: Reference | None = None
    reference_range: list[ReferenceRange] | None = None
    has_member: list[Reference] | None = None
    derived_from: list[Reference] | None = None
    component: list[ObservationComponent] | None = None


class ProcedurePerformer(FHIRElement):
    actor: Reference
    function: CodeableConcept | None = None
    on_behalf_of: Reference | None = None


class FocalDevice(FHIRElement):
    manipulated: Reference
    action: CodeableConcept | None = None


class FHIRProcedure(FHIRResourceBase):
    resource_type: Literal["Procedure"] = "Procedure"
    status: str
    subject: Reference
    identifier: list[Identifier] | None = None
    instantiates_canonical: list[str] | None = None
    instantiates_uri: list[str] | None = None
    based_on: list[Reference] | None = None
    part_of: list[Reference] | None = None
    status_reason: CodeableConcept | None = None
    category: CodeableConcept | None = None
    code: CodeableConcept | None = None
    encounter: Reference | None = None
    performed_date_time: str | None = None
    performed_period: Period | None = None
    performed_string: str | None = None
    performed_age: Quantity | None = None
    performed_range: Range | None = None
    recorder: Reference | None = None
    asserter: Reference | None = None
    performer: list[ProcedurePerformer] | None = None
    location: Reference | None = None
    reason_code: list[CodeableConcept] | None = None
    reason_reference: list[Reference] | None = None
    body_site: list[CodeableConcept] | None = None
    outcome: CodeableConcept | None = None
    report: list[Reference] | None = None
    complication: list[CodeableConcept] | None = None
    complication_detail: list[Reference] | None = None
    follow_up: list[CodeableConcept] | None = None
    note: list[Annotation] | None = None
    focal_device: list[FocalDevice] | None = None
    used_reference: list[Reference] | None = None
    used_code: list[CodeableConcept] | None = None


FHIRResource = Union[
    FHIRImmunization,
    FHIRMedicationStatement,
    FHIRMedicationRequest,
    FHIRAllergyIntolerance,
    FHIRCondition,
    FHIRObservation,
    FHIRProcedure,
]
