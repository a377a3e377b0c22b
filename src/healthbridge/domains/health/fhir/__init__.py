"""FHIR R4 clinical record models and parser."""

from healthbridge.domains.health.fhir.parser import (
    SUPPORTED_RESOURCE_TYPES,
    decode_resource,
    detect_resource_type,
    iter_resources,
    parse_resource,
    parse_resources,
)
from healthbridge.domains.health.fhir.resources import (
    VALUE_KINDS,
    FHIRAllergyIntolerance,
    FHIRCondition,
    FHIRImmunization,
    FHIRMedicationRequest,
    FHIRMedicationStatement,
    FHIRObservation,
    FHIRProcedure,
    FHIRResource,
    FHIRResourceBase,
    ObservationComponent,
    ObservationValue,
    ValueBoolean,
    ValueCodeableConcept,
    ValueDateTime,
    ValueInteger,
    ValuePeriod,
    ValueQuantity,
    ValueRange,
    ValueRatio,
    ValueSampledData,
    ValueString,
    ValueTime,
)
from healthbridge.domains.health.fhir.types import (
    CodeableConcept,
    Coding,
    FHIRElement,
    FHIRModel,
    Period,
    Quantity,
    Reference,
)

__all__ = [
    "SUPPORTED_RESOURCE_TYPES",
    "VALUE_KINDS",
    "CodeableConcept",
    "Coding",
    "FHIRAllergyIntolerance",
    "FHIRCondition",
    "FHIRElement",
    "FHIRModel",
    "FHIRImmunization",
    "FHIRMedicationRequest",
    "FHIRMedicationStatement",
    "FHIRObservation",
    "FHIRProcedure",
    "FHIRResource",
    "FHIRResourceBase",
    "ObservationComponent",
    "ObservationValue",
    "Period",
    "Quantity",
    "Reference",
    "ValueBoolean",
    "ValueCodeableConcept",
    "ValueDateTime",
    "ValueInteger",
    "ValuePeriod",
    "ValueQuantity",
    "ValueRange",
    "ValueRatio",
    "ValueSampledData",
    "ValueString",
    "ValueTime",
    "decode_resource",
    "detect_resource_type",
    "iter_resources",
    "parse_resource",
    "parse_resources",
]
