"""FHIR resource detection and decoding.

Documents may be given as JSON text, UTF-8 bytes, or an already decoded
mapping. A document whose ``resourceType`` is missing or not one of the
supported resources decodes to ``None``; that is an expected absence, not a
failure. A recognised document that cannot be decoded raises ``ParseError``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, TypeVar, Union

from pydantic import ValidationError

from healthbridge.domains.health.exceptions import ParseError
from healthbridge.domains.health.fhir.resources import (
    FHIRAllergyIntolerance,
    FHIRCondition,
    FHIRImmunization,
    FHIRMedicationRequest,
    FHIRMedicationStatement,
    FHIRObservation,
    FHIRProcedure,
    FHIRResource,
    FHIRResourceBase,
)

logger = logging.getLogger(__name__)

RawDocument = Union[str, bytes, bytearray, Mapping[str, Any]]
ErrorSink = Callable[[int, ParseError], None]

R = TypeVar("R", bound=FHIRResourceBase)

_DECODERS: dict[str, type[FHIRResourceBase]] = {
    "Immunization": FHIRImmunization,
    "MedicationStatement": FHIRMedicationStatement,
    "MedicationRequest": FHIRMedicationRequest,
    "AllergyIntolerance": FHIRAllergyIntolerance,
    "Condition": FHIRCondition,
    "Observation": FHIRObservation,
    "Procedure": FHIRProcedure,
}

SUPPORTED_RESOURCE_TYPES = tuple(_DECODERS)


def _preview(doc: RawDocument) -> str:
    if isinstance(doc, (bytes, bytearray)):
        return bytes(doc).decode("utf-8", errors="replace")
    if isinstance(doc, str):
        return doc
    try:
        return json.dumps(doc, default=str)
    except (TypeError, ValueError):
        return repr(doc)


def _load(doc: RawDocument) -> Mapping[str, Any]:
    """Decode ``doc`` into a JSON object, raising ``ParseError`` otherwise."""
    if isinstance(doc, Mapping):
        return doc
    try:
        loaded = json.loads(doc)
    except (TypeError, ValueError) as exc:
        raise ParseError(
            f"Document is not valid JSON: {exc}", input_preview=_preview(doc), cause=exc
        ) from exc
    if not isinstance(loaded, dict):
        raise ParseError(
            f"Document must be a JSON object, got {type(loaded).__name__}",
            input_preview=_preview(doc),
        )
    return loaded


def detect_resource_type(doc: RawDocument) -> str | None:
    """Return the document's ``resourceType``, or ``None``. Never raises.

    A non-string ``resourceType`` counts as absent, as in ``parse_resource``.
    """
    try:
        data = _load(doc)
    except ParseError:
        return None
    resource_type = data.get("resourceType")
    return resource_type if isinstance(resource_type, str) else None


def decode_resource(doc: RawDocument, model: type[R]) -> R:
    """Decode ``doc`` as a specific resource model.

    Unlike ``parse_resource`` this does not dispatch: the document's
    ``resourceType`` must name ``model`` or ``ParseError`` is raised.
    """
    data = _load(doc)
    expected = model.model_fields["resource_type"].default
    found = data.get("resourceType")
    if found != expected:
        raise ParseError(
            f"Expected resourceType {expected!r}, got {found!r}",
            input_preview=_preview(doc),
        )
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ParseError(
            f"Failed to decode {expected}: {exc.error_count()} validation error(s)",
            input_preview=_preview(doc),
            cause=exc,
        ) from exc


def parse_resource(doc: RawDocument) -> FHIRResource | None:
    """Decode one document into the resource its ``resourceType`` names.

    Returns ``None`` when the type is absent or unsupported. Raises
    ``ParseError`` when the document is not a JSON object or when it fails
    to decode as the matched resource (missing required field, type
    mismatch).
    """
    data = _load(doc)
    resource_type = data.get("resourceType")
    if not isinstance(resource_type, str):
        return None
    model = _DECODERS.get(resource_type)
    if model is None:
        logger.debug("Ignoring unsupported resourceType %r", resource_type)
        return None
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ParseError(
            f"Failed to decode {resource_type}: {exc.error_count()} validation error(s)",
            input_preview=_preview(doc),
            cause=exc,
        ) from exc


def iter_resources(
    docs: Iterable[RawDocument],
    on_error: ErrorSink | None = None,
) -> Iterator[FHIRResource]:
    """Lazily decode ``docs``, skipping absent types and failures.

    Each failure is logged and, when given, passed to ``on_error`` with the
    index of the offending document. The batch is never aborted.
    """
    for index, doc in enumerate(docs):
        try:
            resource = parse_resource(doc)
        except ParseError as exc:
            logger.warning("Skipping FHIR document %d: %s", index, exc.message)
            if on_error is not None:
                on_error(index, exc)
            continue
        if resource is not None:
            yield resource


def parse_resources(
    docs: Iterable[RawDocument],
    on_error: ErrorSink | None = None,
) -> list[FHIRResource]:
    """Eager form of ``iter_resources``; input order is preserved."""
    return list(iter_resources(docs, on_error=on_error))
