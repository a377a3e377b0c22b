"""MCP tools for FHIR clinical records."""

from __future__ import annotations

import json
import logging

from fastmcp import FastMCP

from healthbridge.domains.health.exceptions import ParseError
from healthbridge.domains.health.fhir.parser import (
    SUPPORTED_RESOURCE_TYPES,
    detect_resource_type,
    parse_resources,
)

logger = logging.getLogger(__name__)


def register_clinical_record_tools(mcp: FastMCP) -> None:
    """Register FHIR detection and parsing tools on the MCP server."""

    @mcp.tool
    async def detect_fhir_resource_type(document: str) -> str:
        """Report the resourceType of a FHIR JSON document.

        Args:
            document: The raw FHIR resource as JSON text.
        """
        resource_type = detect_resource_type(document)
        return json.dumps({
            "status": "ok" if resource_type else "not_found",
            "resource_type": resource_type,
            "supported": resource_type in SUPPORTED_RESOURCE_TYPES,
        })

    @mcp.tool
    async def parse_fhir_resources(documents: list[str]) -> str:
        """Decode a batch of FHIR JSON documents.

        Supported resources are Immunization, MedicationStatement,
        MedicationRequest, AllergyIntolerance, Condition, Observation and
        Procedure. Other resource types are skipped; a document that fails to
        decode is reported under "errors" without aborting the batch.

        Args:
            documents: Raw FHIR resources as JSON text, one per entry.
        """
        errors: list[dict] = []

        def _record(index: int, exc: ParseError) -> None:
            errors.append({
                "index": index,
                "message": exc.message,
                "input_preview": exc.input_preview,
            })

        resources = parse_resources(documents, on_error=_record)
        logger.info(
            "Parsed %d of %d FHIR documents (%d errors)",
            len(resources), len(documents), len(errors),
        )
        return json.dumps({
            "status": "ok",
            "parsed_count": len(resources),
            "skipped_count": len(documents) - len(resources) - len(errors),
            "resources": [r.as_fhir_dict() for r in resources],
            "errors": errors,
        })
