"""HealthBridge MCP Server application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from healthbridge.core.config.settings import get_settings
from healthbridge.domains.health.connectors import HealthPlatformAdapter
from healthbridge.domains.health.connectors.in_memory import InMemoryHealthAdapter
from healthbridge.domains.health.fhir.parser import SUPPORTED_RESOURCE_TYPES
from healthbridge.domains.health.service import HealthDataService
from healthbridge.domains.health.taxonomy.data_types import Platform
from healthbridge.domains.health.tools.capability_tools import register_capability_tools
from healthbridge.domains.health.tools.clinical_record_tools import (
    register_clinical_record_tools,
)

logger = logging.getLogger(__name__)


def create_app(*, adapter_override: HealthPlatformAdapter | None = None) -> FastMCP:
    """Create and configure the HealthBridge MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Initializes the platform adapter (in-memory unless overridden)
    3. Registers the capability, read and clinical record tools
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "HealthBridge",
        instructions=(
            "HealthBridge: canonical health data server. "
            "Reports per-platform read/write capabilities for health metrics, "
            "requests permissions, reads the latest recorded values, and decodes FHIR clinical records "
            "(immunizations, medications, allergies, conditions, observations, procedures)."
        ),
    )

    # --- Initialize platform adapter ---
    if adapter_override is not None:
        adapter = adapter_override
    else:
        adapter = InMemoryHealthAdapter(Platform(settings.hb_platform))
        logger.info("Using in-memory %s adapter", settings.hb_platform)

    service = HealthDataService(adapter)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "HealthBridge",
            "version": "0.1.0",
            "platform": adapter.platform.value,
            "fhir_resource_types": list(SUPPORTED_RESOURCE_TYPES),
        }

    register_capability_tools(server, service)
    logger.info("Capability tools registered")

    register_clinical_record_tools(server)
    logger.info("Clinical record tools registered")

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
