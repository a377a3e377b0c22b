"""MCP tools for platform capabilities, permissions and latest readings."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from fastmcp import FastMCP

from healthbridge.domains.health.exceptions import HealthBridgeError
from healthbridge.domains.health.service import HealthDataService
from healthbridge.domains.health.taxonomy.capabilities import (
    all_capabilities,
    capabilities_for,
    permissions_for,
    platform_profile,
)
from healthbridge.domains.health.taxonomy.data_types import HealthDataType, Platform

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _resolve_platform(name: str | None, default: Platform) -> Platform | None:
    if not name:
        return default
    try:
        return Platform(name.lower())
    except ValueError:
        return None


def _unknown_platform(name: str) -> str:
    return json.dumps({
        "status": "error",
        "message": f"Unknown platform {name!r}; expected one of "
        + ", ".join(p.value for p in Platform),
    })


def _split_known(names: list[str]) -> tuple[list[HealthDataType], list[str]]:
    known: list[HealthDataType] = []
    unknown: list[str] = []
    for name in names:
        parsed = HealthDataType.from_string(name)
        if parsed is None:
            unknown.append(name)
        else:
            known.append(parsed)
    return known, unknown


def register_capability_tools(mcp: FastMCP, service: HealthDataService) -> None:
    """Register capability, permission and read tools on the MCP server."""
    default_platform = service.adapter.platform

    @mcp.tool
    async def data_type_capabilities(
        platform: str | None = None,
        data_type: str | None = None,
    ) -> str:
        """Report which health data types a platform can read and write.

        Args:
            platform: "ios" or "android" (default: the server's platform).
            data_type: A single data type name such as "HeartRate"; omit to
                list every supported type.
        """
        resolved = _resolve_platform(platform, default_platform)
        if resolved is None:
            return _unknown_platform(platform or "")

        if data_type is not None:
            parsed = HealthDataType.from_string(data_type)
            if parsed is None:
                return json.dumps({
                    "status": "error",
                    "message": f"Unknown data type {data_type!r}",
                })
            capabilities = [capabilities_for(parsed, resolved)]
        else:
            capabilities = [c for c in all_capabilities(resolved) if c.is_supported]

        profile = platform_profile(resolved)
        return json.dumps({
            "status": "ok",
            "platform": resolved.value,
            "profile": {
                "name": profile.name,
                "supports_background_delivery": profile.supports_background_delivery,
                "supports_wearable_integration": profile.supports_wearable_integration,
                "supports_live_workout_metrics": profile.supports_live_workout_metrics,
            },
            "capabilities": [
                {
                    "data_type": c.data_type.value,
                    "can_read": c.can_read,
                    "can_write": c.can_write,
                    "notes": c.notes,
                }
                for c in capabilities
            ],
        })

    @mcp.tool
    async def available_permissions(
        data_types: list[str],
        platform: str | None = None,
    ) -> str:
        """Expand data types into the READ/WRITE permissions a platform can grant.

        Args:
            data_types: Data type names, e.g. ["HeartRate", "Steps"].
            platform: "ios" or "android" (default: the server's platform).
        """
        resolved = _resolve_platform(platform, default_platform)
        if resolved is None:
            return _unknown_platform(platform or "")

        known, unknown = _split_known(data_types)
        permissions = permissions_for(known, resolved)
        return json.dumps({
            "status": "ok",
            "platform": resolved.value,
            "permissions": sorted(str(p) for p in permissions),
            "unknown_data_types": unknown,
        })

    @mcp.tool
    async def request_health_permissions(data_types: list[str]) -> str:
        """Ask the platform for every permission it supports on the given types.

        Args:
            data_types: Data type names, e.g. ["HeartRate", "Steps"].
        """
        known, unknown = _split_known(data_types)
        try:
            result = await service.request_permissions(known)
        except HealthBridgeError as exc:
            logger.warning("request_health_permissions failed: %s", exc.message)
            return json.dumps({
                "status": "error",
                "error_type": type(exc).__name__,
                "message": exc.message,
            })

        return json.dumps({
            "status": "ok",
            "platform": default_platform.value,
            "permission_status": result.status.value,
            "granted": sorted(str(p) for p in result.granted),
            "denied": sorted(str(p) for p in result.denied),
            "unknown_data_types": unknown,
        })

    @mcp.tool
    async def read_latest_health_data(data_type: str) -> str:
        """Read the most recent value recorded for a health data type.

        Args:
            data_type: Data type name, e.g. "HeartRate".
        """
        parsed = HealthDataType.from_string(data_type)
        if parsed is None:
            return json.dumps({
                "status": "error",
                "message": f"Unknown data type {data_type!r}",
            })
        try:
            point = await service.read_latest(parsed)
        except HealthBridgeError as exc:
            logger.warning("read_latest_health_data(%s) failed: %s", data_type, exc.message)
            return json.dumps({
                "status": "error",
                "error_type": type(exc).__name__,
                "message": exc.message,
            })

        if point is None:
            return json.dumps({
                "status": "no_data",
                "data_type": parsed.value,
                "message": "No readable data for this type on this platform.",
            })
        return json.dumps(
            {
                "status": "ok",
                "data_type": parsed.value,
                "record_type": type(point).__name__,
                "data": asdict(point),
            },
            default=_json_default,
        )
