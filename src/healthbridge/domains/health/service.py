"""Point-in-time reads and writes over a platform adapter.

Applies the error taxonomy uniformly: an unreadable type is an expected
absence (``None``), an unwritable type is a ``CapabilityMismatchError``,
missing grants raise ``PermissionDeniedError`` and anything the adapter
raises is wrapped in ``AdapterError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from healthbridge.domains.health.connectors import HealthPlatformAdapter
from healthbridge.domains.health.exceptions import (
    AdapterError,
    CapabilityMismatchError,
    HealthBridgeError,
    PermissionDeniedError,
)
from healthbridge.domains.health.models import HealthDataPoint
from healthbridge.domains.health.taxonomy.capabilities import (
    capabilities_for,
    permissions_for,
)
from healthbridge.domains.health.taxonomy.data_types import HealthDataType
from healthbridge.domains.health.taxonomy.permissions import (
    AccessType,
    Permission,
    PermissionResult,
)

logger = logging.getLogger(__name__)


class HealthDataService:
    """Reads, writes and permission handling for one adapter."""

    def __init__(self, adapter: HealthPlatformAdapter) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> HealthPlatformAdapter:
        return self._adapter

    async def request_permissions(self, data_types: Iterable[HealthDataType]) -> PermissionResult:
        """Request every permission the platform supports for ``data_types``."""
        permissions = permissions_for(data_types, self._adapter.platform)
        if not permissions:
            return PermissionResult()
        try:
            return await self._adapter.request_permissions(permissions)
        except Exception as exc:
            raise AdapterError(f"Permission request failed: {exc}") from exc

    async def check_permissions(self, permissions: Iterable[Permission]) -> PermissionResult:
        try:
            return await self._adapter.check_permissions(frozenset(permissions))
        except Exception as exc:
            raise AdapterError(f"Permission check failed: {exc}") from exc

    async def _require(self, permissions: frozenset[Permission]) -> None:
        result = await self.check_permissions(permissions)
        if result.denied:
            raise PermissionDeniedError(result.denied)

    async def read_latest(self, data_type: HealthDataType) -> HealthDataPoint | None:
        """Latest point for ``data_type``; ``None`` if unreadable or absent."""
        if not capabilities_for(data_type, self._adapter.platform).can_read:
            logger.debug(
                "%s is not readable on %s", data_type.value, self._adapter.platform.value
            )
            return None
        await self._require(frozenset({Permission(data_type, AccessType.READ)}))
        try:
            return await self._adapter.read_latest(data_type)
        except HealthBridgeError:
            raise
        except Exception as exc:
            raise AdapterError(f"Failed to read {data_type.value}: {exc}") from exc

    async def write(self, point: HealthDataPoint) -> None:
        """Write ``point``; every type it covers must be writable and granted."""
        platform = self._adapter.platform
        covered = point.covered_data_types() or frozenset({point.data_type})
        for data_type in sorted(covered, key=lambda t: t.value):
            if not capabilities_for(data_type, platform).can_write:
                raise CapabilityMismatchError(data_type, platform, AccessType.WRITE)
        await self._require(
            frozenset(Permission(data_type, AccessType.WRITE) for data_type in covered)
        )
        try:
            await self._adapter.write(point)
        except HealthBridgeError:
            raise
        except Exception as exc:
            raise AdapterError(f"Failed to write {point.data_type.value}: {exc}") from exc
