"""Dashboard snapshot: the latest value of several metrics, read in parallel.

A failed individual read is logged and left out of the snapshot, the same
as a metric with no data. Callers that need to tell "unsupported" apart from
"temporarily unavailable" should call ``HealthDataService.read_latest``
directly.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from healthbridge.domains.health.models import HealthDataPoint
from healthbridge.domains.health.service import HealthDataService
from healthbridge.domains.health.taxonomy.data_types import HealthDataType

logger = logging.getLogger(__name__)

DASHBOARD_TYPES = (
    HealthDataType.HEART_RATE,
    HealthDataType.STEPS,
    HealthDataType.CALORIES,
    HealthDataType.DISTANCE,
    HealthDataType.SLEEP,
    HealthDataType.WEIGHT,
)


async def load_snapshot(
    service: HealthDataService,
    data_types: Iterable[HealthDataType] = DASHBOARD_TYPES,
) -> dict[HealthDataType, HealthDataPoint]:
    """Read the latest point for each type concurrently.

    Returns:
        Mapping of data type to its latest point, for the types that
        produced one.
    """
    types = list(dict.fromkeys(data_types))
    results = await asyncio.gather(
        *(service.read_latest(data_type) for data_type in types),
        return_exceptions=True,
    )
    snapshot: dict[HealthDataType, HealthDataPoint] = {}
    for data_type, result in zip(types, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("Snapshot read of %s failed: %s", data_type.value, result)
            continue
        if result is not None:
            snapshot[data_type] = result
    return snapshot
