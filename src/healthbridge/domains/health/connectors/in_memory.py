"""In-memory platform adapter for development and testing.

Holds written points, permission grants and live subscriptions in process
memory. Live updates are pushed with :meth:`InMemoryHealthAdapter.emit` and
:meth:`InMemoryHealthAdapter.emit_workout`; failures of any adapter call can
be injected with :meth:`InMemoryHealthAdapter.fail_next`.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import defaultdict
from collections.abc import AsyncIterator, Iterable, Set
from typing import Any

from healthbridge.domains.health.models import HealthDataPoint, WorkoutData
from healthbridge.domains.health.taxonomy.capabilities import (
    capabilities_for,
    permissions_for,
)
from healthbridge.domains.health.taxonomy.data_types import (
    HealthDataType,
    Platform,
    WorkoutType,
)
from healthbridge.domains.health.taxonomy.permissions import Permission, PermissionResult

logger = logging.getLogger(__name__)

_END = object()


class InMemoryHealthAdapter:
    """HealthPlatformAdapter backed by dictionaries and asyncio queues."""

    def __init__(
        self,
        platform: Platform = Platform.IOS,
        *,
        grant_all: bool = True,
        points: Iterable[HealthDataPoint] = (),
    ) -> None:
        self._platform = platform
        self._grant_all = grant_all
        self._granted: set[Permission] = set()
        self._store: dict[HealthDataType, list[HealthDataPoint]] = defaultdict(list)
        self._subscribers: dict[HealthDataType, list[asyncio.Queue[Any]]] = defaultdict(list)
        self._workout_subscribers: list[asyncio.Queue[Any]] = []
        self._failures: dict[str, Exception] = {}
        self.workouts: dict[str, str] = {}
        for point in points:
            self._store_point(point)

    @property
    def platform(self) -> Platform:
        return self._platform

    # -- test controls ------------------------------------------------------

    def grant(self, *permissions: Permission) -> None:
        self._granted.update(permissions)

    def revoke(self, *permissions: Permission) -> None:
        self._granted.difference_update(permissions)

    def fail_next(self, operation: str, exc: Exception) -> None:
        """Make the next call to ``operation`` (a method name) raise ``exc``."""
        self._failures[operation] = exc

    def subscriber_count(self, data_type: HealthDataType) -> int:
        return len(self._subscribers.get(data_type, ()))

    def points(self, data_type: HealthDataType) -> list[HealthDataPoint]:
        return list(self._store.get(data_type, ()))

    async def emit(self, point: HealthDataPoint) -> None:
        """Store ``point`` and push it to every live subscriber of its type."""
        self._store_point(point)
        for queue in list(self._subscribers.get(point.data_type, ())):
            await queue.put(point)

    async def emit_workout(self, update: WorkoutData) -> None:
        for queue in list(self._workout_subscribers):
            await queue.put(update)

    async def fail_stream(self, data_type: HealthDataType, exc: Exception) -> None:
        """Make every live source for ``data_type`` raise ``exc``."""
        for queue in list(self._subscribers.get(data_type, ())):
            await queue.put(exc)

    async def close_stream(self, data_type: HealthDataType) -> None:
        for queue in list(self._subscribers.get(data_type, ())):
            await queue.put(_END)

    # -- HealthPlatformAdapter ----------------------------------------------

    def _check_failure(self, operation: str) -> None:
        exc = self._failures.pop(operation, None)
        if exc is not None:
            raise exc

    def _store_point(self, point: HealthDataPoint) -> None:
        for data_type in point.covered_data_types() or {point.data_type}:
            self._store[data_type].append(point)

    async def check_permissions(self, permissions: Set[Permission]) -> PermissionResult:
        self._check_failure("check_permissions")
        return PermissionResult.from_granted(
            permissions,
            self._granted,
            platform_info={"platform": self._platform.value},
        )

    async def request_permissions(self, permissions: Set[Permission]) -> PermissionResult:
        self._check_failure("request_permissions")
        if self._grant_all:
            supported = permissions_for({p.data_type for p in permissions}, self._platform)
            self._granted.update(set(permissions) & supported)
        return await self.check_permissions(permissions)

    async def read_latest(self, data_type: HealthDataType) -> HealthDataPoint | None:
        self._check_failure("read_latest")
        stored = self._store.get(data_type)
        if not stored:
            return None
        return max(stored, key=lambda point: point.timestamp)

    async def write(self, point: HealthDataPoint) -> None:
        self._check_failure("write")
        self._store_point(point)

    def subscribe(self, data_type: HealthDataType) -> AsyncIterator[HealthDataPoint] | None:
        self._check_failure("subscribe")
        if not capabilities_for(data_type, self._platform).can_read:
            return None
        return _LiveFeed(self._subscribers[data_type])

    async def start_workout(self, workout_type: WorkoutType) -> str:
        self._check_failure("start_workout")
        session_id = uuid.uuid4().hex
        self.workouts[session_id] = "running"
        logger.debug("Started %s workout %s", workout_type.value, session_id)
        return session_id

    async def pause_workout(self, session_id: str) -> None:
        self._check_failure("pause_workout")
        self.workouts[session_id] = "paused"

    async def resume_workout(self, session_id: str) -> None:
        self._check_failure("resume_workout")
        self.workouts[session_id] = "running"

    async def end_workout(self, session_id: str) -> None:
        self._check_failure("end_workout")
        self.workouts[session_id] = "ended"

    async def discard_workout(self, session_id: str) -> None:
        self._check_failure("discard_workout")
        self.workouts[session_id] = "discarded"

    def observe_active_workout(self) -> AsyncIterator[WorkoutData]:
        self._check_failure("observe_active_workout")
        return _LiveFeed(self._workout_subscribers)


class _LiveFeed:
    """Async iterator over one subscriber queue.

    The queue is registered on construction, so points emitted before the
    consumer first awaits are not lost. ``aclose`` unregisters it.
    """

    def __init__(self, registry: list[asyncio.Queue[Any]]) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._registry = registry
        self._closed = False
        registry.append(self._queue)

    def __aiter__(self) -> _LiveFeed:
        return self

    async def __anext__(self) -> Any:
        if self._closed:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _END:
            await self.aclose()
            raise StopAsyncIteration
        if isinstance(item, Exception):
            await self.aclose()
            raise item
        return item

    async def aclose(self) -> None:
        self._closed = True
        if self._queue in self._registry:
            self._registry.remove(self._queue)
