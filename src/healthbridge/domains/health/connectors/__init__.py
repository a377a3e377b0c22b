"""Platform adapters: the contract native health stores must satisfy.

The core never talks to HealthKit or Health Connect directly. An adapter
implementing :class:`HealthPlatformAdapter` does the platform I/O; the
service, the observation multiplexer and the workout session manager only
ever call through this protocol.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Set
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from healthbridge.domains.health.models import HealthDataPoint, WorkoutData
from healthbridge.domains.health.taxonomy.data_types import (
    HealthDataType,
    Platform,
    WorkoutType,
)
from healthbridge.domains.health.taxonomy.permissions import Permission, PermissionResult

if TYPE_CHECKING:
    from healthbridge.domains.health.workout.session import WorkoutSession


@runtime_checkable
class HealthPlatformAdapter(Protocol):
    """Abstract interface to one platform's health store.

    Any method may raise; callers wrap failures in the domain error taxonomy.
    """

    @property
    def platform(self) -> Platform:
        """The platform this adapter serves."""
        ...

    async def check_permissions(self, permissions: Set[Permission]) -> PermissionResult:
        """Partition ``permissions`` into granted and denied without prompting."""
        ...

    async def request_permissions(self, permissions: Set[Permission]) -> PermissionResult:
        """Ask the platform for ``permissions``."""
        ...

    async def read_latest(self, data_type: HealthDataType) -> HealthDataPoint | None:
        """Most recent stored point for ``data_type``, or ``None`` if there is none."""
        ...

    async def write(self, point: HealthDataPoint) -> None:
        """Persist ``point`` to the platform store."""
        ...

    def subscribe(self, data_type: HealthDataType) -> AsyncIterator[HealthDataPoint] | None:
        """Live update source for ``data_type``; ``None`` if it cannot be observed."""
        ...

    async def start_workout(self, workout_type: WorkoutType) -> str:
        """Start a platform workout session and return its id."""
        ...

    async def pause_workout(self, session_id: str) -> None:
        ...

    async def resume_workout(self, session_id: str) -> None:
        ...

    async def end_workout(self, session_id: str) -> None:
        ...

    async def discard_workout(self, session_id: str) -> None:
        """Cancel the session on the platform without saving its samples."""
        ...

    def observe_active_workout(self) -> AsyncIterator[WorkoutData]:
        """Live metric updates for the workout currently in progress."""
        ...


@runtime_checkable
class WorkoutPersistence(Protocol):
    """Receives finished workout sessions for storage."""

    async def save_workout(self, session: WorkoutSession) -> None:
        ...
