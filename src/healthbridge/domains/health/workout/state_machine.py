"""Workout session lifecycle.

States: RUNNING -> PAUSED -> RUNNING ... -> ENDED (terminal). A session is
created RUNNING by :meth:`WorkoutSessionManager.start`; while it runs, live
workout updates from the adapter are merged into it field by field.

A failed platform call leaves the session exactly as it was. Lifecycle calls
made with no active session log and return ``None``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import datetime, timezone

from healthbridge.domains.health.connectors import HealthPlatformAdapter, WorkoutPersistence
from healthbridge.domains.health.exceptions import (
    InvalidTransitionError,
    SessionOperationError,
    SessionStartError,
)
from healthbridge.domains.health.models import HealthDataPoint, WorkoutConfiguration, WorkoutData
from healthbridge.domains.health.observation.multiplexer import ObservationMultiplexer
from healthbridge.domains.health.taxonomy.data_types import HealthDataType, WorkoutType
from healthbridge.domains.health.workout.session import (
    SessionState,
    WorkoutMetrics,
    WorkoutSession,
    merge_workout_update,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutSessionManager:
    """Owns the single current workout session."""

    def __init__(
        self,
        adapter: HealthPlatformAdapter,
        multiplexer: ObservationMultiplexer,
        persistence: WorkoutPersistence | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._adapter = adapter
        self._multiplexer = multiplexer
        self._persistence = persistence
        self._clock = clock
        self._session: WorkoutSession | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> WorkoutSession | None:
        return self._session

    @property
    def metrics(self) -> WorkoutMetrics:
        if self._session is None:
            return WorkoutMetrics()
        return self._session.metrics()

    async def start(self, workout: WorkoutType | WorkoutConfiguration) -> WorkoutSession:
        """Start a RUNNING session.

        Raises:
            SessionStartError: If a session is already active or the platform
                refused to start one.
        """
        workout_type = workout.type if isinstance(workout, WorkoutConfiguration) else workout
        async with self._lock:
            if self._session is not None:
                raise SessionStartError(
                    f"A workout session is already active ({self._session.session_id})"
                )
            try:
                session_id = await self._adapter.start_workout(workout_type)
            except Exception as exc:
                raise SessionStartError(
                    f"Failed to start {workout_type.value} workout: {exc}"
                ) from exc

            self._session = WorkoutSession(
                session_id=session_id,
                type=workout_type,
                start_time=self._clock(),
            )
            logger.info("Workout session %s started (%s)", session_id, workout_type.value)
            self._observe()
            return self._session

    def _observe(self) -> None:
        try:
            source = self._adapter.observe_active_workout()
            self._multiplexer.start_observing(
                HealthDataType.WORKOUT, on_update=self._apply_update, source=source
            )
        except Exception as exc:
            logger.warning("Live workout metrics unavailable: %s", exc)

    def _apply_update(self, point: HealthDataPoint) -> None:
        session = self._session
        if session is None or session.state is not SessionState.RUNNING:
            return
        if not isinstance(point, WorkoutData):
            logger.debug("Ignoring non-workout update %s", type(point).__name__)
            return
        self._session = merge_workout_update(session, point)

    async def pause(self) -> WorkoutSession | None:
        return await self._transition(
            "pause", SessionState.RUNNING, SessionState.PAUSED, self._adapter.pause_workout
        )

    async def resume(self) -> WorkoutSession | None:
        return await self._transition(
            "resume", SessionState.PAUSED, SessionState.RUNNING, self._adapter.resume_workout
        )

    async def _transition(
        self,
        operation: str,
        required: SessionState,
        target: SessionState,
        call: Callable[[str], Awaitable[None]],
    ) -> WorkoutSession | None:
        async with self._lock:
            session = self._session
            if session is None:
                logger.info("No active workout session to %s", operation)
                return None
            if session.state is not required:
                raise InvalidTransitionError(operation, session.state.value)
            try:
                await call(session.session_id)
            except Exception as exc:
                raise SessionOperationError(operation, session.session_id, str(exc)) from exc
            # Updates may have been merged while the platform call was pending.
            self._session = replace(self._session, state=target)
            logger.info("Workout session %s %s", session.session_id, target.value)
            return self._session

    async def end(self) -> WorkoutSession | None:
        """End the session, stop its live metrics and hand it to persistence.

        Returns:
            The ended session, or ``None`` if there was none.

        Raises:
            SessionOperationError: If the platform failed to end it; the
                session stays active and unchanged.
        """
        async with self._lock:
            session = self._session
            if session is None:
                logger.info("No active workout session to end")
                return None
            try:
                await self._adapter.end_workout(session.session_id)
            except Exception as exc:
                raise SessionOperationError("end", session.session_id, str(exc)) from exc

            self._multiplexer.stop_observing(HealthDataType.WORKOUT)
            session = replace(self._session, state=SessionState.ENDED, end_time=self._clock())
            self._session = None
            logger.info("Workout session %s ended", session.session_id)

        if self._persistence is not None:
            try:
                await self._persistence.save_workout(session)
            except Exception:
                logger.exception("Failed to persist workout session %s", session.session_id)
        return session

    async def discard(self) -> WorkoutSession | None:
        """Cancel the session and stop its live metrics without persisting it.

        Returns:
            The discarded session, or ``None`` if there was none.

        Raises:
            SessionOperationError: If the platform failed to discard it; the
                session stays active and unchanged.
        """
        async with self._lock:
            session = self._session
            if session is None:
                logger.info("No active workout session to discard")
                return None
            try:
                await self._adapter.discard_workout(session.session_id)
            except Exception as exc:
                raise SessionOperationError("discard", session.session_id, str(exc)) from exc

            self._multiplexer.stop_observing(HealthDataType.WORKOUT)
            session = replace(self._session, state=SessionState.ENDED, end_time=self._clock())
            self._session = None
            logger.info("Workout session %s discarded", session.session_id)
            return session
