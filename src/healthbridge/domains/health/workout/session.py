"""Workout session aggregate and the streamed-update merge."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

from healthbridge.domains.health.models import WorkoutData
from healthbridge.domains.health.taxonomy.data_types import WorkoutType


class SessionState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass(frozen=True)
class WorkoutSession:
    """An in-progress (or just finished) workout and its running totals.

    Each state change or merged update produces a new value; the session
    manager holds the current one.

    Units: duration in milliseconds, distance in metres, calories in kcal,
    heart rate in bpm.
    """

    session_id: str
    type: WorkoutType
    start_time: datetime
    state: SessionState = SessionState.RUNNING
    duration_ms: int = 0
    distance: float = 0.0
    calories: float = 0.0
    heart_rate: int | None = None
    steps: int = 0
    cadence: float | None = None
    end_time: datetime | None = None

    @property
    def pace(self) -> float | None:
        """Minutes per kilometre, once both duration and distance are positive."""
        if self.duration_ms <= 0 or self.distance <= 0:
            return None
        return (self.duration_ms / 60000) / (self.distance / 1000)

    def metrics(self) -> WorkoutMetrics:
        return WorkoutMetrics(
            duration_ms=self.duration_ms,
            distance=self.distance,
            calories=self.calories,
            heart_rate=self.heart_rate,
            pace=self.pace,
            cadence=self.cadence,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "type": self.type.value,
            "state": self.state.value,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_ms": self.duration_ms,
            "distance_m": self.distance,
            "calories": self.calories,
            "heart_rate": self.heart_rate,
            "steps": self.steps,
            "pace_min_per_km": self.pace,
            "cadence": self.cadence,
        }


@dataclass(frozen=True)
class WorkoutMetrics:
    """Read-only view of a session's live metrics."""

    duration_ms: int = 0
    distance: float = 0.0
    calories: float = 0.0
    heart_rate: int | None = None
    pace: float | None = None
    cadence: float | None = None


def merge_workout_update(session: WorkoutSession, update: WorkoutData) -> WorkoutSession:
    """Fold one streamed update into ``session``, last writer wins per field.

    Only the metrics ``update`` carries are replaced:

    * ``duration`` -> ``duration_ms``
    * ``average_heart_rate`` -> ``heart_rate``
    * ``active_calories`` -> ``calories``
    * ``total_distance`` (converted to metres) -> ``distance``
    * ``step_count`` -> ``steps``

    Returns a new session; ``session`` itself is not modified.
    """
    changes: dict[str, Any] = {}
    if update.duration is not None:
        changes["duration_ms"] = int(update.duration.total_seconds() * 1000)
    if update.average_heart_rate is not None:
        changes["heart_rate"] = update.average_heart_rate
    if update.active_calories is not None:
        changes["calories"] = float(update.active_calories)
    distance = update.distance_meters
    if distance is not None:
        changes["distance"] = distance
    if update.step_count is not None:
        changes["steps"] = update.step_count
    return replace(session, **changes)
