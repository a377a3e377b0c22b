"""Live observation of health metrics.

An :class:`ObservationMultiplexer` owns at most one :class:`ObservationHandle`
per data type. Each handle runs a pump task that drains the adapter's live
source, appends every point to the type's bounded history and fans it out to
consumers (``async for`` iterators and an optional callback), in source
order.

Cancellation is synchronous: once ``cancel()`` returns, the handle delivers
nothing more, even if its pump task has not yet observed the cancellation.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable
from typing import Any

from healthbridge.domains.health.connectors import HealthPlatformAdapter
from healthbridge.domains.health.exceptions import AdapterError
from healthbridge.domains.health.models import HealthDataPoint
from healthbridge.domains.health.taxonomy.data_types import HealthDataType

logger = logging.getLogger(__name__)

HISTORY_SIZE = 20

UpdateCallback = Callable[[HealthDataPoint], Any]

_CLOSED = object()


class ObservationHandle:
    """One live feed for one data type."""

    def __init__(
        self,
        data_type: HealthDataType,
        source: AsyncIterator[HealthDataPoint],
        history: deque[HealthDataPoint],
        on_update: UpdateCallback | None = None,
        on_finish: Callable[[ObservationHandle], None] | None = None,
    ) -> None:
        self.data_type = data_type
        self._source = source
        self._history = history
        self._on_update = on_update
        self._on_finish = on_finish
        self._consumers: list[asyncio.Queue[Any]] = []
        self._task: asyncio.Task[None] | None = None
        self._error: AdapterError | None = None
        self._finished = False
        self._source_closed = False
        self.cancelled = False

    def _start(self) -> None:
        self._task = asyncio.get_running_loop().create_task(
            self._pump(), name=f"observe-{self.data_type.value}"
        )

    @property
    def active(self) -> bool:
        return not self._finished

    @property
    def error(self) -> AdapterError | None:
        return self._error

    async def _pump(self) -> None:
        try:
            async for point in self._source:
                if self.cancelled:
                    break
                self._deliver(point)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if not self.cancelled:
                logger.error("Live source for %s failed: %s", self.data_type.value, exc)
                self._error = AdapterError(
                    f"Observation of {self.data_type.value} failed: {exc}"
                )
                self._error.__cause__ = exc
        finally:
            await self._close_source()
            self._finish()

    @property
    def source_closed(self) -> bool:
        return self._source_closed

    async def _close_source(self) -> None:
        if self._source_closed:
            return
        self._source_closed = True
        aclose = getattr(self._source, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception as exc:
            logger.debug("Closing %s source raised: %s", self.data_type.value, exc)

    def _deliver(self, point: HealthDataPoint) -> None:
        if self.cancelled:
            return
        self._history.append(point)
        for queue in self._consumers:
            queue.put_nowait(point)
        if self._on_update is not None:
            try:
                self._on_update(point)
            except Exception:
                logger.exception("Update callback for %s raised", self.data_type.value)

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        for queue in self._consumers:
            queue.put_nowait(_CLOSED)
        if self._on_finish is not None:
            self._on_finish(self)

    def cancel(self) -> None:
        """Stop delivering updates. Idempotent."""
        if self.cancelled:
            return
        self.cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._finish()

    async def wait_closed(self) -> None:
        """Wait for the pump task to wind down and release the source."""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
        # A pump cancelled before its first step never reaches its own cleanup.
        await self._close_source()

    def __aiter__(self) -> AsyncIterator[HealthDataPoint]:
        return self.updates()

    async def updates(self) -> AsyncIterator[HealthDataPoint]:
        """Points delivered from now until the handle ends.

        Raises:
            AdapterError: If the live source failed.
        """
        queue: asyncio.Queue[Any] = asyncio.Queue()
        if self._finished:
            queue.put_nowait(_CLOSED)
        else:
            self._consumers.append(queue)
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    if self._error is not None and not self.cancelled:
                        raise self._error
                    return
                yield item
        finally:
            if queue in self._consumers:
                self._consumers.remove(queue)


class ObservationMultiplexer:
    """Owns the live observations and their retained history.

    Construct one per owning session (or test); tear it down with
    :meth:`stop_all` or by using it as an async context manager.
    """

    def __init__(self, adapter: HealthPlatformAdapter, history_size: int = HISTORY_SIZE) -> None:
        if history_size < 1:
            raise ValueError("history_size must be at least 1")
        self._adapter = adapter
        self._history_size = history_size
        self._handles: dict[HealthDataType, ObservationHandle] = {}
        self._history: dict[HealthDataType, deque[HealthDataPoint]] = {}
        self._closing: list[ObservationHandle] = []

    async def __aenter__(self) -> ObservationMultiplexer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def start_observing(
        self,
        data_type: HealthDataType,
        on_update: UpdateCallback | None = None,
        source: AsyncIterator[HealthDataPoint] | None = None,
    ) -> ObservationHandle | None:
        """Open a live feed for ``data_type``, superseding any existing one.

        ``source`` overrides the adapter subscription (the workout manager
        passes its active-workout feed here). Must be called from a running
        event loop.

        Returns:
            The new handle, or ``None`` if the platform cannot observe the
            type; an existing handle is left untouched in that case.

        Raises:
            AdapterError: If subscribing failed; an existing handle is kept.
            RuntimeError: If no event loop is running; nothing is subscribed
                or replaced.
        """
        asyncio.get_running_loop()
        if source is None:
            try:
                source = self._adapter.subscribe(data_type)
            except Exception as exc:
                raise AdapterError(
                    f"Failed to subscribe to {data_type.value}: {exc}"
                ) from exc
            if source is None:
                logger.info(
                    "%s cannot be observed on %s",
                    data_type.value, self._adapter.platform.value,
                )
                return None

        previous = self._handles.pop(data_type, None)
        if previous is not None:
            logger.debug("Superseding observation of %s", data_type.value)
            self._cancel(previous)

        history = self._history.get(data_type)
        if history is None:
            history = deque(maxlen=self._history_size)
            self._history[data_type] = history
        handle = ObservationHandle(
            data_type, source, history, on_update=on_update, on_finish=self._forget
        )
        self._handles[data_type] = handle
        handle._start()
        return handle

    def _forget(self, handle: ObservationHandle) -> None:
        if self._handles.get(handle.data_type) is handle:
            del self._handles[handle.data_type]

    def _cancel(self, handle: ObservationHandle) -> None:
        handle.cancel()
        self._closing = [h for h in self._closing if not h.source_closed]
        self._closing.append(handle)

    def stop_observing(self, data_type: HealthDataType) -> None:
        """Cancel the feed for ``data_type`` and drop its history. No-op if idle."""
        handle = self._handles.pop(data_type, None)
        if handle is not None:
            self._cancel(handle)
        self._history.pop(data_type, None)

    def stop_all(self) -> None:
        """Cancel every feed and clear all retained history."""
        for handle in list(self._handles.values()):
            self._cancel(handle)
        self._handles.clear()
        self._history.clear()

    async def aclose(self) -> None:
        """``stop_all`` and wait for every cancelled pump to finish."""
        self.stop_all()
        closing, self._closing = self._closing, []
        for handle in closing:
            await handle.wait_closed()

    def handle(self, data_type: HealthDataType) -> ObservationHandle | None:
        return self._handles.get(data_type)

    def is_observing(self, data_type: HealthDataType) -> bool:
        return data_type in self._handles

    @property
    def observed_types(self) -> frozenset[HealthDataType]:
        return frozenset(self._handles)

    def history(self, data_type: HealthDataType) -> list[HealthDataPoint]:
        """Retained points for ``data_type``, oldest first."""
        return list(self._history.get(data_type, ()))
