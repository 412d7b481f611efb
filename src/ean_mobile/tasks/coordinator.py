"""Latest-request-wins coordination of asynchronous lookups.

A :class:`RequestCoordinator` tracks at most one request. Starting a new one
cancels the previous request without waiting for it, and a finishing request
only delivers its result when it is still the tracked one. Results are
delivered on the event loop that started the request, so callbacks never race
with each other.
"""
from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
ResultT = TypeVar("ResultT")


class RequestState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class CancellationToken:
    """Cooperative cancellation flag handed to each unit of work."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise asyncio.CancelledError()


class TrackedRequest(Generic[ResultT]):
    """Handle for a single started request."""

    def __init__(self, request_id: int, loop: asyncio.AbstractEventLoop) -> None:
        self.request_id = request_id
        self.token = CancellationToken()
        self.state = RequestState.RUNNING
        self._loop = loop
        self._task: Optional[asyncio.Task[None]] = None

    def __repr__(self) -> str:
        return f"TrackedRequest(id={self.request_id}, state={self.state.value})"

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        """Wait until the unit of work has finished, whatever its outcome."""
        if self._task is not None:
            await asyncio.wait({self._task})

    def _attach(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def _signal_cancel(self) -> None:
        self.token.cancel()
        task = self._task
        if task is None or task.done():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            task.cancel()
        else:
            self._loop.call_soon_threadsafe(task.cancel)


class RequestCoordinator(Generic[InputT, ResultT]):
    """Runs ``work`` for the newest input only and hands its result to ``on_result``."""

    def __init__(
        self,
        work: Callable[[InputT, CancellationToken], Awaitable[ResultT]],
        on_result: Callable[[ResultT], None],
        *,
        on_error: Optional[Callable[[Exception], None]] = None,
        name: str = "request",
    ) -> None:
        self._work = work
        self._on_result = on_result
        self._on_error = on_error
        self._name = name
        self._lock = threading.Lock()
        self._current: Optional[TrackedRequest[ResultT]] = None
        self._ids = itertools.count(1)

    @property
    def current(self) -> Optional[TrackedRequest[ResultT]]:
        return self._current

    @property
    def is_idle(self) -> bool:
        return self._current is None

    def start(self, value: InputT) -> TrackedRequest[ResultT]:
        """Supersede any running request and start a new one for ``value``.

        Must be called from the event loop that should receive the results.
        """
        loop = asyncio.get_running_loop()
        with self._lock:
            previous = self._current
            request: TrackedRequest[ResultT] = TrackedRequest(next(self._ids), loop)
            self._current = request
            superseded = previous is not None and previous.state is RequestState.RUNNING
            if superseded:
                previous.state = RequestState.CANCELLED
        if superseded:
            logger.debug("%s %s superseded by %s", self._name, previous.request_id, request.request_id)
            previous._signal_cancel()
        task = loop.create_task(self._run(request, value), name=f"{self._name}-{request.request_id}")
        request._attach(task)
        return request

    def kill_current(self) -> bool:
        """Cancel the tracked request, if any is running. Safe to call from any thread."""
        with self._lock:
            request = self._current
            self._current = None
            if request is None or request.state is not RequestState.RUNNING:
                return False
            request.state = RequestState.CANCELLED
        logger.debug("Killing %s %s", self._name, request.request_id)
        request._signal_cancel()
        return True

    def _retire(self, request: TrackedRequest[ResultT], state: RequestState) -> bool:
        """Drop ``request`` from tracking; True when it was still current and uncancelled."""
        with self._lock:
            is_current = self._current is request
            if is_current:
                self._current = None
            deliverable = is_current and not request.token.cancelled
            if request.state is RequestState.RUNNING:
                request.state = state if deliverable else RequestState.CANCELLED
            return deliverable

    async def _run(self, request: TrackedRequest[ResultT], value: InputT) -> None:
        try:
            result = await self._work(value, request.token)
        except asyncio.CancelledError:
            self._retire(request, RequestState.CANCELLED)
            raise
        except Exception as exc:
            if not self._retire(request, RequestState.FAILED):
                logger.debug("Ignoring failure of stale %s %s: %s", self._name, request.request_id, exc)
                return
            if self._on_error is None:
                logger.exception("%s %s failed", self._name, request.request_id)
                return
            try:
                self._on_error(exc)
            except Exception:
                logger.exception("%s %s error handler failed", self._name, request.request_id)
            return

        if not self._retire(request, RequestState.COMPLETED):
            logger.debug("Discarding stale result of %s %s", self._name, request.request_id)
            return
        try:
            self._on_result(result)
        except Exception:
            logger.exception("%s %s result handler failed", self._name, request.request_id)
