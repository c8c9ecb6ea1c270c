"""Sequential step runner with explicit cancellation.

Every asynchronous traversal (listing, walking, finding, deleting) is a
chain of "do one filesystem step, then continue". A CancellableSequencer
runs those steps one at a time, keeps a handle on the single step in
flight, and records whether the traversal is still running, finished
normally, was cancelled, or failed.

A sequencer belongs to exactly one traversal and is never shared.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import TypeVar

from treefs.filesystem.errors import TraversalCancelledError, TraversalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorConsumer = Callable[[BaseException], None]


class TraversalState(str, Enum):
    """Lifecycle state of a traversal.

    Attributes:
        RUNNING: Steps may still be scheduled.
        COMPLETED: The traversal finished normally.
        CANCELLED: The consumer stopped the traversal.
        FAILED: A step raised and the traversal was aborted.
    """

    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


def _discard(step: Awaitable[object]) -> None:
    """Drop a step that will never run, without a never-awaited warning."""
    if inspect.iscoroutine(step):
        step.close()


class CancellableSequencer:
    """Runs asynchronous steps strictly one after another.

    Before step N+1 starts, step N has finished (successfully or not).
    ``cancel()`` disarms the step in flight so that nothing it produces
    is delivered afterwards.

    Args:
        on_error: Optional consumer that receives the error passed to
            ``fail()``. Without one, ``fail()`` raises.
    """

    def __init__(self, on_error: ErrorConsumer | None = None) -> None:
        self._state = TraversalState.RUNNING
        self._in_flight: asyncio.Future[object] | None = None
        self._on_error = on_error
        self._error: BaseException | None = None

    @property
    def state(self) -> TraversalState:
        return self._state

    @property
    def error(self) -> BaseException | None:
        """Error that moved the sequencer to FAILED, if any."""
        return self._error

    @property
    def in_flight(self) -> bool:
        """Whether a step is currently tracked and unfinished."""
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def running(self) -> bool:
        return self._state is TraversalState.RUNNING

    def attach(self, on_error: ErrorConsumer) -> None:
        """Attach the consumer that ``fail()`` forwards errors to."""
        self._on_error = on_error

    def detach(self) -> None:
        """Detach the error consumer; later failures are raised instead."""
        self._on_error = None

    async def run_next(self, step: Awaitable[T]) -> T:
        """Run one step and return its result.

        The step becomes the tracked in-flight operation, replacing any
        previously tracked handle.

        Args:
            step: Awaitable performing a single filesystem operation.

        Returns:
            The step's result.

        Raises:
            TraversalCancelledError: If the sequencer is not running, or the
                step was cancelled through ``cancel()``.
            asyncio.CancelledError: If the enclosing task was cancelled.
        """
        if self._state is not TraversalState.RUNNING:
            _discard(step)
            raise TraversalCancelledError()

        self._clear_in_flight()
        task: asyncio.Future[T] = asyncio.ensure_future(step)
        self._in_flight = task
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                # The caller's own task is being cancelled: stop here too.
                self._mark_cancelled()
                raise
            if self._state is TraversalState.CANCELLED:
                raise TraversalCancelledError() from None
            raise
        finally:
            if self._in_flight is task:
                self._in_flight = None

    def cancel(self) -> None:
        """Cancel the in-flight step and stop the traversal.

        Idempotent. A traversal that already completed or failed keeps
        its state.
        """
        self._clear_in_flight()
        self._mark_cancelled()

    def complete(self) -> None:
        """Mark a running traversal as finished normally."""
        if self._state is TraversalState.RUNNING:
            self._state = TraversalState.COMPLETED

    def fail(self, error: BaseException) -> None:
        """Abort the traversal with ``error``.

        Cancels any in-flight step, then hands the error to the attached
        consumer. With no consumer attached the error is raised so it is
        never silently dropped.

        Args:
            error: The error that ends the traversal.

        Raises:
            BaseException: ``error`` itself, when no consumer is attached.
        """
        self._clear_in_flight()
        if self._state is TraversalState.RUNNING:
            self._state = TraversalState.FAILED
            self._error = error
        consumer = self._on_error
        if consumer is not None:
            consumer(error)
            return
        raise error

    @contextmanager
    def guard(self) -> Iterator[None]:
        """Route traversal errors raised inside the block through ``fail()``.

        The error still propagates to the code awaiting the block.
        """
        try:
            yield
        except TraversalCancelledError:
            raise
        except TraversalError as e:
            self.fail(e)
            raise

    def _mark_cancelled(self) -> None:
        if self._state is TraversalState.RUNNING:
            logger.debug("Traversal cancelled")
            self._state = TraversalState.CANCELLED

    def _clear_in_flight(self) -> None:
        task = self._in_flight
        self._in_flight = None
        if task is not None and not task.done():
            task.cancel()
