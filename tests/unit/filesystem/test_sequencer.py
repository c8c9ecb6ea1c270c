"""Unit tests for CancellableSequencer."""

import asyncio

import pytest
from treefs.filesystem.errors import TraversalCancelledError, TraversalError, TraversalIOError
from treefs.filesystem.sequencer import CancellableSequencer, TraversalState


async def _value(value: int) -> int:
    return value


class TestRunNext:
    """Tests for running steps."""

    @pytest.mark.asyncio
    async def test_returns_step_result(self) -> None:
        seq = CancellableSequencer()

        assert await seq.run_next(_value(7)) == 7
        assert seq.state is TraversalState.RUNNING
        assert not seq.in_flight

    @pytest.mark.asyncio
    async def test_steps_run_in_order(self) -> None:
        seq = CancellableSequencer()
        seen: list[int] = []

        async def record(n: int) -> None:
            await asyncio.sleep(0)
            seen.append(n)

        for n in range(5):
            await seq.run_next(record(n))

        assert seen == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_step_errors_propagate(self) -> None:
        seq = CancellableSequencer()

        async def boom() -> None:
            raise FileNotFoundError(2, "gone")

        with pytest.raises(FileNotFoundError):
            await seq.run_next(boom())
        assert seq.state is TraversalState.RUNNING

    @pytest.mark.asyncio
    async def test_refuses_after_cancel(self) -> None:
        seq = CancellableSequencer()
        seq.cancel()
        step = _value(1)

        with pytest.raises(TraversalCancelledError):
            await seq.run_next(step)
        # The refused coroutine was closed, not left pending.
        assert step.cr_frame is None

    @pytest.mark.asyncio
    async def test_refuses_after_complete(self) -> None:
        seq = CancellableSequencer()
        seq.complete()

        with pytest.raises(TraversalCancelledError):
            await seq.run_next(_value(1))


class TestCancel:
    """Tests for cancellation."""

    def test_cancel_is_idempotent(self) -> None:
        seq = CancellableSequencer()

        seq.cancel()
        seq.cancel()

        assert seq.state is TraversalState.CANCELLED

    def test_cancel_keeps_completed_state(self) -> None:
        seq = CancellableSequencer()
        seq.complete()

        seq.cancel()

        assert seq.state is TraversalState.COMPLETED

    def test_complete_after_cancel_is_ignored(self) -> None:
        seq = CancellableSequencer()
        seq.cancel()

        seq.complete()

        assert seq.state is TraversalState.CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_disarms_in_flight_step(self) -> None:
        seq = CancellableSequencer()
        started = asyncio.Event()

        async def slow() -> str:
            started.set()
            await asyncio.sleep(10)
            return "late"

        runner = asyncio.create_task(seq.run_next(slow()))
        await started.wait()
        assert seq.in_flight

        seq.cancel()

        with pytest.raises(TraversalCancelledError):
            await runner
        assert seq.state is TraversalState.CANCELLED
        assert not seq.in_flight

    @pytest.mark.asyncio
    async def test_cancelling_the_caller_cancels_traversal(self) -> None:
        seq = CancellableSequencer()
        started = asyncio.Event()

        async def slow() -> None:
            started.set()
            await asyncio.sleep(10)

        runner = asyncio.create_task(seq.run_next(slow()))
        await started.wait()

        runner.cancel()

        with pytest.raises(asyncio.CancelledError):
            await runner
        assert seq.state is TraversalState.CANCELLED


class TestFail:
    """Tests for failure reporting."""

    def test_fail_without_consumer_raises(self) -> None:
        seq = CancellableSequencer()
        error = TraversalError("bad", "/x")

        with pytest.raises(TraversalError, match="bad"):
            seq.fail(error)

        assert seq.state is TraversalState.FAILED
        assert seq.error is error

    def test_fail_with_consumer_delivers(self) -> None:
        received: list[BaseException] = []
        seq = CancellableSequencer(on_error=received.append)
        error = TraversalError("bad")

        seq.fail(error)

        assert received == [error]
        assert seq.state is TraversalState.FAILED

    def test_detached_consumer_no_longer_receives(self) -> None:
        received: list[BaseException] = []
        seq = CancellableSequencer()
        seq.attach(received.append)
        seq.detach()

        with pytest.raises(TraversalError):
            seq.fail(TraversalError("bad"))
        assert received == []

    def test_fail_after_cancel_keeps_cancelled(self) -> None:
        received: list[BaseException] = []
        seq = CancellableSequencer(on_error=received.append)
        seq.cancel()

        seq.fail(TraversalError("late"))

        assert seq.state is TraversalState.CANCELLED
        assert seq.error is None


class TestGuard:
    """Tests for the guard context manager."""

    def test_routes_traversal_errors_through_fail(self) -> None:
        received: list[BaseException] = []
        seq = CancellableSequencer(on_error=received.append)
        error = TraversalIOError("/x", PermissionError(13, "Permission denied"))

        with pytest.raises(TraversalIOError), seq.guard():
            raise error

        assert received == [error]
        assert seq.state is TraversalState.FAILED

    def test_cancellation_passes_through(self) -> None:
        seq = CancellableSequencer()
        seq.cancel()

        with pytest.raises(TraversalCancelledError), seq.guard():
            raise TraversalCancelledError()

        assert seq.state is TraversalState.CANCELLED

    def test_other_errors_untouched(self) -> None:
        seq = CancellableSequencer()

        with pytest.raises(KeyError), seq.guard():
            raise KeyError("x")

        assert seq.state is TraversalState.RUNNING
