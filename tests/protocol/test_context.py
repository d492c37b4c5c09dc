"""Tests for CallContext cancellation and deadlines."""

from __future__ import annotations

import asyncio

import pytest

from olm_mcp.protocol.context import CallContext, OperationCancelledError


class _Probe:
    """Records whether a slow call started and whether it was cancelled."""

    def __init__(self) -> None:
        self.started = False
        self.cancelled = False

    async def slow(self, delay: float = 10.0) -> str:
        self.started = True
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return "done"


class TestCallContext:
    async def test_returns_result(self) -> None:
        probe = _Probe()
        assert await CallContext().run(probe.slow(0)) == "done"
        assert probe.cancelled is False

    async def test_timeout_abandons_call(self) -> None:
        probe = _Probe()
        with pytest.raises(OperationCancelledError) as exc_info:
            await CallContext(timeout=0.01).run(probe.slow())
        assert exc_info.value.timed_out is True
        assert str(exc_info.value) == "Request timed out"
        assert probe.cancelled is True

    async def test_cancel_abandons_call(self) -> None:
        probe = _Probe()
        ctx = CallContext()
        task = asyncio.ensure_future(ctx.run(probe.slow()))
        await asyncio.sleep(0.01)
        ctx.cancel()
        with pytest.raises(OperationCancelledError) as exc_info:
            await task
        assert exc_info.value.reason == "canceled"
        assert exc_info.value.timed_out is False
        assert probe.cancelled is True
        assert ctx.cancelled is True

    async def test_already_cancelled_never_starts(self) -> None:
        probe = _Probe()
        ctx = CallContext()
        ctx.cancel()
        with pytest.raises(OperationCancelledError, match="canceled"):
            await ctx.run(probe.slow())
        assert probe.started is False

    async def test_outer_cancellation_propagates(self) -> None:
        probe = _Probe()
        task = asyncio.ensure_future(CallContext().run(probe.slow()))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert probe.cancelled is True

    async def test_exception_passes_through(self) -> None:
        async def boom() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await CallContext(timeout=1).run(boom())
