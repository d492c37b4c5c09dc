"""Per-call cancellation token.

A :class:`CallContext` travels from the transport through the dispatcher
into the handler and wraps the outbound call to the cluster.  Cancelling it,
or running past its deadline, abandons the outbound call.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class OperationCancelledError(Exception):
    """The outbound call was abandoned before it completed."""

    def __init__(self, reason: str = "canceled") -> None:
        self.reason = reason
        super().__init__(f"Request {reason}")

    @property
    def timed_out(self) -> bool:
        return self.reason == "timed out"


class CallContext:
    """Cancellation and deadline for a single request."""

    def __init__(self, *, timeout: float | None = None) -> None:
        self.timeout = timeout
        self._cancelled = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Abandon whatever call is currently running under this context."""
        self._cancelled.set()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable* unless the context is cancelled or times out first.

        Raises:
            OperationCancelledError: The call was cancelled or timed out.  The
                underlying task is cancelled and awaited before raising.
        """
        task: asyncio.Future[T] = asyncio.ensure_future(awaitable)
        if self.cancelled:
            await _abandon(task)
            raise OperationCancelledError("canceled")

        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            await _abandon(task)
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        await _abandon(task)
        raise OperationCancelledError("canceled" if waiter in done else "timed out")


async def _abandon(task: asyncio.Future[object]) -> None:
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
