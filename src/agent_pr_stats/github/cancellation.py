"""Cooperative cancellation for in-flight GitHub requests.

A CancellationToken is passed down through every transport call. Cancelling
it aborts the awaited network operation (not merely its result), so a
superseded request stops consuming quota.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from .exceptions import RequestCancelledError

T = TypeVar("T")


class CancellationToken:
    """Signal shared between a request and whoever may abandon it.

    Usage:
        token = CancellationToken()
        data = await token.guard(transport_call())  # raises if cancelled

        # elsewhere
        token.cancel("superseded")
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """Reason passed to cancel(), if any."""
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Cancel the token. Idempotent; the first reason wins."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise RequestCancelledError if the token is cancelled."""
        if self._event.is_set():
            raise RequestCancelledError(self._reason or "cancelled")

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await `awaitable`, aborting it if the token is cancelled first.

        Args:
            awaitable: The network operation to run

        Returns:
            The awaitable's result

        Raises:
            RequestCancelledError: If the token was or becomes cancelled
        """
        if self._event.is_set():
            # Close an unstarted coroutine so it does not warn on GC
            close = getattr(awaitable, "close", None)
            if close is not None:
                close()
            self.raise_if_cancelled()

        task: asyncio.Future[T] = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        raise RequestCancelledError(self._reason or "cancelled")


async def run_cancellable(awaitable: Awaitable[T], cancel_token: CancellationToken | None) -> T:
    """Await `awaitable` under `cancel_token`, or plainly when there is none."""
    if cancel_token is None:
        return await awaitable
    return await cancel_token.guard(awaitable)
