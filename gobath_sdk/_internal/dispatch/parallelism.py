"""Coalescing of identical in-flight requests."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class RequestRegistry:
    """In-flight operations keyed by request key.

    While a coalesced operation is pending, further calls with the same key
    await the same task instead of starting a new one. The entry is dropped
    as soon as the task settles, whatever the outcome, so the next call
    starts fresh.

    The registry belongs to one event loop. Lookup and insertion happen with
    no await in between, so no lock is needed under asyncio.
    """

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Task[Any]] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def keys(self) -> list[str]:
        return list(self._pending)

    async def run(
        self,
        key: str,
        coalesce: bool,
        fn: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run ``fn`` or join an identical operation already in flight.

        Args:
            key: Identity of the logical operation.
            coalesce: If False, ``fn`` always runs and the registry is untouched.
            fn: Zero-argument coroutine function performing the operation.

        Returns:
            The operation's result. Every joined caller gets the same value,
            or sees the same exception raised.
        """
        if not coalesce:
            return await fn()

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(fn())
            self._pending[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        # A cancelled waiter must not cancel the shared operation.
        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Future[Any]) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
