"""Async debounce helper used by the suggestion widget."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

DEFAULT_DELAY = 0.3


class Debouncer:
    """Restartable single-shot deferred call.

    Each ``submit`` supersedes a call that is still waiting out its delay. Once
    a call has started it is no longer cancellable and runs to completion;
    started calls are serialised so only one is ever in flight.
    """

    def __init__(self, delay: float = DEFAULT_DELAY) -> None:
        self._delay = delay
        self._task: asyncio.Task[Any] | None = None
        self._started: set[asyncio.Task[Any]] = set()
        self._gate = asyncio.Lock()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a submitted call is waiting for its delay to elapse."""

        return self._task is not None and not self._task.done()

    @property
    def busy(self) -> bool:
        """True while a started call has not finished yet."""

        return bool(self._started)

    def submit(self, callback: Callable[[], Awaitable[Any] | Any]) -> None:
        """Schedule a call, cancelling any invocation that has not started."""

        self.cancel()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._runner(callback))

    def cancel(self) -> None:
        """Cancel the pending invocation, if any."""

        if self._task:
            self._task.cancel()
            self._task = None

    async def _runner(self, callback: Callable[[], Awaitable[Any] | Any]) -> None:
        try:
            await asyncio.sleep(self._delay)
        except asyncio.CancelledError:
            return
        task = asyncio.current_task()
        if task is not None:
            if self._task is task:
                self._task = None
            self._started.add(task)
        try:
            async with self._gate:
                result = callback()
                if inspect.isawaitable(result):
                    await result
        finally:
            self._started.discard(task)  # type: ignore[arg-type]


__all__ = ["DEFAULT_DELAY", "Debouncer"]
