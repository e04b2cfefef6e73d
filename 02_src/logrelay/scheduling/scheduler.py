"""Injectable time and task scheduling."""

import asyncio
from typing import Any, Callable, Coroutine, Protocol


class IScheduledHandle(Protocol):
    """A pending delayed callback."""

    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class IScheduler(Protocol):
    """Clock and task source for the delivery pipeline."""

    async def sleep(self, seconds: float) -> None:
        """Suspend the current task."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> IScheduledHandle:
        """Run a plain callback after delay seconds."""
        ...

    def spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task | None:
        """Start a background task; None when no event loop is running."""
        ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)

    def spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            return None
        return loop.create_task(coro)
