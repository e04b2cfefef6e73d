"""Pytest configuration and fixtures."""

import asyncio
import io
import sys
from pathlib import Path
from typing import Callable

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from logrelay.models import (  # noqa: E402
    Delivered,
    Destination,
    DestinationResolutionFailure,
    PlainUnit,
    RichUnit,
    TransientSendFailure,
)
from logrelay.scheduling import AsyncioScheduler  # noqa: E402


class FakeTimer:
    """Delayed callback registered on the virtual clock."""

    def __init__(self, when: float, delay: float, callback: Callable[[], None]):
        self.when = when
        self.delay = delay
        self.callback = callback
        self.fired = False
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class FakeScheduler(AsyncioScheduler):
    """Virtual clock: sleeps return at once, timers fire on advance()."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []
        self.timers: list[FakeTimer] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        await asyncio.sleep(0)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.fired and not t.cancelled()]

    def advance(self, seconds: float) -> None:
        """Move the clock forward and fire every timer that came due."""
        self.now += seconds
        due = sorted((t for t in self.pending if t.when <= self.now), key=lambda t: t.when)
        for timer in due:
            timer.fired = True
            timer.callback()


class FakeRemoteClient:
    """Scripted remote sink that records every call."""

    def __init__(self, resolve_failure: bool = False):
        self.resolve_failure = resolve_failure
        self.resolve_calls: list[str] = []
        self.attempts: list = []
        self.sent: list = []
        self.fail_on: set[int] = set()
        self.raise_on: set[int] = set()
        self.gate: asyncio.Event | None = None
        self.in_flight = 0
        self.max_in_flight = 0

    async def resolve_destination(self, destination_id: str):
        self.resolve_calls.append(destination_id)
        await asyncio.sleep(0)
        if self.resolve_failure:
            return DestinationResolutionFailure(destination_id, "channel is not a thread")
        return Destination(id=destination_id, name="logs")

    async def send(self, destination: Destination, unit):
        index = len(self.attempts)
        self.attempts.append(unit)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1

        if index in self.raise_on:
            raise RuntimeError("remote exploded")
        if index in self.fail_on:
            return TransientSendFailure("rate limited", retry_after=0.5)

        self.sent.append(unit)
        return Delivered(destination_id=destination.id)

    @property
    def sent_texts(self) -> list[str]:
        return [unit_text(unit) for unit in self.sent]


def unit_text(unit) -> str:
    """Main text of a rendered unit."""
    if isinstance(unit, PlainUnit):
        return unit.text
    if isinstance(unit, RichUnit):
        return unit.description
    raise TypeError(f"unexpected unit {unit!r}")


async def settle(rounds: int = 10) -> None:
    """Let ready tasks run a few steps."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def scheduler():
    """Create virtual-clock scheduler."""
    return FakeScheduler()


@pytest.fixture
def remote_client():
    """Create scripted remote sink client."""
    return FakeRemoteClient()


@pytest.fixture
def console_stream():
    """In-memory stream standing in for the terminal."""
    return io.StringIO()


@pytest.fixture
def console(console_stream):
    """Create console sink writing to memory."""
    from logrelay.sinks import ConsoleSink

    return ConsoleSink(console_stream)


@pytest.fixture
def controller(scheduler):
    """Create LifecycleController on the virtual clock."""
    from logrelay.delivery import LifecycleController

    return LifecycleController(scheduler=scheduler, service_name="Test Relay")


@pytest.fixture
def relay(console, scheduler):
    """Create RelayLogger with in-memory console and virtual clock."""
    from logrelay.relay import RelayLogger

    return RelayLogger(
        local_sink=console,
        scheduler=scheduler,
        producer_name="app",
        service_name="Test Relay",
        environment="test",
    )
