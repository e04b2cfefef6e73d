"""QueueDrainer implementation."""

import asyncio
from enum import Enum

from ..formatting import render_remote
from ..logging_config import get_logger
from ..models import (
    Destination,
    DestinationResolutionFailure,
    LogEvent,
    TransientSendFailure,
)
from ..scheduling import IScheduledHandle, IScheduler
from ..sinks.remote import IRemoteSinkClient
from .queue import DeliveryQueue
from .state import DeliveryState

logger = get_logger(__name__)

BATCH_SIZE = 5
PACING_INTERVAL = 0.1  # seconds between sends within a batch
BACKOFF_DELAY = 1.0  # seconds before the next pass when work remains


class DrainState(str, Enum):
    """Re-entrancy guard for drain passes."""

    IDLE = "idle"
    DRAINING = "draining"


class QueueDrainer:
    """Moves queued events to the remote sink in paced batches.

    At most one pass runs at a time. The IDLE -> DRAINING transition happens
    synchronously inside trigger(), with no suspension point between the
    check and the set, so bursts of enqueues cannot start a second pass.
    """

    def __init__(
        self,
        queue: DeliveryQueue,
        state: DeliveryState,
        scheduler: IScheduler,
    ):
        self._queue = queue
        self._state = state
        self._scheduler = scheduler
        self._drain_state = DrainState.IDLE
        self._task: asyncio.Task | None = None
        self._backoff: IScheduledHandle | None = None

    @property
    def drain_state(self) -> DrainState:
        return self._drain_state

    @property
    def draining(self) -> bool:
        return self._drain_state is DrainState.DRAINING

    @property
    def backoff_pending(self) -> bool:
        return self._backoff is not None

    def trigger(self) -> None:
        """Start a pass if idle, enabled and there is pending work."""
        if (
            self._drain_state is DrainState.DRAINING
            or not self._state.enabled
            or self._queue.is_empty()
        ):
            return

        # A pass started now supersedes any scheduled backoff pass
        self._cancel_backoff()
        self._drain_state = DrainState.DRAINING

        task = self._scheduler.spawn(self._run_pass())
        if task is None:
            # No running loop yet; events stay queued for a later trigger
            self._drain_state = DrainState.IDLE
            return
        self._task = task

    async def wait_idle(self) -> None:
        """Wait for the in-flight pass, if any, to finish."""
        task = self._task
        if task is not None and not task.done():
            await task

    def disable(self, reason: str) -> bool:
        """Permanently stop remote delivery and drop pending events."""
        if not self._state.disable():
            return False

        self._cancel_backoff()
        dropped = self._queue.clear()
        self._state.stats.dropped += dropped
        logger.error(
            "Remote log delivery disabled: %s (%d queued events dropped)",
            reason,
            dropped,
        )
        return True

    async def aclose(self) -> None:
        """Cancel the backoff timer and let an in-flight pass complete."""
        self._cancel_backoff()
        await self.wait_idle()

    async def _run_pass(self) -> None:
        try:
            await self._deliver_batch()
        finally:
            self._drain_state = DrainState.IDLE
            self._task = None
            self._schedule_backoff()

    async def _deliver_batch(self) -> None:
        client = self._state.client
        destination_id = self._state.destination_id
        if client is None or destination_id is None:
            return

        destination = await self._resolve(client, destination_id)
        if destination is None:
            return

        batch = self._queue.take(BATCH_SIZE)
        for index, event in enumerate(batch):
            if not self._state.enabled:
                self._state.stats.dropped += len(batch) - index
                return
            await self._deliver(client, destination, event)
            await self._scheduler.sleep(PACING_INTERVAL)

    async def _resolve(
        self, client: IRemoteSinkClient, destination_id: str
    ) -> Destination | None:
        try:
            outcome = await client.resolve_destination(destination_id)
        except Exception as e:
            outcome = DestinationResolutionFailure(destination_id, f"resolver raised {e!r}")

        if isinstance(outcome, DestinationResolutionFailure):
            self.disable(f"destination {outcome.destination_id} unusable: {outcome.reason}")
            return None
        return outcome

    async def _deliver(
        self,
        client: IRemoteSinkClient,
        destination: Destination,
        event: LogEvent,
    ) -> None:
        stats = self._state.stats
        context = {"level": event.level.value, "source": event.source}
        try:
            outcome = await client.send(destination, render_remote(event))
        except Exception as e:
            stats.failed += 1
            logger.error(
                "Remote sink raised while sending: %s",
                e,
                exc_info=True,
                extra={"context": context},
            )
            return

        if isinstance(outcome, TransientSendFailure):
            stats.failed += 1
            context["retry_after"] = outcome.retry_after
            logger.warning(
                "Failed to deliver %s event to remote sink: %s",
                event.level.value,
                outcome.reason,
                extra={"context": context},
            )
            return

        stats.delivered += 1

    def _schedule_backoff(self) -> None:
        if self._backoff is not None or self._queue.is_empty() or not self._state.enabled:
            return
        self._backoff = self._scheduler.call_later(BACKOFF_DELAY, self._on_backoff)

    def _on_backoff(self) -> None:
        self._backoff = None
        self.trigger()

    def _cancel_backoff(self) -> None:
        if self._backoff is not None:
            self._backoff.cancel()
            self._backoff = None
