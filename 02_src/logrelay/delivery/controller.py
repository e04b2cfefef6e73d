"""LifecycleController implementation."""

from ..config import DEFAULT_SERVICE_NAME
from ..formatting import render_shutdown_notice, render_startup_notice
from ..logging_config import get_logger
from ..models import DestinationResolutionFailure, LogEvent, RichUnit, TransientSendFailure
from ..scheduling import AsyncioScheduler, IScheduler
from ..sinks.remote import IRemoteSinkClient
from .drainer import QueueDrainer
from .queue import DeliveryQueue
from .state import DeliveryState, DeliveryStats, RemoteState

logger = get_logger(__name__)

SHUTDOWN_GRACE_PERIOD = 1.0  # seconds


class LifecycleController:
    """Owns the delivery queue, the remote handle and start/stop notices."""

    def __init__(
        self,
        scheduler: IScheduler | None = None,
        service_name: str = DEFAULT_SERVICE_NAME,
        environment: str = "development",
    ):
        self._scheduler = scheduler or AsyncioScheduler()
        self._service_name = service_name
        self._environment = environment

        self._queue = DeliveryQueue()
        self._state = DeliveryState()
        self._drainer = QueueDrainer(self._queue, self._state, self._scheduler)

    @property
    def remote_state(self) -> RemoteState:
        return self._state.remote

    @property
    def enabled(self) -> bool:
        return self._state.enabled

    @property
    def draining(self) -> bool:
        return self._drainer.draining

    @property
    def queue_depth(self) -> int:
        return len(self._queue)

    @property
    def stats(self) -> DeliveryStats:
        return self._state.stats

    @property
    def drainer(self) -> QueueDrainer:
        return self._drainer

    def submit(self, event: LogEvent) -> None:
        """Queue an event for the remote sink. Never blocks, never raises."""
        if not self._state.accepting:
            self._state.stats.dropped += 1
            return

        self._queue.push(event)
        self._drainer.trigger()

    def initialize(self, client: IRemoteSinkClient, destination_id: str) -> None:
        """Bind the remote client and flush anything queued so far."""
        if not self._state.bind(client, destination_id):
            logger.warning("Ignoring remote initialization: delivery is disabled")
            return

        logger.info(
            "Remote log delivery initialized for destination %s (%d queued)",
            destination_id,
            len(self._queue),
        )
        self._drainer.trigger()

    def disable(self, reason: str) -> bool:
        """Turn remote delivery off for the rest of the process lifetime."""
        return self._drainer.disable(reason)

    async def send_startup_notice(self) -> None:
        """Best-effort rich notice that the service is up."""
        await self._send_notice(
            render_startup_notice(self._service_name, self._environment)
        )

    async def send_shutdown_notice(self) -> None:
        """Best-effort rich notice, then a short grace period before exit."""
        attempted = await self._send_notice(render_shutdown_notice(self._service_name))
        if attempted:
            await self._scheduler.sleep(SHUTDOWN_GRACE_PERIOD)

    async def aclose(self) -> None:
        """Stop scheduling passes; pending events may be dropped."""
        await self._drainer.aclose()
        if len(self._queue):
            logger.info("Closing with %d undelivered events", len(self._queue))

    async def _send_notice(self, unit: RichUnit) -> bool:
        """Resolve and send out of band. True when a send was attempted."""
        client = self._state.client
        destination_id = self._state.destination_id
        if not self._state.enabled or client is None or destination_id is None:
            return False

        try:
            destination = await client.resolve_destination(destination_id)
        except Exception as e:
            logger.warning("Notice skipped, resolver raised: %s", e, exc_info=True)
            return False

        if isinstance(destination, DestinationResolutionFailure):
            logger.warning("Notice skipped: %s", destination.reason)
            return False

        try:
            outcome = await client.send(destination, unit)
        except Exception as e:
            logger.warning("Notice send raised: %s", e, exc_info=True)
            return True

        if isinstance(outcome, TransientSendFailure):
            logger.warning("Notice not delivered: %s", outcome.reason)
        return True
