"""RelayLogger: the ingestion API handed to producers."""

from typing import Any, Protocol

from .config import DEFAULT_CONTAINER_NAME, DEFAULT_SERVICE_NAME
from .delivery import DeliveryStats, LifecycleController, RemoteState
from .formatting import normalize_raw_line, render_local
from .logging_config import get_logger
from .models import LogEvent, LogLevel
from .scheduling import IScheduler
from .sinks import ConsoleSink, ILocalSink, IRemoteSinkClient

logger = get_logger(__name__)


class IRelayLogger(Protocol):
    """Accepts log events from producers. Every call is infallible."""

    def info(self, message: str, source: str | None = None, details: Any = None) -> None:
        ...

    def warn(self, message: str, source: str | None = None, details: Any = None) -> None:
        ...

    def error(self, message: str, source: str | None = None, details: Any = None) -> None:
        ...

    def debug(self, message: str, source: str | None = None, details: Any = None) -> None:
        ...

    def success(self, message: str, source: str | None = None, details: Any = None) -> None:
        ...

    def ingest_raw_line(self, line: str) -> None:
        """Normalize and ingest an unstructured external log line."""
        ...


class RelayLogger:
    """Renders every event locally and forwards it to the remote sink when possible."""

    def __init__(
        self,
        local_sink: ILocalSink | None = None,
        scheduler: IScheduler | None = None,
        producer_name: str | None = DEFAULT_CONTAINER_NAME,
        service_name: str = DEFAULT_SERVICE_NAME,
        environment: str = "development",
    ):
        self._local = local_sink or ConsoleSink()
        self._producer_name = producer_name
        self._controller = LifecycleController(
            scheduler=scheduler,
            service_name=service_name,
            environment=environment,
        )

    # Ingestion

    def info(self, message: str, source: str | None = None, details: Any = None) -> None:
        self.log(LogLevel.INFO, message, source, details)

    def warn(self, message: str, source: str | None = None, details: Any = None) -> None:
        self.log(LogLevel.WARN, message, source, details)

    def error(self, message: str, source: str | None = None, details: Any = None) -> None:
        self.log(LogLevel.ERROR, message, source, details)

    def debug(self, message: str, source: str | None = None, details: Any = None) -> None:
        self.log(LogLevel.DEBUG, message, source, details)

    def success(self, message: str, source: str | None = None, details: Any = None) -> None:
        self.log(LogLevel.SUCCESS, message, source, details)

    def log(
        self,
        level: LogLevel | str,
        message: str,
        source: str | None = None,
        details: Any = None,
    ) -> None:
        """Build an event with a resolved timestamp and dispatch it."""
        self.emit(LogEvent.create(level, message, source=source, details=details))

    def ingest_raw_line(self, line: str) -> None:
        """Normalize a raw external line; blank lines are ignored."""
        event = normalize_raw_line(line, self._producer_name)
        if event is not None:
            self.emit(event)

    def emit(self, event: LogEvent) -> None:
        """Write locally, then hand the event to remote delivery."""
        try:
            self._local.write(render_local(event), event.details)
        except Exception as e:
            logger.error("Local sink failed: %s", e, exc_info=True)
        self._controller.submit(event)

    # Lifecycle

    def initialize(self, client: IRemoteSinkClient, destination_id: str) -> None:
        """Bind the remote sink and flush events logged before it was ready."""
        self._controller.initialize(client, destination_id)

    def disable_remote(self, reason: str) -> bool:
        """Keep logging local-only for the rest of the process."""
        return self._controller.disable(reason)

    async def send_startup_notice(self) -> None:
        await self._controller.send_startup_notice()

    async def send_shutdown_notice(self) -> None:
        await self._controller.send_shutdown_notice()

    async def aclose(self) -> None:
        await self._controller.aclose()

    # Introspection

    @property
    def controller(self) -> LifecycleController:
        return self._controller

    @property
    def remote_state(self) -> RemoteState:
        return self._controller.remote_state

    @property
    def enabled(self) -> bool:
        return self._controller.enabled

    @property
    def draining(self) -> bool:
        return self._controller.draining

    @property
    def queue_depth(self) -> int:
        return self._controller.queue_depth

    @property
    def stats(self) -> DeliveryStats:
        return self._controller.stats
