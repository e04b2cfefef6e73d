"""Application bootstrap and lifecycle management."""

import asyncio
from typing import Any, Protocol

from .config import RelaySettings
from .forwarder import DockerLogForwarder
from .logging_config import get_logger
from .relay import RelayLogger
from .scheduling import AsyncioScheduler, IScheduler
from .sinks import DiscordClient, ILocalSink, IRemoteSinkClient

logger = get_logger(__name__)

APP_SOURCE = "Log Relay"


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    @property
    def relay(self) -> RelayLogger:
        """The relay handed to producers."""
        ...

    async def start(self) -> None:
        """Bring up remote delivery and optional forwarding."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: RelaySettings | None = None,
        remote_client: IRemoteSinkClient | None = None,
        local_sink: ILocalSink | None = None,
        scheduler: IScheduler | None = None,
    ):
        self._settings = settings or RelaySettings.from_env()
        self._scheduler = scheduler or AsyncioScheduler()
        self._remote_client = remote_client
        self._owned_client: DiscordClient | None = None
        self._forwarder: DockerLogForwarder | None = None
        self._started = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._previous_handler = None
        self._started = False

        # The relay exists before start() so producers can log early;
        # those events queue until remote delivery is initialized.
        self._relay = RelayLogger(
            local_sink=local_sink,
            scheduler=self._scheduler,
            producer_name=self._settings.container_name,
            service_name=self._settings.service_name,
            environment=self._settings.environment,
        )

    async def start(self) -> None:
        """Initialize components in dependency order."""
        if self._started:
            return
        logger.info("Starting application")

        self._install_exception_handler()

        # 1. Remote sink (injected client wins over configured credentials)
        client = self._remote_client
        if client is None and self._settings.remote_configured:
            self._owned_client = DiscordClient(self._settings.discord_token)
            client = self._owned_client

        # 2. Remote delivery
        if client is not None and self._settings.thread_id:
            self._relay.initialize(client, self._settings.thread_id)
            await self._relay.send_startup_notice()
            logger.info("Remote delivery initialized")
        else:
            self._relay.disable_remote("remote sink not configured")

        self._relay.info(f"{self._settings.service_name} started successfully", APP_SOURCE)

        # 3. Docker log forwarder (depends on the relay)
        if self._settings.forward_docker_logs:
            self._forwarder = DockerLogForwarder(
                relay=self._relay,
                container_name=self._settings.container_name,
                scheduler=self._scheduler,
            )
            await self._forwarder.start()
            logger.info("Docker log forwarder started")

        self._started = True
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._forwarder:
            await self._forwarder.stop()
            logger.info("Docker log forwarder stopped")

        if self._started:
            await self._relay.send_shutdown_notice()
            self._relay.info(f"{self._settings.service_name} shutting down", APP_SOURCE)

        await self._relay.aclose()
        self._restore_exception_handler()

        if self._owned_client:
            await self._owned_client.aclose()
            self._owned_client = None
            logger.info("Remote client closed")

        self._started = False

    def _install_exception_handler(self) -> None:
        """Route uncaught loop errors into the relay."""
        self._loop = asyncio.get_running_loop()
        self._previous_handler = self._loop.get_exception_handler()
        self._loop.set_exception_handler(self._handle_loop_exception)

    def _restore_exception_handler(self) -> None:
        if self._loop is not None:
            self._loop.set_exception_handler(self._previous_handler)
            self._loop = None
            self._previous_handler = None

    def _handle_loop_exception(
        self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        message = context.get("message") or "Unhandled exception in event loop"
        exception = context.get("exception")
        details = {"message": message}
        if exception is not None:
            details["exception"] = repr(exception)

        self._relay.error(f"Uncaught exception: {exception or message}", APP_SOURCE, details)

        if self._previous_handler is not None:
            self._previous_handler(loop, context)
        else:
            loop.default_exception_handler(context)

    @property
    def settings(self) -> RelaySettings:
        """Get settings."""
        return self._settings

    @property
    def relay(self) -> RelayLogger:
        """Get relay instance."""
        return self._relay

    @property
    def forwarder(self) -> DockerLogForwarder:
        """Get Docker log forwarder instance."""
        if not self._forwarder:
            raise RuntimeError("Application not started with Docker log forwarding")
        return self._forwarder
