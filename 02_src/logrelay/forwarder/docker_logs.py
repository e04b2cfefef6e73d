"""Docker log forwarder: follows a container's logs into the relay."""

import asyncio
from typing import Callable, Protocol

from ..logging_config import get_logger
from ..relay import IRelayLogger
from ..scheduling import AsyncioScheduler, IScheduler

logger = get_logger(__name__)

FORWARDER_SOURCE = "Log Forwarder"
STDERR_SOURCE = "Docker"

# Generous line limit; container output can carry long stack traces
STREAM_LIMIT = 1024 * 1024


class IDockerLogForwarder(Protocol):
    """Streams an external container's output into the relay."""

    async def start(self) -> None:
        """Wait for the container, then follow its logs in the background."""
        ...

    async def stop(self) -> None:
        """Stop following and kill the docker process."""
        ...


class DockerLogForwarder:
    """Follows `docker logs -f` for one container."""

    def __init__(
        self,
        relay: IRelayLogger,
        container_name: str,
        scheduler: IScheduler | None = None,
        tail: int = 100,
        poll_interval: float = 5.0,
        restart_delay: float = 5.0,
    ):
        self._relay = relay
        self._container_name = container_name
        self._scheduler = scheduler or AsyncioScheduler()
        self._tail = tail
        self._poll_interval = poll_interval
        self._restart_delay = restart_delay

        self._running = False
        self._task: asyncio.Task | None = None
        self._process: asyncio.subprocess.Process | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start monitoring in a background task."""
        if self._running:
            return

        self._running = True
        logger.info("Starting Docker log monitoring for container %s", self._container_name)
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop monitoring."""
        self._running = False

        if self._process and self._process.returncode is None:
            self._process.kill()

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def container_running(self) -> bool:
        """Check `docker ps` for the container."""
        try:
            proc = await asyncio.create_subprocess_exec(
                "docker",
                "ps",
                "--filter",
                f"name={self._container_name}",
                "--format",
                "{{.Names}}",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug("docker ps failed: %s", e)
            return False

        output, _ = await proc.communicate()
        return self._container_name in output.decode("utf-8", errors="replace")

    async def _run(self) -> None:
        """Wait for the container, then follow logs, restarting on failure."""
        try:
            await self._wait_for_container()

            while self._running:
                code = await self._follow_logs()
                logger.info("Docker logs process exited with code %s", code)
                self._relay.warn(
                    f"Docker logs process exited with code {code}", FORWARDER_SOURCE
                )
                if code == 0 or not self._running:
                    break

                await self._scheduler.sleep(self._restart_delay)
                logger.info("Restarting Docker log monitoring")

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Docker log forwarder error: %s", e, exc_info=True)
            self._relay.error(f"Docker log forwarder failed: {e}", FORWARDER_SOURCE)
        finally:
            self._running = False

    async def _wait_for_container(self) -> None:
        while self._running:
            if await self.container_running():
                self._relay.success(
                    f"Container {self._container_name} detected and running",
                    FORWARDER_SOURCE,
                )
                return

            logger.info("Container %s not found, waiting", self._container_name)
            await self._scheduler.sleep(self._poll_interval)

    async def _follow_logs(self) -> int:
        """Run one `docker logs -f` process to completion."""
        try:
            proc = await asyncio.create_subprocess_exec(
                "docker",
                "logs",
                "-f",
                "--tail",
                str(self._tail),
                self._container_name,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=STREAM_LIMIT,
            )
        except OSError as e:
            self._relay.error(f"Docker logs process error: {e}", FORWARDER_SOURCE)
            return -1

        self._process = proc
        pumps = [
            asyncio.ensure_future(pump_lines(proc.stdout, self._relay.ingest_raw_line)),
            asyncio.ensure_future(pump_lines(proc.stderr, self._handle_stderr)),
        ]
        try:
            await asyncio.gather(*pumps)
            return await proc.wait()
        finally:
            for pump in pumps:
                pump.cancel()
            await asyncio.gather(*pumps, return_exceptions=True)
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()
            self._process = None

    def _handle_stderr(self, line: str) -> None:
        self._relay.error(f"[STDERR] {line}", STDERR_SOURCE)


async def pump_lines(
    stream: asyncio.StreamReader | None,
    handler: Callable[[str], None],
) -> None:
    """Feed each non-blank decoded line of a stream to handler."""
    if stream is None:
        return

    while True:
        try:
            raw = await stream.readline()
        except ValueError as e:
            # Line longer than the reader limit; the reader has discarded it
            logger.warning("Skipping over-long log line: %s", e)
            continue
        if not raw:
            return

        line = raw.decode("utf-8", errors="replace").strip()
        if line:
            handler(line)
