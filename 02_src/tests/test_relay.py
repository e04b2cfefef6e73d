"""Tests for RelayLogger."""

import pytest

from conftest import FakeRemoteClient, settle
from logrelay.delivery import RemoteState
from logrelay.formatting import EXTERNAL_SOURCE
from logrelay.models import PlainUnit, RichUnit
from logrelay.relay import RelayLogger


class TestLevelMethods:
    """Tests for info/warn/error/debug/success."""

    @pytest.mark.parametrize(
        "method,emoji",
        [
            ("info", "ℹ️"),
            ("warn", "⚠️"),
            ("error", "❌"),
            ("debug", "🔍"),
            ("success", "✅"),
        ],
    )
    def test_writes_locally(self, relay, console_stream, method, emoji):
        """Test every level method renders to the console at once."""
        getattr(relay, method)("something happened", "worker")

        line = console_stream.getvalue().splitlines()[0]
        assert line.startswith(emoji + " ")
        assert line.endswith("[worker] something happened")

    def test_details_written_locally(self, relay, console_stream):
        """Test details are rendered below the line."""
        relay.error("query failed", "db", {"table": "users"})

        output = console_stream.getvalue()
        assert "   Details: {" in output
        assert '"table": "users"' in output

    def test_details_with_non_string_keys(self, relay, console_stream):
        """Test details JSON cannot encode never raise and still queue the event."""
        relay.info("hello", "svc", details={(1, 2): "v"})

        assert "[svc] hello" in console_stream.getvalue()
        assert "(1, 2)" in console_stream.getvalue()
        assert relay.queue_depth == 1

    def test_failing_local_sink_still_queues(self, scheduler):
        """Test a raising local sink does not stop remote submission."""

        class ExplodingSink:
            def write(self, text, details=None):
                raise RuntimeError("terminal gone")

        relay = RelayLogger(local_sink=ExplodingSink(), scheduler=scheduler)
        relay.error("still forwarded")

        assert relay.queue_depth == 1

    def test_queued_before_initialize(self, relay):
        """Test events wait in the queue until remote delivery is ready."""
        relay.info("one")
        relay.warn("two")

        assert relay.remote_state is RemoteState.PENDING
        assert relay.queue_depth == 2


class TestRemoteForwarding:
    """Tests for forwarding through the relay."""

    @pytest.mark.asyncio
    async def test_initialize_forwards_backlog(self, relay, remote_client):
        """Test the backlog and later events reach the remote sink."""
        relay.debug("before")
        relay.initialize(remote_client, "thread-1")
        relay.success("after")

        await relay.controller.drainer.wait_idle()

        assert isinstance(remote_client.sent[0], PlainUnit)
        assert isinstance(remote_client.sent[1], RichUnit)
        assert relay.stats.delivered == 2

    @pytest.mark.asyncio
    async def test_resolution_failure_keeps_local_logging(
        self, relay, console_stream, scheduler
    ):
        """Test a resolution failure disables remote delivery but not the console."""
        client = FakeRemoteClient(resolve_failure=True)
        relay.initialize(client, "thread-1")
        relay.error("first")
        await relay.controller.drainer.wait_idle()

        assert relay.remote_state is RemoteState.DISABLED
        assert not relay.enabled

        relay.info("still here")
        await settle()

        assert "still here" in console_stream.getvalue()
        assert len(client.resolve_calls) == 1
        assert client.attempts == []
        assert relay.queue_depth == 0
        assert scheduler.pending == []

    @pytest.mark.asyncio
    async def test_disable_remote(self, relay, console_stream):
        """Test explicit opt-out keeps logging local only."""
        assert relay.disable_remote("not configured") is True

        relay.info("local only")

        assert relay.queue_depth == 0
        assert "local only" in console_stream.getvalue()


class TestIngestRawLine:
    """Tests for RelayLogger.ingest_raw_line()."""

    def test_normalizes_and_renders(self, relay, console_stream):
        """Test a raw line is normalized before rendering."""
        relay.ingest_raw_line("2024-01-01T00:00:00.000Z app | ERROR: disk full")

        line = console_stream.getvalue().splitlines()[0]
        assert line.startswith("❌ ")
        assert line.endswith(f"[{EXTERNAL_SOURCE}] ERROR: disk full")
        assert relay.queue_depth == 1

    def test_blank_line_ignored(self, relay, console_stream):
        """Test blank raw lines produce nothing."""
        relay.ingest_raw_line("   ")

        assert console_stream.getvalue() == ""
        assert relay.queue_depth == 0

    @pytest.mark.asyncio
    async def test_forwarded_as_rich_error(self, relay, remote_client):
        """Test an error raw line reaches the remote sink as a rich unit."""
        relay.initialize(remote_client, "thread-1")
        relay.ingest_raw_line("app | Error: connection reset")

        await relay.controller.drainer.wait_idle()

        unit = remote_client.sent[0]
        assert isinstance(unit, RichUnit)
        assert unit.author == EXTERNAL_SOURCE
        assert unit.description == "Error: connection reset"


class TestLifecycle:
    """Tests for notices and close through the relay."""

    @pytest.mark.asyncio
    async def test_notices(self, relay, remote_client):
        """Test startup and shutdown notices pass through."""
        relay.initialize(remote_client, "thread-1")

        await relay.send_startup_notice()
        await relay.send_shutdown_notice()

        titles = [unit.title for unit in remote_client.sent]
        assert titles == ["🚀 Test Relay Started", "🛑 Test Relay Stopping"]

    @pytest.mark.asyncio
    async def test_aclose_waits_for_pass(self, relay, remote_client):
        """Test closing lets the in-flight pass finish."""
        relay.initialize(remote_client, "thread-1")
        relay.info("last words")

        await relay.aclose()

        assert len(remote_client.sent) == 1
        assert not relay.draining
