"""Process-wide delivery state."""

from dataclasses import dataclass, field
from enum import Enum

from ..sinks.remote import IRemoteSinkClient


class RemoteState(str, Enum):
    """Remote delivery lifecycle.

    PENDING: constructed, not yet initialized; events queue up.
    ENABLED: client bound; events queue and drain.
    DISABLED: permanent; events render locally only.
    """

    PENDING = "pending"
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass
class DeliveryStats:
    """Counters for remote delivery outcomes."""

    delivered: int = 0
    failed: int = 0
    dropped: int = 0


@dataclass
class DeliveryState:
    """Remote handle plus the enabled flag, owned by the lifecycle controller."""

    remote: RemoteState = RemoteState.PENDING
    client: IRemoteSinkClient | None = None
    destination_id: str | None = None
    stats: DeliveryStats = field(default_factory=DeliveryStats)

    @property
    def enabled(self) -> bool:
        return self.remote is RemoteState.ENABLED

    @property
    def accepting(self) -> bool:
        """Whether new events are still considered for remote delivery."""
        return self.remote is not RemoteState.DISABLED

    def bind(self, client: IRemoteSinkClient, destination_id: str) -> bool:
        """Attach the remote handle. Refused once disabled."""
        if self.remote is RemoteState.DISABLED:
            return False
        self.client = client
        self.destination_id = destination_id
        self.remote = RemoteState.ENABLED
        return True

    def disable(self) -> bool:
        """Invalidate the handle for good. False if already disabled."""
        if self.remote is RemoteState.DISABLED:
            return False
        self.remote = RemoteState.DISABLED
        self.client = None
        return True
