"""Remote sink client capability."""

from typing import Protocol

from ..models import Destination, RemoteUnit, ResolveOutcome, SendOutcome


class IRemoteSinkClient(Protocol):
    """Quota-limited external channel. Failures come back as values."""

    async def resolve_destination(self, destination_id: str) -> ResolveOutcome:
        """Resolve the delivery target or report why it is unusable."""
        ...

    async def send(self, destination: Destination, unit: RemoteUnit) -> SendOutcome:
        """Attempt delivery of one rendered unit."""
        ...
