"""Outcome values returned by the remote sink seam."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Destination:
    """Resolved handle to the remote delivery target."""

    id: str
    name: str | None = None


@dataclass(frozen=True)
class DestinationResolutionFailure:
    """The target cannot be found or is the wrong kind of target."""

    destination_id: str
    reason: str


@dataclass(frozen=True)
class Delivered:
    """One unit reached the remote sink."""

    destination_id: str


@dataclass(frozen=True)
class TransientSendFailure:
    """One unit failed to deliver; later sends are unaffected."""

    reason: str
    retry_after: float | None = None


ResolveOutcome = Destination | DestinationResolutionFailure
SendOutcome = Delivered | TransientSendFailure
