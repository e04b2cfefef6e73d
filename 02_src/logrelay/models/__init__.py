"""Core data models for the log relay."""

from .events import LogEvent, LogLevel
from .results import (
    Delivered,
    Destination,
    DestinationResolutionFailure,
    ResolveOutcome,
    SendOutcome,
    TransientSendFailure,
)
from .units import PlainUnit, RemoteUnit, RichUnit, UnitField

__all__ = [
    # Events
    "LogLevel",
    "LogEvent",
    # Units
    "RichUnit",
    "PlainUnit",
    "UnitField",
    "RemoteUnit",
    # Results
    "Destination",
    "DestinationResolutionFailure",
    "Delivered",
    "TransientSendFailure",
    "ResolveOutcome",
    "SendOutcome",
]
