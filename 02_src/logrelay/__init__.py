"""Log relay core module."""

from .app import Application, IApplication
from .config import RelaySettings
from .delivery import (
    DeliveryQueue,
    DeliveryState,
    DeliveryStats,
    DrainState,
    LifecycleController,
    QueueDrainer,
    RemoteState,
)
from .forwarder import DockerLogForwarder, IDockerLogForwarder
from .models import (
    Delivered,
    Destination,
    DestinationResolutionFailure,
    LogEvent,
    LogLevel,
    PlainUnit,
    RemoteUnit,
    RichUnit,
    TransientSendFailure,
    UnitField,
)
from .relay import IRelayLogger, RelayLogger
from .scheduling import AsyncioScheduler, IScheduler
from .sinks import ConsoleSink, DiscordClient, ILocalSink, IRemoteSinkClient

__all__ = [
    # Application
    "Application",
    "IApplication",
    "RelaySettings",
    # Models
    "LogLevel",
    "LogEvent",
    "RichUnit",
    "PlainUnit",
    "UnitField",
    "RemoteUnit",
    "Destination",
    "DestinationResolutionFailure",
    "Delivered",
    "TransientSendFailure",
    # Components
    "IRelayLogger",
    "RelayLogger",
    "LifecycleController",
    "QueueDrainer",
    "DrainState",
    "DeliveryQueue",
    "DeliveryState",
    "DeliveryStats",
    "RemoteState",
    "IScheduler",
    "AsyncioScheduler",
    "ILocalSink",
    "ConsoleSink",
    "IRemoteSinkClient",
    "DiscordClient",
    "IDockerLogForwarder",
    "DockerLogForwarder",
]
