"""Delivery module."""

from .controller import SHUTDOWN_GRACE_PERIOD, LifecycleController
from .drainer import BACKOFF_DELAY, BATCH_SIZE, PACING_INTERVAL, DrainState, QueueDrainer
from .queue import DeliveryQueue
from .state import DeliveryState, DeliveryStats, RemoteState

__all__ = [
    "LifecycleController",
    "SHUTDOWN_GRACE_PERIOD",
    "QueueDrainer",
    "DrainState",
    "BATCH_SIZE",
    "PACING_INTERVAL",
    "BACKOFF_DELAY",
    "DeliveryQueue",
    "DeliveryState",
    "DeliveryStats",
    "RemoteState",
]
