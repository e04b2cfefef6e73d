"""DeliveryQueue implementation."""

from collections import deque

from ..models import LogEvent


class DeliveryQueue:
    """FIFO of events waiting for the remote sink."""

    def __init__(self) -> None:
        self._events: deque[LogEvent] = deque()

    def push(self, event: LogEvent) -> None:
        """Append an event at the tail."""
        self._events.append(event)

    def take(self, limit: int) -> list[LogEvent]:
        """Remove up to limit events from the head, preserving order."""
        batch: list[LogEvent] = []
        while self._events and len(batch) < limit:
            batch.append(self._events.popleft())
        return batch

    def clear(self) -> int:
        """Drop every pending event. Returns how many were dropped."""
        dropped = len(self._events)
        self._events.clear()
        return dropped

    def snapshot(self) -> list[LogEvent]:
        """Copy of pending events, head first."""
        return list(self._events)

    def is_empty(self) -> bool:
        return not self._events

    def __len__(self) -> int:
        return len(self._events)
