"""Log event data models."""

import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """Severity of a relayed log event."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    DEBUG = "debug"
    SUCCESS = "success"


def _snapshot_details(details: Any) -> Any:
    """Take a private copy so later producer mutations never reach the queue."""
    if details is None or isinstance(details, str):
        return details
    try:
        return copy.deepcopy(details)
    except Exception:
        # Uncopyable payloads (locks, sockets, ...) are kept as their repr
        return repr(details)


@dataclass(frozen=True)
class LogEvent:
    """A single log event produced by any subsystem."""

    level: LogLevel
    message: str
    timestamp: datetime
    source: str | None = None
    details: Any = None

    @property
    def has_details(self) -> bool:
        return self.details is not None and self.details != ""

    @classmethod
    def create(
        cls,
        level: LogLevel | str,
        message: str,
        source: str | None = None,
        details: Any = None,
        timestamp: datetime | None = None,
    ) -> "LogEvent":
        """Build an event, resolving the timestamp at ingestion."""
        return cls(
            level=LogLevel(level),
            message=str(message),
            timestamp=timestamp or datetime.now(timezone.utc),
            source=source or None,
            details=_snapshot_details(details),
        )
