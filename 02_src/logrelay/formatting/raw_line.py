"""Normalization of unstructured lines captured from external processes."""

import re

from ..models import LogEvent, LogLevel

EXTERNAL_SOURCE = "Docker"

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\s*")

# Ordered; first match wins
_LEVEL_KEYWORDS: tuple[tuple[LogLevel, tuple[str, ...]], ...] = (
    (LogLevel.ERROR, ("error",)),
    (LogLevel.WARN, ("warn",)),
    (LogLevel.DEBUG, ("debug",)),
    (LogLevel.SUCCESS, ("success", "ready")),
)


def detect_level(line: str) -> LogLevel:
    """Guess a level from keywords in the line."""
    lowered = line.lower()
    for level, keywords in _LEVEL_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return level
    return LogLevel.INFO


def strip_prefixes(line: str, producer_name: str | None) -> str:
    """Drop a leading ISO timestamp and a `<producer> |` tag."""
    cleaned = _ISO_PREFIX.sub("", line, count=1)
    if producer_name:
        producer_prefix = re.compile(rf"^{re.escape(producer_name)}\s*\|\s*")
        cleaned = producer_prefix.sub("", cleaned, count=1)
    return cleaned


def normalize_raw_line(line: str, producer_name: str | None = None) -> LogEvent | None:
    """Turn a raw external log line into an event; blank lines yield None."""
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    return LogEvent.create(
        level=detect_level(line),
        message=strip_prefixes(line, producer_name),
        source=EXTERNAL_SOURCE,
    )
