"""Pure rendering of log events for the local and remote sinks."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ..models import LogEvent, LogLevel, PlainUnit, RemoteUnit, RichUnit, UnitField

ELLIPSIS = "..."

# Remote sink limits, in characters
DESCRIPTION_LIMIT = 2048
FIELD_VALUE_LIMIT = 1024
PLAIN_LINE_LIMIT = 2000

STARTUP_COLOR = 0x00FF00
SHUTDOWN_COLOR = 0xFF9900


@dataclass(frozen=True)
class Decoration:
    """Color and emoji shared by both renderers for one level."""

    color: int
    emoji: str


DECORATIONS: dict[LogLevel, Decoration] = {
    LogLevel.ERROR: Decoration(color=0xFF0000, emoji="❌"),
    LogLevel.WARN: Decoration(color=0xFF9900, emoji="⚠️"),
    LogLevel.SUCCESS: Decoration(color=0x00FF00, emoji="✅"),
    LogLevel.DEBUG: Decoration(color=0x888888, emoji="🔍"),
    LogLevel.INFO: Decoration(color=0x5865F2, emoji="ℹ️"),
}

_RICH_LEVELS = {LogLevel.ERROR, LogLevel.SUCCESS}


def decoration_for(level: LogLevel) -> Decoration:
    """Look up the decoration for a level, defaulting to info."""
    return DECORATIONS.get(level, DECORATIONS[LogLevel.INFO])


def truncate(text: str, limit: int) -> str:
    """Cap text at limit characters, ending in an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def render_details(details: Any) -> str:
    """Serialize details to readable text; strings pass through."""
    if isinstance(details, str):
        return details
    try:
        return json.dumps(details, indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        # Non-string keys or circular references
        return repr(details)


def format_iso(timestamp: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    utc = timestamp.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _source_tag(source: str | None) -> str:
    return f"[{source}]" if source else ""


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def render_local(event: LogEvent) -> str:
    """Render the console line for an event."""
    decoration = decoration_for(event.level)
    return _join(
        decoration.emoji,
        format_iso(event.timestamp),
        _source_tag(event.source),
        event.message,
    )


def is_rich(event: LogEvent) -> bool:
    """Errors, successes and anything carrying details get a rich unit."""
    return event.level in _RICH_LEVELS or event.has_details


def render_remote(event: LogEvent) -> RemoteUnit:
    """Render an event for the remote sink, applying size limits."""
    decoration = decoration_for(event.level)

    if is_rich(event):
        fields: tuple[UnitField, ...] = ()
        if event.has_details:
            fields = (
                UnitField(
                    name="Details",
                    value=truncate(render_details(event.details), FIELD_VALUE_LIMIT),
                ),
            )
        return RichUnit(
            title=f"{decoration.emoji} {event.level.value.upper()}",
            description=truncate(event.message, DESCRIPTION_LIMIT),
            color=decoration.color,
            timestamp=event.timestamp,
            author=event.source,
            fields=fields,
        )

    wall_clock = event.timestamp.astimezone().strftime("%H:%M:%S")
    line = _join(
        decoration.emoji,
        f"`{wall_clock}`",
        _source_tag(event.source),
        event.message,
    )
    return PlainUnit(text=truncate(line, PLAIN_LINE_LIMIT))


def render_startup_notice(
    service_name: str,
    environment: str,
    now: datetime | None = None,
) -> RichUnit:
    """Out-of-band notice sent once remote delivery is up."""
    now = now or datetime.now(timezone.utc)
    return RichUnit(
        title=f"🚀 {service_name} Started",
        description=f"The {service_name} has started successfully!",
        color=STARTUP_COLOR,
        timestamp=now,
        fields=(
            UnitField(name="Timestamp", value=f"<t:{int(now.timestamp())}:F>"),
            UnitField(name="Environment", value=environment),
        ),
    )


def render_shutdown_notice(service_name: str, now: datetime | None = None) -> RichUnit:
    """Out-of-band notice sent right before the process exits."""
    return RichUnit(
        title=f"🛑 {service_name} Stopping",
        description=f"The {service_name} is shutting down.",
        color=SHUTDOWN_COLOR,
        timestamp=now or datetime.now(timezone.utc),
    )
