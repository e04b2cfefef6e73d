"""Remote-sink rendering shapes."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class UnitField:
    """A named field attached to a rich unit."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class RichUnit:
    """Structured multi-field rendering (title, description, author, fields)."""

    title: str
    description: str
    color: int
    timestamp: datetime | None = None
    author: str | None = None
    fields: tuple[UnitField, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlainUnit:
    """Single line of text."""

    text: str


RemoteUnit = RichUnit | PlainUnit
