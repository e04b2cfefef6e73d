"""Sinks module."""

from .console import ConsoleSink, ILocalSink
from .discord import DiscordClient
from .remote import IRemoteSinkClient

__all__ = ["ConsoleSink", "ILocalSink", "DiscordClient", "IRemoteSinkClient"]
