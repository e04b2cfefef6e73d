"""Discord thread client implementing the remote sink capability."""

from datetime import timezone
from typing import Any

import httpx

from ..logging_config import get_logger
from ..models import (
    Delivered,
    Destination,
    DestinationResolutionFailure,
    PlainUnit,
    RemoteUnit,
    ResolveOutcome,
    RichUnit,
    SendOutcome,
    TransientSendFailure,
)

logger = get_logger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"

# Announcement, public and private thread channel types
THREAD_CHANNEL_TYPES = frozenset({10, 11, 12})


def unit_payload(unit: RemoteUnit) -> dict[str, Any]:
    """Build the message body for a rendered unit."""
    if isinstance(unit, PlainUnit):
        return {"content": unit.text}

    embed: dict[str, Any] = {
        "title": unit.title,
        "description": unit.description,
        "color": unit.color,
    }
    if unit.timestamp is not None:
        embed["timestamp"] = unit.timestamp.astimezone(timezone.utc).isoformat()
    if unit.author:
        embed["author"] = {"name": unit.author}
    if unit.fields:
        embed["fields"] = [
            {"name": f.name, "value": f.value, "inline": f.inline}
            for f in unit.fields
        ]
    return {"embeds": [embed]}


class DiscordClient:
    """Sends rendered units to a Discord thread over the REST API."""

    def __init__(
        self,
        token: str,
        client: httpx.AsyncClient | None = None,
        base_url: str = DISCORD_API_BASE,
        timeout: float = 10.0,
    ):
        if not token:
            raise ValueError("Discord token is required")

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bot {token}"}

    async def resolve_destination(self, destination_id: str) -> ResolveOutcome:
        """Fetch the channel and check it is a thread."""
        url = f"{self._base_url}/channels/{destination_id}"
        try:
            response = await self._client.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            return DestinationResolutionFailure(destination_id, f"request failed: {e}")

        if response.status_code != 200:
            return DestinationResolutionFailure(
                destination_id, f"channel lookup returned HTTP {response.status_code}"
            )

        try:
            channel = response.json()
        except ValueError:
            return DestinationResolutionFailure(destination_id, "invalid channel payload")

        if not isinstance(channel, dict) or channel.get("type") not in THREAD_CHANNEL_TYPES:
            return DestinationResolutionFailure(destination_id, "channel is not a thread")

        return Destination(id=str(channel.get("id", destination_id)), name=channel.get("name"))

    async def send(self, destination: Destination, unit: RemoteUnit) -> SendOutcome:
        """Post one unit as a message in the thread."""
        url = f"{self._base_url}/channels/{destination.id}/messages"
        try:
            response = await self._client.post(
                url, headers=self._headers, json=unit_payload(unit)
            )
        except httpx.HTTPError as e:
            return TransientSendFailure(f"request failed: {e}")

        if response.status_code == 429:
            return TransientSendFailure("rate limited", retry_after=_retry_after(response))
        if not response.is_success:
            return TransientSendFailure(f"HTTP {response.status_code}")

        return Delivered(destination_id=destination.id)

    async def aclose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()


def _retry_after(response: httpx.Response) -> float | None:
    """Read the retry delay from a rate-limit response."""
    try:
        return float(response.json().get("retry_after"))
    except (ValueError, TypeError, AttributeError):
        pass
    header = response.headers.get("Retry-After")
    try:
        return float(header) if header is not None else None
    except ValueError:
        logger.debug("Unparseable Retry-After header: %s", header)
        return None
