"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "relay.log"

DEFAULT_CONTAINER_NAME = "app"
DEFAULT_SERVICE_NAME = "Log Relay"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class RelaySettings:
    """Runtime settings for the relay service."""

    discord_token: str | None = None
    thread_id: str | None = None
    container_name: str = DEFAULT_CONTAINER_NAME
    forward_docker_logs: bool = False
    service_name: str = DEFAULT_SERVICE_NAME
    environment: str = "development"
    api_host: str = "localhost"
    api_port: int = 8000
    log_level: str = "INFO"

    @property
    def remote_configured(self) -> bool:
        """Remote delivery needs both a token and a destination thread."""
        return bool(self.discord_token and self.thread_id)

    @classmethod
    def from_env(cls) -> "RelaySettings":
        """Build settings from environment variables."""
        return cls(
            discord_token=os.getenv("DISCORD_TOKEN") or None,
            thread_id=os.getenv("LOG_THREAD_ID") or None,
            container_name=os.getenv("LOG_CONTAINER_NAME", DEFAULT_CONTAINER_NAME),
            forward_docker_logs=_env_flag("FORWARD_DOCKER_LOGS"),
            service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
            environment=os.getenv("APP_ENV", "development"),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
