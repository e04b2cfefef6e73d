"""Forwarder module."""

from .docker_logs import DockerLogForwarder, IDockerLogForwarder, pump_lines

__all__ = ["DockerLogForwarder", "IDockerLogForwarder", "pump_lines"]
