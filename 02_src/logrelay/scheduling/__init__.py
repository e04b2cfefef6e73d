"""Scheduling module."""

from .scheduler import AsyncioScheduler, IScheduledHandle, IScheduler

__all__ = ["AsyncioScheduler", "IScheduledHandle", "IScheduler"]
