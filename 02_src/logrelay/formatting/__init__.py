"""Formatting module."""

from .formatter import (
    DECORATIONS,
    DESCRIPTION_LIMIT,
    ELLIPSIS,
    FIELD_VALUE_LIMIT,
    PLAIN_LINE_LIMIT,
    Decoration,
    decoration_for,
    is_rich,
    render_details,
    render_local,
    render_remote,
    render_shutdown_notice,
    render_startup_notice,
    truncate,
)
from .raw_line import EXTERNAL_SOURCE, detect_level, normalize_raw_line

__all__ = [
    "DECORATIONS",
    "DESCRIPTION_LIMIT",
    "ELLIPSIS",
    "FIELD_VALUE_LIMIT",
    "PLAIN_LINE_LIMIT",
    "Decoration",
    "decoration_for",
    "is_rich",
    "render_details",
    "render_local",
    "render_remote",
    "render_shutdown_notice",
    "render_startup_notice",
    "truncate",
    "EXTERNAL_SOURCE",
    "detect_level",
    "normalize_raw_line",
]
